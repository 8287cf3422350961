"""Device detection and lighting control for Legion keyboards."""

import logging
import operator
import threading
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Self

import hid

from legion_kb_rgb.constants import (
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    CHANNELS_PER_ZONE,
    PAYLOAD_SIZE,
    REVISION_NAMES,
    RGB_BYTES,
    SPEED_MAX,
    SPEED_MIN,
    VENDOR_ID,
    ZONE_COUNT,
)
from legion_kb_rgb.exceptions import (
    DeviceCommunicationError,
    DeviceNotFoundError,
    DeviceOpenError,
    HIDUnavailableError,
    LightingValueError,
)
from legion_kb_rgb.models import (
    SUPPORTED_IDENTITIES,
    LightingState,
    build_payload,
    clamp,
    identity_of,
)

logger = logging.getLogger(__name__)


def enumerate_keyboards() -> list[dict[str, Any]]:
    """Enumerate all HID interfaces matching a supported keyboard identity.

    Returns:
        List of device info dictionaries from hidapi, in enumeration order.

    Raises:
        HIDUnavailableError: If the HID subsystem cannot be queried.
    """
    try:
        devices: list[dict[str, Any]] = hid.enumerate(VENDOR_ID, 0)
    except OSError as e:
        msg = f"HID subsystem unavailable: {e}"
        raise HIDUnavailableError(msg) from e

    supported = {identity.key for identity in SUPPORTED_IDENTITIES}
    matches = [dev for dev in devices if identity_of(dev) in supported]
    logger.debug(
        "Found %d vendor interface(s), %d matching", len(devices), len(matches)
    )
    return matches


def find_device_info() -> dict[str, Any]:
    """Find a compatible Legion keyboard.

    The first matching interface wins. If several compatible keyboards are
    attached, which one is picked depends on the enumeration order.

    Returns:
        Device info dictionary from hidapi.

    Raises:
        DeviceNotFoundError: If no compatible device is found.
        HIDUnavailableError: If the HID subsystem cannot be queried.
    """
    for dev_info in enumerate_keyboards():
        return dev_info

    raise DeviceNotFoundError


def get_revision_name(product_id: int) -> str:
    """Get the hardware revision for a product ID.

    Args:
        product_id: The USB product ID.

    Returns:
        "2020", "2021", or "Unknown" if not recognized.
    """
    return REVISION_NAMES.get(product_id, f"Unknown (0x{product_id:04X})")


class LegionKeyboard:
    """Context manager owning the keyboard handle and its lighting state.

    The device has no incremental update command, so every mutation
    resends the complete state. Mutators are serialized per instance.

    Example:
        with LegionKeyboard() as keyboard:
            keyboard.set_brightness(2)
            keyboard.set_colors(bytes([255, 0, 0] * 4))
    """

    def __init__(self) -> None:
        self._device: hid.device | None = None
        self._device_info: dict[str, Any] | None = None
        self._state = LightingState()
        self._lock = threading.RLock()

    def __enter__(self) -> Self:
        """Open connection to the device and send the default state."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Close connection to the device."""
        self.close()

    def open(self) -> None:
        """Resolve and open the keyboard, then send the current state.

        Does nothing if the keyboard is already open.

        Raises:
            HIDUnavailableError: If the HID subsystem cannot be queried.
            DeviceNotFoundError: If no compatible device is found.
            DeviceOpenError: If the device cannot be opened.
            DeviceCommunicationError: If the initial state cannot be sent.
        """
        if self._device is not None:
            return

        self._device_info = find_device_info()
        logger.debug(
            "Opening %s keyboard at %r",
            self.revision,
            self._device_info.get("path"),
        )
        self._device = hid.device()
        try:
            self._device.open_path(self._device_info["path"])
        except OSError as e:
            self._device = None
            msg = f"Failed to open device: {e}"
            raise DeviceOpenError(msg) from e

        try:
            self.refresh()
        except BaseException:
            self.close()
            raise

    def close(self) -> None:
        """Close the device handle. Safe to call more than once."""
        if self._device is not None:
            try:
                self._device.close()
            finally:
                self._device = None

    @property
    def product_id(self) -> int | None:
        """Get the product ID of the connected device."""
        if self._device_info is None:
            return None
        return self._device_info.get("product_id")

    @property
    def revision(self) -> str:
        """Get the hardware revision of the connected device."""
        if self._device_info is None:
            return "Unknown"
        return get_revision_name(self._device_info.get("product_id", 0))

    @property
    def state(self) -> LightingState:
        """Current lighting state."""
        return self._state

    def build_payload(self) -> bytes:
        """Encode the current state without clamping.

        Raises:
            LightingValueError: If the state holds an out-of-range value.
        """
        return build_payload(self._state)

    def transmit(self, payload: bytes) -> None:
        """Send a lighting payload as a feature report.

        Args:
            payload: Exactly 33 bytes, as returned by build_payload().

        Raises:
            DeviceCommunicationError: If sending fails or report is rejected.
            ValueError: If payload is not exactly 33 bytes.
        """
        if len(payload) != PAYLOAD_SIZE:
            msg = f"Payload must be exactly {PAYLOAD_SIZE} bytes, got {len(payload)}"
            raise ValueError(msg)
        with self._lock:
            if self._device is None:
                msg = "Device not opened"
                raise DeviceCommunicationError(msg)
            try:
                result = self._device.send_feature_report(payload)
                if result < 0:
                    msg = f"Feature report rejected by device (result={result})"
                    raise DeviceCommunicationError(msg)
            except OSError as e:
                msg = f"Failed to send feature report: {e}"
                raise DeviceCommunicationError(msg) from e
        logger.debug("Sent lighting report: %s", payload.hex(" "))

    def refresh(self) -> None:
        """Resend the complete current state to the device.

        Raises:
            LightingValueError: If the state holds an out-of-range value.
            DeviceCommunicationError: If sending fails.
        """
        with self._lock:
            self.transmit(self.build_payload())

    def _commit(self, **changes: Any) -> None:
        """Validate a modified copy of the state, store it, then send it.

        A rejected change leaves the current state untouched. A failed
        write keeps the new state so a later refresh() resends it.
        Must be called with the lock held.
        """
        candidate = replace(
            self._state, rgb_values=bytearray(self._state.rgb_values), **changes
        )
        payload = build_payload(candidate)
        self._state.speed = candidate.speed
        self._state.brightness = candidate.brightness
        self._state.rgb_values = candidate.rgb_values
        self.transmit(payload)

    def set_speed(self, speed: int) -> None:
        """Set the animation speed, clamped into 1-4.

        Raises:
            LightingValueError: If speed is not an integer.
            DeviceCommunicationError: If sending fails.
        """
        value = clamp(_to_level("speed", speed), SPEED_MIN, SPEED_MAX)
        with self._lock:
            self._commit(speed=value)

    def set_brightness(self, brightness: int) -> None:
        """Set the brightness, clamped into 1-2.

        Raises:
            LightingValueError: If brightness is not an integer.
            DeviceCommunicationError: If sending fails.
        """
        value = clamp(
            _to_level("brightness", brightness), BRIGHTNESS_MIN, BRIGHTNESS_MAX
        )
        with self._lock:
            self._commit(brightness=value)

    def set_colors(self, rgb_values: Iterable[int]) -> None:
        """Replace all zone colors.

        Args:
            rgb_values: 12 byte values, zone 1 R/G/B through zone 4 R/G/B.

        Raises:
            LightingValueError: If not exactly 12 values in 0-255.
            DeviceCommunicationError: If sending fails.
        """
        values = _to_rgb_bytes(rgb_values)
        with self._lock:
            self._commit(rgb_values=bytearray(values))

    def set_zone_color(self, zone: int, color: tuple[int, int, int]) -> None:
        """Replace the color of a single zone (0-3).

        Raises:
            LightingValueError: If zone or color is out of range.
            DeviceCommunicationError: If sending fails.
        """
        if not 0 <= zone < ZONE_COUNT:
            msg = f"Zone must be between 0 and {ZONE_COUNT - 1}, got {zone}"
            raise LightingValueError("zone", msg)
        try:
            channels = bytes(list(color))
        except (TypeError, ValueError) as e:
            msg = f"Invalid color for zone {zone}: {color!r}"
            raise LightingValueError("rgb_values", msg) from e
        if len(channels) != CHANNELS_PER_ZONE:
            msg = f"Color must have {CHANNELS_PER_ZONE} channels, got {len(channels)}"
            raise LightingValueError("rgb_values", msg)

        start = zone * CHANNELS_PER_ZONE
        with self._lock:
            rgb_values = bytearray(self._state.rgb_values)
            rgb_values[start : start + CHANNELS_PER_ZONE] = channels
            self._commit(rgb_values=rgb_values)

    def apply(
        self,
        speed: int | None = None,
        brightness: int | None = None,
        colors: Iterable[int] | None = None,
    ) -> None:
        """Update several attributes at once and send a single report.

        Speed and brightness are clamped like the individual setters. All
        arguments are validated before anything is stored.
        """
        changes: dict[str, Any] = {}
        if speed is not None:
            changes["speed"] = clamp(_to_level("speed", speed), SPEED_MIN, SPEED_MAX)
        if brightness is not None:
            changes["brightness"] = clamp(
                _to_level("brightness", brightness), BRIGHTNESS_MIN, BRIGHTNESS_MAX
            )
        if colors is not None:
            changes["rgb_values"] = bytearray(_to_rgb_bytes(colors))
        with self._lock:
            self._commit(**changes)


def _to_level(name: str, value: int) -> int:
    # bool is an int subclass but never a valid level
    if isinstance(value, bool):
        msg = f"{name.capitalize()} must be an integer, got {value!r}"
        raise LightingValueError(name, msg)
    try:
        return operator.index(value)
    except TypeError as e:
        msg = f"{name.capitalize()} must be an integer, got {value!r}"
        raise LightingValueError(name, msg) from e


def _to_rgb_bytes(rgb_values: Iterable[int]) -> bytes:
    try:
        values = bytes(list(rgb_values))
    except (TypeError, ValueError) as e:
        msg = f"Color values must be integers in 0-255: {e}"
        raise LightingValueError("rgb_values", msg) from e
    if len(values) != RGB_BYTES:
        msg = f"Color data must be exactly {RGB_BYTES} bytes, got {len(values)}"
        raise LightingValueError("rgb_values", msg)
    return values


def acquire_device() -> LegionKeyboard:
    """Open the first compatible keyboard and send the default state.

    The caller owns the returned keyboard and must close() it.

    Raises:
        HIDUnavailableError: If the HID subsystem cannot be queried.
        DeviceNotFoundError: If no compatible device is found.
        DeviceOpenError: If the device cannot be opened.
        DeviceCommunicationError: If the initial state cannot be sent.
    """
    keyboard = LegionKeyboard()
    keyboard.open()
    return keyboard


@contextmanager
def open_keyboard() -> Generator[LegionKeyboard, None, None]:
    """Context manager for opening a Legion keyboard.

    Yields:
        An opened LegionKeyboard instance.

    Example:
        with open_keyboard() as keyboard:
            keyboard.set_speed(3)
    """
    keyboard = LegionKeyboard()
    with keyboard:
        yield keyboard
