"""Data models and payload encoding for legion-kb-rgb."""

import sys
from dataclasses import dataclass, field
from typing import Any

from legion_kb_rgb.constants import (
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    COMMAND_SET_LIGHTING,
    DEFAULT_USAGE,
    OFFSET_BRIGHTNESS,
    OFFSET_RGB,
    OFFSET_SPEED,
    PAYLOAD_SIZE,
    PLATFORM_USAGE,
    PRODUCT_ID_2020,
    PRODUCT_ID_2021,
    REPORT_ID_LIGHTING,
    RGB_BYTES,
    SPEED_MAX,
    SPEED_MIN,
    SUBCOMMAND_APPLY,
    VENDOR_ID,
)
from legion_kb_rgb.exceptions import LightingValueError


@dataclass(frozen=True, slots=True)
class DeviceIdentity:
    """Attributes that recognize one hardware revision among HID devices."""

    revision: str
    vendor_id: int
    product_id: int
    usage_page: int
    usage: int

    @property
    def key(self) -> tuple[int, int, int, int]:
        """Return the (vendor id, product id, usage page, usage) tuple."""
        return (self.vendor_id, self.product_id, self.usage_page, self.usage)


def identities_for_platform(platform: str) -> tuple[DeviceIdentity, ...]:
    """Resolve the supported device identities for a platform.

    Args:
        platform: A ``sys.platform`` value.

    Returns:
        The 2021 and 2020 identities, in that order.
    """
    usage_page, usage = PLATFORM_USAGE.get(platform, DEFAULT_USAGE)
    return (
        DeviceIdentity("2021", VENDOR_ID, PRODUCT_ID_2021, usage_page, usage),
        DeviceIdentity("2020", VENDOR_ID, PRODUCT_ID_2020, usage_page, usage),
    )


SUPPORTED_IDENTITIES: tuple[DeviceIdentity, ...] = identities_for_platform(
    sys.platform
)


def identity_of(device_info: dict[str, Any]) -> tuple[int, int, int, int]:
    """Extract the identity tuple from an hidapi device info dictionary."""
    return (
        device_info.get("vendor_id", 0),
        device_info.get("product_id", 0),
        device_info.get("usage_page", 0),
        device_info.get("usage", 0),
    )


def _default_rgb() -> bytearray:
    return bytearray(RGB_BYTES)


@dataclass(slots=True)
class LightingState:
    """Current lighting configuration of the keyboard.

    Every report sent to the device carries the complete state.
    """

    speed: int = SPEED_MIN
    brightness: int = BRIGHTNESS_MIN
    # 4 zones x (R, G, B), passed to the device verbatim
    rgb_values: bytearray = field(default_factory=_default_rgb)


def clamp(value: int, low: int, high: int) -> int:
    """Coerce value to the nearest bound of [low, high]."""
    return max(low, min(high, value))


def _check_level(name: str, value: object, low: int, high: int) -> None:
    # bool is an int subclass but never a valid level
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name.capitalize()} must be an integer, got {value!r}"
        raise LightingValueError(name, msg)
    if not low <= value <= high:
        msg = f"{name.capitalize()} is outside valid range ({low}-{high}): {value}"
        raise LightingValueError(name, msg)


def build_payload(state: LightingState) -> bytes:
    """Encode a lighting state into the 33-byte feature report.

    Layout:
        0: report id (0xCC), 1: command (0x16), 2: apply flag (0x01),
        3: speed, 4: brightness, 5-16: zone colors, 17-32: reserved zeros.

    Args:
        state: The lighting state to encode. It is not modified.

    Returns:
        The feature report bytes.

    Raises:
        LightingValueError: If speed, brightness or rgb_values is invalid.
    """
    _check_level("speed", state.speed, SPEED_MIN, SPEED_MAX)
    _check_level("brightness", state.brightness, BRIGHTNESS_MIN, BRIGHTNESS_MAX)
    if len(state.rgb_values) != RGB_BYTES:
        msg = (
            f"Color data must be exactly {RGB_BYTES} bytes, "
            f"got {len(state.rgb_values)}"
        )
        raise LightingValueError("rgb_values", msg)

    payload = bytearray(PAYLOAD_SIZE)
    payload[0] = REPORT_ID_LIGHTING
    payload[1] = COMMAND_SET_LIGHTING
    payload[2] = SUBCOMMAND_APPLY
    payload[OFFSET_SPEED] = state.speed
    payload[OFFSET_BRIGHTNESS] = state.brightness
    payload[OFFSET_RGB : OFFSET_RGB + RGB_BYTES] = state.rgb_values

    assert len(payload) == PAYLOAD_SIZE
    return bytes(payload)
