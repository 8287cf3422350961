"""Legion keyboard RGB - Control the 4-zone lighting on Legion keyboards.

This package drives the ITE lighting controller found in Lenovo Legion
laptops (2020 and 2021 revisions) over USB HID feature reports.

Example:
    from legion_kb_rgb import open_keyboard

    with open_keyboard() as keyboard:
        keyboard.set_brightness(2)
        keyboard.set_colors(bytes([255, 0, 0] * 4))
"""

from legion_kb_rgb.colors import parse_color, zone_colors
from legion_kb_rgb.constants import (
    PAYLOAD_SIZE,
    PRODUCT_ID_2020,
    PRODUCT_ID_2021,
    VENDOR_ID,
)
from legion_kb_rgb.device import (
    LegionKeyboard,
    acquire_device,
    enumerate_keyboards,
    find_device_info,
    open_keyboard,
)
from legion_kb_rgb.exceptions import (
    ColorError,
    DeviceCommunicationError,
    DeviceNotFoundError,
    DeviceOpenError,
    HIDUnavailableError,
    LegionKeyboardError,
    LightingValueError,
)
from legion_kb_rgb.models import (
    SUPPORTED_IDENTITIES,
    DeviceIdentity,
    LightingState,
    build_payload,
)

__version__ = "1.0.0"

__all__ = [
    "PAYLOAD_SIZE",
    "PRODUCT_ID_2020",
    "PRODUCT_ID_2021",
    "SUPPORTED_IDENTITIES",
    "VENDOR_ID",
    "ColorError",
    "DeviceCommunicationError",
    "DeviceIdentity",
    "DeviceNotFoundError",
    "DeviceOpenError",
    "HIDUnavailableError",
    "LegionKeyboard",
    "LegionKeyboardError",
    "LightingState",
    "LightingValueError",
    "__version__",
    "acquire_device",
    "build_payload",
    "enumerate_keyboards",
    "find_device_info",
    "open_keyboard",
    "parse_color",
    "zone_colors",
]
