"""Constants for Legion keyboard lighting communication."""

from typing import Final

# ITE Tech. Inc. USB Vendor ID (keyboard lighting controller)
VENDOR_ID: Final[int] = 0x048D

# Product IDs, one per supported hardware revision
PRODUCT_ID_2020: Final[int] = 0xC955
PRODUCT_ID_2021: Final[int] = 0xC965

REVISION_NAMES: Final[dict[int, str]] = {
    PRODUCT_ID_2020: "2020",
    PRODUCT_ID_2021: "2021",
}

# (usage page, usage) reported for the lighting interface, keyed by sys.platform.
# Platforms missing from the table do not expose usage info and report zeros.
PLATFORM_USAGE: Final[dict[str, tuple[int, int]]] = {
    "win32": (0xFF89, 0x00CC),
}
DEFAULT_USAGE: Final[tuple[int, int]] = (0x0000, 0x0000)

# Valid lighting ranges (inclusive)
SPEED_MIN: Final[int] = 1
SPEED_MAX: Final[int] = 4
BRIGHTNESS_MIN: Final[int] = 1
BRIGHTNESS_MAX: Final[int] = 2

# Color layout: 4 zones x 3 channels
ZONE_COUNT: Final[int] = 4
CHANNELS_PER_ZONE: Final[int] = 3
RGB_BYTES: Final[int] = ZONE_COUNT * CHANNELS_PER_ZONE  # 12 bytes

# Lighting feature report
REPORT_ID_LIGHTING: Final[int] = 0xCC
COMMAND_SET_LIGHTING: Final[int] = 0x16
SUBCOMMAND_APPLY: Final[int] = 0x01

OFFSET_SPEED: Final[int] = 3
OFFSET_BRIGHTNESS: Final[int] = 4
OFFSET_RGB: Final[int] = 5

PAYLOAD_SIZE: Final[int] = 33  # 5 header bytes + 12 color bytes + 16 reserved
