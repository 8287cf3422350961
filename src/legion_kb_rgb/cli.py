"""Command-line interface for Legion keyboard lighting."""

import argparse
import logging
import sys

from legion_kb_rgb import __version__
from legion_kb_rgb.colors import zone_colors
from legion_kb_rgb.constants import (
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    RGB_BYTES,
    SPEED_MAX,
    SPEED_MIN,
)
from legion_kb_rgb.device import enumerate_keyboards, get_revision_name, open_keyboard
from legion_kb_rgb.exceptions import (
    ColorError,
    DeviceNotFoundError,
    DeviceOpenError,
    HIDUnavailableError,
    LegionKeyboardError,
)

# Epilog text for main parser
MAIN_EPILOG = """\
examples:
  legion-kb-rgb list                          Show detected keyboards
  legion-kb-rgb set --color red               All zones red
  legion-kb-rgb set --color red green blue white
                                              One color per zone, left to right
  legion-kb-rgb set --brightness 2 --speed 3  Change brightness and speed
  legion-kb-rgb off                           Turn all zones off

supported keyboards:
  Lenovo Legion 4-zone RGB keyboards (2020 and 2021 revisions)

Use -h with any command for detailed help.
"""

SET_EPILOG = f"""\
examples:
  legion-kb-rgb set --color "#ff8800"
  legion-kb-rgb set --color red "rgb(0,255,0)" blue "hsl(300,100%,50%)"
  legion-kb-rgb set --brightness 2

colors:
  Names (red), hex (#f80, #ff8800) and rgb()/hsl() forms are accepted.
  Give one color for all zones or four colors, one per zone.

ranges:
  speed {SPEED_MIN}-{SPEED_MAX}, brightness {BRIGHTNESS_MIN}-{BRIGHTNESS_MAX}.
  Out-of-range values are clamped to the nearest limit.

note:
  The keyboard does not report its current lighting. Every command sends a
  complete configuration, so options not given fall back to their defaults
  (speed {SPEED_MIN}, brightness {BRIGHTNESS_MIN}, all zones off).
"""

NOT_FOUND_MSG = "Error: No compatible Legion keyboard found."


def _report_error(error: LegionKeyboardError) -> None:
    """Print an actionable message for a keyboard error."""
    if isinstance(error, DeviceNotFoundError):
        print(NOT_FOUND_MSG, file=sys.stderr)
    elif isinstance(error, DeviceOpenError):
        print(
            f"Error: Keyboard found but could not be opened: {error}",
            file=sys.stderr,
        )
        print(
            "Check permissions on the hidraw device (udev rule) or run as root.",
            file=sys.stderr,
        )
    elif isinstance(error, HIDUnavailableError):
        print(f"Error: {error}", file=sys.stderr)
        print(
            "Ensure hidapi is installed and the HID subsystem is available.",
            file=sys.stderr,
        )
    else:
        print(f"Error: {error}", file=sys.stderr)


def cmd_list(args: argparse.Namespace) -> int:
    """List compatible keyboards."""
    try:
        devices = enumerate_keyboards()
    except LegionKeyboardError as e:
        _report_error(e)
        return 1

    if not devices:
        print(NOT_FOUND_MSG, file=sys.stderr)
        return 1

    for dev_info in devices:
        product_id = dev_info.get("product_id", 0)
        path = dev_info.get("path", b"")
        if isinstance(path, bytes):
            path = path.decode(errors="replace")
        print(
            f"{get_revision_name(product_id)}: "
            f"{dev_info.get('vendor_id', 0):04x}:{product_id:04x} "
            f"usage {dev_info.get('usage_page', 0):04x}/{dev_info.get('usage', 0):04x} "
            f"at {path}"
        )
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    """Send a lighting configuration to the keyboard."""
    if args.speed is None and args.brightness is None and not args.color:
        print(
            "Error: Nothing to set; give --speed, --brightness or --color.",
            file=sys.stderr,
        )
        return 1

    try:
        colors = zone_colors(args.color) if args.color else None
        with open_keyboard() as keyboard:
            keyboard.apply(
                speed=args.speed, brightness=args.brightness, colors=colors
            )
        return 0

    except ColorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except LegionKeyboardError as e:
        _report_error(e)
        return 1
    except KeyboardInterrupt:
        return 0


def cmd_off(args: argparse.Namespace) -> int:
    """Turn all zones off."""
    try:
        with open_keyboard() as keyboard:
            keyboard.set_colors(bytes(RGB_BYTES))
        return 0

    except LegionKeyboardError as e:
        _report_error(e)
        return 1
    except KeyboardInterrupt:
        return 0


def main() -> int:
    """Main entry point with subcommands."""
    # Use RawDescriptionHelpFormatter to preserve epilog formatting
    parser = argparse.ArgumentParser(
        prog="legion-kb-rgb",
        description="Lenovo Legion keyboard RGB lighting control.",
        epilog=MAIN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log device discovery and sent reports",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="commands",
        metavar="<command>",
    )

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        help="list compatible keyboards",
        description="List attached HID interfaces matching a supported keyboard.",
    )
    list_parser.set_defaults(func=cmd_list)

    # set subcommand
    set_parser = subparsers.add_parser(
        "set",
        help="set speed, brightness and zone colors",
        description="Send a complete lighting configuration to the keyboard.",
        epilog=SET_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    set_parser.add_argument(
        "--speed",
        type=int,
        metavar="N",
        default=None,
        help=f"effect speed ({SPEED_MIN}-{SPEED_MAX})",
    )
    set_parser.add_argument(
        "--brightness",
        type=int,
        metavar="N",
        default=None,
        help=f"brightness level ({BRIGHTNESS_MIN}-{BRIGHTNESS_MAX})",
    )
    set_parser.add_argument(
        "--color",
        nargs="+",
        metavar="COLOR",
        default=None,
        help="one color for all zones, or four colors (one per zone)",
    )
    set_parser.set_defaults(func=cmd_set)

    # off subcommand
    off_parser = subparsers.add_parser(
        "off",
        help="turn all zones off",
        description="Set every zone to black.",
    )
    off_parser.set_defaults(func=cmd_off)

    args = parser.parse_args()

    # Configure logging for messages from library modules
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
