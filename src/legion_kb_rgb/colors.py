"""Color parsing for keyboard lighting zones."""

from collections.abc import Sequence

from PIL import ImageColor

from legion_kb_rgb.constants import ZONE_COUNT
from legion_kb_rgb.exceptions import ColorError


def parse_color(text: str) -> tuple[int, int, int]:
    """Parse a color specification into an (R, G, B) tuple.

    Accepts anything PIL understands: names ("red"), hex ("#ff8800", "#f80"),
    and functional forms ("rgb(255, 136, 0)", "hsl(32, 100%, 50%)").
    An alpha channel, if given, is ignored.

    Raises:
        ColorError: If the specification is not recognized.
    """
    try:
        rgb = ImageColor.getrgb(text.strip())
    except ValueError as e:
        msg = f"Invalid color: {text!r}"
        raise ColorError(msg) from e
    return rgb[0], rgb[1], rgb[2]


def zone_colors(colors: Sequence[str]) -> bytes:
    """Build the 12 color bytes for all zones.

    Args:
        colors: Either one color, used for every zone, or one color per
            zone in order (left to right).

    Returns:
        Zone 1 R/G/B through zone 4 R/G/B.

    Raises:
        ColorError: If a color is invalid or the count is neither 1 nor 4.
    """
    if len(colors) == 1:
        rgb = parse_color(colors[0])
        return bytes(rgb * ZONE_COUNT)
    if len(colors) == ZONE_COUNT:
        return bytes(channel for color in colors for channel in parse_color(color))

    msg = f"Expected 1 or {ZONE_COUNT} colors, got {len(colors)}"
    raise ColorError(msg)
