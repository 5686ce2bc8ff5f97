"""CSS color parsing on top of Pillow's ImageColor."""

import re
from functools import lru_cache

from PIL import ImageColor

from cardcanvas.errors import ConfigError
from cardcanvas.types import RGBAColor

# Pillow only accepts integer alpha in rgba(); canvas callers write "rgba(0,0,0,0.7)".
_RGBA_PATTERN = re.compile(
    r"^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*([0-9]*\.?[0-9]+)\s*\)$",
    re.IGNORECASE,
)

TRANSPARENT: RGBAColor = (0, 0, 0, 0)


@lru_cache(maxsize=256)
def parse_color(color: str) -> RGBAColor:
    """
    Parse a CSS color string to an RGBA tuple.

    Supports everything ImageColor understands (hex, names, rgb(), hsl()),
    `transparent`, and rgba() with a fractional alpha in the 0-1 range.

    Args:
        color: CSS color string.

    Returns:
        (r, g, b, a) tuple with components in 0-255.

    Raises:
        ConfigError: If the string isn't a recognized color.
    """
    value = color.strip()
    if value.lower() == "transparent":
        return TRANSPARENT

    if match := _RGBA_PATTERN.match(value):
        r, g, b = (min(int(c), 255) for c in match.group(1, 2, 3))
        alpha = float(match.group(4))
        if alpha <= 1.0:
            alpha *= 255
        return (r, g, b, max(0, min(255, round(alpha))))

    try:
        rgba = ImageColor.getcolor(value, "RGBA")
    except ValueError as e:
        raise ConfigError(f"Unrecognized color: {color!r}") from e
    return tuple(rgba)  # type: ignore[return-value]


def interpolate(start: RGBAColor, end: RGBAColor, t: float) -> RGBAColor:
    """
    Linear interpolation between two RGBA colors, t in 0-1.

    Channels are blended premultiplied by alpha, so fading from "transparent"
    to white stays white instead of passing through grey.
    """
    t = max(0.0, min(1.0, t))
    alpha = start[3] + (end[3] - start[3]) * t
    if alpha <= 0:
        return (0, 0, 0, 0)

    def channel(a: int, b: int) -> int:
        premultiplied = a * start[3] + (b * end[3] - a * start[3]) * t
        return max(0, min(255, round(premultiplied / alpha)))

    r, g, b = (channel(start[i], end[i]) for i in range(3))
    return (r, g, b, round(alpha))
