"""Vertical linear gradients used for legibility overlays."""

from dataclasses import dataclass

from PIL import Image

from cardcanvas.types import CSSColor, RGBAColor
from cardcanvas.utils.color import interpolate, parse_color
from cardcanvas.utils.geometry import Rect


@dataclass(frozen=True)
class LinearGradient:
    """
    Gradient running from y_start to y_end in canvas coordinates.

    Stops are (offset, color) pairs with offsets in 0-1, kept in the order given.
    Outside the stop range the nearest stop color is used.
    """

    y_start: float
    y_end: float
    stops: tuple[tuple[float, CSSColor], ...]

    def color_at(self, offset: float) -> RGBAColor:
        """Color at a gradient offset (0 = y_start, 1 = y_end)."""
        if not self.stops:
            return (0, 0, 0, 0)

        parsed = [(max(0.0, min(1.0, o)), parse_color(c)) for o, c in self.stops]
        if offset <= parsed[0][0]:
            return parsed[0][1]

        for (o1, c1), (o2, c2) in zip(parsed, parsed[1:]):
            if offset <= o2:
                if o2 <= o1:
                    return c2
                return interpolate(c1, c2, (offset - o1) / (o2 - o1))

        return parsed[-1][1]

    def render(self, rect: Rect) -> Image.Image:
        """
        Rasterize the gradient over a rectangle.

        Args:
            rect: Area being filled, in canvas coordinates.

        Returns:
            RGBA image sized to the rounded rectangle.
        """
        width = max(1, round(rect.right) - round(rect.left))
        height = max(1, round(rect.bottom) - round(rect.top))
        span = self.y_end - self.y_start

        column = Image.new("RGBA", (1, height))
        for row in range(height):
            y = round(rect.top) + row + 0.5
            offset = (y - self.y_start) / span if span else 1.0
            column.putpixel((0, row), self.color_at(offset))

        return column.resize((width, height), Image.Resampling.NEAREST)


def dim_gradient(
    rect: Rect,
    fade_start: float = 0.0,
    fade_end: float = 1.0,
    color: CSSColor = "rgba(0, 0, 0, 0.7)",
) -> LinearGradient:
    """
    Fade from transparent at the top of rect to color at its bottom.

    The fade begins at fade_start and reaches full color at fade_end (offsets in 0-1).
    """
    return LinearGradient(
        y_start=rect.top,
        y_end=rect.bottom,
        stops=((0.0, "transparent"), (fade_start, "transparent"), (fade_end, color)),
    )
