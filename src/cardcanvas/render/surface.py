"""Fixed-size drawing surface with scoped clip/alpha state."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator, Union

from PIL import Image, ImageChops, ImageDraw, ImageFont

from cardcanvas.errors import ConfigError
from cardcanvas.render.compositor import SourceRect, cover_source_rect, path_mask, sample_image
from cardcanvas.render.gradient import LinearGradient, dim_gradient
from cardcanvas.render.image import ImageLoaderFunc, ImageSource, load_image, save_image_to_bytes
from cardcanvas.types import CSSColor, ImageFit, Point
from cardcanvas.utils.color import TRANSPARENT, parse_color
from cardcanvas.utils.geometry import (
    AnchorSpec,
    BoxTarget,
    ClipPath,
    Rect,
    RectPath,
    create_rect,
    resolve_target,
)
from cardcanvas.utils.text import DerivedStyle, TextMeasurer, TextStyle, derive_style, wrap_style

logger = logging.getLogger(__name__)

ACCENT_PRIMARY = "#9700af"
ACCENT_SECONDARY = "#a69a00"

Fill = Union[CSSColor, LinearGradient]

# Pillow text anchors: horizontal (l/m/r) + vertical (a/m/s/d)
_ALIGN_ANCHORS = {"left": "l", "start": "l", "center": "m", "right": "r", "end": "r"}
_BASELINE_ANCHORS = {"top": "a", "middle": "m", "alphabetic": "s", "bottom": "d"}


@dataclass(frozen=True)
class DrawState:
    """Drawing state that scoped calls push and pop."""

    clip: Image.Image | None = None
    alpha: float = 1.0


@dataclass(frozen=True)
class LayoutResult:
    """
    Where a text block ended up.

    Attributes:
        lines: Rendered lines in drawing order (reversed when stacking upward).
        line_positions: (x, y) anchor point of each drawn line.
        rect: Bounding rectangle of the block, anchored at the style's (x, y).
        line_height: Font size plus line margin.
        direction: 1 when lines stack downward, -1 when upward.
        style: The derived style used for rendering.
    """

    lines: tuple[str, ...]
    line_positions: tuple[Point, ...]
    rect: Rect
    line_height: float
    direction: int
    style: DerivedStyle


class CanvasSurface:
    """
    A fixed-size RGBA canvas with box, circle, text and image primitives.

    Every primitive draws onto its own layer and composites it through the
    current clip mask and alpha, inside a scope that restores the state on exit
    even when the call fails.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: CSSColor | None = None,
        loader: ImageLoaderFunc | None = None,
    ) -> None:
        """
        Initialize surface.

        Args:
            width: Canvas width in pixels.
            height: Canvas height in pixels.
            background: Optional fill color; transparent by default.
            loader: Callable turning an image source into a PIL Image.

        Raises:
            ConfigError: If width or height are not positive numbers.
        """
        if not isinstance(width, (int, float)) or not isinstance(height, (int, float)) or width <= 0 or height <= 0:
            raise ConfigError("Invalid canvas config: width and height required")

        self._width = int(width)
        self._height = int(height)
        fill = parse_color(background) if background else TRANSPARENT
        self._image = Image.new("RGBA", (self._width, self._height), fill)
        self._loader = loader or load_image
        self._states: list[DrawState] = [DrawState()]

    # ========================================================================
    # Geometry
    # ========================================================================

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def left(self) -> float:
        return 0

    @property
    def top(self) -> float:
        return 0

    @property
    def right(self) -> float:
        return self._width

    @property
    def bottom(self) -> float:
        return self._height

    @property
    def center_x(self) -> float:
        return self._width / 2

    @property
    def center_y(self) -> float:
        return self._height / 2

    @property
    def rect(self) -> Rect:
        return create_rect(self._width, self._height, left=0, top=0)

    # ========================================================================
    # State handling
    # ========================================================================

    @property
    def _state(self) -> DrawState:
        return self._states[-1]

    @property
    def state_depth(self) -> int:
        """Number of saved states; 1 when no draw call is in progress."""
        return len(self._states)

    @contextmanager
    def _scoped(self) -> Iterator[None]:
        """Save the drawing state and restore it on exit, including on error."""
        depth = len(self._states)
        self._states.append(self._state)
        try:
            yield
        finally:
            del self._states[depth:]

    def _clip(self, path: ClipPath) -> None:
        mask = path_mask(path, (self._width, self._height))
        if self._state.clip is not None:
            mask = ImageChops.multiply(self._state.clip, mask)
        self._states[-1] = replace(self._state, clip=mask)

    def _set_alpha(self, alpha: float) -> None:
        self._states[-1] = replace(self._state, alpha=max(0.0, min(1.0, alpha)))

    def _new_layer(self) -> Image.Image:
        return Image.new("RGBA", (self._width, self._height), TRANSPARENT)

    def _composite(self, layer: Image.Image) -> None:
        state = self._state
        if state.clip is not None or state.alpha < 1.0:
            alpha = layer.getchannel("A")
            if state.clip is not None:
                alpha = ImageChops.multiply(alpha, state.clip)
            if state.alpha < 1.0:
                factor = state.alpha
                alpha = alpha.point(lambda v: round(v * factor))
            layer.putalpha(alpha)
        self._image.alpha_composite(layer)

    # ========================================================================
    # Primitives
    # ========================================================================

    def draw_box(self, target: Union[BoxTarget, Rect, AnchorSpec], fill: Fill | None, *, opacity: float = 1.0) -> Rect:
        """
        Fill a rectangle with a color or a gradient.

        Args:
            target: Explicit rect or anchor spec (bare Rect/AnchorSpec also accepted).
            fill: CSS color or LinearGradient. Nothing is drawn when None.
            opacity: Global alpha for this call.

        Returns:
            The resolved rectangle.
        """
        rect = resolve_target(target)
        if fill is None:
            return rect

        with self._scoped():
            self._set_alpha(opacity)
            layer = self._new_layer()
            if isinstance(fill, LinearGradient):
                layer.paste(fill.render(rect), (round(rect.left), round(rect.top)))
            else:
                box = (round(rect.left), round(rect.top), round(rect.right) - 1, round(rect.bottom) - 1)
                if box[2] >= box[0] and box[3] >= box[1]:
                    ImageDraw.Draw(layer).rectangle(box, fill=parse_color(fill))
            self._composite(layer)
        return rect

    def draw_circle(
        self,
        center: Point,
        radius: float,
        *,
        fill: CSSColor | None = None,
        stroke: CSSColor | None = None,
        stroke_width: float = 1,
    ) -> None:
        """
        Draw a circle, stroke first, then fill.

        The stroke is centered on the circle's edge like a canvas stroke.
        """
        cx, cy = center
        with self._scoped():
            layer = self._new_layer()
            draw = ImageDraw.Draw(layer)
            if stroke:
                outer = radius + stroke_width / 2
                draw.ellipse(
                    [cx - outer, cy - outer, cx + outer, cy + outer],
                    outline=parse_color(stroke),
                    width=max(1, round(stroke_width)),
                )
            if fill:
                draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius], fill=parse_color(fill))
            self._composite(layer)

    def measure_text(self, style: TextStyle) -> float:
        """Width in pixels of the style's text on a single line."""
        derived = derive_style(style)
        return TextMeasurer(derived.font)(style.text)

    def draw_text(self, style: TextStyle) -> LayoutResult:
        """
        Wrap and draw a text block.

        Lines are spaced by size + y_margin and stack from (x, y) in the
        break_to direction. Each line is stroked first (when a stroke color is
        set), then filled.

        Args:
            style: Text and style to render.

        Returns:
            LayoutResult describing the rendered block.

        Raises:
            ConfigError: If the text is empty.
        """
        derived = derive_style(style)
        wrapped = wrap_style(derived)

        x, y, size = style.x, style.y, style.size
        line_height = derived.line_height
        direction = derived.direction

        draw_y = y
        if style.v_align == "top":
            draw_y -= size / 2
        elif style.v_align == "bottom":
            draw_y += size / 2

        lines = list(wrapped.lines)
        if style.break_to == "top":
            lines.reverse()
        if style.break_to == "center":
            draw_y -= ((len(lines) - 1) / 2) * line_height

        font = derived.font
        anchor = None
        if isinstance(font, ImageFont.FreeTypeFont):
            anchor = _ALIGN_ANCHORS[style.align] + _BASELINE_ANCHORS[style.baseline]

        positions: list[Point] = []
        with self._scoped():
            layer = self._new_layer()
            draw = ImageDraw.Draw(layer)
            ty = draw_y
            for line in lines:
                if style.stroke:
                    stroke_color = parse_color(style.stroke)
                    draw.text(
                        (x, ty),
                        line,
                        font=font,
                        fill=stroke_color,
                        anchor=anchor,
                        stroke_width=max(1, round(style.stroke_width / 2)),
                        stroke_fill=stroke_color,
                    )
                if style.fill:
                    draw.text((x, ty), line, font=font, fill=parse_color(style.fill), anchor=anchor)
                positions.append((x, ty))
                ty += line_height * direction
            self._composite(layer)

        edge_y = y
        if style.v_align == "top":
            edge_y += size
        elif style.v_align == "bottom":
            edge_y -= size

        vertical = {"bottom": {"top": y}, "top": {"bottom": y}, "center": {"center_y": y}}[style.break_to]
        if style.align in ("left", "start"):
            horizontal = {"left": x}
        elif style.align in ("right", "end"):
            horizontal = {"right": x}
        else:
            horizontal = {"center_x": x}

        rect = create_rect(
            wrapped.max_width,
            abs(edge_y - positions[-1][1]),
            **vertical,
            **horizontal,
        )

        return LayoutResult(
            lines=tuple(lines),
            line_positions=tuple(positions),
            rect=rect,
            line_height=line_height,
            direction=direction,
            style=derived,
        )

    def create_dim(
        self,
        rect: Rect,
        *,
        fade_start: float = 0.0,
        fade_end: float = 1.0,
        color: CSSColor = "rgba(0, 0, 0, 0.7)",
    ) -> LinearGradient:
        """Vertical transparent-to-color gradient over rect, for overlays behind text."""
        return dim_gradient(rect, fade_start=fade_start, fade_end=fade_end, color=color)

    def load_image(self, source: ImageSource) -> Image.Image:
        """Load an image source with this surface's loader."""
        return self._loader(source)

    def draw_image(
        self,
        source: ImageSource,
        left: float,
        top: float,
        *,
        width: float | None = None,
        height: float | None = None,
        clip_to: ClipPath | None = None,
        fit: ImageFit | None = None,
        source_left: float | None = None,
        source_top: float | None = None,
        crop_width: float | None = None,
        crop_height: float | None = None,
        opacity: float = 1.0,
    ) -> None:
        """
        Draw an image into a destination rectangle.

        Args:
            source: PIL Image or anything the loader accepts (bytes, path, URL).
            left: Destination left edge.
            top: Destination top edge.
            width: Destination width (defaults to the image's natural width).
            height: Destination height (defaults to the image's natural height).
            clip_to: Clip path; defaults to the destination rectangle.
            fit: "cover" for aspect-preserving fill with center crop.
            source_left, source_top, crop_width, crop_height: Explicit source region,
                ignored when fit is "cover".
            opacity: Global alpha for this call.

        Raises:
            LoadError: If the source can't be loaded. The surface stays usable.
            ConfigError: If fit is unsupported.
        """
        if fit not in (None, "cover"):
            raise ConfigError(f"Unsupported image fit: {fit!r}")

        with self._scoped():
            self._set_alpha(opacity)
            if clip_to is not None:
                self._clip(clip_to)

            image = self.load_image(source)

            dest_width = width or image.width
            dest_height = height or image.height
            if clip_to is None:
                self._clip(RectPath(create_rect(dest_width, dest_height, left=left, top=top)))

            if fit == "cover":
                region = cover_source_rect(image.width, image.height, dest_width, dest_height)
            else:
                region = SourceRect(
                    left=source_left or 0,
                    top=source_top or 0,
                    width=crop_width or image.width,
                    height=crop_height or image.height,
                )

            sampled = sample_image(image, region, (round(dest_width), round(dest_height)))
            layer = self._new_layer()
            layer.paste(sampled, (round(left), round(top)))
            self._composite(layer)

    # ========================================================================
    # Output
    # ========================================================================

    def to_image(self) -> Image.Image:
        """Copy of the current pixel buffer."""
        return self._image.copy()

    def to_png(self) -> bytes:
        """
        Encode the surface as PNG.

        Raises:
            EncodeError: If encoding fails.
        """
        return save_image_to_bytes(self._image, format="PNG")
