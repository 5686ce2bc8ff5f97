"""Rendering modules: image loading, compositing and the canvas surface."""

from cardcanvas.render.compositor import SourceRect, cover_source_rect
from cardcanvas.render.gradient import LinearGradient
from cardcanvas.render.image import (
    ImageLoader,
    load_image,
    load_image_from_bytes,
    save_image_to_bytes,
)
from cardcanvas.render.surface import CanvasSurface, LayoutResult

__all__ = [
    "CanvasSurface",
    "ImageLoader",
    "LayoutResult",
    "LinearGradient",
    "SourceRect",
    "cover_source_rect",
    "load_image",
    "load_image_from_bytes",
    "save_image_to_bytes",
]
