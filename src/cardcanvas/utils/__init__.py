"""Utility modules."""

from cardcanvas.utils.geometry import (
    Anchored,
    AnchorSpec,
    CirclePath,
    Explicit,
    Rect,
    RectPath,
    circle_path,
    create_rect,
    rect_path,
)
from cardcanvas.utils.text import TextStyle, WrapResult, derive_style, wrap

__all__ = [
    "AnchorSpec",
    "Anchored",
    "CirclePath",
    "Explicit",
    "Rect",
    "RectPath",
    "TextStyle",
    "WrapResult",
    "circle_path",
    "create_rect",
    "derive_style",
    "rect_path",
    "wrap",
]
