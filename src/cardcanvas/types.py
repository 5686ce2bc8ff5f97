"""Type aliases used across the cardcanvas package."""

from typing import Literal, Tuple

# Measurements
Point = Tuple[float, float]

# Colors: CSS-like strings ("#9700af", "cyan", "rgba(0, 0, 0, 0.7)", "transparent")
CSSColor = str
RGBAColor = Tuple[int, int, int, int]

# Text styling options
FontType = Literal["normal", "bold", "auto"]
TextAlign = Literal["left", "center", "right", "start", "end"]
TextBaseline = Literal["top", "middle", "bottom", "alphabetic"]
VerticalAlign = Literal["top", "middle", "bottom"]
BreakDirection = Literal["top", "bottom", "center"]

# Image fitting
ImageFit = Literal["cover"]
