"""Canvas helpers and card templates for generated social images."""

__version__ = "0.1.0"

from cardcanvas.cards import SatireNewsCard
from cardcanvas.config import Config, load_config
from cardcanvas.errors import CardCanvasError, ConfigError, EncodeError, LoadError
from cardcanvas.render import CanvasSurface, ImageLoader, LayoutResult
from cardcanvas.utils import AnchorSpec, Rect, TextStyle, create_rect, wrap

__all__ = [
    "AnchorSpec",
    "CanvasSurface",
    "CardCanvasError",
    "Config",
    "ConfigError",
    "EncodeError",
    "ImageLoader",
    "LayoutResult",
    "LoadError",
    "Rect",
    "SatireNewsCard",
    "TextStyle",
    "create_rect",
    "load_config",
    "wrap",
]
