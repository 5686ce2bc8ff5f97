"""Exception types raised by the canvas core."""


class CardCanvasError(Exception):
    """Base class for all cardcanvas errors."""


class ConfigError(CardCanvasError, ValueError):
    """Invalid geometry or style input (missing size, unresolvable anchor, empty text)."""


class LoadError(CardCanvasError):
    """An image source could not be fetched or decoded."""


class EncodeError(CardCanvasError):
    """The surface could not be encoded to PNG."""
