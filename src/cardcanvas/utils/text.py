"""Text styling and width-constrained line wrapping."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from PIL import ImageFont
from pydantic import BaseModel, ConfigDict

from cardcanvas.errors import ConfigError
from cardcanvas.fonts import load_font
from cardcanvas.types import (
    BreakDirection,
    CSSColor,
    FontType,
    TextAlign,
    TextBaseline,
    VerticalAlign,
)

logger = logging.getLogger(__name__)

HYPHEN = "-"

Measure = Callable[[str], float]


# ============================================================================
# Styles
# ============================================================================

class TextStyle(BaseModel):
    """
    Everything needed to lay out and draw one text block.

    Styles are immutable. Derive variants with Pydantic's model_copy():

        title = TextStyle(text="News", size=20, font_type="bold")
        subtitle = title.model_copy(update={"text": "News and Nonsense", "size": 10})
    """

    model_config = ConfigDict(frozen=True)

    text: str
    x: float = 0.0
    y: float = 0.0

    size: float = 50
    """Font size in pixels."""

    font_type: FontType = "normal"
    """Weight tag used to build the CSS font when css_font isn't given."""

    css_font: str | None = None
    """Explicit CSS font shorthand (e.g. "bold 38px sans-serif"). Overrides size/font_type."""

    fill: CSSColor | None = "white"
    stroke: CSSColor | None = None
    stroke_width: float = 1

    align: TextAlign = "center"
    baseline: TextBaseline = "middle"
    v_align: VerticalAlign = "middle"

    y_margin: float = 0
    """Extra vertical space between lines, added to the font size."""

    break_to: BreakDirection = "bottom"
    """Direction in which wrapped lines stack from (x, y)."""

    break_max_width: float = math.inf
    """Maximum line width in pixels before wrapping."""


def build_css_font(size: float, font_type: FontType) -> str:
    """Build the CSS font shorthand for a size and weight tag."""
    size_str = f"{size:g}px"
    if font_type == "bold":
        return f"bold {size_str} sans-serif"
    if font_type == "auto":
        return f"{size_str} sans-serif"
    return f"normal {size_str} sans-serif"


@dataclass(frozen=True)
class DerivedStyle:
    """A TextStyle together with the font string and font it resolves to."""

    style: TextStyle
    css_font: str
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont

    @property
    def line_height(self) -> float:
        return self.style.size + self.style.y_margin

    @property
    def direction(self) -> int:
        return -1 if self.style.break_to == "top" else 1


def derive_style(style: TextStyle) -> DerivedStyle:
    """
    Resolve the font of a style without touching the style itself.

    Args:
        style: Input style.

    Returns:
        DerivedStyle carrying the css_font string and the loaded font.
    """
    css_font = style.css_font or build_css_font(style.size, style.font_type)
    return DerivedStyle(style=style, css_font=css_font, font=load_font(css_font))


# ============================================================================
# Measurement
# ============================================================================

class TextMeasurer:
    """
    Measures advance widths with a Pillow font, memoizing per string.

    The cache only avoids repeated calls to the font; results are the same as
    measuring directly.
    """

    def __init__(self, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> None:
        self.font = font
        self._cache: dict[str, float] = {}

    def __call__(self, text: str) -> float:
        width = self._cache.get(text)
        if width is None:
            width = float(self.font.getlength(text))
            self._cache[text] = width
        return width


# ============================================================================
# Wrapping
# ============================================================================

@dataclass(frozen=True)
class WrapResult:
    """Wrapped lines with their measured widths."""

    lines: tuple[str, ...]
    widths: tuple[float, ...]

    @property
    def max_width(self) -> float:
        return max(self.widths, default=0.0)


def _longest_hyphenated_prefix(word: str, measure: Measure, max_width: float) -> int:
    """
    Length of the longest prefix of word that fits max_width with a trailing hyphen.

    Never returns less than 1 so every split makes progress.
    """
    split_index = len(word) - 1
    while split_index > 1 and measure(word[:split_index] + HYPHEN) > max_width:
        split_index -= 1
    return max(split_index, 1)


def wrap(text: str, measure: Measure, max_width: float) -> WrapResult:
    """
    Greedily wrap text into lines no wider than max_width.

    Newlines are hard breaks and each paragraph wraps independently. Words are
    added to the current line while the candidate line fits; a word wider than
    max_width on its own is split into hyphenated pieces, each on its own line.
    Blank lines never appear in the result.

    Args:
        text: Text to wrap.
        measure: Function returning the pixel width of a string in the render font.
        max_width: Maximum line width in pixels (math.inf disables wrapping).

    Returns:
        WrapResult with lines and per-line widths.
    """
    lines: list[str] = []
    widths: list[float] = []

    def emit(line: str, width: float) -> None:
        lines.append(line)
        widths.append(width)

    for paragraph in text.split("\n"):
        current = ""
        current_width = 0.0

        for word in (w for w in paragraph.split(" ") if w):
            if measure(word) > max_width:
                if current:
                    emit(current, current_width)
                    current, current_width = "", 0.0

                while measure(word) > max_width and len(word) > 1:
                    split_index = _longest_hyphenated_prefix(word, measure, max_width)
                    part = word[:split_index] + HYPHEN
                    emit(part, measure(part))
                    word = word[split_index:]

            candidate = f"{current} {word}" if current else word
            candidate_width = measure(candidate)

            if candidate_width > max_width and current:
                emit(current, current_width)
                current, current_width = word, measure(word)
            else:
                current, current_width = candidate, candidate_width

        if current:
            emit(current, current_width)

    return WrapResult(lines=tuple(lines), widths=tuple(widths))


def wrap_style(derived: DerivedStyle) -> WrapResult:
    """
    Wrap a derived style's text at its break_max_width.

    Raises:
        ConfigError: If the style has no visible text.
    """
    if not derived.style.text or not derived.style.text.strip():
        raise ConfigError("Text style requires non-empty text.")

    result = wrap(derived.style.text, TextMeasurer(derived.font), derived.style.break_max_width)
    logger.debug(f"Wrapped {len(derived.style.text)} chars into {len(result.lines)} line(s)")
    return result
