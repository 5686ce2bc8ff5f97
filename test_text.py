"""Tests for text styles and line wrapping."""

import math

import pytest
from pydantic import ValidationError

from cardcanvas import fonts
from cardcanvas.errors import ConfigError
from cardcanvas.fonts import load_font, parse_css_font, register_fonts
from cardcanvas.utils.text import (
    TextMeasurer,
    TextStyle,
    build_css_font,
    derive_style,
    wrap,
    wrap_style,
)


def monospace(text: str) -> float:
    """10 pixels per character, so expectations can be worked out by hand."""
    return len(text) * 10.0


# ============================================================================
# Wrapping
# ============================================================================

def test_short_text_stays_on_one_line():
    result = wrap("he love Jea", monospace, 200)

    assert result.lines == ("he love Jea",)
    assert result.max_width == 110


def test_repeated_spaces_collapse():
    result = wrap("  he   love  ", monospace, 200)
    assert result.lines == ("he love",)


def test_greedy_wrap_breaks_at_word_boundaries():
    result = wrap("aaa bbb ccc ddd", monospace, 70)

    assert result.lines == ("aaa bbb", "ccc ddd")
    assert result.widths == (70, 70)


def test_newlines_are_hard_breaks_without_blank_lines():
    result = wrap("a\n\nb", monospace, 1000)
    assert result.lines == ("a", "b")


def test_long_token_is_hyphenated_within_limit():
    url = "https://example.com/" + "x" * 40
    assert len(url) == 60

    result = wrap(url, monospace, 100)

    assert len(result.lines) > 1
    assert all(line.endswith("-") for line in result.lines[:-1])
    assert all(monospace(line) <= 100 for line in result.lines)
    assert "".join(line.rstrip("-") for line in result.lines) == url


def test_long_token_flushes_current_line_first():
    result = wrap("hi abcdefghijklmnop", monospace, 60)

    assert result.lines[0] == "hi"
    assert result.lines[1] == "abcde-"
    assert all(width <= 60 for width in result.widths)


def test_remainder_of_split_word_continues_the_line():
    result = wrap("abcdefgh ij", monospace, 60)
    assert result.lines == ("abcde-", "fgh ij")


def test_width_narrower_than_one_glyph_still_terminates():
    result = wrap("abc", monospace, 5)
    assert result.lines == ("a-", "b-", "c")


def test_infinite_width_never_wraps():
    text = "word " * 50
    result = wrap(text, monospace, math.inf)
    assert result.lines == (text.strip(),)


def test_empty_text_has_zero_max_width():
    result = wrap("", monospace, 100)

    assert result.lines == ()
    assert result.max_width == 0


def test_real_font_wrap_respects_limit():
    measure = TextMeasurer(load_font("bold 38px sans-serif"))
    text = "Lance claims that the quick brown fox jumps over the lazy dog every single morning"

    result = wrap(text, measure, 610)

    assert len(result.lines) >= 2
    assert all(measure(line) <= 610 for line in result.lines)
    assert result.max_width == max(measure(line) for line in result.lines)


def test_measurer_memoizes_without_changing_results():
    font = load_font("normal 20px sans-serif")
    measure = TextMeasurer(font)

    first = measure("hello world")
    assert measure("hello world") == first == float(font.getlength("hello world"))


# ============================================================================
# Styles
# ============================================================================

@pytest.mark.parametrize(
    "font_type, expected",
    [
        ("bold", "bold 38px sans-serif"),
        ("normal", "normal 38px sans-serif"),
        ("auto", "38px sans-serif"),
    ],
)
def test_build_css_font(font_type, expected):
    assert build_css_font(38, font_type) == expected


def test_derive_style_does_not_mutate_input():
    style = TextStyle(text="News", size=20, font_type="bold")

    derived = derive_style(style)

    assert derived.css_font == "bold 20px sans-serif"
    assert style.css_font is None
    assert derived.style is style


def test_explicit_css_font_wins():
    derived = derive_style(TextStyle(text="x", size=20, css_font="bold 12px monospace"))
    assert derived.css_font == "bold 12px monospace"


def test_style_is_frozen():
    style = TextStyle(text="News")
    with pytest.raises(ValidationError):
        style.text = "Other"


def test_line_height_and_direction():
    derived = derive_style(TextStyle(text="x", size=38, y_margin=4, break_to="top"))

    assert derived.line_height == 42
    assert derived.direction == -1


def test_wrap_style_rejects_blank_text():
    with pytest.raises(ConfigError):
        wrap_style(derive_style(TextStyle(text="   ")))


def test_parse_css_font():
    spec = parse_css_font("bold 38px sans-serif")

    assert spec.family == "sans-serif"
    assert spec.size == 38
    assert spec.bold


def test_parse_css_font_rejects_garbage():
    with pytest.raises(ConfigError):
        parse_css_font("large and friendly")


@pytest.mark.parametrize("css_font", ["bold 0px sans-serif", "0.0px serif"])
def test_parse_css_font_rejects_zero_size(css_font):
    with pytest.raises(ConfigError):
        parse_css_font(css_font)


def test_zero_size_style_is_config_error():
    with pytest.raises(ConfigError):
        derive_style(TextStyle(text="hi", size=0))


def test_register_fonts_picks_up_ttf_and_otf(tmp_path, monkeypatch):
    monkeypatch.setattr(fonts, "_FONT_PATHS", {})
    (tmp_path / "brand-bold.otf").write_bytes(b"")
    (tmp_path / "body-regular.ttf").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("not a font")

    assert register_fonts(tmp_path) == 2
    assert set(fonts._FONT_PATHS) == {"Brand-Bold", "Body-Regular"}
