"""Font discovery and CSS font string resolution."""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from PIL import ImageFont

from cardcanvas.errors import ConfigError

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).parent

# Font path registry: maps TitleCase font names to their file paths
_FONT_PATHS: dict[str, Path] = {}

# Generic CSS families resolved against fonts commonly installed with Pillow/system packages.
# Pillow's truetype() searches the system font directories for bare file names.
GENERIC_FAMILIES: dict[str, tuple[str, str]] = {
    "sans-serif": ("DejaVuSans.ttf", "DejaVuSans-Bold.ttf"),
    "serif": ("DejaVuSerif.ttf", "DejaVuSerif-Bold.ttf"),
    "monospace": ("DejaVuSansMono.ttf", "DejaVuSansMono-Bold.ttf"),
}

_CSS_FONT_PATTERN = re.compile(
    r"^\s*(?:(?P<weight>normal|bold|bolder|lighter|[1-9]00)\s+)?"
    r"(?P<size>\d+(?:\.\d+)?)px\s+(?P<family>.+?)\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class FontSpec:
    """Parsed CSS font shorthand (weight, pixel size, family)."""

    family: str
    size: float
    bold: bool = False


def _normalize_font_name(name: str) -> str:
    """
    Normalize a font name to TitleCase convention.

    Examples:
        "roboto-bold" → "Roboto-Bold"
        "anton" → "Anton"
    """
    parts = name.split('-')
    return '-'.join(part.title() for part in parts)


def register_fonts(directory: Path | None = None) -> int:
    """
    Register TTF and OTF fonts found in a directory.

    Scans the bundled fonts directory when no directory is given. Each font is
    registered under the TitleCase form of its file stem, e.g. `anton-regular.ttf`
    becomes "Anton-Regular".

    Args:
        directory: Directory to scan for .ttf and .otf files.

    Returns:
        Number of fonts registered.
    """
    directory = directory or FONTS_DIR
    font_files = sorted([*directory.glob("*.ttf"), *directory.glob("*.otf")])

    if not font_files:
        logger.debug(f"No TTF/OTF font files found in {directory}")
        return 0

    for font_path in font_files:
        font_name = _normalize_font_name(font_path.stem)
        _FONT_PATHS[font_name] = font_path
        logger.info(f"Registered font: {font_name} from {font_path.name}")

    load_font.cache_clear()
    return len(font_files)


def parse_css_font(css_font: str) -> FontSpec:
    """
    Parse a CSS font shorthand such as "bold 38px sans-serif".

    Raises:
        ConfigError: If the string has no family or a pixel size that isn't positive.
    """
    match = _CSS_FONT_PATTERN.match(css_font)
    if not match:
        raise ConfigError(f"Unsupported font string: {css_font!r}")

    weight = (match.group("weight") or "normal").lower()
    bold = weight in ("bold", "bolder") or (weight.isdigit() and int(weight) >= 600)
    family = match.group("family").split(",")[0].strip().strip("'\"")
    size = float(match.group("size"))
    if size <= 0:
        raise ConfigError(f"Font size must be positive: {css_font!r}")
    return FontSpec(family=family, size=size, bold=bold)


def _candidates(spec: FontSpec) -> list[str | Path]:
    """Font files to try for a spec, most specific first."""
    candidates: list[str | Path] = []

    family = _normalize_font_name(spec.family.replace(" ", "-"))
    for name in ([f"{family}-Bold", family] if spec.bold else [f"{family}-Regular", family]):
        if path := _FONT_PATHS.get(name):
            candidates.append(path)

    if generic := GENERIC_FAMILIES.get(spec.family.lower()):
        regular, bold = generic
        candidates.append(bold if spec.bold else regular)
        if spec.bold:
            candidates.append(regular)

    return candidates


@lru_cache(maxsize=64)
def load_font(css_font: str) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """
    Resolve a CSS font string to a Pillow font.

    Resolution priority:
    1. Registered TTF/OTF fonts matching the family (bold variant first when bold)
    2. System fonts for generic families (sans-serif, serif, monospace)
    3. Pillow's built-in font at the requested size

    Args:
        css_font: CSS font shorthand, e.g. "bold 38px sans-serif".

    Returns:
        Pillow font object usable for measuring and drawing.
    """
    spec = parse_css_font(css_font)

    for candidate in _candidates(spec):
        try:
            return ImageFont.truetype(str(candidate), size=spec.size)
        except OSError:
            logger.debug(f"Font file {candidate} not available for '{css_font}'")

    logger.warning(f"No TrueType font found for '{css_font}', using Pillow's built-in font")
    return ImageFont.load_default(size=spec.size)
