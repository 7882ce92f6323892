"""Font strings, registration and resolution."""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence, Tuple

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase._fontdata import standardFonts
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).parent

# Font path registry: maps registered font names to their file paths
# This is needed by the Pillow backend, which loads TrueType files directly
_FONT_PATHS: dict[str, Path] = {}

GENERIC_FAMILIES = frozenset({
    "serif", "sans-serif", "monospace", "cursive", "fantasy",
    "system-ui", "ui-serif", "ui-sans-serif", "ui-monospace",
})

# Built-in PDF faces by family alias: (regular, bold, italic, bold-italic)
_BUILTIN_FACES: dict[str, Tuple[str, str, str, str]] = {
    "helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "arial": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "sans-serif": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "times new roman": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "serif": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
    "courier new": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
    "monospace": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}

_FONT_SIZE = re.compile(r"^(?P<size>\d+(?:\.\d+)?)px$")


@dataclass(frozen=True)
class FontSpec:
    """
    Parsed CSS font shorthand.

    Attributes:
        style: "normal", "italic" or "oblique".
        variant: "normal" or "small-caps".
        weight: "normal" or "bold" (or a numeric weight string).
        size: Font size in px.
        families: Family names in priority order, quotes removed.
    """

    style: str = "normal"
    variant: str = "normal"
    weight: str = "normal"
    size: float = 12.0
    families: Tuple[str, ...] = ("Helvetica",)

    @property
    def bold(self) -> bool:
        return self.weight == "bold" or (self.weight.isdigit() and int(self.weight) >= 600)

    @property
    def italic(self) -> bool:
        return self.style in ("italic", "oblique")


def _normalize_font_name(name: str) -> str:
    """
    Normalize a font name to TitleCase convention.

    Examples:
        "iosevka-regular" → "Iosevka-Regular"
        "helvetica-bold" → "Helvetica-Bold"

    Args:
        name: Font name to normalize (can be any case)

    Returns:
        TitleCase font name
    """
    parts = name.split('-')
    return '-'.join(part.title() for part in parts)


def normalize_font_family(font_family: str) -> str:
    """
    Quote family names so the list survives a CSS font shorthand.

    Families containing spaces are double-quoted unless already quoted or
    generic: "Font Awesome, Arial" → '"Font Awesome", Arial'.

    Args:
        font_family: Comma-separated family list.

    Returns:
        Normalized family list.
    """
    families = []
    for family in font_family.split(","):
        family = family.strip()
        if not family:
            continue
        already_quoted = family[0] in "\"'" and family[-1] == family[0]
        if " " in family and not already_quoted and family.lower() not in GENERIC_FAMILIES:
            family = f'"{family}"'
        families.append(family)
    return ", ".join(families)


def build_font_string(font_style: str, font_variant: str, font_size: float, font_family: str) -> str:
    """
    Compose the CSS font shorthand handed to the backend.

    Format: "<style> <variant> <size>px <family list>", e.g. "normal normal 12px Arial".
    """
    size = int(font_size) if float(font_size).is_integer() else font_size
    return f"{font_style} {font_variant} {size}px {normalize_font_family(font_family)}"


@lru_cache(maxsize=256)
def parse_font(font: str) -> FontSpec:
    """
    Parse a CSS font shorthand into a FontSpec.

    Unknown leading keywords are ignored; a missing size falls back to 12px.

    Args:
        font: Shorthand such as 'italic bold 16px "Font Awesome", Arial'.

    Returns:
        Parsed FontSpec.
    """
    style, variant, weight = "normal", "normal", "normal"
    size = 12.0
    words = font.split()
    family_start = len(words)

    for position, word in enumerate(words):
        lowered = word.lower()
        if match := _FONT_SIZE.match(lowered):
            size = float(match.group("size"))
            family_start = position + 1
            break
        if lowered in ("italic", "oblique"):
            style = lowered
        elif lowered == "small-caps":
            variant = lowered
        elif lowered in ("bold", "bolder") or lowered.isdigit():
            weight = "bold" if lowered == "bolder" else lowered

    family_text = " ".join(words[family_start:])
    families = tuple(
        family.strip().strip("\"'")
        for family in family_text.split(",")
        if family.strip()
    )
    return FontSpec(style=style, variant=variant, weight=weight, size=size, families=families or ("Helvetica",))


def register_fonts(directory: Optional[Path] = None) -> int:
    """
    Register TrueType fonts with ReportLab.

    Each *.ttf file is registered under a TitleCase name based on its
    filename (without extension), e.g. my-custom-font.ttf → "My-Custom-Font".

    Args:
        directory: Directory to scan. Defaults to the package fonts directory.

    Returns:
        Number of fonts registered.
    """
    directory = directory or FONTS_DIR
    ttf_files = sorted(directory.glob("*.ttf"))

    if not ttf_files:
        logger.info(f"No TTF font files found in {directory}. Using built-in PDF fonts.")
        return 0

    registered_count = 0
    for font_path in ttf_files:
        font_name = _normalize_font_name(font_path.stem)

        try:
            pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
        except Exception as e:
            logger.warning(
                f"Failed to register font {font_name} from {font_path.name}: {e}. "
                "Skipping this font."
            )
            continue

        _FONT_PATHS[font_name] = font_path
        logger.info(f"Registered font: {font_name} from {font_path.name}")
        registered_count += 1

    return registered_count


def _is_registered(font_name: str) -> bool:
    return font_name in pdfmetrics.getRegisteredFontNames() or font_name in standardFonts


def _registered_face(family: str, bold: bool, italic: bool) -> Optional[str]:
    """Find a registered TTF face for family, preferring the matching style suffix."""
    base = _normalize_font_name(family.replace(" ", "-"))
    suffixes = []
    if bold and italic:
        suffixes += ["-BoldItalic", "-BoldOblique", "-Bolditalic", "-Bold-Italic"]
    if bold:
        suffixes.append("-Bold")
    if italic:
        suffixes += ["-Italic", "-Oblique"]
    suffixes += ["", "-Regular"]

    for suffix in suffixes:
        if _is_registered(base + suffix):
            return base + suffix
    return None


def resolve_font(families: Sequence[str], bold: bool = False, italic: bool = False,
                 fallback: str = "Helvetica") -> str:
    """
    Resolve a family list to a ReportLab face name.

    Resolution priority, for each family in order:
    1. A registered TTF face (case-insensitive, TitleCase naming)
    2. A built-in PDF face (Helvetica/Arial, Times, Courier and generic aliases)
    Falls back to the fallback family when nothing matches.

    Args:
        families: Family names in priority order.
        bold: Prefer a bold face.
        italic: Prefer an italic/oblique face.
        fallback: Family used when no family resolves.

    Returns:
        Registered or built-in face name.
    """
    variant_index = (2 if italic else 0) + (1 if bold else 0)

    for family in families:
        if face := _registered_face(family, bold, italic):
            logger.debug(f"Font '{family}' resolved to registered face '{face}'")
            return face
        if faces := _BUILTIN_FACES.get(family.lower()):
            return faces[variant_index]

    faces = _BUILTIN_FACES.get(fallback.lower(), _BUILTIN_FACES["helvetica"])
    logger.debug(f"Using fallback font '{faces[variant_index]}' for {list(families)}")
    return faces[variant_index]


def get_font_path(font_name: str) -> Optional[Path]:
    """
    Get the file path for a registered font.

    Args:
        font_name: Registered font name (e.g., "Iosevka-Regular").

    Returns:
        Path to the font file, or None if font path is not tracked.
        Note: PDF built-in fonts (Helvetica, Courier, etc.) won't have paths.
    """
    return _FONT_PATHS.get(font_name)
