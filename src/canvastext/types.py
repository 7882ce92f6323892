"""Type aliases and closed style variants used across the canvastext package."""

from enum import Enum
from typing import Any, Callable, Literal, Tuple, Union

# Measurements
Extent = Union[float, Literal["auto"]]  # a fixed size in px, or "auto" for unbounded

# Paint is whatever the backend accepts as a fill/stroke style:
# a CSS color string, an RGB tuple in 0-1 range, or a backend gradient/pattern object
RGBColor = Tuple[float, float, float]
Paint = Union[str, RGBColor, Any]

# Glyph marking the cut point of a truncated line
ELLIPSIS = "…"

AUTO = "auto"


class _StyleEnum(str, Enum):
    """String-valued enum that parses its values case-insensitively."""

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class WrapMode(_StyleEnum):
    """Where a line may break."""

    WORD = "word"
    CHAR = "char"
    NONE = "none"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str) and value.strip().lower() == "character":
            return cls.CHAR
        return super()._missing_(value)


class Align(_StyleEnum):
    """Horizontal alignment of each line inside the content box."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class VerticalAlign(_StyleEnum):
    """Vertical alignment of the line block inside the content box."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Direction(_StyleEnum):
    """Text direction. INHERIT takes whatever the backend currently uses."""

    INHERIT = "inherit"
    LTR = "ltr"
    RTL = "rtl"


# Per-character hook: called with (CharacterRun, GlyphScope) before each glyph is drawn
CharHook = Callable[..., None]
