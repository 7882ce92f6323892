"""Utility modules."""

from canvastext.utils.dimensions import BoxDimensions, resolve_box, resolve_extent
from canvastext.utils.text import (
    coerce_text,
    grapheme_count,
    is_whitespace,
    round_half_up,
    split_graphemes,
)

__all__ = [
    "BoxDimensions",
    "coerce_text",
    "grapheme_count",
    "is_whitespace",
    "resolve_box",
    "resolve_extent",
    "round_half_up",
    "split_graphemes",
]
