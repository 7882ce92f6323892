"""Text utilities shared by the layout and rendering passes."""

from __future__ import annotations

import math
from typing import Any, List

import regex

# Extended grapheme cluster: emoji ZWJ sequences, skin tones and combining
# marks stay together as one user-perceived character
_GRAPHEME = regex.compile(r"\X")


def coerce_text(value: Any) -> str:
    """
    Coerce an arbitrary text value into the string that gets laid out.

    Mirrors how a script host stringifies values: None becomes the empty
    string, booleans are lowercase, integral numbers have no decimal point.

    Args:
        value: Text value from the caller (str, number, bool or None).

    Returns:
        String to lay out.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def split_graphemes(text: str) -> List[str]:
    """
    Split text into grapheme clusters.

    Args:
        text: Text to split.

    Returns:
        List of user-perceived characters, in logical order.
    """
    return _GRAPHEME.findall(text)


def grapheme_count(text: str) -> int:
    """Number of grapheme clusters in text."""
    return len(_GRAPHEME.findall(text))


def is_whitespace(grapheme: str) -> bool:
    """True for whitespace graphemes (space, tab, no-break space...)."""
    return grapheme.isspace()


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties towards positive infinity.

    Python's round() uses banker's rounding; canvas decoration offsets
    round ties up (round(2.5) == 2, round_half_up(2.5) == 3).
    """
    return math.floor(value + 0.5)
