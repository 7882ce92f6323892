"""Ellipsis truncation of the last permissible line."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import regex

from canvastext.types import ELLIPSIS
from canvastext.utils.text import split_graphemes

logger = logging.getLogger(__name__)

# Whitespace run plus the word after it, anchored at the end of the line
_LAST_WORD = regex.compile(r"\s+\S*$")


def longest_fitting_prefix(graphemes: List[str], fits: Callable[[str], bool]) -> str:
    """
    Binary search for the longest grapheme prefix accepted by fits().

    Widths grow monotonically with prefix length, so the search is exact.

    Args:
        graphemes: Text split into grapheme clusters.
        fits: Predicate on a candidate prefix.

    Returns:
        The longest accepted prefix (possibly empty).
    """
    low, high = 0, len(graphemes)
    while low < high:
        mid = (low + high + 1) // 2
        if fits("".join(graphemes[:mid])):
            low = mid
        else:
            high = mid - 1
    return "".join(graphemes[:low])


def _drop_last_word(text: str) -> Optional[str]:
    """Remove the trailing word of text, or None when only one word is left."""
    stripped = text.rstrip()
    match = _LAST_WORD.search(stripped)
    if match is None or match.start() == 0:
        return None
    return stripped[:match.start()]


def truncate(
    line_text: str,
    available_width: Optional[float],
    measure: Callable[[str], float],
    by_word: bool = False,
) -> str:
    """
    Shrink a line until it plus an ellipsis fits the width budget.

    In word mode trailing whole words are removed first; once a single word
    is left, shrinking continues character by character. When not even one
    character fits next to the ellipsis, the result is the ellipsis alone.

    Args:
        line_text: Text of the line to truncate.
        available_width: Width budget in px, None for unbounded.
        measure: Width function (letter spacing included).
        by_word: Remove whole words before falling back to characters.

    Returns:
        Truncated text ending with the ellipsis glyph.
    """
    def fits(candidate: str) -> bool:
        return available_width is None or measure(candidate + ELLIPSIS) <= available_width

    candidate = line_text.rstrip()
    if fits(candidate):
        return candidate + ELLIPSIS

    if by_word:
        while (shorter := _drop_last_word(candidate)) is not None:
            candidate = shorter
            if fits(candidate):
                return candidate + ELLIPSIS

    prefix = longest_fitting_prefix(split_graphemes(candidate), fits).rstrip()
    if not prefix:
        logger.debug(f"No room for any character of {line_text!r} next to the ellipsis")
    return prefix + ELLIPSIS
