"""Inter-word spacing for justified lines."""

from __future__ import annotations

from typing import Optional

import regex

from canvastext.layout.models import LaidOutLine

_GAP = regex.compile(r"\s+")


def count_word_gaps(line_text: str) -> int:
    """Number of whitespace runs between words of a (stripped) line."""
    return len(_GAP.findall(line_text.strip()))


def compute_word_gap(line_text: str, line_width: float, available_width: Optional[float]) -> float:
    """
    Extra px added at every inter-word gap so the line fills the available width.

    Args:
        line_text: Text of the line.
        line_width: Measured width of the line.
        available_width: Content box width, None when unbounded.

    Returns:
        Extra spacing per gap; 0.0 for a single word, an unbounded box or a
        line that already fills the width.
    """
    gaps = count_word_gaps(line_text)
    if gaps == 0 or available_width is None:
        return 0.0
    return max(available_width - line_width, 0.0) / gaps


def should_justify(line: LaidOutLine, line_count: int) -> bool:
    """
    Whether a line gets stretched under align=justify.

    Never the last line of a paragraph, never a layout of exactly one line.
    """
    return line_count > 1 and not line.last_in_paragraph
