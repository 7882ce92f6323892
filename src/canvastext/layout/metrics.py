"""Font-metric fallbacks for backends with an incomplete text-metrics API."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from canvastext.render.base import TextMetrics

# Fallback metrics of a typical sans-serif face at 100px.
# They are scaled by font_size / 100 before use.
FALLBACK_FONT_BOX_ASCENT = 91.0
FALLBACK_FONT_BOX_DESCENT = 21.0
FALLBACK_ACTUAL_ASCENT = 71.58203125
FALLBACK_ACTUAL_DESCENT = 0.0


def _first_present(*values: Optional[float]) -> float:
    for value in values:
        if value is not None:
            return value
    raise ValueError("no metric value available")


def resolve_ascent_descent(metrics: TextMetrics, font_size: float) -> tuple[float, float]:
    """
    Resolve the ascent and descent used to place a baseline.

    Per side: the font bounding box when the backend reports it, else the
    actual bounding box, else the scaled font-box fallback.

    Args:
        metrics: Measurement returned by the backend.
        font_size: Font size in px.

    Returns:
        (ascent, descent) in px, both measured away from the baseline.
    """
    scale = font_size / 100
    ascent = _first_present(
        metrics.font_bounding_box_ascent,
        metrics.actual_bounding_box_ascent,
        FALLBACK_FONT_BOX_ASCENT * scale,
    )
    descent = _first_present(
        metrics.font_bounding_box_descent,
        metrics.actual_bounding_box_descent,
        FALLBACK_FONT_BOX_DESCENT * scale,
    )
    return ascent, descent


def resolve_offset_y(metrics: TextMetrics, font_size: float, line_height: float = 1.0) -> float:
    """
    Baseline offset from the top of a line slot.

    Glyphs placed on this baseline appear vertically centered inside one
    line-height slot. Used identically for single- and multi-line text.

    Formula: (ascent - descent) / 2 + (font_size * line_height) / 2

    Args:
        metrics: Measurement returned by the backend (usually of "M").
        font_size: Font size in px.
        line_height: Line height multiplier. 0 or None means 1.

    Returns:
        Offset in px.
    """
    line_height = line_height or 1.0
    ascent, descent = resolve_ascent_descent(metrics, font_size)
    return (ascent - descent) / 2 + (font_size * line_height) / 2


def complete_metrics(metrics: TextMetrics, font_size: float) -> TextMetrics:
    """
    Fill every metric field the backend left out with its scaled fallback.

    Fields the backend reported are kept as-is.

    Args:
        metrics: Measurement returned by the backend.
        font_size: Font size in px.

    Returns:
        A TextMetrics with all four vertical fields set.
    """
    scale = font_size / 100

    def _or(value: Optional[float], fallback: float) -> float:
        return value if value is not None else fallback * scale

    return replace(
        metrics,
        font_bounding_box_ascent=_or(metrics.font_bounding_box_ascent, FALLBACK_FONT_BOX_ASCENT),
        font_bounding_box_descent=_or(metrics.font_bounding_box_descent, FALLBACK_FONT_BOX_DESCENT),
        actual_bounding_box_ascent=_or(metrics.actual_bounding_box_ascent, FALLBACK_ACTUAL_ASCENT),
        actual_bounding_box_descent=_or(metrics.actual_bounding_box_descent, FALLBACK_ACTUAL_DESCENT),
    )
