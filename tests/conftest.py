from __future__ import annotations

from typing import Optional

import pytest

from canvastext.config import StyleConfig
from canvastext.fonts import parse_font
from canvastext.layout import TextLayout
from canvastext.render import TextMetrics, TraceBackend
from canvastext.utils.text import grapheme_count


class MonospaceMetrics:
    """Every grapheme advances 0.6 * font size; no vertical metrics are reported."""

    def __init__(self, ratio: float = 0.6) -> None:
        self.ratio = ratio

    def measure_text(self, text: str, font: Optional[str] = None) -> TextMetrics:
        size = parse_font(font).size if font else 10.0
        return TextMetrics(width=self.ratio * size * grapheme_count(text))


@pytest.fixture
def metrics() -> MonospaceMetrics:
    return MonospaceMetrics()


@pytest.fixture
def make_layout(metrics):
    """Build a TextLayout at font size 10 (6px per character) with style overrides."""

    def _make(text, **style) -> TextLayout:
        style.setdefault("font_size", 10)
        return TextLayout(text, StyleConfig(**style), measurer=metrics)

    return _make


@pytest.fixture
def trace_backend(metrics) -> TraceBackend:
    return TraceBackend(metrics=metrics)
