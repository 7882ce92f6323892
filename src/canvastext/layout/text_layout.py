"""Text node: owns text, style and the cached result of the layout pass."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from canvastext.config import StyleConfig
from canvastext.fonts import build_font_string
from canvastext.layout.line_breaker import LineBreaker
from canvastext.layout.metrics import complete_metrics
from canvastext.layout.models import LaidOutLine
from canvastext.types import AUTO
from canvastext.utils.text import coerce_text, grapheme_count

if TYPE_CHECKING:
    from canvastext.render.base import TextMeasurer, TextMetrics


class TextLayout:
    """
    Laid-out block of text.

    The line list is computed lazily and cached. Changing the text or any
    style property (including width and height) invalidates the cache, and
    the next access runs a full layout pass again.

    Example:
        layout = TextLayout("Hello world", StyleConfig(width=60, font_size=10))
        for line in layout.lines:
            print(line.text, line.width)
    """

    def __init__(
        self,
        text: Any = None,
        style: Optional[StyleConfig] = None,
        measurer: Optional[TextMeasurer] = None,
    ) -> None:
        """
        Initialize the layout.

        Args:
            text: Text to lay out. Non-strings are coerced (None → "", 5 → "5").
            style: Style of the node. Defaults to StyleConfig().
            measurer: Text measurement provider. Defaults to ReportLab font metrics.
        """
        if measurer is None:
            from canvastext.render.pdf import ReportLabMetrics

            measurer = ReportLabMetrics()
        self.measurer = measurer
        self._text = coerce_text(text)
        self._style = style or StyleConfig()
        self._lines: Optional[List[LaidOutLine]] = None
        self._widths: Dict[str, float] = {}

    # ========================================================================
    # Inputs
    # ========================================================================

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: Any) -> None:
        self._text = coerce_text(value)
        self.invalidate()

    @property
    def style(self) -> StyleConfig:
        return self._style

    @style.setter
    def style(self, value: StyleConfig) -> None:
        self._style = value
        self.invalidate()

    def update_style(self, **changes: Any) -> None:
        """Apply style changes (validated like constructor arguments) and invalidate."""
        self.style = self._style.evolve(**changes)

    def invalidate(self) -> None:
        """Drop the cached lines and measurements."""
        self._lines = None
        self._widths.clear()

    @property
    def font(self) -> str:
        """CSS font shorthand handed to the measurer and the backend."""
        style = self._style
        return build_font_string(style.font_style, style.font_variant, style.font_size, style.font_family)

    # ========================================================================
    # Measurement
    # ========================================================================

    def measure_width(self, text: str) -> float:
        """
        Width of text in the node's font, letter spacing included.

        Letter spacing is added once per grapheme, after the last one too.
        """
        if text not in self._widths:
            width = self.measurer.measure_text(text, self.font).width
            self._widths[text] = width + self._style.letter_spacing * grapheme_count(text)
        return self._widths[text]

    def measure_size(self, text: str) -> TextMetrics:
        """
        Backend metrics of text, every missing vertical field filled from fallbacks.

        Args:
            text: Text to measure.

        Returns:
            TextMetrics with all fields set.
        """
        return complete_metrics(self.measurer.measure_text(text, self.font), self._style.font_size)

    # ========================================================================
    # Layout
    # ========================================================================

    def layout(self) -> List[LaidOutLine]:
        """Run the layout pass if the cache is stale and return the lines."""
        if self._lines is None:
            breaker = LineBreaker(self._style, self.measure_width)
            self._lines = breaker.break_lines(self._text)
        return self._lines

    @property
    def lines(self) -> List[LaidOutLine]:
        return self.layout()

    @property
    def text_width(self) -> float:
        """Widest committed line."""
        return max((line.width for line in self.lines), default=0.0)

    @property
    def text_height(self) -> float:
        return self._style.font_size

    @property
    def width(self) -> float:
        """Outer width: the fixed width, or the text width plus padding when auto."""
        if self._style.width == AUTO:
            return self.text_width + 2 * self._style.padding
        return self._style.width

    @property
    def height(self) -> float:
        """Outer height: the fixed height, or all lines plus padding when auto."""
        if self._style.height == AUTO:
            return len(self.lines) * self._style.line_height_px + 2 * self._style.padding
        return self._style.height

    def self_rect(self) -> Tuple[float, float, float, float]:
        """Bounding rectangle (x, y, width, height) in node space."""
        return (0.0, 0.0, self.width, self.height)
