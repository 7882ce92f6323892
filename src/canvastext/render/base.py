"""Drawing backend contract used by the layout and emission passes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

# Attributes every backend keeps on its save/restore stack, with canvas defaults
DEFAULT_ATTRS: Dict[str, Any] = {
    "font": "normal normal 10px sans-serif",
    "fill_style": "black",
    "stroke_style": "black",
    "line_width": 1.0,
    "text_baseline": "alphabetic",
    "text_align": "left",
    "direction": "ltr",
    "letter_spacing": "0px",
}


def letter_spacing_px(value: Any) -> float:
    """Parse a letter_spacing attribute ("2px", "2" or a number) to px."""
    if isinstance(value, str):
        value = value.strip().removesuffix("px") or 0
    return float(value)


@dataclass(frozen=True)
class TextMetrics:
    """
    Result of measuring a string.

    The vertical fields are optional: backends only report what their
    text API provides. Missing fields are resolved by canvastext.layout.metrics.
    """

    width: float
    font_bounding_box_ascent: Optional[float] = None
    font_bounding_box_descent: Optional[float] = None
    actual_bounding_box_ascent: Optional[float] = None
    actual_bounding_box_descent: Optional[float] = None


class TextMeasurer(Protocol):
    """Anything that can measure text in a given font."""

    def measure_text(self, text: str, font: Optional[str] = None) -> TextMetrics:
        ...


class Backend(ABC):
    """
    Canvas-like drawing surface.

    Style attributes (font, fill_style, stroke_style, line_width, text_baseline,
    text_align, direction, letter_spacing) live on a stack: save() pushes a
    copy, restore() pops it. Subclasses that keep extra state (transforms,
    native graphics state) extend save()/restore() and call super().
    """

    def __init__(self) -> None:
        self._attrs: Dict[str, Any] = dict(DEFAULT_ATTRS)
        self._stack: List[Dict[str, Any]] = []

    # ========================================================================
    # State
    # ========================================================================

    def save(self) -> None:
        self._stack.append(dict(self._attrs))

    def restore(self) -> None:
        if self._stack:
            self._attrs = self._stack.pop()

    @property
    def depth(self) -> int:
        """Number of unmatched save() calls."""
        return len(self._stack)

    def set_attr(self, name: str, value: Any) -> None:
        """Set a style attribute (e.g. "fill_style", "font")."""
        if name not in DEFAULT_ATTRS:
            raise ValueError(f"Unknown backend attribute: {name}")
        self._attrs[name] = value

    def get_attr(self, name: str) -> Any:
        return self._attrs[name]

    # ========================================================================
    # Measurement
    # ========================================================================

    @abstractmethod
    def measure_text(self, text: str, font: Optional[str] = None) -> TextMetrics:
        """
        Measure text.

        Args:
            text: Text to measure.
            font: CSS font shorthand. Defaults to the current "font" attribute.

        Returns:
            TextMetrics with at least the advance width.
        """

    # ========================================================================
    # Drawing
    # ========================================================================

    @abstractmethod
    def fill_text(self, text: str, x: float, y: float) -> None:
        """Fill text with its alphabetic baseline at y."""

    @abstractmethod
    def stroke_text(self, text: str, x: float, y: float) -> None:
        """Stroke glyph outlines of text with its baseline at y."""

    @abstractmethod
    def translate(self, x: float, y: float) -> None:
        """Move the origin; undone by restore()."""

    @abstractmethod
    def begin_path(self) -> None:
        ...

    @abstractmethod
    def move_to(self, x: float, y: float) -> None:
        ...

    @abstractmethod
    def line_to(self, x: float, y: float) -> None:
        ...

    @abstractmethod
    def stroke(self) -> None:
        """Stroke the current path with stroke_style and line_width."""
