"""Recording backend that turns drawing calls into a canvas-style trace."""

import re
from typing import Any, List, Optional, Tuple

from canvastext.render.base import Backend, TextMeasurer, TextMetrics
from canvastext.utils.text import round_half_up

# Backend attribute names as they appear on an HTML canvas context
_CANVAS_NAMES = {
    "font": "font",
    "fill_style": "fillStyle",
    "stroke_style": "strokeStyle",
    "line_width": "lineWidth",
    "text_baseline": "textBaseline",
    "text_align": "textAlign",
    "direction": "direction",
    "letter_spacing": "letterSpacing",
}

_ARGUMENTS = re.compile(r"\([^)]*\)")


def _format_value(value: Any, rounded: bool) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if rounded:
        return str(round_half_up(value))
    value = round(float(value), 6)
    return str(int(value)) if value.is_integer() else str(value)


class TraceBackend(Backend):
    """
    Backend that draws nothing and records everything.

    Calls are recorded as "name(arg,arg);" and attribute writes as
    "name=value;", so a whole pass reads like:

        save();font=normal normal 10px Arial;translate(0,0);fillText(A,0,8.5);restore();

    Measurement calls are delegated to a metrics provider and not recorded.
    """

    def __init__(self, metrics: Optional[TextMeasurer] = None) -> None:
        """
        Initialize the backend.

        Args:
            metrics: Provider used by measure_text(). Defaults to ReportLab metrics.
        """
        super().__init__()
        if metrics is None:
            from canvastext.render.pdf import ReportLabMetrics

            metrics = ReportLabMetrics()
        self.metrics = metrics
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def _record_attr(self, name: str, value: Any) -> None:
        self.calls.append((f"={_CANVAS_NAMES[name]}", (value,)))

    def get_trace(self, relaxed: bool = False, rounded: bool = False) -> str:
        """
        Render the recorded calls as a single string.

        Args:
            relaxed: Drop call arguments, keeping only call names and attribute writes.
            rounded: Round numeric arguments to integers (ties up).

        Returns:
            Trace string, one ";"-terminated entry per call.
        """
        parts = []
        for name, args in self.calls:
            if name.startswith("="):
                parts.append(f"{name[1:]}={_format_value(args[0], rounded)};")
            else:
                formatted = ",".join(_format_value(arg, rounded) for arg in args)
                parts.append(f"{name}({formatted});")
        trace = "".join(parts)
        if relaxed:
            trace = _ARGUMENTS.sub("()", trace)
        return trace

    def clear(self) -> None:
        self.calls.clear()

    def save(self) -> None:
        super().save()
        self._record("save")

    def restore(self) -> None:
        super().restore()
        self._record("restore")

    def set_attr(self, name: str, value: Any) -> None:
        super().set_attr(name, value)
        self._record_attr(name, value)

    def measure_text(self, text: str, font: Optional[str] = None) -> TextMetrics:
        return self.metrics.measure_text(text, font or self.get_attr("font"))

    def fill_text(self, text: str, x: float, y: float) -> None:
        self._record("fillText", text, x, y)

    def stroke_text(self, text: str, x: float, y: float) -> None:
        self._record("strokeText", text, x, y)

    def translate(self, x: float, y: float) -> None:
        self._record("translate", x, y)

    def begin_path(self) -> None:
        self._record("beginPath")

    def move_to(self, x: float, y: float) -> None:
        self._record("moveTo", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._record("lineTo", x, y)

    def stroke(self) -> None:
        self._record("stroke")
