"""Drawing backends and the glyph emitter."""

from canvastext.render.base import Backend, TextMeasurer, TextMetrics
from canvastext.render.emitter import DrawState, GlyphScope, GlyphScopeClosedError, RunEmitter, render_text
from canvastext.render.image import PillowBackend
from canvastext.render.pdf import ReportLabBackend, ReportLabMetrics
from canvastext.render.trace import TraceBackend

__all__ = [
    "Backend",
    "DrawState",
    "GlyphScope",
    "GlyphScopeClosedError",
    "PillowBackend",
    "ReportLabBackend",
    "ReportLabMetrics",
    "RunEmitter",
    "TextMeasurer",
    "TextMetrics",
    "TraceBackend",
    "render_text",
]
