"""Canvas-style text layout and rendering: wrapping, truncation, alignment and per-glyph drawing."""

__version__ = "0.1.0"

from canvastext.config import StyleConfig, load_style
from canvastext.layout import CharacterRun, LaidOutLine, TextLayout
from canvastext.render import (
    Backend,
    GlyphScope,
    GlyphScopeClosedError,
    PillowBackend,
    ReportLabBackend,
    TraceBackend,
    render_text,
)
from canvastext.types import Align, Direction, VerticalAlign, WrapMode

__all__ = [
    "Align",
    "Backend",
    "CharacterRun",
    "Direction",
    "GlyphScope",
    "GlyphScopeClosedError",
    "LaidOutLine",
    "PillowBackend",
    "ReportLabBackend",
    "StyleConfig",
    "TextLayout",
    "TraceBackend",
    "VerticalAlign",
    "WrapMode",
    "load_style",
    "render_text",
]
