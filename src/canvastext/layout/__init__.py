"""Line layout: tokenizing, greedy line breaking, truncation and justification."""

from canvastext.layout.ellipsis import truncate
from canvastext.layout.justify import compute_word_gap, should_justify
from canvastext.layout.line_breaker import LineBreaker
from canvastext.layout.metrics import complete_metrics, resolve_offset_y
from canvastext.layout.models import CharacterRun, LaidOutLine, Token
from canvastext.layout.text_layout import TextLayout
from canvastext.layout.tokenizer import tokenize

__all__ = [
    "CharacterRun",
    "LaidOutLine",
    "LineBreaker",
    "TextLayout",
    "Token",
    "complete_metrics",
    "compute_word_gap",
    "resolve_offset_y",
    "should_justify",
    "tokenize",
    "truncate",
]
