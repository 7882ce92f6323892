"""Greedy line breaking under wrap, width and height budgets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, List

from canvastext.config import StyleConfig
from canvastext.layout.ellipsis import longest_fitting_prefix, truncate
from canvastext.layout.models import LaidOutLine
from canvastext.layout.tokenizer import tokenize
from canvastext.types import Align, WrapMode
from canvastext.utils.dimensions import resolve_box
from canvastext.utils.text import split_graphemes

logger = logging.getLogger(__name__)

# Tolerance for float noise when summing line heights against the height budget
_HEIGHT_EPSILON = 1e-9


@dataclass
class _PassState:
    """Mutable bookkeeping of one layout pass."""

    lines: List[LaidOutLine] = field(default_factory=list)
    used_height: float = 0.0
    truncated: bool = False
    done: bool = False


class LineBreaker:
    """
    Packs paragraphs into lines no wider than the content box.

    Per paragraph the breaker accumulates tokens while they fit, emits the
    line when the next token does not fit, and places a token alone when it
    overflows an empty line (words are never split or hyphenated). Once the
    height budget is used up and content remains, the last line goes through
    the ellipsis truncator (ellipsis=True) or the rest is dropped silently.
    """

    def __init__(self, style: StyleConfig, measure: Callable[[str], float]) -> None:
        """
        Initialize the breaker for one style.

        Args:
            style: Style of the pass (wrap, ellipsis, align, box, line height).
            measure: Width function, letter spacing included.
        """
        self.style = style
        self.measure = measure
        box = resolve_box(style.width, style.height, style.padding)
        self.max_width = box.width
        self.max_height = box.height
        self.line_height_px = style.line_height_px

    # ========================================================================
    # Budget checks
    # ========================================================================

    def _fits(self, text: str) -> bool:
        return self.max_width is None or self.measure(text) <= self.max_width

    def _has_room(self, state: _PassState) -> bool:
        """Whether one more line fits under the height budget."""
        if self.max_height is None:
            return True
        return state.used_height + self.line_height_px <= self.max_height + _HEIGHT_EPSILON

    # ========================================================================
    # Line commits
    # ========================================================================

    def _finalize(self, text: str) -> str:
        """Trim wrap-boundary whitespace; wrap=none keeps the text verbatim."""
        if self.style.wrap is not WrapMode.NONE or self.style.align is Align.JUSTIFY:
            return text.strip()
        return text

    def _append(self, state: _PassState, text: str) -> None:
        state.lines.append(LaidOutLine(text=text, width=self.measure(text)))
        state.used_height += self.line_height_px

    def _commit(self, state: _PassState, text: str, remaining: bool) -> bool:
        """
        Commit a line and apply the height budget.

        Args:
            state: Pass state.
            text: Raw line text.
            remaining: Whether any content follows this line.

        Returns:
            True when the pass must stop (budget exhausted with content left).
        """
        self._append(state, self._finalize(text))

        if remaining and not self._has_room(state):
            last = state.lines.pop()
            if self.style.ellipsis:
                by_word = self.style.wrap is WrapMode.WORD
                cut = truncate(last.text, self.max_width, self.measure, by_word=by_word)
                last = LaidOutLine(text=cut, width=self.measure(cut))
            state.lines.append(replace(last, last_in_paragraph=True))
            state.truncated = True
            state.done = True
            return True
        return False

    def _close_paragraph(self, state: _PassState) -> None:
        if state.lines:
            state.lines[-1] = replace(state.lines[-1], last_in_paragraph=True)

    # ========================================================================
    # Paragraph strategies
    # ========================================================================

    def _break_unwrapped(self, state: _PassState, paragraph: str, more_paragraphs: bool) -> None:
        """wrap=none: one line per paragraph, cut only when it overflows the width."""
        if self._fits(paragraph):
            self._commit(state, paragraph, remaining=more_paragraphs)
            return

        if self.style.ellipsis:
            cut = truncate(paragraph, self.max_width, self.measure)
            self._append(state, cut)
            state.truncated = True
            state.done = True
            return

        clipped = longest_fitting_prefix(split_graphemes(paragraph), self._fits)
        self._commit(state, clipped, remaining=more_paragraphs)

    def _break_wrapped(self, state: _PassState, paragraph: str, more_paragraphs: bool) -> None:
        """wrap=word / wrap=char: greedy packing of tokens."""
        tokens = tokenize(paragraph, self.style.wrap)
        line = ""
        wrapped = False
        index = 0

        while index < len(tokens):
            token = tokens[index]
            line_is_empty = not line.strip()

            if line_is_empty and wrapped and token.is_blank:
                # Whitespace at the start of a wrapped line is never rendered
                index += 1
                continue

            if line_is_empty or self._fits(line + token.text):
                line += token.text + token.suffix
                index += 1
                continue

            if self._commit(state, line, remaining=True):
                return
            line = ""
            wrapped = True

        if line.strip() or not wrapped:
            self._commit(state, line, remaining=more_paragraphs)

    # ========================================================================
    # Entry point
    # ========================================================================

    def break_lines(self, text: str) -> List[LaidOutLine]:
        """
        Lay out text into lines.

        Args:
            text: Text to lay out; "\\n" separates paragraphs.

        Returns:
            Ordered list of committed lines. Empty for empty text.
        """
        state = _PassState()
        if not text:
            return state.lines

        paragraphs = text.split("\n")
        for number, paragraph in enumerate(paragraphs):
            more_paragraphs = number < len(paragraphs) - 1

            if self.style.wrap is WrapMode.NONE or self.max_width is None:
                self._break_unwrapped(state, paragraph, more_paragraphs)
            else:
                self._break_wrapped(state, paragraph, more_paragraphs)

            self._close_paragraph(state)
            if state.done:
                break

        logger.debug(
            f"Laid out {len(state.lines)} line(s) from {len(paragraphs)} paragraph(s)"
            f"{' (truncated)' if state.truncated else ''}"
        )
        return state.lines
