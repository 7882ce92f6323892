"""Split a paragraph into break-candidate tokens."""

from __future__ import annotations

from typing import Callable, List, Optional

import regex

from canvastext.layout.models import Token
from canvastext.types import WrapMode
from canvastext.utils.text import split_graphemes

# A word runs up to and including any hyphens that end it; the whitespace run
# after it becomes the token suffix. Leading whitespace forms its own blank token.
_WORD_TOKEN = regex.compile(r"(?P<text>[^\s\-]+\-*|\-+)(?P<suffix>\s*)|(?P<suffix_only>\s+)")


def _word_tokens(paragraph: str) -> List[Token]:
    tokens = []
    for match in _WORD_TOKEN.finditer(paragraph):
        if match.group("suffix_only") is not None:
            tokens.append(Token(text="", suffix=match.group("suffix_only")))
        else:
            tokens.append(Token(text=match.group("text"), suffix=match.group("suffix")))
    return tokens


def tokenize(
    paragraph: str, wrap: WrapMode, measure: Optional[Callable[[str], float]] = None
) -> List[Token]:
    """
    Split one paragraph into break candidates according to the wrap mode.

    - WORD: words with their trailing whitespace run as suffix; a word may
      also end after an existing hyphen.
    - CHAR: one token per grapheme cluster (emoji sequences stay whole).
    - NONE: the whole paragraph as a single token.

    Args:
        paragraph: Paragraph text (no newlines).
        wrap: Wrap mode.
        measure: Optional width function; when given each token carries its width.

    Returns:
        Ordered list of tokens. Empty for an empty paragraph.
    """
    if not paragraph:
        return []

    if wrap is WrapMode.WORD:
        tokens = _word_tokens(paragraph)
    elif wrap is WrapMode.CHAR:
        tokens = [Token(text=grapheme) for grapheme in split_graphemes(paragraph)]
    else:
        tokens = [Token(text=paragraph)]

    if measure is None:
        return tokens
    return [Token(text=t.text, suffix=t.suffix, width=measure(t.text + t.suffix)) for t in tokens]
