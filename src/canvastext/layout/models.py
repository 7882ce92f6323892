"""Data models produced and consumed by the layout pass."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """
    A break-candidate unit of a paragraph.

    Attributes:
        text: Rendered part of the token (a word, a single grapheme, or a whole paragraph).
        suffix: Whitespace run following the token. Counted when another token
            follows on the same line, trimmed at a wrap boundary.
        width: Measured width of text + suffix in px (0.0 when measured lazily).
    """

    text: str
    suffix: str = ""
    width: float = 0.0

    @property
    def has_trailing_whitespace(self) -> bool:
        return bool(self.suffix)

    @property
    def is_blank(self) -> bool:
        """True when the token renders nothing (pure whitespace)."""
        return not self.text.strip()


@dataclass(frozen=True)
class LaidOutLine:
    """
    One committed line of a layout pass.

    Attributes:
        text: Final text of the line (an ellipsis glyph included when truncated).
        width: Measured width in px, letter spacing included.
        last_in_paragraph: True for the last line of its paragraph; never justified.
    """

    text: str
    width: float
    last_in_paragraph: bool = False


@dataclass(frozen=True)
class CharacterRun:
    """
    Per-glyph record handed to a character hook. Not retained after emission.

    Attributes:
        char: Grapheme about to be drawn.
        index: Index of the grapheme across the whole laid-out text.
        line: Index of the line the grapheme belongs to.
        column: Index of the grapheme inside its line.
        x_offset: Left edge of the glyph in px, relative to the content box.
        y: Baseline of the line in px, relative to the content box.
        width: Backend-measured advance of the glyph.
        is_last_in_line: True for the final grapheme of the line.
    """

    char: str
    index: int
    line: int
    column: int
    x_offset: float
    y: float
    width: float
    is_last_in_line: bool
