"""Draw a laid-out text node onto a backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

from canvastext.layout.justify import compute_word_gap, should_justify
from canvastext.layout.metrics import resolve_offset_y
from canvastext.layout.models import CharacterRun, LaidOutLine
from canvastext.layout.text_layout import TextLayout
from canvastext.render.base import Backend
from canvastext.types import Align, CharHook, Direction, Paint, VerticalAlign
from canvastext.utils.text import is_whitespace, round_half_up, split_graphemes

logger = logging.getLogger(__name__)


class GlyphScopeClosedError(RuntimeError):
    """A glyph scope was used after its character had been drawn."""


@dataclass(frozen=True)
class DrawState:
    """
    Paint state a glyph is drawn with.

    Attributes:
        font: CSS font shorthand.
        fill: Fill paint, None for no fill.
        stroke: Stroke paint, None for no stroke.
        stroke_width: Effective stroke width in px.
        letter_spacing: Extra advance after each character in px.
        direction: "ltr" or "rtl".
        fill_after_stroke: Stroke first, then fill.
    """

    font: str
    fill: Optional[Paint]
    stroke: Optional[Paint]
    stroke_width: float
    letter_spacing: float
    direction: str
    fill_after_stroke: bool = False


class GlyphScope:
    """
    Handle given to a character hook for exactly one glyph.

    Changes made through the scope apply to that glyph only: the emitter
    wraps hook and draw in save()/restore(). Once the glyph is drawn the
    scope is closed and any further use raises GlyphScopeClosedError.
    """

    def __init__(self, backend: Backend, state: DrawState) -> None:
        self._backend = backend
        self._state = state
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise GlyphScopeClosedError("glyph scope used after its character was drawn")

    @property
    def state(self) -> DrawState:
        self._check_open()
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def translate(self, x: float, y: float) -> None:
        """Offset this glyph."""
        self._check_open()
        self._backend.translate(x, y)

    def set_fill(self, paint: Optional[Paint]) -> None:
        """Fill this glyph with paint (None disables the fill)."""
        self._check_open()
        self._state = replace(self._state, fill=paint)

    def set_stroke(self, paint: Optional[Paint], width: Optional[float] = None) -> None:
        """Stroke this glyph with paint, optionally changing the stroke width."""
        self._check_open()
        changes = {"stroke": paint}
        if width is not None:
            changes["stroke_width"] = width
        self._state = replace(self._state, **changes)

    def close(self) -> None:
        self._closed = True


class RunEmitter:
    """
    Emits the glyphs and decorations of a layout line by line.

    The caller positions the backend at the top-left of the content box;
    every line and every hooked character is bracketed by save()/restore(),
    on error paths too.
    """

    def __init__(self, layout: TextLayout, backend: Backend, state: DrawState,
                 hook: Optional[CharHook] = None) -> None:
        self.layout = layout
        self.backend = backend
        self.state = state
        self.hook = hook
        style = layout.style
        self.style = style
        self.available_width = layout.width - 2 * style.padding
        self.rtl = state.direction == Direction.RTL.value
        self.per_character = (
            hook is not None
            or style.align is Align.JUSTIFY
            or (style.letter_spacing != 0 and not self.rtl)
        )

    # ========================================================================
    # Geometry
    # ========================================================================

    def _line_x(self, rendered_width: float) -> float:
        if self.style.align is Align.RIGHT:
            return self.available_width - rendered_width
        if self.style.align is Align.CENTER:
            return (self.available_width - rendered_width) / 2
        return 0.0

    def _glyph_width(self, grapheme: str) -> float:
        return self.layout.measurer.measure_text(grapheme, self.state.font).width

    # ========================================================================
    # Drawing primitives
    # ========================================================================

    def _draw(self, text: str, x: float, y: float, state: DrawState) -> None:
        """Fill and/or stroke text in the order the state asks for."""
        backend = self.backend

        def fill() -> None:
            if state.fill is not None:
                backend.set_attr("fill_style", state.fill)
                backend.fill_text(text, x, y)

        def stroke() -> None:
            if state.stroke is not None and state.stroke_width > 0:
                backend.set_attr("stroke_style", state.stroke)
                backend.set_attr("line_width", state.stroke_width)
                backend.stroke_text(text, x, y)

        if state.fill_after_stroke:
            stroke()
            fill()
        else:
            fill()
            stroke()

    def _decoration(self, x: float, y: float, width: float, paint: Paint) -> None:
        backend = self.backend
        backend.save()
        try:
            backend.begin_path()
            backend.move_to(x, y)
            backend.line_to(x + round_half_up(width), y)
            backend.set_attr("line_width", self.style.font_size / 15)
            backend.set_attr("stroke_style", paint)
            backend.stroke()
        finally:
            backend.restore()

    def _draw_decorations(self, x: float, baseline: float, rendered_width: float) -> None:
        # Decorations take the fill paint; stroke-only text falls back to its stroke
        paint = self.state.fill if self.state.fill is not None else self.state.stroke
        if paint is None:
            return
        offset = round_half_up(self.style.font_size / 4)
        if self.style.underline:
            self._decoration(x, baseline + offset, rendered_width, paint)
        if self.style.line_through:
            self._decoration(x, baseline - offset, rendered_width, paint)

    # ========================================================================
    # Glyph emission
    # ========================================================================

    def _emit_characters(self, line: LaidOutLine, line_index: int, x: float, y: float,
                         rendered_width: float, gap: float, char_index_start: int) -> None:
        graphemes = split_graphemes(line.text)
        spacing = self.style.letter_spacing

        # Positions are computed left to right, then mirrored for RTL
        positions: List[float] = []
        widths: List[float] = []
        cursor = x
        previous_blank = False
        for grapheme in graphemes:
            blank = is_whitespace(grapheme)
            if gap and blank and not previous_blank:
                cursor += gap
            previous_blank = blank
            width = self._glyph_width(grapheme)
            positions.append(cursor)
            widths.append(width)
            cursor += width + spacing

        if self.rtl:
            positions = [2 * x + rendered_width - pos - width for pos, width in zip(positions, widths)]

        for column, grapheme in enumerate(graphemes):
            if self.hook is None:
                self._draw(grapheme, positions[column], y, self.state)
                continue

            run = CharacterRun(
                char=grapheme,
                index=char_index_start + column,
                line=line_index,
                column=column,
                x_offset=positions[column],
                y=y,
                width=widths[column],
                is_last_in_line=column == len(graphemes) - 1,
            )
            self._emit_hooked(run)

    def _emit_hooked(self, run: CharacterRun) -> None:
        self.backend.save()
        scope = GlyphScope(self.backend, self.state)
        try:
            self.hook(run, scope)
            self._draw(run.char, run.x_offset, run.y, scope.state)
        finally:
            scope.close()
            self.backend.restore()

    def emit(self, line: LaidOutLine, line_index: int, y: float, char_index_start: int) -> None:
        """
        Draw one line with its baseline at y.

        Args:
            line: Line to draw.
            line_index: Index of the line in the layout.
            y: Baseline in content-box coordinates.
            char_index_start: Global index of the line's first grapheme.
        """
        justified = self.style.align is Align.JUSTIFY and should_justify(line, len(self.layout.lines))
        gap = compute_word_gap(line.text, line.width, self.available_width) if justified else 0.0
        rendered_width = self.available_width if gap else line.width
        x = self._line_x(rendered_width)

        self.backend.save()
        try:
            self._draw_decorations(x, y, rendered_width)
            if self.per_character:
                self._emit_characters(line, line_index, x, y, rendered_width, gap, char_index_start)
            else:
                if self.style.letter_spacing:
                    self.backend.set_attr("letter_spacing", f"{self.style.letter_spacing:g}px")
                self._draw(line.text, x, y, self.state)
        finally:
            self.backend.restore()


def render_text(layout: TextLayout, backend: Backend, hook: Optional[CharHook] = None,
                node_scale: float = 1.0) -> None:
    """
    Draw a text node onto a backend.

    The backend origin is taken as the node's top-left corner. The whole pass
    is bracketed by save()/restore(); exceptions raised by hook propagate
    after the backend state has been restored.

    Args:
        layout: Laid-out text node.
        backend: Drawing surface.
        hook: Optional per-character hook, called as hook(run, scope) before
            each glyph is drawn.
        node_scale: Absolute scale of the node, used when the style disables
            stroke scaling.
    """
    if not layout.text:
        return

    style = layout.style
    lines = layout.lines
    line_height_px = style.line_height_px
    padding = style.padding

    backend.save()
    try:
        if style.direction is Direction.INHERIT:
            direction = Direction(backend.get_attr("direction"))
        else:
            direction = style.direction
        if direction is Direction.RTL:
            backend.set_attr("direction", direction.value)

        font = layout.font
        backend.set_attr("font", font)
        backend.set_attr("text_baseline", "alphabetic")
        backend.set_attr("text_align", "left")

        offset_y = resolve_offset_y(layout.measurer.measure_text("M", font), style.font_size, style.line_height)

        block_height = len(lines) * line_height_px
        align_y = 0.0
        if style.vertical_align is VerticalAlign.MIDDLE:
            align_y = (layout.height - block_height - 2 * padding) / 2
        elif style.vertical_align is VerticalAlign.BOTTOM:
            align_y = layout.height - block_height - 2 * padding
        backend.translate(padding, align_y + padding)

        stroke_width = style.stroke_width
        if not style.stroke_scale_enabled and node_scale:
            stroke_width = stroke_width / node_scale

        state = DrawState(
            font=font,
            fill=style.fill,
            stroke=style.stroke,
            stroke_width=stroke_width,
            letter_spacing=style.letter_spacing,
            direction=direction.value,
            fill_after_stroke=style.fill_after_stroke,
        )
        emitter = RunEmitter(layout, backend, state, hook)

        char_index = 0
        for line_index, line in enumerate(lines):
            emitter.emit(line, line_index, line_index * line_height_px + offset_y, char_index)
            char_index += len(split_graphemes(line.text))
    finally:
        backend.restore()

    logger.debug(f"Rendered {len(lines)} line(s) in {direction.value} direction")
