"""Raster drawing using Pillow."""

import logging
from typing import Dict, List, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from canvastext.fonts import get_font_path, parse_font, resolve_font
from canvastext.render.base import Backend, TextMetrics, letter_spacing_px
from canvastext.types import Paint
from canvastext.utils.text import split_graphemes

logger = logging.getLogger(__name__)

PillowFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


def to_pillow_color(paint: Paint) -> Union[str, Tuple[int, ...]]:
    """
    Convert a paint value to something ImageDraw accepts.

    RGB tuples in 0-1 range are scaled to 0-255; strings pass through
    (Pillow understands CSS names and hex colors).
    """
    if isinstance(paint, tuple):
        return tuple(int(round(channel * 255)) for channel in paint)
    return paint


class PillowBackend(Backend):
    """
    Draws on a PIL image.

    ImageDraw has no transform stack, so translations are tracked here and
    applied to every coordinate. Glyphs are anchored at the alphabetic
    baseline ("ls") to match the canvas text baseline.
    """

    def __init__(self, image: Image.Image) -> None:
        """
        Initialize the backend.

        Args:
            image: Image to draw on (modified in place).
        """
        super().__init__()
        self.image = image
        self.draw = ImageDraw.Draw(image)
        self._offset = (0.0, 0.0)
        self._offsets: List[Tuple[float, float]] = []
        self._path: List[Tuple[float, float]] = []
        self._fonts: Dict[Tuple[str, float], PillowFont] = {}

    @classmethod
    def new(cls, width: int, height: int, background: str = "white") -> "PillowBackend":
        """Create a backend on a fresh RGB image."""
        return cls(Image.new("RGB", (width, height), background))

    def save(self) -> None:
        super().save()
        self._offsets.append(self._offset)

    def restore(self) -> None:
        super().restore()
        if self._offsets:
            self._offset = self._offsets.pop()

    def _font(self, font: Optional[str] = None) -> PillowFont:
        spec = parse_font(font or self.get_attr("font"))
        face = resolve_font(spec.families, bold=spec.bold, italic=spec.italic)
        key = (face, spec.size)
        if key not in self._fonts:
            path = get_font_path(face)
            if path is not None:
                self._fonts[key] = ImageFont.truetype(str(path), spec.size)
            else:
                logger.debug(f"No TrueType file for '{face}', using Pillow's default font")
                self._fonts[key] = ImageFont.load_default(size=spec.size)
        return self._fonts[key]

    def _point(self, x: float, y: float) -> Tuple[float, float]:
        ox, oy = self._offset
        return ox + x, oy + y

    def measure_text(self, text: str, font: Optional[str] = None) -> TextMetrics:
        pil_font = self._font(font)
        width = pil_font.getlength(text)
        if not isinstance(pil_font, ImageFont.FreeTypeFont):
            return TextMetrics(width=width)

        ascent, descent = pil_font.getmetrics()
        metrics = TextMetrics(width=width, font_bounding_box_ascent=ascent, font_bounding_box_descent=descent)
        if text:
            _, top, _, bottom = pil_font.getbbox(text, anchor="ls")
            metrics = TextMetrics(
                width=width,
                font_bounding_box_ascent=ascent,
                font_bounding_box_descent=descent,
                actual_bounding_box_ascent=-top,
                actual_bounding_box_descent=bottom,
            )
        return metrics

    def _draw_text(self, text: str, x: float, y: float, **kwargs) -> None:
        pil_font = self._font()
        anchor = "ls" if isinstance(pil_font, ImageFont.FreeTypeFont) else None
        spacing = letter_spacing_px(self.get_attr("letter_spacing"))

        if not spacing:
            self.draw.text(self._point(x, y), text, font=pil_font, anchor=anchor, **kwargs)
            return

        # ImageDraw has no letter spacing: advance glyph by glyph
        for grapheme in split_graphemes(text):
            self.draw.text(self._point(x, y), grapheme, font=pil_font, anchor=anchor, **kwargs)
            x += pil_font.getlength(grapheme) + spacing

    def fill_text(self, text: str, x: float, y: float) -> None:
        self._draw_text(text, x, y, fill=to_pillow_color(self.get_attr("fill_style")))

    def stroke_text(self, text: str, x: float, y: float) -> None:
        # Pillow strokes around a filled glyph; both use the stroke color
        color = to_pillow_color(self.get_attr("stroke_style"))
        width = max(1, round(self.get_attr("line_width") / 2))
        self._draw_text(text, x, y, fill=color, stroke_width=width, stroke_fill=color)

    def translate(self, x: float, y: float) -> None:
        ox, oy = self._offset
        self._offset = (ox + x, oy + y)

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path = [self._point(x, y)]

    def line_to(self, x: float, y: float) -> None:
        self._path.append(self._point(x, y))

    def stroke(self) -> None:
        if len(self._path) < 2:
            return
        self.draw.line(
            self._path,
            fill=to_pillow_color(self.get_attr("stroke_style")),
            width=max(1, round(self.get_attr("line_width"))),
        )
