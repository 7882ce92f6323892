"""PDF drawing and text measurement using ReportLab."""

from typing import List, Optional, Tuple

from reportlab.lib.colors import Color, toColor
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from canvastext.fonts import parse_font, resolve_font
from canvastext.render.base import Backend, TextMetrics, letter_spacing_px
from canvastext.types import Paint

DEFAULT_FONT = "normal normal 12px Helvetica"


def _face_and_size(font: str) -> Tuple[str, float]:
    """Resolve a CSS font shorthand to a ReportLab face name and size."""
    spec = parse_font(font)
    return resolve_font(spec.families, bold=spec.bold, italic=spec.italic), spec.size


def to_reportlab_color(paint: Paint) -> Color:
    """
    Convert a paint value to a ReportLab color.

    Args:
        paint: CSS color string, RGB tuple (0-1) or ReportLab Color.

    Returns:
        ReportLab Color.
    """
    if isinstance(paint, tuple):
        return Color(*paint)
    return toColor(paint)


class ReportLabMetrics:
    """
    Measures text with ReportLab font metrics (no canvas needed).

    The font box comes from the face FontBBox; the ascender and descender
    fill the actual box.
    """

    def measure_text(self, text: str, font: Optional[str] = None) -> TextMetrics:
        face, size = _face_and_size(font or DEFAULT_FONT)
        ascent, descent = pdfmetrics.getAscentDescent(face, size)
        # bbox is [xmin, ymin, xmax, ymax] in 1/1000 em
        bbox = pdfmetrics.getFont(face).face.bbox
        return TextMetrics(
            width=pdfmetrics.stringWidth(text, face, size),
            font_bounding_box_ascent=bbox[3] * size / 1000,
            font_bounding_box_descent=-bbox[1] * size / 1000,
            actual_bounding_box_ascent=ascent,
            actual_bounding_box_descent=abs(descent),
        )


class ReportLabBackend(Backend):
    """
    Draws on a ReportLab canvas using a top-left origin.

    ReportLab's origin is bottom-left with y growing upwards; this backend
    keeps its own translation and flips y against the page height so callers
    see canvas coordinates.
    """

    def __init__(self, c: canvas.Canvas, page_height: float) -> None:
        """
        Initialize the backend.

        Args:
            c: ReportLab canvas to draw on.
            page_height: Height of the page in points.
        """
        super().__init__()
        self.canvas = c
        self.page_height = page_height
        self._metrics = ReportLabMetrics()
        self._offset = (0.0, 0.0)
        self._offsets: List[Tuple[float, float]] = []
        self._path: List[Tuple[str, float, float]] = []

    def save(self) -> None:
        super().save()
        self._offsets.append(self._offset)
        self.canvas.saveState()

    def restore(self) -> None:
        super().restore()
        if self._offsets:
            self._offset = self._offsets.pop()
            self.canvas.restoreState()

    def _to_page(self, x: float, y: float) -> Tuple[float, float]:
        ox, oy = self._offset
        return ox + x, self.page_height - (oy + y)

    def measure_text(self, text: str, font: Optional[str] = None) -> TextMetrics:
        return self._metrics.measure_text(text, font or self.get_attr("font"))

    def _draw_string(self, text: str, x: float, y: float, mode: int) -> None:
        face, size = _face_and_size(self.get_attr("font"))
        self.canvas.setFont(face, size)
        page_x, page_y = self._to_page(x, y)
        self.canvas.drawString(
            page_x, page_y, text, mode=mode, charSpace=letter_spacing_px(self.get_attr("letter_spacing"))
        )

    def fill_text(self, text: str, x: float, y: float) -> None:
        self.canvas.setFillColor(to_reportlab_color(self.get_attr("fill_style")))
        self._draw_string(text, x, y, mode=0)

    def stroke_text(self, text: str, x: float, y: float) -> None:
        self.canvas.setStrokeColor(to_reportlab_color(self.get_attr("stroke_style")))
        self.canvas.setLineWidth(self.get_attr("line_width"))
        self._draw_string(text, x, y, mode=1)

    def translate(self, x: float, y: float) -> None:
        ox, oy = self._offset
        self._offset = (ox + x, oy + y)

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append(("move", *self._to_page(x, y)))

    def line_to(self, x: float, y: float) -> None:
        self._path.append(("line", *self._to_page(x, y)))

    def stroke(self) -> None:
        if not self._path:
            return
        path = self.canvas.beginPath()
        for op, x, y in self._path:
            if op == "move":
                path.moveTo(x, y)
            else:
                path.lineTo(x, y)
        self.canvas.setStrokeColor(to_reportlab_color(self.get_attr("stroke_style")))
        self.canvas.setLineWidth(self.get_attr("line_width"))
        self.canvas.drawPath(path, stroke=1, fill=0)
