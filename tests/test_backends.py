from io import BytesIO

import pytest
from reportlab.pdfgen import canvas

from canvastext.config import StyleConfig
from canvastext.layout import TextLayout
from canvastext.render import PillowBackend, ReportLabBackend, ReportLabMetrics, TraceBackend, render_text
from canvastext.render.base import letter_spacing_px


def test_reportlab_metrics():
    metrics = ReportLabMetrics().measure_text("Hello", "normal normal 10px Helvetica")

    assert metrics.width == pytest.approx(22.78)
    assert metrics.font_bounding_box_ascent > 0
    assert metrics.font_bounding_box_descent > 0


def test_reportlab_backend_writes_pdf():
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(200, 100))
    backend = ReportLabBackend(c, page_height=100)
    style = StyleConfig(width=200, font_size=14, underline=True, stroke="red", letter_spacing=1)

    render_text(TextLayout("Hello canvas text", style), backend)
    c.save()

    assert backend.depth == 0
    assert buffer.getvalue().startswith(b"%PDF")


def test_pillow_backend_draws_pixels():
    backend = PillowBackend.new(120, 40)
    layout = TextLayout("Hi", StyleConfig(font_size=20, fill="black"), measurer=backend)

    render_text(layout, backend)

    darkest, _ = backend.image.convert("L").getextrema()
    assert darkest < 128
    assert backend.depth == 0


def test_pillow_backend_measures_with_vertical_metrics():
    metrics = PillowBackend.new(1, 1).measure_text("Hg", "normal normal 20px Helvetica")

    assert metrics.width > 0
    assert metrics.font_bounding_box_ascent > 0


def test_unknown_attribute_is_rejected():
    with pytest.raises(ValueError):
        TraceBackend().set_attr("shadow_blur", 3)


def test_restore_pops_attributes():
    backend = TraceBackend()
    backend.save()
    backend.set_attr("fill_style", "red")
    backend.restore()

    assert backend.get_attr("fill_style") == "black"


def test_trace_views():
    backend = TraceBackend()
    backend.translate(1.25, 2.5)
    backend.fill_text("A", 0.4, 8.5)

    assert backend.get_trace() == "translate(1.25,2.5);fillText(A,0.4,8.5);"
    assert backend.get_trace(rounded=True) == "translate(1,3);fillText(A,0,9);"
    assert backend.get_trace(relaxed=True) == "translate();fillText();"


@pytest.mark.parametrize("value, expected", [("2px", 2.0), ("0px", 0.0), ("1.5", 1.5), (3, 3.0), ("px", 0.0)])
def test_letter_spacing_px(value, expected):
    assert letter_spacing_px(value) == expected


def test_reportlab_metrics_split_font_box_and_ascender():
    metrics = ReportLabMetrics().measure_text("M", "normal normal 100px Helvetica")

    assert metrics.font_bounding_box_ascent == pytest.approx(93.1)
    assert metrics.font_bounding_box_descent == pytest.approx(22.5)
    assert metrics.actual_bounding_box_ascent == pytest.approx(71.8)
    assert metrics.actual_bounding_box_descent == pytest.approx(20.7)


def test_default_measurer_places_baseline_from_font_box():
    backend = TraceBackend()

    render_text(TextLayout("hello", StyleConfig(font_size=100, font_family="Arial")), backend)

    assert "fillText(hello,0,85)" in backend.get_trace(rounded=True)
