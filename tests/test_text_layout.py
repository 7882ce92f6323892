import pytest

from canvastext.config import StyleConfig
from canvastext.layout import TextLayout


@pytest.mark.parametrize(
    "value, expected",
    [(None, ""), (5, "5"), (5.0, "5"), (2.5, "2.5"), (True, "true"), (False, "false"), ("x", "x")],
)
def test_text_is_coerced(metrics, value, expected):
    assert TextLayout(value, measurer=metrics).text == expected


def test_empty_text_has_no_lines(make_layout):
    layout = make_layout("", padding=3)

    assert layout.lines == []
    assert layout.width == 6
    assert layout.height == 6


def test_fixed_box_is_reported_as_is(make_layout):
    layout = make_layout("Hi", width=100, height=50)

    assert layout.width == 100
    assert layout.height == 50
    assert layout.self_rect() == (0.0, 0.0, 100, 50)


def test_text_height_is_font_size(make_layout):
    assert make_layout("a\nb\nc").text_height == 10


def test_style_change_invalidates_lines(make_layout):
    layout = make_layout("Hello world", width=60)
    assert len(layout.lines) == 2

    layout.update_style(width=100)
    assert len(layout.lines) == 1

    layout.update_style(width="auto", wrap="WORD")
    assert [line.text for line in layout.lines] == ["Hello world"]


def test_text_change_invalidates_lines(make_layout):
    layout = make_layout("Hello", width=60)
    assert len(layout.lines) == 1

    layout.text = "Hello world"
    assert len(layout.lines) == 2


def test_style_assignment_invalidates_lines(metrics):
    layout = TextLayout("Hello world", StyleConfig(font_size=10), measurer=metrics)
    assert len(layout.lines) == 1

    layout.style = StyleConfig(font_size=10, width=40)
    assert len(layout.lines) == 2


def test_font_string(make_layout):
    layout = make_layout("x", font_family="Font Awesome, Arial", font_style="italic")
    assert layout.font == 'italic normal 10px "Font Awesome", Arial'


def test_measure_size_completes_missing_metrics(make_layout):
    size = make_layout("x").measure_size("M")

    assert size.width == 6
    assert size.font_bounding_box_ascent == pytest.approx(9.1)
    assert size.font_bounding_box_descent == pytest.approx(2.1)
    assert size.actual_bounding_box_ascent == pytest.approx(7.158203125)
    assert size.actual_bounding_box_descent == 0
