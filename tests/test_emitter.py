"""Drawing traces at font size 10: 6px glyphs, baseline at 8.5 then every 10px."""

import pytest

from canvastext.render import GlyphScopeClosedError, render_text


def render(layout, backend, **kwargs):
    render_text(layout, backend, **kwargs)
    return backend.get_trace()


def test_single_line_trace(make_layout, trace_backend):
    trace = render(make_layout("A"), trace_backend)

    assert trace == (
        "save();font=normal normal 10px Helvetica;textBaseline=alphabetic;textAlign=left;"
        "translate(0,0);save();fillStyle=black;fillText(A,0,8.5);restore();restore();"
    )


def test_empty_text_draws_nothing(make_layout, trace_backend):
    assert render(make_layout(""), trace_backend) == ""


def test_lines_advance_by_line_height(make_layout, trace_backend):
    trace = render(make_layout("ab\ncd", line_height=2), trace_backend)

    assert "fillText(ab,0,13.5)" in trace
    assert "fillText(cd,0,33.5)" in trace


def test_padding_and_vertical_alignment_translate_the_block(make_layout, trace_backend):
    assert "translate(5,5)" in render(make_layout("A", padding=5), trace_backend)

    trace_backend.clear()
    assert "translate(0,15)" in render(make_layout("A", height=40, vertical_align="middle"), trace_backend)

    trace_backend.clear()
    assert "translate(0,30)" in render(make_layout("A", height=40, vertical_align="bottom"), trace_backend)


@pytest.mark.parametrize("align, x", [("left", 0), ("center", 9), ("right", 18)])
def test_horizontal_alignment(make_layout, trace_backend, align, x):
    trace = render(make_layout("ab", width=30, align=align), trace_backend)
    assert f"fillText(ab,{x},8.5)" in trace


class TestDecorations:
    def test_underline_is_a_stroked_path_below_the_baseline(self, make_layout, trace_backend):
        trace = render(make_layout("A", underline=True), trace_backend)

        assert (
            "save();beginPath();moveTo(0,11.5);lineTo(6,11.5);"
            "lineWidth=0.666667;strokeStyle=black;stroke();restore();"
        ) in trace

    def test_underline_is_drawn_before_line_through(self, make_layout, trace_backend):
        trace = render(make_layout("A", text_decoration="underline line-through"), trace_backend)

        assert trace.index("moveTo(0,11.5)") < trace.index("moveTo(0,5.5)") < trace.index("fillText")

    def test_stretched_justified_line_is_fully_underlined(self, make_layout, trace_backend):
        trace = render(make_layout("aa bb cc dd", width=50, align="justify", underline=True), trace_backend)

        assert "lineTo(50,11.5)" in trace
        assert "lineTo(12,21.5)" in trace


class TestGlyphEmission:
    def test_letter_spacing_draws_each_character(self, make_layout, trace_backend):
        trace = render(make_layout("ab", letter_spacing=2), trace_backend)

        assert "fillText(a,0,8.5)" in trace
        assert "fillText(b,8,8.5)" in trace

    def test_justify_adds_gap_before_each_word_gap(self, make_layout, trace_backend):
        trace = render(make_layout("aa bb cc dd", width=50, align="justify"), trace_backend)

        assert "fillText( ,13,8.5)" in trace
        assert "fillText(b,19,8.5)" in trace
        assert "fillText(c,38,8.5)" in trace
        # last line is not stretched
        assert "fillText(d,0,18.5)" in trace
        assert "fillText(d,6,18.5)" in trace

    def test_single_justified_line_is_not_stretched(self, make_layout, trace_backend):
        trace = render(make_layout("aa bb", width=50, align="justify"), trace_backend)
        assert "fillText(b,18,8.5)" in trace

    def test_stroke_order_and_scale(self, make_layout, trace_backend):
        layout = make_layout("A", stroke="red", fill_after_stroke=True, stroke_scale_enabled=False)
        trace = render(layout, trace_backend, node_scale=2)

        assert trace.index("strokeText(A,0,8.5)") < trace.index("fillText(A,0,8.5)")
        assert "strokeStyle=red;lineWidth=1;strokeText" in trace

    def test_no_stroke_without_paint(self, make_layout, trace_backend):
        assert "strokeText" not in render(make_layout("A", stroke_width=5), trace_backend)


class TestRightToLeft:
    def test_rtl_sets_direction_and_keeps_whole_line(self, make_layout, trace_backend):
        trace = render(make_layout("ab", direction="rtl", letter_spacing=2), trace_backend)

        assert "direction=rtl;" in trace
        assert "letterSpacing=2px;" in trace
        assert "fillText(ab,0,8.5)" in trace

    def test_ltr_does_not_touch_direction(self, make_layout, trace_backend):
        assert "direction=" not in render(make_layout("ab", direction="ltr"), trace_backend)

    def test_hooked_rtl_characters_are_mirrored(self, make_layout, trace_backend):
        runs = []
        render_text(make_layout("ab", direction="rtl"), trace_backend, hook=lambda run, scope: runs.append(run))

        assert [(run.char, run.x_offset) for run in runs] == [("a", 6), ("b", 0)]

    def test_inherit_takes_backend_direction(self, make_layout, trace_backend):
        trace_backend.set_attr("direction", "rtl")
        runs = []
        render_text(make_layout("ab"), trace_backend, hook=lambda run, scope: runs.append(run))

        assert [run.x_offset for run in runs] == [6, 0]


class TestCharacterHook:
    def test_runs_describe_every_grapheme(self, make_layout, trace_backend):
        runs = []
        render_text(make_layout("ab cd", width=12), trace_backend, hook=lambda run, scope: runs.append(run))

        assert [run.char for run in runs] == ["a", "b", "c", "d"]
        assert [run.index for run in runs] == [0, 1, 2, 3]
        assert [run.line for run in runs] == [0, 0, 1, 1]
        assert [run.column for run in runs] == [0, 1, 0, 1]
        assert [run.is_last_in_line for run in runs] == [False, True, False, True]
        assert [run.y for run in runs] == [8.5, 8.5, 18.5, 18.5]

    def test_hook_changes_apply_to_one_glyph_only(self, make_layout, trace_backend):
        def hook(run, scope):
            if run.index == 0:
                scope.set_fill("red")
                scope.translate(0, -2)

        trace = render(make_layout("ab"), trace_backend, hook=hook)

        assert "save();translate(0,-2);fillStyle=red;fillText(a,0,8.5);restore();" in trace
        assert "save();fillStyle=black;fillText(b,6,8.5);restore();" in trace
        assert trace_backend.depth == 0

    def test_scope_is_closed_after_the_glyph(self, make_layout, trace_backend):
        scopes = []
        render_text(make_layout("a"), trace_backend, hook=lambda run, scope: scopes.append(scope))

        assert scopes[0].closed
        with pytest.raises(GlyphScopeClosedError):
            scopes[0].translate(1, 1)
        with pytest.raises(GlyphScopeClosedError):
            scopes[0].state

    def test_hook_error_propagates_after_restore(self, make_layout, trace_backend):
        def hook(run, scope):
            if run.index == 1:
                raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            render_text(make_layout("abc"), trace_backend, hook=hook)

        assert trace_backend.depth == 0
        assert trace_backend.get_trace().count("save()") == trace_backend.get_trace().count("restore()")


def test_empty_line_still_emits_a_fill(make_layout, trace_backend):
    trace = render(make_layout("a\n\nb"), trace_backend)

    assert "fillText(a,0,8.5)" in trace
    assert "save();fillStyle=black;fillText(,0,18.5);restore();" in trace
    assert "fillText(b,0,28.5)" in trace
