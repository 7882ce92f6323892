import json

from click.testing import CliRunner

from canvastext.cli import main


def invoke(*args):
    return CliRunner().invoke(main, list(args))


def test_layout_prints_lines():
    result = invoke("layout", "Hello world", "--width", "30", "--font-size", "10")

    assert result.exit_code == 0
    assert result.output.splitlines() == ["Hello", "world"]


def test_layout_json():
    result = invoke("layout", "one\\ntwo", "--json")

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [line["text"] for line in payload["lines"]] == ["one", "two"]
    assert payload["height"] == 24


def test_layout_reads_config_file(tmp_path):
    config = tmp_path / "style.toml"
    config.write_text('[style]\nwidth = 30\nfont_size = 10\nwrap = "none"\n')

    result = invoke("layout", "Hello world", "--config", str(config))

    assert result.exit_code == 0
    assert len(result.output.splitlines()) == 1


def test_trace_command():
    result = invoke("trace", "A", "--font-size", "10", "--relaxed")

    assert result.exit_code == 0
    assert result.output.startswith("save();font=normal normal 10px Helvetica;")
    assert "fillText();" in result.output


def test_render_pdf(tmp_path):
    output = tmp_path / "out.pdf"
    result = invoke("render", "Hello world", "-o", str(output), "--decoration", "underline")

    assert result.exit_code == 0, result.output
    assert output.read_bytes().startswith(b"%PDF")


def test_render_png(tmp_path):
    output = tmp_path / "out.png"
    result = invoke("render", "Hello", "-o", str(output), "--canvas-size", "120x40", "--font-size", "20")

    assert result.exit_code == 0, result.output
    assert output.read_bytes().startswith(b"\x89PNG")


def test_invalid_style_exits_with_error():
    result = invoke("layout", "Hello", "--line-height", "-1")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_unsupported_output_format(tmp_path):
    result = invoke("render", "Hello", "-o", str(tmp_path / "out.gif"))

    assert result.exit_code == 1
    assert "Unsupported output format" in result.output


def test_bad_canvas_size_is_a_usage_error(tmp_path):
    result = invoke("render", "Hello", "-o", str(tmp_path / "out.png"), "--canvas-size", "wide")
    assert result.exit_code == 2
