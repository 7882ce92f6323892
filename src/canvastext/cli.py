"""CLI interface for canvastext."""

import json
import logging
import math
from functools import wraps
from pathlib import Path
from typing import Any, Callable

import click
from reportlab.pdfgen import canvas

from canvastext.config import StyleConfig, load_style
from canvastext.fonts import register_fonts
from canvastext.layout import TextLayout
from canvastext.render import PillowBackend, ReportLabBackend, TraceBackend, render_text

logger = logging.getLogger(__name__)

# CLI option name → StyleConfig field
_STYLE_OPTIONS = {
    "width": "width",
    "height": "height",
    "font_size": "font_size",
    "font_family": "font_family",
    "wrap": "wrap",
    "align": "align",
    "ellipsis": "ellipsis",
    "letter_spacing": "letter_spacing",
    "line_height": "line_height",
    "padding": "padding",
    "decoration": "text_decoration",
    "direction": "direction",
}


def _parse_canvas_size(ctx: click.Context, param: click.Parameter, value: str | None) -> tuple[int, int] | None:
    if value is None:
        return None
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise click.BadParameter(f"expected WIDTHxHEIGHT, got '{value}'")
    if width <= 0 or height <= 0:
        raise click.BadParameter("canvas size must be positive")
    return width, height


def style_options(func: Callable) -> Callable:
    """Attach the style override options shared by every command."""
    options = [
        click.option("--config", type=click.Path(exists=True, path_type=Path),
                     help="Path to a style TOML file ([style] table or root)."),
        click.option("--width", type=float, help="Box width in px (default: auto)."),
        click.option("--height", type=float, help="Box height in px (default: auto)."),
        click.option("--font-size", type=float, help="Font size in px."),
        click.option("--font-family", type=str, help="Font family list, e.g. 'Font Awesome, Arial'."),
        click.option("--wrap", type=click.Choice(["word", "char", "none"], case_sensitive=False),
                     help="Line-break policy."),
        click.option("--align", type=click.Choice(["left", "center", "right", "justify"], case_sensitive=False),
                     help="Horizontal alignment."),
        click.option("--ellipsis/--no-ellipsis", default=None, help="Truncate overflow with an ellipsis."),
        click.option("--letter-spacing", type=float, help="Extra px after every character."),
        click.option("--line-height", type=float, help="Line pitch as a multiple of the font size."),
        click.option("--padding", type=float, help="Padding in px on every side."),
        click.option("--decoration", type=str, help="Text decoration, e.g. 'underline line-through'."),
        click.option("--direction", type=click.Choice(["inherit", "ltr", "rtl"], case_sensitive=False),
                     help="Text direction."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_style(config: Path | None, **overrides: Any) -> StyleConfig:
    """
    Build the style for a command: the config file (if any) plus CLI overrides.

    Args:
        config: Optional style TOML file.
        **overrides: CLI option values keyed by option name; None means "not given".

    Returns:
        Validated StyleConfig.
    """
    style = load_style(config) if config else StyleConfig()
    changes = {
        _STYLE_OPTIONS[name]: value
        for name, value in overrides.items()
        if name in _STYLE_OPTIONS and value is not None
    }
    return style.evolve(**changes) if changes else style


def handle_errors(func: Callable) -> Callable:
    """Report expected failures as 'Error: ...' and exit with status 1."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FileNotFoundError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
    return wrapper


@click.group()
@click.version_option(package_name="canvastext")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("--fonts-dir", type=click.Path(exists=True, file_okay=False, path_type=Path),
              help="Directory of .ttf files to register (default: bundled fonts).")
def main(verbose: bool, fonts_dir: Path | None) -> None:
    """Lay out and render text the way a 2D canvas text node does."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    register_fonts(fonts_dir)


@main.command()
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Print lines and sizes as JSON.")
@style_options
@handle_errors
def layout(text: str, as_json: bool, config: Path | None, **overrides: Any) -> None:
    """Print the laid-out lines of TEXT ("\\n" in TEXT separates paragraphs)."""
    text_layout = TextLayout(_unescape(text), build_style(config, **overrides))

    if as_json:
        payload = {
            "width": text_layout.width,
            "height": text_layout.height,
            "lines": [
                {"text": line.text, "width": line.width, "last_in_paragraph": line.last_in_paragraph}
                for line in text_layout.lines
            ],
        }
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    for line in text_layout.lines:
        click.echo(line.text)


@main.command()
@click.argument("text")
@click.option("-o", "--output", type=click.Path(path_type=Path), required=True,
              help="Output file (.pdf or .png).")
@click.option("--canvas-size", callback=_parse_canvas_size,
              help="Canvas size as WIDTHxHEIGHT (default: the node's size).")
@style_options
@handle_errors
def render(text: str, output: Path, canvas_size: tuple[int, int] | None, config: Path | None,
           **overrides: Any) -> None:
    """Render TEXT to a PDF (ReportLab) or PNG (Pillow) file."""
    style = build_style(config, **overrides)
    suffix = output.suffix.lower()

    if suffix == ".pdf":
        text_layout = TextLayout(_unescape(text), style)
        width, height = canvas_size or _node_size(text_layout)
        c = canvas.Canvas(str(output), pagesize=(width, height))
        render_text(text_layout, ReportLabBackend(c, height))
        c.save()
    elif suffix == ".png":
        # Measure with Pillow so glyph positions match what gets drawn
        text_layout = TextLayout(_unescape(text), style, measurer=PillowBackend.new(1, 1))
        width, height = canvas_size or _node_size(text_layout)
        backend = PillowBackend.new(width, height)
        render_text(text_layout, backend)
        backend.image.save(output)
    else:
        raise ValueError(f"Unsupported output format '{output.suffix}' (use .pdf or .png)")

    logger.info(f"Wrote {width}x{height} canvas to {output}")
    click.echo(f"✓ Rendered to: {output}")


@main.command()
@click.argument("text")
@click.option("--relaxed", is_flag=True, help="Omit call arguments.")
@click.option("--rounded", is_flag=True, help="Round numeric arguments.")
@style_options
@handle_errors
def trace(text: str, relaxed: bool, rounded: bool, config: Path | None, **overrides: Any) -> None:
    """Print the canvas drawing calls that rendering TEXT produces."""
    backend = TraceBackend()
    text_layout = TextLayout(_unescape(text), build_style(config, **overrides), measurer=backend.metrics)
    render_text(text_layout, backend)
    click.echo(backend.get_trace(relaxed=relaxed, rounded=rounded))


def _unescape(text: str) -> str:
    """Turn a literal backslash-n typed on the command line into a newline."""
    return text.replace("\\n", "\n")


def _node_size(text_layout: TextLayout) -> tuple[int, int]:
    return max(1, math.ceil(text_layout.width)), max(1, math.ceil(text_layout.height))


if __name__ == "__main__":
    main()
