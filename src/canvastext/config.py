"""Style configuration loading and validation."""

import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from canvastext.types import AUTO, Align, Direction, Paint, VerticalAlign, WrapMode


class StyleConfig(BaseModel):
    """
    Immutable style for one layout/render pass.

    All parameters have sensible defaults. Override only what you need using
    Pydantic's model_copy():

        base = StyleConfig(font_size=40, width=245)
        wider = base.model_copy(update={"width": 261})
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # ========================================================================
    # Font
    # ========================================================================
    font_family: str = "Helvetica"
    """Font family list, CSS style (e.g. "Font Awesome, Arial")."""

    font_size: float = Field(default=12.0, gt=0)
    """Font size in px."""

    font_style: str = "normal"
    """"normal", "italic", "bold", "italic bold" ..."""

    font_variant: str = "normal"
    """"normal" or "small-caps"."""

    # ========================================================================
    # Spacing
    # ========================================================================
    line_height: float = Field(default=1.0, ge=0)
    """Line pitch as a multiple of font_size. 0 is treated as 1."""

    letter_spacing: float = 0.0
    """Extra advance in px added after every character."""

    padding: float = Field(default=0.0, ge=0)
    """Padding in px on every side of the content box."""

    # ========================================================================
    # Wrapping and alignment
    # ========================================================================
    wrap: WrapMode = WrapMode.WORD
    """Line-break policy: word, char or none."""

    ellipsis: bool = False
    """Replace overflowing trailing content with an ellipsis glyph."""

    align: Align = Align.LEFT
    """Horizontal alignment of each line."""

    vertical_align: VerticalAlign = VerticalAlign.TOP
    """Vertical alignment of the line block."""

    direction: Direction = Direction.INHERIT
    """Text direction. INHERIT uses the backend's current direction."""

    # ========================================================================
    # Decoration
    # ========================================================================
    underline: bool = False
    line_through: bool = False

    # ========================================================================
    # Box
    # ========================================================================
    width: float | Literal["auto"] = AUTO
    """Outer box width in px, or "auto" to size to the content."""

    height: float | Literal["auto"] = AUTO
    """Outer box height in px, or "auto" to size to the content."""

    # ========================================================================
    # Paint
    # ========================================================================
    fill: Paint | None = "black"
    """Fill paint passed through to the backend (color string or backend object)."""

    stroke: Paint | None = None
    """Stroke paint. Text is only stroked when set."""

    stroke_width: float = Field(default=2.0, ge=0)

    fill_after_stroke: bool = False
    """Stroke first, then fill on top."""

    stroke_scale_enabled: bool = True
    """When False the stroke width ignores the node's scale."""

    @model_validator(mode="before")
    @classmethod
    def _expand_text_decoration(cls, data: Any) -> Any:
        """Accept the CSS-like "underline line-through" shorthand."""
        if isinstance(data, dict) and "text_decoration" in data:
            data = dict(data)
            decoration = data.pop("text_decoration") or ""
            tokens = str(decoration).lower().split()
            data["underline"] = "underline" in tokens
            data["line_through"] = "line-through" in tokens
        return data

    @field_validator("wrap", "align", "vertical_align", "direction", mode="before")
    @classmethod
    def _lowercase_variant(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "character":
                return "char"
        return value

    @field_validator("width", "height", mode="before")
    @classmethod
    def _normalize_extent(cls, value: Any) -> Any:
        if value is None:
            return AUTO
        if isinstance(value, str) and value.strip().lower() == AUTO:
            return AUTO
        return value

    @field_validator("width", "height")
    @classmethod
    def _non_negative_extent(cls, value: float | str) -> float | str:
        if value != AUTO and value < 0:
            raise ValueError("box extent must be non-negative or 'auto'")
        return value

    def evolve(self, **changes: Any) -> "StyleConfig":
        """
        Return a copy with changes applied and validated.

        Unlike model_copy(update=...), the changed values go through the
        same coercion as constructor arguments ("WORD", None widths,
        text_decoration shorthand).
        """
        return type(self).model_validate({**dict(self), **changes})

    # ========================================================================
    # Computed Properties
    # ========================================================================

    @property
    def line_height_px(self) -> float:
        """Vertical distance between consecutive baselines in px."""
        return self.font_size * (self.line_height or 1.0)

    @property
    def text_decoration(self) -> str:
        """Decoration flags in CSS shorthand form."""
        parts = []
        if self.underline:
            parts.append("underline")
        if self.line_through:
            parts.append("line-through")
        return " ".join(parts)

    @property
    def is_bold(self) -> bool:
        return "bold" in self.font_style.lower().split()

    @property
    def is_italic(self) -> bool:
        tokens = self.font_style.lower().split()
        return "italic" in tokens or "oblique" in tokens


def load_style(config_path: Path | None = None) -> StyleConfig:
    """
    Load a style from a TOML file.

    The [style] table is used when present, otherwise the document root.

    Args:
        config_path: Path to the style file. If None, looks for style.toml in current directory.

    Returns:
        Validated StyleConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the style is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / "style.toml"

    if not config_path.exists():
        raise FileNotFoundError(f"Style file not found: {config_path}")

    with open(config_path, "rb") as f:
        config_dict = tomllib.load(f)

    style_dict = config_dict.get("style", config_dict)
    return StyleConfig(**style_dict)
