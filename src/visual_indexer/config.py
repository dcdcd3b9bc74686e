"""
Configuration schema and loader for the Visual Indexer.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, field_validator, model_validator

from visual_indexer.config_defaults import (
    DEFAULT_BACKGROUND,
    DEFAULT_COLUMN_GUTTER_HEIGHT,
    DEFAULT_DPI,
    DEFAULT_LABEL_BOLD,
    DEFAULT_LABEL_COLOR,
    DEFAULT_LABEL_PX,
    DEFAULT_LINE_COLOR,
    DEFAULT_LINE_WIDTH,
    DEFAULT_MAX_CANVAS_HEIGHT,
    DEFAULT_MAX_CANVAS_WIDTH,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PAGES_PER_GRID,
    DEFAULT_ROW_GUTTER_WIDTH,
)
from visual_indexer.grid.compose import GridStyle

_RGB = tuple[int, int, int]
_HEX_RGB_LENGTH = 6


def parse_hex_color(text: str) -> _RGB:
    """Parse ``#rrggbb`` strings into RGB triples."""
    stripped = text.strip().lstrip("#")
    if len(stripped) != _HEX_RGB_LENGTH:
        msg = "color must look like #rrggbb"
        raise ValueError(msg)
    try:
        red = int(stripped[0:2], 16)
        green = int(stripped[2:4], 16)
        blue = int(stripped[4:6], 16)
    except ValueError as exc:
        msg = "color contains invalid hex digits"
        raise ValueError(msg) from exc
    return red, green, blue


class CanvasConfig(BaseModel):
    """Bound the composed image and reserve room for labels."""

    max_width: int = Field(DEFAULT_MAX_CANVAS_WIDTH, ge=1)
    max_height: int = Field(DEFAULT_MAX_CANVAS_HEIGHT, ge=1)
    row_gutter_width: int = Field(DEFAULT_ROW_GUTTER_WIDTH, ge=0)
    column_gutter_height: int = Field(DEFAULT_COLUMN_GUTTER_HEIGHT, ge=0)

    @model_validator(mode="after")
    def _gutters_fit(self) -> CanvasConfig:
        if self.row_gutter_width >= self.max_width:
            msg = "row_gutter_width must be smaller than max_width"
            raise ValueError(msg)
        if self.column_gutter_height >= self.max_height:
            msg = "column_gutter_height must be smaller than max_height"
            raise ValueError(msg)
        return self


class StyleConfig(BaseModel):
    """Colors, grid stroke, and label font."""

    background: _RGB = Field(DEFAULT_BACKGROUND, validate_default=True)
    line_color: _RGB = Field(DEFAULT_LINE_COLOR, validate_default=True)
    line_width: int = Field(DEFAULT_LINE_WIDTH, ge=0)
    label_color: _RGB = Field(DEFAULT_LABEL_COLOR, validate_default=True)
    label_px: int = Field(DEFAULT_LABEL_PX, ge=1)
    label_bold: bool = DEFAULT_LABEL_BOLD

    @field_validator("background", "line_color", "label_color",
                     mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> Any:  # noqa: ANN401
        if isinstance(value, str):
            return parse_hex_color(value)
        return value

    @field_validator("background", "line_color", "label_color")
    @classmethod
    def _channel_range(cls, value: _RGB) -> _RGB:
        if any(not 0 <= channel <= 255 for channel in value):  # noqa: PLR2004
            msg = "color channels must be within 0-255"
            raise ValueError(msg)
        return value


class RenderConfig(BaseModel):
    """Rasterization density and batch size."""

    dpi: int = Field(DEFAULT_DPI, ge=1)
    pages_per_grid: int = Field(DEFAULT_PAGES_PER_GRID, ge=1)


class OutputConfig(BaseModel):
    """Configure the output directory."""

    output: str = Field(DEFAULT_OUTPUT_DIR)


class VisualIndexConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    canvas: CanvasConfig = Field(
        default_factory=lambda: CanvasConfig.model_validate({}),
    )
    style: StyleConfig = Field(
        default_factory=lambda: StyleConfig.model_validate({}),
    )
    render: RenderConfig = Field(
        default_factory=lambda: RenderConfig.model_validate({}),
    )
    output: OutputConfig = Field(
        default_factory=lambda: OutputConfig.model_validate({}),
    )

    def grid_style(self) -> GridStyle:
        """Return the immutable drawing style for the composer."""
        s = self.style
        return GridStyle(
            background=s.background,
            line_color=s.line_color,
            line_width=s.line_width,
            label_color=s.label_color,
            label_px=s.label_px,
            label_bold=s.label_bold,
        )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> VisualIndexConfig:
        """Load and validate a visual index configuration from TOML."""
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return VisualIndexConfig.model_validate(doc.unwrap())


# CLI argument name -> (config section, field)
_CLI_OVERRIDES: dict[str, tuple[str, str]] = {
    "out": ("output", "output"),
    "dpi": ("render", "dpi"),
    "pages_per_grid": ("render", "pages_per_grid"),
    "max_width": ("canvas", "max_width"),
    "max_height": ("canvas", "max_height"),
}


def build_config_from_cli(
    args: dict[str, Any],
    base_config: VisualIndexConfig | None = None,
) -> VisualIndexConfig:
    """
    Merge CLI overrides onto a base configuration.

    Only arguments that were actually given (present and not None)
    replace config values. The result is re-validated as a whole.
    """
    base = base_config or VisualIndexConfig.model_validate({})
    data = base.model_dump()
    for arg_name, (section, field) in _CLI_OVERRIDES.items():
        value = args.get(arg_name)
        if value is not None:
            data[section][field] = value
    return VisualIndexConfig.model_validate(data)
