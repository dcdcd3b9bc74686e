"""Rendering of a planned grid: thumbnails, grid lines, and labels."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont

from visual_indexer.constants import (
    COLOR_BLACK,
    COLOR_MODE_RGB,
    COLOR_WHITE,
    LABEL_FONT_BOLD,
    LABEL_FONT_REGULAR,
)
from visual_indexer.config_defaults import (
    DEFAULT_LABEL_BOLD,
    DEFAULT_LABEL_PX,
    DEFAULT_LINE_WIDTH,
)
from visual_indexer.errors import InvalidInputError
from visual_indexer.grid.addressing import column_letters

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from visual_indexer.grid.layout import GridLayout

_RGB = tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class GridStyle:
    """Colors, stroke, and label font used to draw the grid."""

    background: _RGB = COLOR_WHITE
    line_color: _RGB = COLOR_BLACK
    line_width: int = DEFAULT_LINE_WIDTH
    label_color: _RGB = COLOR_BLACK
    label_px: int = DEFAULT_LABEL_PX
    label_bold: bool = DEFAULT_LABEL_BOLD


def to_rgb(img: Image.Image, *, bg_color: _RGB) -> Image.Image:
    """Convert PIL image to RGB, alpha compositing if needed."""
    if img.mode == COLOR_MODE_RGB:
        return img
    if img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info:
        bg = Image.new("RGBA", img.size, (*bg_color, 255))
        comp = Image.alpha_composite(bg, img.convert("RGBA"))
        return comp.convert(COLOR_MODE_RGB)
    return img.convert(COLOR_MODE_RGB)


@lru_cache(maxsize=8)
def _get_font(
    px: int,
    *,
    bold: bool,
) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load the label font at the given pixel size with fallback; cached."""
    try:
        return ImageFont.truetype(
            LABEL_FONT_BOLD if bold else LABEL_FONT_REGULAR, px,
        )
    except OSError:
        return ImageFont.load_default(size=px)


def _draw_centered(
    draw: ImageDraw.ImageDraw,
    center: tuple[float, float],
    text: str,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    fill: _RGB,
) -> None:
    """Draw ``text`` with its ink box centered on ``center``."""
    x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=font)
    x = center[0] - (x1 - x0) / 2 - x0
    y = center[1] - (y1 - y0) / 2 - y0
    draw.text((round(x), round(y)), text, font=font, fill=fill)


def _paste_cells(
    canvas: Image.Image,
    layout: GridLayout,
    images: Sequence[Image.Image],
    bg_color: _RGB,
) -> None:
    """Stretch each image to its cell and paste it in row-major order."""
    cell_size = (layout.cell_width, layout.cell_height)
    for idx, img in enumerate(images):
        x0, y0, _, _ = layout.cell_box(idx)
        thumb = to_rgb(img, bg_color=bg_color)
        if thumb.size != cell_size:
            thumb = thumb.resize(cell_size, Image.Resampling.LANCZOS)
        canvas.paste(thumb, (x0, y0))


def _draw_grid_lines(
    draw: ImageDraw.ImageDraw,
    layout: GridLayout,
    style: GridStyle,
) -> None:
    """Draw every row and column boundary across the full raster."""
    width, height = layout.canvas_size
    for row in range(layout.rows + 1):
        y = min(row * layout.cell_height + layout.column_gutter_height,
                height - 1)
        draw.line([(0, y), (width, y)], fill=style.line_color,
                  width=style.line_width)
    for col in range(layout.columns + 1):
        x = min(col * layout.cell_width + layout.row_gutter_width, width - 1)
        draw.line([(x, 0), (x, height)], fill=style.line_color,
                  width=style.line_width)


def _draw_labels(
    draw: ImageDraw.ImageDraw,
    layout: GridLayout,
    style: GridStyle,
) -> None:
    """Number rows in the left gutter and letter columns in the top one."""
    font = _get_font(style.label_px, bold=style.label_bold)
    gutter_x = layout.row_gutter_width / 2
    for row in range(layout.rows):
        center_y = (layout.column_gutter_height
                    + row * layout.cell_height + layout.cell_height / 2)
        _draw_centered(draw, (gutter_x, center_y), str(row + 1), font,
                       style.label_color)

    gutter_y = layout.column_gutter_height / 2
    for col in range(layout.columns):
        center_x = (layout.row_gutter_width
                    + col * layout.cell_width + layout.cell_width / 2)
        _draw_centered(draw, (center_x, gutter_y), column_letters(col + 1),
                       font, style.label_color)


def compose_grid(
    layout: GridLayout,
    images: Sequence[Image.Image],
    style: GridStyle | None = None,
) -> Image.Image:
    """
    Compose ``images`` into a labeled spreadsheet-style grid.

    Images are stretched to exactly one cell each, filling row by row.
    Fewer images than cells leaves the trailing cells blank; grid lines
    and labels are drawn for every row and column regardless. The input
    images are read but never modified.

    Raises:
        InvalidInputError: If there are more images than cells.

    """
    style = style or GridStyle()
    if len(images) > layout.capacity:
        msg = (f"{len(images)} images exceed the {layout.rows}x"
               f"{layout.columns} grid capacity of {layout.capacity}")
        raise InvalidInputError(msg)
    if style.line_width < 0:
        msg = "line_width must not be negative"
        raise InvalidInputError(msg)

    canvas = Image.new(COLOR_MODE_RGB, layout.canvas_size, style.background)
    _paste_cells(canvas, layout, images, style.background)

    draw = ImageDraw.Draw(canvas)
    if style.line_width > 0:
        _draw_grid_lines(draw, layout, style)
    _draw_labels(draw, layout, style)
    return canvas
