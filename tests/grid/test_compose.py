"""Tests for grid composition: placement, lines, labels, and errors."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from PIL import Image, ImageChops

from visual_indexer.constants import COLOR_BLACK, COLOR_WHITE
from visual_indexer.errors import InvalidInputError
from visual_indexer.grid.compose import GridStyle, compose_grid, to_rgb
from visual_indexer.grid.layout import GridLayout

pytestmark = pytest.mark.visual

RED = (220, 20, 20)
# Three pixels wide so the line always covers its nominal coordinate.
THICK_LINES = GridStyle(line_width=3)


def _close(actual: tuple[int, ...], expected: tuple[int, ...],
           tol: int = 2) -> bool:
    return all(abs(a - e) <= tol for a, e in zip(actual, expected,
                                                 strict=True))


def _cell_center(layout: GridLayout, index: int) -> tuple[int, int]:
    x0, y0, x1, y1 = layout.cell_box(index)
    return (x0 + x1) // 2, (y0 + y1) // 2


def _has_ink(region: Image.Image, background: tuple[int, int, int]) -> bool:
    blank = Image.new("RGB", region.size, background)
    return ImageChops.difference(region, blank).getbbox() is not None


def test_raster_dimensions(layout_3x4: GridLayout) -> None:
    raster = compose_grid(layout_3x4, [])
    assert raster.size == (850, 500)
    assert raster.mode == "RGB"


def test_images_fill_row_major_and_stretch(
    layout_3x4: GridLayout,
    make_page: Callable[..., Image.Image],
) -> None:
    """Five small pages land in A1..D1, A2 and are stretched to the cell."""
    pages = [make_page(RED, size=(40, 30)) for _ in range(5)]
    raster = compose_grid(layout_3x4, pages, THICK_LINES)

    for idx in range(5):
        assert _close(raster.getpixel(_cell_center(layout_3x4, idx)), RED)
    # stretched edge to edge, just inside the grid lines
    x0, y0, x1, y1 = layout_3x4.cell_box(4)
    assert _close(raster.getpixel((x0 + 3, y0 + 3)), RED)
    assert _close(raster.getpixel((x1 - 3, y1 - 3)), RED)


def test_partial_fill_keeps_background(
    layout_3x4: GridLayout,
    sample_pages: list[Image.Image],
) -> None:
    raster = compose_grid(layout_3x4, sample_pages[:5], THICK_LINES)
    for idx in range(5, layout_3x4.capacity):
        assert raster.getpixel(_cell_center(layout_3x4, idx)) == COLOR_WHITE


def test_grid_lines_on_every_boundary(layout_3x4: GridLayout) -> None:
    raster = compose_grid(layout_3x4, [], THICK_LINES)
    mid_row_y = 50 + 150 // 2
    for x in (50, 250, 450, 650, 849):
        assert raster.getpixel((x, mid_row_y)) == COLOR_BLACK
    mid_col_x = 50 + 200 // 2
    for y in (50, 200, 350, 499):
        assert raster.getpixel((mid_col_x, y)) == COLOR_BLACK
    # lines run through the gutters
    assert raster.getpixel((10, 200)) == COLOR_BLACK
    assert raster.getpixel((250, 10)) == COLOR_BLACK


def test_labels_drawn_for_empty_rows_and_columns(
    layout_3x4: GridLayout,
    make_page: Callable[..., Image.Image],
) -> None:
    raster = compose_grid(layout_3x4, [make_page(RED)], THICK_LINES)

    for row in range(3):
        y0 = 50 + row * 150
        gutter = raster.crop((4, y0 + 6, 44, y0 + 150 - 6))
        assert _has_ink(gutter, COLOR_WHITE), f"row {row + 1} unlabeled"
    for col in range(4):
        x0 = 50 + col * 200
        gutter = raster.crop((x0 + 6, 4, x0 + 200 - 6, 44))
        assert _has_ink(gutter, COLOR_WHITE), f"column {col + 1} unlabeled"


def test_labels_are_centered_in_their_gutter(layout_3x4: GridLayout) -> None:
    raster = compose_grid(layout_3x4, [], GridStyle(line_width=0))
    gutter = raster.crop((0, 50, 50, 200))
    blank = Image.new("RGB", gutter.size, COLOR_WHITE)
    bbox = ImageChops.difference(gutter, blank).getbbox()
    assert bbox is not None
    center_x = (bbox[0] + bbox[2]) / 2
    center_y = (bbox[1] + bbox[3]) / 2
    assert abs(center_x - 25) <= 3
    assert abs(center_y - 75) <= 3


def test_wide_grid_renders_multi_letter_labels() -> None:
    layout = GridLayout(rows=1, columns=28, cell_width=40, cell_height=40)
    raster = compose_grid(layout, [])
    assert raster.size == (28 * 40 + 50, 40 + 50)


def test_custom_style_colors(
    layout_3x4: GridLayout,
    make_page: Callable[..., Image.Image],
) -> None:
    style = GridStyle(background=(10, 20, 30), line_color=(0, 255, 0),
                      line_width=3)
    raster = compose_grid(layout_3x4, [make_page(RED)], style)
    assert raster.getpixel(_cell_center(layout_3x4, 1)) == (10, 20, 30)
    assert raster.getpixel((50, 125)) == (0, 255, 0)


def test_too_many_images_is_rejected(
    layout_3x4: GridLayout,
    make_page: Callable[..., Image.Image],
) -> None:
    pages = [make_page() for _ in range(layout_3x4.capacity + 1)]
    with pytest.raises(InvalidInputError, match="capacity"):
        compose_grid(layout_3x4, pages)


def test_full_grid_is_accepted(
    layout_3x4: GridLayout,
    make_page: Callable[..., Image.Image],
) -> None:
    pages = [make_page(size=(200, 150)) for _ in range(layout_3x4.capacity)]
    raster = compose_grid(layout_3x4, pages, THICK_LINES)
    expected = pages[0].getpixel((0, 0))
    assert raster.getpixel(_cell_center(layout_3x4, 11)) == expected


def test_inputs_are_not_modified(
    layout_3x4: GridLayout,
    make_page: Callable[..., Image.Image],
) -> None:
    page = make_page(RED, size=(30, 40), mode="RGBA")
    before = page.tobytes()
    compose_grid(layout_3x4, [page])
    assert page.mode == "RGBA"
    assert page.size == (30, 40)
    assert page.tobytes() == before


def test_transparent_pages_flatten_onto_background(
    layout_3x4: GridLayout,
) -> None:
    clear = Image.new("RGBA", (20, 20), (255, 0, 0, 0))
    style = GridStyle(background=(40, 50, 60))
    raster = compose_grid(layout_3x4, [clear], style)
    assert _close(raster.getpixel(_cell_center(layout_3x4, 0)), (40, 50, 60))


def test_to_rgb_passthrough_and_conversion() -> None:
    rgb = Image.new("RGB", (4, 4), RED)
    assert to_rgb(rgb, bg_color=COLOR_WHITE) is rgb
    gray = Image.new("L", (4, 4), 128)
    assert to_rgb(gray, bg_color=COLOR_WHITE).getpixel((0, 0)) == (128,
                                                                   128, 128)
