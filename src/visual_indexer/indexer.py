"""
Visual index orchestration.

Plans a layout for a batch of page images, composes the grid, and
keeps the page range so cells and pages can be looked up afterwards.
Documents longer than one grid are split into consecutive batches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from visual_indexer.config import CanvasConfig, VisualIndexConfig
from visual_indexer.config_defaults import DEFAULT_START_PAGE
from visual_indexer.errors import InvalidInputError
from visual_indexer.grid import (
    GridLayout,
    GridStyle,
    PageCellMap,
    compose_grid,
    compute_layout,
)
from visual_indexer.logging_utils import logger
from visual_indexer.runtime.rasterize import PageRasterizer, PdfPageRasterizer

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence
    from os import PathLike

    from PIL import Image


@dataclass(frozen=True, slots=True)
class VisualIndex:
    """A composed grid image and the page range it shows."""

    image: Image.Image
    layout: GridLayout
    start_page: int
    page_count: int

    @property
    def end_page(self) -> int:
        """Last page shown in the grid."""
        return self.start_page + self.page_count - 1

    def page_map(self) -> PageCellMap:
        """Build a fresh page/cell map for this grid."""
        return PageCellMap(
            start_page=self.start_page,
            page_count=self.page_count,
            rows=self.layout.rows,
            columns=self.layout.columns,
        )

    def page_for_cell(self, address: str) -> int:
        """Return the page shown in cell ``address``."""
        return self.page_map().page_for_cell(address)

    def cell_for_page(self, page: int) -> str:
        """Return the cell address that shows ``page``."""
        return self.page_map().cell_for_page(page)


def plan_layout(
    item_count: int,
    reference_size: tuple[int, int],
    canvas: CanvasConfig,
) -> GridLayout:
    """Run the layout planner against a canvas configuration."""
    return compute_layout(
        item_count,
        reference_size[0],
        reference_size[1],
        max_canvas_width=canvas.max_width,
        max_canvas_height=canvas.max_height,
        row_gutter_width=canvas.row_gutter_width,
        column_gutter_height=canvas.column_gutter_height,
    )


def build_visual_index(
    images: Sequence[Image.Image],
    *,
    start_page: int = DEFAULT_START_PAGE,
    canvas: CanvasConfig | None = None,
    style: GridStyle | None = None,
) -> VisualIndex:
    """
    Lay out and compose one grid for ``images``.

    The first image's natural size sets the thumbnail aspect ratio; the
    others are stretched to the same cell size.
    """
    if not images:
        msg = "No images provided"
        raise InvalidInputError(msg)
    canvas = canvas or CanvasConfig.model_validate({})

    layout = plan_layout(len(images), images[0].size, canvas)
    logger.info(
        "Pages %d-%d: %d rows x %d columns of %dx%d px cells",
        start_page, start_page + len(images) - 1,
        layout.rows, layout.columns, layout.cell_width, layout.cell_height,
    )
    image = compose_grid(layout, images, style)
    return VisualIndex(
        image=image,
        layout=layout,
        start_page=start_page,
        page_count=len(images),
    )


def page_batches(
    total_pages: int,
    pages_per_grid: int,
    start_page: int = DEFAULT_START_PAGE,
) -> list[tuple[int, int]]:
    """Split pages into consecutive ``(start_page, page_count)`` batches."""
    if total_pages <= 0:
        msg = f"total_pages must be positive, got {total_pages}"
        raise InvalidInputError(msg)
    if pages_per_grid <= 0:
        msg = f"pages_per_grid must be positive, got {pages_per_grid}"
        raise InvalidInputError(msg)
    last_page = start_page + total_pages - 1
    return [
        (first, min(pages_per_grid, last_page - first + 1))
        for first in range(start_page, last_page + 1, pages_per_grid)
    ]


def index_document(
    pdf_path: str | PathLike[str],
    config: VisualIndexConfig | None = None,
    rasterizer: PageRasterizer | None = None,
) -> list[VisualIndex]:
    """
    Build one visual index per batch of pages of a PDF.

    Each batch is rendered, laid out, and composed independently, so a
    short final batch gets its own, usually larger, cells.
    """
    cfg = config or VisualIndexConfig.model_validate({})
    source = rasterizer or PdfPageRasterizer(cfg.render.dpi, progress=True)
    style = cfg.grid_style()

    total = source.page_count(pdf_path)
    if total <= 0:
        msg = f"Document has no pages: {pdf_path}"
        raise InvalidInputError(msg)
    batches = page_batches(total, cfg.render.pages_per_grid)
    logger.info("Indexing %s: %d pages in %d grid(s)", pdf_path, total,
                len(batches))

    return [
        build_visual_index(
            source.render_pages(pdf_path, first, count),
            start_page=first,
            canvas=cfg.canvas,
            style=style,
        )
        for first, count in batches
    ]
