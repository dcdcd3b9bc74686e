"""
Grid layout planning for visual index images.

The planner sweeps over every possible row count, derives the column
count needed to hold all items, and keeps the configuration whose
aspect-preserving thumbnail has the largest area. Ties keep the
smallest row count.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from visual_indexer.config_defaults import (
    DEFAULT_COLUMN_GUTTER_HEIGHT,
    DEFAULT_MAX_CANVAS_HEIGHT,
    DEFAULT_MAX_CANVAS_WIDTH,
    DEFAULT_ROW_GUTTER_WIDTH,
)
from visual_indexer.errors import DegenerateLayoutError, InvalidInputError


@dataclass(frozen=True, slots=True)
class GridLayout:
    """Grid shape, thumbnail size, and label gutters of one index image."""

    rows: int
    columns: int
    cell_width: int
    cell_height: int
    row_gutter_width: int = DEFAULT_ROW_GUTTER_WIDTH
    column_gutter_height: int = DEFAULT_COLUMN_GUTTER_HEIGHT

    def __post_init__(self) -> None:
        """Reject shapes no raster can be built from."""
        for name in ("rows", "columns", "cell_width", "cell_height"):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise InvalidInputError(msg)
        if self.row_gutter_width < 0 or self.column_gutter_height < 0:
            msg = "gutters must not be negative"
            raise InvalidInputError(msg)

    @property
    def capacity(self) -> int:
        """Number of cells in the grid."""
        return self.rows * self.columns

    @property
    def canvas_size(self) -> tuple[int, int]:
        """Return (width, height) of the composed raster."""
        return (
            self.columns * self.cell_width + self.row_gutter_width,
            self.rows * self.cell_height + self.column_gutter_height,
        )

    def cell_box(self, index: int) -> tuple[int, int, int, int]:
        """Return the (x0, y0, x1, y1) box of the ``index``-th cell."""
        if not 0 <= index < self.capacity:
            msg = f"cell index {index} outside grid of {self.capacity}"
            raise InvalidInputError(msg)
        row, col = divmod(index, self.columns)
        x0 = col * self.cell_width + self.row_gutter_width
        y0 = row * self.cell_height + self.column_gutter_height
        return x0, y0, x0 + self.cell_width, y0 + self.cell_height


def compute_layout(  # noqa: PLR0913
    item_count: int,
    reference_width: int,
    reference_height: int,
    *,
    max_canvas_width: int = DEFAULT_MAX_CANVAS_WIDTH,
    max_canvas_height: int = DEFAULT_MAX_CANVAS_HEIGHT,
    row_gutter_width: int = DEFAULT_ROW_GUTTER_WIDTH,
    column_gutter_height: int = DEFAULT_COLUMN_GUTTER_HEIGHT,
) -> GridLayout:
    """
    Choose rows, columns, and thumbnail size for ``item_count`` items.

    Every thumbnail keeps the reference aspect ratio. Space per column
    and per row is measured in whole pixels before the aspect fit, so a
    row of cells never overruns the available width.

    Raises:
        InvalidInputError: If counts or sizes are not positive, or the
            gutters leave no room for cells.
        DegenerateLayoutError: If the best layout truncates to a cell
            narrower or shorter than one pixel.

    """
    if item_count <= 0:
        msg = f"item_count must be positive, got {item_count}"
        raise InvalidInputError(msg)
    if reference_width <= 0 or reference_height <= 0:
        msg = (f"reference size must be positive, got "
               f"{reference_width}x{reference_height}")
        raise InvalidInputError(msg)
    if row_gutter_width < 0 or column_gutter_height < 0:
        msg = "gutters must not be negative"
        raise InvalidInputError(msg)

    available_width = max_canvas_width - row_gutter_width
    available_height = max_canvas_height - column_gutter_height
    if available_width <= 0 or available_height <= 0:
        msg = (f"canvas {max_canvas_width}x{max_canvas_height} leaves no "
               f"room for cells after {row_gutter_width}x"
               f"{column_gutter_height} gutters")
        raise InvalidInputError(msg)

    aspect = reference_width / reference_height

    best_area = 0.0
    best: tuple[int, int, float, float] | None = None
    for rows in range(1, item_count + 1):
        columns = math.ceil(item_count / rows)
        width_budget = available_width // columns
        height_budget = available_height // rows

        cell_w = min(width_budget, height_budget * aspect)
        cell_h = cell_w / aspect
        if cell_h > height_budget:
            cell_h = height_budget
            cell_w = cell_h * aspect

        area = cell_w * cell_h
        if area > best_area:
            best_area = area
            best = (rows, columns, cell_w, cell_h)

    if best is None:
        msg = (f"no layout for {item_count} items fits a "
               f"{available_width}x{available_height} cell area")
        raise DegenerateLayoutError(msg)

    rows, columns, cell_w, cell_h = best
    cell_width, cell_height = int(cell_w), int(cell_h)
    if cell_width < 1 or cell_height < 1:
        msg = (f"best layout {rows}x{columns} truncates to "
               f"{cell_width}x{cell_height} px cells")
        raise DegenerateLayoutError(msg)

    return GridLayout(
        rows=rows,
        columns=columns,
        cell_width=cell_width,
        cell_height=cell_height,
        row_gutter_width=row_gutter_width,
        column_gutter_height=column_gutter_height,
    )
