"""
Grid planning, addressing, and composition for visual index images.

The package exposes the most commonly used entry points directly so
callers rarely need the submodules.
"""

from __future__ import annotations

from . import addressing, compose, layout
from .addressing import (
    PageCellMap,
    build_cell_to_page_map,
    build_page_to_cell_map,
    cell_address,
    column_index,
    column_letters,
    invert_cell_map,
    parse_cell_address,
)
from .compose import GridStyle, compose_grid, to_rgb
from .layout import GridLayout, compute_layout

__all__ = [
    "GridLayout",
    "GridStyle",
    "PageCellMap",
    "addressing",
    "build_cell_to_page_map",
    "build_page_to_cell_map",
    "cell_address",
    "column_index",
    "column_letters",
    "compose",
    "compose_grid",
    "compute_layout",
    "invert_cell_map",
    "layout",
    "parse_cell_address",
    "to_rgb",
]
