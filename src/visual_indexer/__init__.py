"""Public package exports for the Visual Indexer."""

from __future__ import annotations

from .errors import (
    DegenerateLayoutError,
    InvalidInputError,
    MappingConsistencyError,
    VisualIndexError,
)
from .grid import (
    GridLayout,
    GridStyle,
    PageCellMap,
    build_cell_to_page_map,
    build_page_to_cell_map,
    compose_grid,
    compute_layout,
    invert_cell_map,
)
from .indexer import VisualIndex, build_visual_index, index_document

__all__ = [
    "DegenerateLayoutError",
    "GridLayout",
    "GridStyle",
    "InvalidInputError",
    "MappingConsistencyError",
    "PageCellMap",
    "VisualIndex",
    "VisualIndexError",
    "build_cell_to_page_map",
    "build_page_to_cell_map",
    "build_visual_index",
    "compose_grid",
    "compute_layout",
    "index_document",
    "invert_cell_map",
]
