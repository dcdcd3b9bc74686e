"""
Spreadsheet-style cell addresses and page/cell mappings.

Columns are named with bijective base-26 letters (A..Z, AA..AZ, BA..),
rows with 1-based numerals, so the first cell is ``A1``. Pages fill the
grid row by row.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from visual_indexer.constants import COLUMN_ALPHABET, COLUMN_BASE
from visual_indexer.errors import InvalidInputError, MappingConsistencyError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping

_ADDRESS_RE = re.compile(r"^([A-Z]+)([1-9][0-9]*)$")


def column_letters(index: int) -> str:
    """Return the letter label of the 1-based column ``index``."""
    if index < 1:
        msg = f"column index must be >= 1, got {index}"
        raise InvalidInputError(msg)
    letters: list[str] = []
    while index > 0:
        index, rem = divmod(index - 1, COLUMN_BASE)
        letters.append(COLUMN_ALPHABET[rem])
    return "".join(reversed(letters))


def column_index(letters: str) -> int:
    """Return the 1-based column index named by ``letters``."""
    if not letters or any(ch not in COLUMN_ALPHABET for ch in letters):
        msg = f"invalid column letters: {letters!r}"
        raise InvalidInputError(msg)
    index = 0
    for ch in letters:
        index = index * COLUMN_BASE + COLUMN_ALPHABET.index(ch) + 1
    return index


def cell_address(column: int, row: int) -> str:
    """Format 1-based ``column`` and ``row`` as an address like ``C2``."""
    if row < 1:
        msg = f"row index must be >= 1, got {row}"
        raise InvalidInputError(msg)
    return f"{column_letters(column)}{row}"


def parse_cell_address(address: str) -> tuple[int, int]:
    """Split an address like ``c2`` into 1-based (column, row)."""
    match = _ADDRESS_RE.match(address.strip().upper())
    if match is None:
        msg = f"invalid cell address: {address!r}"
        raise InvalidInputError(msg)
    return column_index(match.group(1)), int(match.group(2))


def _check_range(
    start_page: int,
    page_count: int,
    rows: int,
    columns: int,
) -> None:
    if page_count <= 0:
        msg = f"page_count must be positive, got {page_count}"
        raise InvalidInputError(msg)
    if rows <= 0 or columns <= 0:
        msg = f"grid shape must be positive, got {rows}x{columns}"
        raise InvalidInputError(msg)
    if page_count > rows * columns:
        msg = (f"{page_count} pages do not fit a {rows}x{columns} grid "
               f"starting at page {start_page}")
        raise InvalidInputError(msg)


def build_cell_to_page_map(
    start_page: int,
    page_count: int,
    rows: int,
    columns: int,
) -> dict[str, int]:
    """
    Map cell addresses to page numbers in row-major order.

    Pages ``start_page .. start_page + page_count - 1`` are assigned to
    consecutive cells; trailing cells stay unmapped.
    """
    _check_range(start_page, page_count, rows, columns)
    last_page = start_page + page_count - 1

    mapping: dict[str, int] = {}
    page = start_page
    for row in range(1, rows + 1):
        for col in range(1, columns + 1):
            if page > last_page:
                return mapping
            mapping[cell_address(col, row)] = page
            page += 1
    return mapping


def invert_cell_map(mapping: Mapping[str, int]) -> dict[int, str]:
    """
    Return the page -> cell inverse of a forward map.

    Raises:
        MappingConsistencyError: If two cells hold the same page.

    """
    inverse: dict[int, str] = {}
    for cell, page in mapping.items():
        if page in inverse:
            msg = (f"page {page} mapped to both {inverse[page]} and {cell}")
            raise MappingConsistencyError(msg)
        inverse[page] = cell
    return inverse


def build_page_to_cell_map(
    start_page: int,
    page_count: int,
    rows: int,
    columns: int,
) -> dict[int, str]:
    """Map page numbers to their cell addresses."""
    return invert_cell_map(
        build_cell_to_page_map(start_page, page_count, rows, columns),
    )


@dataclass(frozen=True, slots=True)
class PageCellMap:
    """Page range laid over a grid; both directions rebuilt on access."""

    start_page: int
    page_count: int
    rows: int
    columns: int

    def __post_init__(self) -> None:
        """Validate the range against the grid shape."""
        _check_range(self.start_page, self.page_count, self.rows, self.columns)

    @property
    def end_page(self) -> int:
        """Last page number covered by the map."""
        return self.start_page + self.page_count - 1

    @property
    def cell_to_page(self) -> dict[str, int]:
        """Forward map, cell address -> page number."""
        return build_cell_to_page_map(
            self.start_page, self.page_count, self.rows, self.columns,
        )

    @property
    def page_to_cell(self) -> dict[int, str]:
        """Inverse map, page number -> cell address."""
        return invert_cell_map(self.cell_to_page)

    def page_for_cell(self, address: str) -> int:
        """Return the page shown in ``address``."""
        column, row = parse_cell_address(address)
        key = cell_address(column, row)
        try:
            return self.cell_to_page[key]
        except KeyError as exc:
            msg = f"cell {key} holds no page"
            raise InvalidInputError(msg) from exc

    def cell_for_page(self, page: int) -> str:
        """Return the address of the cell showing ``page``."""
        try:
            return self.page_to_cell[page]
        except KeyError as exc:
            msg = (f"page {page} outside {self.start_page}-{self.end_page}")
            raise InvalidInputError(msg) from exc
