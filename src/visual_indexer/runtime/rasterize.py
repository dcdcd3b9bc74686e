"""
Page rasterization through PyMuPDF.

The grid code only needs an ordered batch of page images; this module
is one way to get them. Anything matching :class:`PageRasterizer` can
stand in, which keeps tests free of real PDF files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import fitz  # PyMuPDF
from PIL import Image
from tqdm import tqdm

from visual_indexer.config_defaults import DEFAULT_DPI
from visual_indexer.constants import COLOR_MODE_RGB, PDF_POINTS_PER_INCH
from visual_indexer.errors import InvalidInputError
from visual_indexer.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from os import PathLike


class PageRasterizer(Protocol):
    """Source of decoded page images for a document."""

    def page_count(self, path: str | PathLike[str]) -> int:
        """Return the number of pages in the document."""

    def render_pages(
        self,
        path: str | PathLike[str],
        start_page: int,
        page_count: int,
    ) -> list[Image.Image]:
        """Return ``page_count`` pages starting at 1-based ``start_page``."""


def _open_document(path: str | PathLike[str]) -> fitz.Document:
    """Open a PDF, reporting a missing file as FileNotFoundError."""
    pdf_path = Path(path)
    if not pdf_path.is_file():
        msg = f"Document not found: {pdf_path}"
        raise FileNotFoundError(msg)
    return fitz.open(pdf_path)


class PdfPageRasterizer:
    """Render PDF pages to RGB images at a fixed density."""

    def __init__(self, dpi: int = DEFAULT_DPI, *, progress: bool = False) -> None:
        """Store the render density and whether to show a progress bar."""
        if dpi <= 0:
            msg = f"dpi must be positive, got {dpi}"
            raise InvalidInputError(msg)
        self.dpi = dpi
        self.progress = progress

    @property
    def zoom(self) -> float:
        """Scale factor from PDF points to output pixels."""
        return self.dpi / PDF_POINTS_PER_INCH

    def page_count(self, path: str | PathLike[str]) -> int:
        """Return the number of pages in the PDF at ``path``."""
        with _open_document(path) as doc:
            return doc.page_count

    def _render(self, doc: fitz.Document, page_number: int) -> Image.Image:
        if not 1 <= page_number <= doc.page_count:
            msg = (f"page {page_number} outside document of "
                   f"{doc.page_count} pages")
            raise InvalidInputError(msg)
        matrix = fitz.Matrix(self.zoom, self.zoom)
        pix = doc.load_page(page_number - 1).get_pixmap(
            matrix=matrix, alpha=False,
        )
        logger.debug("Rendered page %d at %dx%d", page_number,
                     pix.width, pix.height)
        return Image.frombytes(
            COLOR_MODE_RGB, (pix.width, pix.height), pix.samples,
        )

    def render_page(
        self,
        path: str | PathLike[str],
        page_number: int,
    ) -> Image.Image:
        """Render the 1-based ``page_number`` of the PDF at ``path``."""
        with _open_document(path) as doc:
            return self._render(doc, page_number)

    def render_pages(
        self,
        path: str | PathLike[str],
        start_page: int,
        page_count: int,
    ) -> list[Image.Image]:
        """Render a consecutive run of pages, opening the file once."""
        if page_count <= 0:
            msg = f"page_count must be positive, got {page_count}"
            raise InvalidInputError(msg)
        page_numbers = range(start_page, start_page + page_count)
        with _open_document(path) as doc:
            return [
                self._render(doc, number)
                for number in tqdm(
                    page_numbers,
                    desc=f"Pages {start_page}-{page_numbers[-1]}",
                    disable=not self.progress,
                )
            ]
