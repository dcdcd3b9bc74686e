"""Tests for visual index orchestration and batching."""

from __future__ import annotations

from os import PathLike

import pytest
from PIL import Image

from visual_indexer.config import VisualIndexConfig
from visual_indexer.errors import InvalidInputError
from visual_indexer.indexer import (
    VisualIndex,
    build_visual_index,
    index_document,
    page_batches,
)


class FakeRasterizer:
    """In-memory page source recording which ranges were requested."""

    def __init__(self, total: int, size: tuple[int, int] = (60, 80)) -> None:
        self.total = total
        self.size = size
        self.calls: list[tuple[int, int]] = []

    def page_count(self, path: str | PathLike[str]) -> int:
        return self.total

    def render_pages(
        self,
        path: str | PathLike[str],
        start_page: int,
        page_count: int,
    ) -> list[Image.Image]:
        self.calls.append((start_page, page_count))
        return [Image.new("RGB", self.size, (page % 256, 0, 0))
                for page in range(start_page, start_page + page_count)]


def test_build_visual_index_plans_from_first_page(
    sample_pages: list[Image.Image],
) -> None:
    index = build_visual_index(sample_pages)
    assert (index.layout.rows, index.layout.columns) == (2, 5)
    assert index.image.size == index.layout.canvas_size
    assert index.start_page == 1
    assert index.end_page == 9


def test_visual_index_lookups(sample_pages: list[Image.Image]) -> None:
    index = build_visual_index(sample_pages, start_page=21)
    assert index.page_for_cell("A1") == 21
    assert index.page_for_cell("e1") == 25
    assert index.cell_for_page(29) == "D2"
    with pytest.raises(InvalidInputError):
        index.page_for_cell("E2")
    with pytest.raises(InvalidInputError):
        index.cell_for_page(30)


def test_build_visual_index_logs_layout(
    sample_pages: list[Image.Image],
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level("INFO"):
        build_visual_index(sample_pages[:3])
    assert "1 rows x 3 columns" in caplog.text


def test_build_visual_index_requires_images() -> None:
    with pytest.raises(InvalidInputError, match="No images"):
        build_visual_index([])


@pytest.mark.parametrize(
    ("total", "per_grid", "start", "expected"),
    [
        (45, 20, 1, [(1, 20), (21, 20), (41, 5)]),
        (40, 20, 1, [(1, 20), (21, 20)]),
        (3, 20, 1, [(1, 3)]),
        (5, 2, 10, [(10, 2), (12, 2), (14, 1)]),
    ],
)
def test_page_batches(total: int, per_grid: int, start: int,
                      expected: list[tuple[int, int]]) -> None:
    assert page_batches(total, per_grid, start) == expected


@pytest.mark.parametrize(("total", "per_grid"), [(0, 5), (5, 0)])
def test_page_batches_rejects_non_positive(total: int, per_grid: int) -> None:
    with pytest.raises(InvalidInputError):
        page_batches(total, per_grid)


def test_index_document_batches_every_page_once() -> None:
    cfg = VisualIndexConfig.model_validate(
        {"render": {"pages_per_grid": 10}},
    )
    rasterizer = FakeRasterizer(total=25)

    indexes = index_document("doc.pdf", cfg, rasterizer=rasterizer)

    assert rasterizer.calls == [(1, 10), (11, 10), (21, 5)]
    assert all(isinstance(index, VisualIndex) for index in indexes)
    assert [index.start_page for index in indexes] == [1, 11, 21]
    covered: list[int] = []
    for index in indexes:
        covered.extend(index.page_map().page_to_cell)
    assert covered == list(range(1, 26))


def test_index_document_applies_canvas_and_style() -> None:
    cfg = VisualIndexConfig.model_validate(
        {
            "canvas": {"max_width": 400, "max_height": 300,
                       "row_gutter_width": 20, "column_gutter_height": 20},
            "style": {"background": "#102030", "line_width": 0},
        },
    )
    indexes = index_document("doc.pdf", cfg,
                             rasterizer=FakeRasterizer(total=2))
    (index,) = indexes
    width, height = index.image.size
    assert width <= 400
    assert height <= 300
    assert index.layout.row_gutter_width == 20
    assert index.image.getpixel((0, 0)) == (16, 32, 48)


def test_index_document_rejects_empty_document() -> None:
    with pytest.raises(InvalidInputError, match="no pages"):
        index_document("empty.pdf", rasterizer=FakeRasterizer(total=0))
