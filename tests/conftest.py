"""
Test configuration and shared fixtures for visual_indexer.

This module defines reusable pytest fixtures for page image generation,
seeded random generators, layouts, and output directories.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from visual_indexer.config import VisualIndexConfig
from visual_indexer.constants import COLOR_MODE_RGB
from visual_indexer.grid import GridLayout
from visual_indexer.logging_utils import logger

PAGE_SIZE = (600, 800)

PAGE_COLORS = [
    (200, 30, 30),
    (30, 160, 40),
    (40, 60, 200),
    (220, 180, 20),
    (150, 40, 160),
    (20, 170, 170),
    (240, 120, 0),
    (90, 90, 90),
    (120, 60, 20),
]


@pytest.fixture
def make_page() -> Callable[..., Image.Image]:
    """Factory for solid-color page images."""

    def _make(
        color: tuple[int, int, int] = PAGE_COLORS[0],
        size: tuple[int, int] = PAGE_SIZE,
        mode: str = COLOR_MODE_RGB,
    ) -> Image.Image:
        if mode == "RGBA":
            return Image.new(mode, size, (*color, 255))
        return Image.new(mode, size, color)

    return _make


@pytest.fixture
def sample_pages(make_page: Callable[..., Image.Image]) -> list[Image.Image]:
    """Nine 600x800 pages, each a distinct solid color."""
    return [make_page(color) for color in PAGE_COLORS]


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded NumPy generator for reproducible synthetic pages."""
    return np.random.default_rng(1234)


@pytest.fixture
def layout_3x4() -> GridLayout:
    """Three rows of four 200x150 cells with 50px gutters."""
    return GridLayout(rows=3, columns=4, cell_width=200, cell_height=150,
                      row_gutter_width=50, column_gutter_height=50)


@pytest.fixture
def default_config() -> VisualIndexConfig:
    """Fully defaulted configuration."""
    return VisualIndexConfig.model_validate({})


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Provide a reusable temporary directory for output files."""
    return tmp_path / "out"


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the indexer logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
