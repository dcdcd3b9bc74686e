"""Synthetic page images for demos and tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image

from visual_indexer.constants import COLOR_MODE_RGB, COLOR_WHITE
from visual_indexer.errors import InvalidInputError

if TYPE_CHECKING:  # pragma: no cover
    import numpy as np

_RGB = tuple[int, int, int]


def random_page_color(rng: np.random.Generator) -> _RGB:
    """Draw a random RGB color that is never pure white."""
    while True:
        red, green, blue = (int(v) for v in rng.integers(0, 256, size=3))
        color = (red, green, blue)
        if color != COLOR_WHITE:
            return color


def random_color_pages(
    count: int,
    size: tuple[int, int],
    rng: np.random.Generator,
) -> list[Image.Image]:
    """
    Build ``count`` solid-color pages of ``size`` from ``rng``.

    White is excluded so every page stands out from the default grid
    background.
    """
    if count <= 0:
        msg = f"count must be positive, got {count}"
        raise InvalidInputError(msg)
    width, height = size
    if width <= 0 or height <= 0:
        msg = f"page size must be positive, got {width}x{height}"
        raise InvalidInputError(msg)
    return [
        Image.new(COLOR_MODE_RGB, size, random_page_color(rng))
        for _ in range(count)
    ]
