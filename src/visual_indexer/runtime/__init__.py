"""Runtime collaborators: rasterization, persistence, samples, version."""

from .output import (
    IndexManifest,
    save_visual_index,
    setup_output_directory,
    visual_index_path,
)
from .rasterize import PageRasterizer, PdfPageRasterizer
from .samples import random_color_pages, random_page_color
from .version import resolve_project_version

__all__ = [
    "IndexManifest",
    "PageRasterizer",
    "PdfPageRasterizer",
    "random_color_pages",
    "random_page_color",
    "resolve_project_version",
    "save_visual_index",
    "setup_output_directory",
    "visual_index_path",
]
