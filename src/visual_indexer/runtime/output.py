"""Helpers for managing output locations and persisted index artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel

from visual_indexer.constants import INDEX_IMAGE_SUFFIX, INDEX_MANIFEST_SUFFIX
from visual_indexer.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

    from visual_indexer.indexer import VisualIndex


class IndexManifest(BaseModel):
    """Sidecar describing which page sits in which cell of an image."""

    source: str
    image: str
    start_page: int
    end_page: int
    rows: int
    columns: int
    cell_width: int
    cell_height: int
    cells: dict[str, int]

    @classmethod
    def from_index(
        cls,
        index: VisualIndex,
        *,
        source: str,
        image_path: Path,
    ) -> IndexManifest:
        """Describe ``index`` as saved to ``image_path``."""
        layout = index.layout
        return cls(
            source=source,
            image=image_path.name,
            start_page=index.start_page,
            end_page=index.end_page,
            rows=layout.rows,
            columns=layout.columns,
            cell_width=layout.cell_width,
            cell_height=layout.cell_height,
            cells=index.page_map().cell_to_page,
        )


def setup_output_directory(
    output_path: str,
    path_factory: Callable[[str], Path] = Path,
) -> Path:
    """
    Create the output directory if needed and return its resolved path.

    Falls back to ``visual_index_output`` on failure to create the desired
    directory to keep the run from aborting.
    """
    resolved_path = path_factory(output_path)
    try:
        resolved_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create output directory: %s", exc)
        fallback_path = path_factory("visual_index_output")
        fallback_path.mkdir(parents=True, exist_ok=True)
        logger.info("Using fallback directory: %s", fallback_path)
        return fallback_path
    return resolved_path


def _canonical_stem(name: str) -> str:
    """Return a filesystem-safe stem (spaces mapped to underscores)."""
    return Path(name).stem.replace(" ", "_")


def visual_index_path(
    output_dir: Path,
    source_name: str,
    start_page: int,
    end_page: int,
) -> Path:
    """Return the canonical image path for a page range of a source."""
    stem = _canonical_stem(source_name)
    return output_dir / (
        f"index_{stem}_p{start_page:04d}-{end_page:04d}{INDEX_IMAGE_SUFFIX}"
    )


def save_visual_index(
    index: VisualIndex,
    output_dir: Path,
    source_name: str,
) -> Path:
    """
    Write the index image as PNG plus a JSON manifest next to it.

    Returns the image path; the manifest shares its stem.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    image_path = visual_index_path(
        output_dir, source_name, index.start_page, index.end_page,
    )
    index.image.save(image_path, format="PNG")

    manifest = IndexManifest.from_index(
        index, source=source_name, image_path=image_path,
    )
    manifest_path = image_path.with_suffix(INDEX_MANIFEST_SUFFIX)
    manifest_path.write_text(
        manifest.model_dump_json(indent=2), encoding="utf-8",
    )
    logger.info("Visual index saved to: %s", image_path)
    return image_path
