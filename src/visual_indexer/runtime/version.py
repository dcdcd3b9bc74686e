"""Version string for ``--version`` output."""

from __future__ import annotations

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path

from visual_indexer.logging_utils import logger

DISTRIBUTION_NAMES = ("visual-indexer", "visual_indexer")
UNKNOWN_VERSION = "0.0.0"


def _installed_version() -> str | None:
    for name in DISTRIBUTION_NAMES:
        try:
            return importlib_metadata.version(name)
        except importlib_metadata.PackageNotFoundError:
            continue
    return None


def _pyproject_version(start: Path) -> str | None:
    """Read project.version from the nearest pyproject.toml above start."""
    for directory in start.parents:
        candidate = directory / "pyproject.toml"
        if not candidate.is_file():
            continue
        try:
            with candidate.open("rb") as handle:
                project = tomllib.load(handle).get("project", {})
        except OSError as exc:
            logger.warning("Error reading %s: %s", candidate, exc)
            return None
        version = project.get("version")
        if isinstance(version, str) and version.strip():
            return version.strip()
    return None


def resolve_project_version() -> str:
    """
    Return the installed version, else the source checkout's version.

    Source checkouts without an installed distribution report
    ``0.0.0`` when pyproject.toml carries no usable version.
    """
    return (
        _installed_version()
        or _pyproject_version(Path(__file__).resolve())
        or UNKNOWN_VERSION
    )
