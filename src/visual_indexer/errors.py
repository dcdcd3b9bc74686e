"""
Exception hierarchy for visual index planning and composition.

Input problems and degenerate layouts subclass ``ValueError`` so callers
that already guard against bad arguments keep working. A broken page map
is a ``RuntimeError``: it signals a bug in the mapper, not bad input.
"""

from __future__ import annotations


class VisualIndexError(Exception):
    """Base class for all visual indexer errors."""


class InvalidInputError(VisualIndexError, ValueError):
    """Counts, sizes, or image batches the caller has to fix."""


class DegenerateLayoutError(VisualIndexError, ValueError):
    """The canvas cannot hold a thumbnail of at least one pixel."""


class MappingConsistencyError(VisualIndexError, RuntimeError):
    """Two cells were assigned the same page number."""


__all__ = [
    "DegenerateLayoutError",
    "InvalidInputError",
    "MappingConsistencyError",
    "VisualIndexError",
]
