"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import numpy as np

import visual_indexer.config as vi_config
from visual_indexer.errors import VisualIndexError
from visual_indexer.grid import cell_address, parse_cell_address
from visual_indexer.indexer import (
    VisualIndex,
    build_visual_index,
    index_document,
    page_batches,
)
from visual_indexer.logging_utils import logger
from visual_indexer.runtime.output import (
    save_visual_index,
    setup_output_directory,
)
from visual_indexer.runtime.samples import random_color_pages
from visual_indexer.runtime.version import resolve_project_version

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

T = TypeVar("T")

DEMO_PAGE_SIZE = (600, 800)
DEMO_SOURCE_NAME = "demo"


def positive_int(text: str) -> int:
    """Argparse-style validator that enforces a strictly positive integer."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def cell_argument(text: str) -> str:
    """Normalize a cell address argument such as ``b3`` to ``B3``."""
    return cell_address(*parse_cell_address(text))


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="visual-indexer",
        description=(
            "Render document pages into spreadsheet-style grid images "
            "addressed by column letter and row number."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "visual-indexer --pdf report.pdf --out indexes\n"
            "visual-indexer --pdf report.pdf --pages-per-grid 12 "
            "--lookup B2\n"
            "visual-indexer --demo 9 --page 5"
        ),
    )
    p.add_argument("--version", action="version",
                   version=f"%(prog)s {resolve_project_version()}")

    source = p.add_argument_group("source")
    source.add_argument("--pdf", type=Path, help="Path to a PDF document")
    source.add_argument(
        "--demo", type=_wrap_validator(positive_int), metavar="N",
        help="Index N random solid-color pages instead of a PDF")
    source.add_argument(
        "--seed", type=int, default=0,
        help="Random seed for --demo pages (default: 0)")

    output = p.add_argument_group("output")
    output.add_argument("--out", type=str, help="Output directory")

    layout = p.add_argument_group("layout")
    layout.add_argument(
        "--pages-per-grid", type=_wrap_validator(positive_int),
        help="Maximum pages shown in one grid image")
    layout.add_argument(
        "--dpi", type=_wrap_validator(positive_int),
        help="Rasterization density for PDF pages")
    layout.add_argument(
        "--max-width", type=_wrap_validator(positive_int),
        help="Maximum width of a grid image in pixels")
    layout.add_argument(
        "--max-height", type=_wrap_validator(positive_int),
        help="Maximum height of a grid image in pixels")

    query = p.add_argument_group("lookup")
    query.add_argument(
        "--lookup", type=_wrap_validator(cell_argument), metavar="CELL",
        help="Report the page shown in CELL of each grid")
    query.add_argument(
        "--page", type=_wrap_validator(positive_int),
        help="Report which grid and cell show this page")

    cfg = p.add_argument_group("config")
    cfg.add_argument("--config", type=str, help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without indexing")

    return p


def _build_indexes(
    args: argparse.Namespace,
    cfg: vi_config.VisualIndexConfig,
) -> tuple[str, list[VisualIndex]]:
    """Return the source name and the grids for a PDF or demo run."""
    if args.pdf is not None:
        return args.pdf.name, index_document(args.pdf, cfg)

    rng = np.random.default_rng(args.seed)
    pages = random_color_pages(args.demo, DEMO_PAGE_SIZE, rng)
    indexes = [
        build_visual_index(
            pages[first - 1:first - 1 + count],
            start_page=first,
            canvas=cfg.canvas,
            style=cfg.grid_style(),
        )
        for first, count in page_batches(len(pages),
                                         cfg.render.pages_per_grid)
    ]
    return DEMO_SOURCE_NAME, indexes


def report_lookups(
    indexes: Sequence[VisualIndex],
    *,
    cell: str | None = None,
    page: int | None = None,
) -> None:
    """Log cell and page lookups against every grid."""
    for number, index in enumerate(indexes, start=1):
        page_map = index.page_map()
        if cell is not None:
            cells = page_map.cell_to_page
            if cell in cells:
                logger.info("Grid %d: cell %s = page %d", number, cell,
                            cells[cell])
            else:
                logger.info("Grid %d: cell %s is empty", number, cell)
        if page is not None and index.start_page <= page <= index.end_page:
            logger.info("Page %d = grid %d, cell %s", page, number,
                        page_map.cell_for_page(page))
    if page is not None and not any(
        index.start_page <= page <= index.end_page for index in indexes
    ):
        logger.warning("Page %d is not in any grid", page)


def run_from_args(args: argparse.Namespace) -> list[Path]:
    """Index the requested source and save every grid image."""
    base_cfg: vi_config.VisualIndexConfig | None = None
    if args.config:
        base_cfg = vi_config.ConfigLoader.load(args.config)
        logger.info("Loaded config from: %s", args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            sys.exit(0)

    cfg = vi_config.build_config_from_cli(vars(args), base_config=base_cfg)

    source_name, indexes = _build_indexes(args, cfg)
    out_dir = setup_output_directory(cfg.output.output)
    saved = [save_visual_index(index, out_dir, source_name)
             for index in indexes]

    report_lookups(indexes, cell=args.lookup, page=args.page)
    return saved


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface for visual index generation."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if not args.validate_config_only and (
        (args.pdf is None) == (args.demo is None)
    ):
        arg_parser.error("exactly one of --pdf or --demo is required")

    try:
        run_from_args(args)
    except (VisualIndexError, FileNotFoundError) as exc:
        arg_parser.error(str(exc))

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
