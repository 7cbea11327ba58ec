"""
pdf_diff.cli

Command-line entry point: compares two PDFs page by page and writes one
difference image per page, optionally merged into a single PDF.

Exit codes: 0 success, 1 invalid configuration, 2 some pages failed,
3 the output PDF could not be assembled.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from utils.env import configure_logging, env_float, env_int
from utils.report import render_html_report

from .config import DEFAULT_DPI, DEFAULT_OUTPUT, DiffConfig, PrintSize
from .errors import AssemblyError, ConfigurationError
from .pipeline import PipelineResult, compare_files

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_PAGE_FAILURES = 2
EXIT_ASSEMBLY = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-diff",
        description="Compare two PDFs visually, page by page. Red pixels are brighter in A, blue pixels in B.",
    )
    parser.add_argument("file_a", help="Path to first PDF")
    parser.add_argument("file_b", help="Path to second PDF")
    parser.add_argument("--merge", action="store_true", help="merge the difference images into a single PDF")
    parser.add_argument("--clean", action="store_true", help="remove the difference images after processing")
    parser.add_argument("--offset", type=int, default=0, help="the number of pages to skip in the second PDF")
    parser.add_argument("--startoffset", type=int, default=0, help="the page of the first PDF to start the offset")
    parser.add_argument(
        "--orientation",
        default=None,
        help="the orientation of the merged PDF (P for portrait, L for landscape); detected from the first page if unset",
    )
    parser.add_argument(
        "--printsize",
        default=PrintSize.A3.value,
        help="size of the merged PDF pages: A4, A3, A2, A1 or A0 (default: A3)",
    )
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="the name of the output PDF file")
    parser.add_argument("--workers", type=int, default=None, help="the number of workers to use; 0 or unset uses the CPU count")
    parser.add_argument("--sidebyside", action="store_true", help="create a side-by-side comparison of the two PDFs")
    parser.add_argument("--verticalalign", action="store_true", help="align the documents vertically in the combined image")
    parser.add_argument("--dpi", type=float, default=None, help=f"rendering resolution (default: {DEFAULT_DPI:g})")
    parser.add_argument("--workdir", default=None, help="directory for the per-page images (default: next to --output)")
    parser.add_argument("--report", default=None, help="also write an HTML run report to this path")
    return parser


def config_from_args(args: argparse.Namespace) -> DiffConfig:
    """Build a DiffConfig from parsed flags, falling back to PDF_DIFF_* environment defaults."""
    try:
        workers = args.workers if args.workers is not None else env_int("WORKERS")
        dpi = args.dpi if args.dpi is not None else env_float("DPI", DEFAULT_DPI)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    return DiffConfig(
        output=Path(args.output),
        merge=args.merge,
        clean=args.clean,
        offset=args.offset,
        start_offset=args.startoffset,
        orientation=args.orientation,
        print_size=args.printsize,
        workers=workers,
        side_by_side=args.sidebyside,
        vertical_align=args.verticalalign,
        dpi=float(dpi),
        workdir=Path(args.workdir) if args.workdir else None,
    )


def _summarize(result: PipelineResult) -> None:
    changed = len(result.changed_pages)
    logger.info("%d of %d pages differ", changed, len(result.pages))
    for page in result.failures:
        print(f"Error: page {page.index + 1}: {page.error}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
        result = compare_files(args.file_a, args.file_b, config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG
    except AssemblyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ASSEMBLY

    _summarize(result)
    if args.report:
        render_html_report(result, args.report)
        logger.info("Report written to %s", args.report)

    if not result.ok:
        return EXIT_PAGE_FAILURES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
