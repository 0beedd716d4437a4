"""
Module: cli

Purpose:
    `copybook-export` command: turn a text (or structured content JSON)
    file into a copybook practice PDF.

Example:
    copybook-export poem.txt -o poem.pdf --font kaiti.ttf --grid tianzi
    copybook-export ci.json --json -o ci.pdf --strategy flow --direction horizontal
"""

from __future__ import annotations

import argparse
import concurrent.futures
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.errors import CopybookError
from .core.models.content import StructuredContent
from .core.utils.logging_utils import configure_logging
from .core.utils.serialization import parse_content_json
from .export import ExportRequest, ExportWorker, needs_font_confirmation, write_pdf
from .fonts.validation import validate_font
from .layout.config import (
    BorderMode,
    ColumnOrder,
    Direction,
    FixedGrid,
    GridDecoration,
    GridOptions,
    StrategyKind,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="copybook-export",
        description="Export Chinese text as a calligraphy practice sheet PDF",
    )
    parser.add_argument("input", type=Path, help="UTF-8 text file (or content JSON with --json)")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output PDF path")
    parser.add_argument("--font", type=Path, help="TrueType font file (default: bundled/system CJK font)")
    parser.add_argument("--json", action="store_true", help="Input is structured content JSON")
    parser.add_argument(
        "--direction", choices=[d.value for d in Direction], default=Direction.VERTICAL.value,
    )
    parser.add_argument(
        "--column-order", choices=[c.value for c in ColumnOrder], default=ColumnOrder.RTL.value,
        help="Column order for vertical text",
    )
    parser.add_argument(
        "--border", choices=[b.value for b in BorderMode], default=BorderMode.FULL.value,
    )
    parser.add_argument(
        "--grid", choices=[g.value for g in GridDecoration], default=GridDecoration.MIZI.value,
        help="Guide lines inside each cell",
    )
    parser.add_argument("--rows", type=int, help="Fixed rows per page (requires --cols)")
    parser.add_argument("--cols", type=int, help="Fixed columns per page (requires --rows)")
    parser.add_argument(
        "--strategy", choices=["grid", "flow", "center"], default=None,
        help="Layout strategy (default: grid)",
    )
    parser.add_argument(
        "--no-fallback", action="store_true",
        help="Fail instead of embedding the full font when subsetting fails",
    )
    parser.add_argument(
        "--allow-missing-font", action="store_true",
        help="Export even if no font is available (characters will not render)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _read_content(path: Path, is_json: bool) -> StructuredContent:
    text = path.read_text(encoding="utf-8")
    if is_json:
        return parse_content_json(text)
    return StructuredContent.from_text(text.strip("\n"))


def _build_request(args: argparse.Namespace) -> ExportRequest:
    fixed_grid = FixedGrid(rows=args.rows, cols=args.cols) if args.rows is not None else None
    font_bytes = None
    if args.font is not None:
        metadata = validate_font(args.font)
        logger.info(f"Font: {metadata.family_name} ({metadata.glyph_count} glyphs)")
        font_bytes = args.font.read_bytes()

    return ExportRequest(
        content=_read_content(args.input, args.json),
        font_bytes=font_bytes,
        options=GridOptions(
            direction=Direction(args.direction),
            column_order=ColumnOrder(args.column_order),
            border_mode=BorderMode(args.border),
            decoration=GridDecoration(args.grid),
            fixed_grid=fixed_grid,
        ),
        strategy=StrategyKind.parse(args.strategy) if args.strategy else None,
        allow_full_font_fallback=not args.no_fallback,
        allow_missing_font=args.allow_missing_font,
        title=args.input.stem,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if (args.rows is None) != (args.cols is None):
        parser.error("--rows and --cols must be given together")

    try:
        request = _build_request(args)
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return EXIT_USAGE
    except CopybookError as e:
        logger.error(str(e))
        return EXIT_USAGE

    if needs_font_confirmation(request):
        logger.error("No font available: pass --font, set COPYBOOK_DEFAULT_FONT, or use --allow-missing-font")
        return EXIT_FAILED

    worker = ExportWorker()
    worker.start(request)
    try:
        response = worker.wait(timeout=args.timeout)
    except concurrent.futures.TimeoutError:
        worker.cancel()
        logger.error(f"Export timed out after {args.timeout}s")
        return EXIT_FAILED

    if not response.success:
        logger.error(f"Export failed ({response.error_kind}): {response.error}")
        return EXIT_FAILED

    for warning in response.warnings:
        logger.warning(warning)

    try:
        write_pdf(response.output_bytes, args.output)
    except CopybookError as e:
        logger.error(str(e))
        return EXIT_FAILED

    print(f"Wrote {args.output} ({response.page_count} page(s))")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
