"""
Module: export.controller

Purpose:
    Drive one PDF export through a fixed sequence of states:
    IDLE → FONT_READY → LAID_OUT → PAGES_DRAWN → SERIALIZED → DONE,
    with FAILED reachable from every step. No step is retried.

Key Functions:
    - export_pdf(): Run one export, raising ExportError on failure
    - write_pdf(): Write PDF bytes to disk
    - needs_font_confirmation(): Whether the user must approve a font-less export

Key Classes:
    - ExportState: Pipeline states
    - ExportOrchestrator: Single-use state machine
    - ExportResult: Successful export output

Dependencies:
    - fonts: Subsetting and default font lookup
    - layout: Strategies and pagination
    - export.output: Drawing service and cell rendering

Used By:
    - export.worker: Background exports
    - cli: Command line export
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from ..core.errors import (
    CopybookError,
    ExportError,
    ExportIOError,
    MissingFontError,
)
from ..fonts.defaults import find_default_font, resolve_default_font
from ..fonts.subsetter import subset_font_with_fallback
from ..layout.config import UNBOUNDED, Direction, LayoutConfig, StrategyKind
from ..layout.grid_sizing import resolve_gap
from ..layout.models import LayoutResult, PageCapacity, PaginationResult
from ..layout.paginator import paginate
from ..layout.strategies import calculate_layout
from .config import ExportRequest, ExportResponse, cell_size_mm
from .output.canvas import DrawingService, ReportLabDrawingService
from .output.renderer import render_cells

logger = logging.getLogger(__name__)


class ExportState(Enum):
    """States of one export."""

    IDLE = "idle"
    FONT_READY = "font_ready"
    LAID_OUT = "laid_out"
    PAGES_DRAWN = "pages_drawn"
    SERIALIZED = "serialized"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: Dict[ExportState, FrozenSet[ExportState]] = {
    ExportState.IDLE: frozenset({ExportState.FONT_READY, ExportState.FAILED}),
    ExportState.FONT_READY: frozenset({ExportState.LAID_OUT, ExportState.FAILED}),
    ExportState.LAID_OUT: frozenset({ExportState.PAGES_DRAWN, ExportState.FAILED}),
    ExportState.PAGES_DRAWN: frozenset({ExportState.SERIALIZED, ExportState.FAILED}),
    ExportState.SERIALIZED: frozenset({ExportState.DONE, ExportState.FAILED}),
    ExportState.DONE: frozenset(),
    ExportState.FAILED: frozenset(),
}

ServiceFactory = Callable[[ExportRequest], DrawingService]


def _reportlab_service(request: ExportRequest) -> DrawingService:
    return ReportLabDrawingService(
        request.geometry.width_mm,
        request.geometry.height_mm,
        title=request.title,
    )


@dataclass(frozen=True)
class ExportResult:
    """
    Successful export (immutable).

    Attributes:
        pdf_bytes: Serialized PDF
        page_count: Pages in the PDF
        char_count: Characters drawn
        capacity: Page capacity used
        subset_applied: Whether the embedded font was subset
        font_size_bytes: Size of the embedded font binary (0 without a font)
        warnings: Non-fatal problems
        duration_s: Wall time of the export
    """

    pdf_bytes: bytes
    page_count: int
    char_count: int
    capacity: PageCapacity
    subset_applied: bool
    font_size_bytes: int
    warnings: Tuple[str, ...]
    duration_s: float


def needs_font_confirmation(request: ExportRequest) -> bool:
    """
    True when the export would fail for lack of a font unless the user
    accepts exporting without one.
    """
    if request.font_bytes is not None or request.allow_missing_font:
        return False
    return not request.use_default_font or find_default_font() is None


class ExportOrchestrator:
    """
    Runs exactly one export.

    Example:
        >>> orchestrator = ExportOrchestrator()
        >>> result = orchestrator.run(ExportRequest.from_text("永字八法", font_bytes=data))
        >>> orchestrator.state
        <ExportState.DONE: 'done'>
    """

    def __init__(self, service_factory: Optional[ServiceFactory] = None):
        self._service_factory = service_factory or _reportlab_service
        self.state = ExportState.IDLE
        self.history: List[ExportState] = [ExportState.IDLE]
        self.failure_reason: Optional[str] = None

    # ─────────────────────────────────────────────────────────────────────────
    # State handling
    # ─────────────────────────────────────────────────────────────────────────

    def _advance(self, target: ExportState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid export transition {self.state.value} -> {target.value}")
        logger.debug(f"Export state: {self.state.value} -> {target.value}")
        self.state = target
        self.history.append(target)

    def _fail(self, stage: ExportState, error: BaseException, message: str) -> ExportError:
        self.failure_reason = message
        self._advance(ExportState.FAILED)
        logger.error(f"Export failed during {stage.value}: {message}")
        return ExportError(message, state=stage.value, kind=type(error).__name__)

    # ─────────────────────────────────────────────────────────────────────────
    # Stages
    # ─────────────────────────────────────────────────────────────────────────

    def _prepare_font(
        self,
        request: ExportRequest,
        service: DrawingService,
        warnings: List[str],
    ) -> Tuple[bool, int]:
        """Stage 1: finalize font bytes and hand them to the service."""
        font_bytes = request.font_bytes
        if font_bytes is None and request.use_default_font:
            font_bytes = resolve_default_font()

        if font_bytes is None:
            if not request.allow_missing_font:
                raise MissingFontError(
                    "No font available: choose a font file or install a default CJK font"
                )
            warnings.append("Exported without a font; characters will not render")
            service.set_font(None, request.font_name)
            return False, 0

        text = "".join(request.content.iter_chars())
        final_bytes, subset_applied = subset_font_with_fallback(
            font_bytes, text, allow_fallback=request.allow_full_font_fallback
        )
        if not subset_applied:
            warnings.append("Font subsetting failed; the full font was embedded")
        service.set_font(final_bytes, request.font_name)
        return subset_applied, len(final_bytes)

    def _layout(self, request: ExportRequest, capacity: PageCapacity) -> LayoutResult:
        """Stage 2: lay out the whole text once on an unbounded canvas."""
        options = request.options
        vertical = options.direction is Direction.VERTICAL
        config = LayoutConfig(
            rows=capacity.rows if vertical else UNBOUNDED,
            cols=UNBOUNDED if vertical else capacity.cols,
            gap=resolve_gap(options.border_mode),
            direction=options.direction,
            column_order=options.column_order,
            border_mode=options.border_mode,
            decoration=options.decoration,
        )
        strategy = request.strategy or StrategyKind.GRID_STANDARD
        return calculate_layout(request.content, config, strategy)

    def _draw(
        self,
        request: ExportRequest,
        layout: LayoutResult,
        capacity: PageCapacity,
        service: DrawingService,
    ) -> Tuple[PaginationResult, int]:
        """Stage 3: paginate and draw every cell."""
        options = request.options
        pagination = paginate(
            layout.items,
            capacity,
            direction=options.direction,
            column_order=options.column_order,
            fill_last_page=True,
        )
        drawn = render_cells(
            service,
            pagination.cells,
            cell_size=cell_size_mm(capacity),
            margin=request.geometry.margin_mm,
            border_mode=options.border_mode,
            decoration=options.decoration,
            direction=options.direction,
        )
        return pagination, drawn

    # ─────────────────────────────────────────────────────────────────────────
    # Entry points
    # ─────────────────────────────────────────────────────────────────────────

    def run(self, request: ExportRequest) -> ExportResult:
        """
        Run the export.

        Args:
            request: Export request

        Returns:
            ExportResult

        Raises:
            ExportError: If any stage fails; no partial output is returned
            RuntimeError: If this orchestrator was already used
        """
        if self.state is not ExportState.IDLE:
            raise RuntimeError("ExportOrchestrator runs a single export; create a new one")

        start_time = time.perf_counter()
        warnings: List[str] = []
        stage = ExportState.FONT_READY
        try:
            service = self._service_factory(request)
            subset_applied, font_size = self._prepare_font(request, service, warnings)
            self._advance(ExportState.FONT_READY)

            stage = ExportState.LAID_OUT
            capacity = request.resolved_capacity()
            layout = self._layout(request, capacity)
            warnings.extend(layout.warnings)
            self._advance(ExportState.LAID_OUT)
            logger.info(f"Laid out {layout.item_count} characters ({capacity.rows}x{capacity.cols} per page)")

            stage = ExportState.PAGES_DRAWN
            pagination, drawn = self._draw(request, layout, capacity, service)
            warnings.extend(pagination.warnings)
            self._advance(ExportState.PAGES_DRAWN)

            stage = ExportState.SERIALIZED
            pdf_bytes = service.serialize()
            self._advance(ExportState.SERIALIZED)
        except CopybookError as e:
            raise self._fail(stage, e, str(e)) from e
        except Exception as e:
            raise self._fail(stage, e, f"Unexpected error: {e}") from e

        self._advance(ExportState.DONE)
        duration = time.perf_counter() - start_time
        logger.info(
            f"Export complete: {pagination.page_count} page(s), {drawn} characters, "
            f"{len(pdf_bytes) / 1024:.1f} KB in {duration:.2f}s"
        )
        return ExportResult(
            pdf_bytes=pdf_bytes,
            page_count=pagination.page_count,
            char_count=drawn,
            capacity=capacity,
            subset_applied=subset_applied,
            font_size_bytes=font_size,
            warnings=tuple(warnings),
            duration_s=duration,
        )

    def execute(self, request: ExportRequest) -> ExportResponse:
        """Run the export and report the outcome as a response message."""
        try:
            result = self.run(request)
        except ExportError as e:
            return ExportResponse.failure(str(e), e.kind, e.state)
        return ExportResponse(
            success=True,
            output_bytes=result.pdf_bytes,
            page_count=result.page_count,
            warnings=result.warnings,
            subset_applied=result.subset_applied,
        )


def export_pdf(request: ExportRequest, service_factory: Optional[ServiceFactory] = None) -> ExportResult:
    """
    Export a copybook PDF.

    Raises:
        ExportError: If the export fails
    """
    return ExportOrchestrator(service_factory).run(request)


def write_pdf(pdf_bytes: bytes, output_path: Path) -> Path:
    """
    Write PDF bytes to a file, creating parent directories.

    Raises:
        ExportIOError: If the file cannot be written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(pdf_bytes)
    except OSError as e:
        raise ExportIOError(f"Export write failed: {e}") from e
    logger.info(f"Wrote {output_path} ({len(pdf_bytes) / 1024:.1f} KB)")
    return output_path
