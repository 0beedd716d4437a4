"""
Module: export.config

Purpose:
    Export request/response messages, page geometry and page capacity.

    An ExportRequest holds plain immutable values only (content, font
    bytes, options), so handing one to a worker thread is a plain copy.

Key Classes:
    - PageGeometry: Page size and margin in millimetres
    - ExportRequest: Everything one export needs
    - ExportResponse: One-shot result (success + bytes, or failure + reason)

Key Functions:
    - compute_page_capacity(): Rows/cols/scale that fit one page
    - cell_size_mm(): Cell edge on paper

Dependencies:
    - layout: GridOptions, PageCapacity, max_fit, StrategyKind
    - core.models.content: StructuredContent

Used By:
    - export.controller: Orchestration
    - export.worker: Background execution
    - cli: Request construction
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..core.errors import GridTooSmallError
from ..core.models.content import StructuredContent
from ..layout.config import CELL_SIZE, GridOptions, StrategyKind
from ..layout.grid_sizing import max_fit
from ..layout.models import PageCapacity

logger = logging.getLogger(__name__)


# A4 portrait
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
PAGE_MARGIN_MM = 15.0

# Layout pixels per millimetre (96 dpi)
MM_TO_PX = 3.7795

DEFAULT_FONT_NAME = "CopybookFont"


@dataclass(frozen=True)
class PageGeometry:
    """
    Physical page.

    Attributes:
        width_mm: Page width
        height_mm: Page height
        margin_mm: Margin on every side
    """

    width_mm: float = A4_WIDTH_MM
    height_mm: float = A4_HEIGHT_MM
    margin_mm: float = PAGE_MARGIN_MM

    def __post_init__(self) -> None:
        if self.width_mm <= 0 or self.height_mm <= 0:
            raise ValueError(f"Page size must be positive: {self.width_mm}x{self.height_mm}")
        if self.margin_mm < 0:
            raise ValueError(f"margin_mm must be non-negative: {self.margin_mm}")

    @property
    def content_width_mm(self) -> float:
        """Width inside the margins."""
        return self.width_mm - 2 * self.margin_mm

    @property
    def content_height_mm(self) -> float:
        """Height inside the margins."""
        return self.height_mm - 2 * self.margin_mm

    @property
    def content_width_px(self) -> float:
        return self.content_width_mm * MM_TO_PX

    @property
    def content_height_px(self) -> float:
        return self.content_height_mm * MM_TO_PX


A4 = PageGeometry()


def compute_page_capacity(options: GridOptions, geometry: PageGeometry = A4) -> PageCapacity:
    """
    Rows, columns and scale of one export page.

    Auto mode fits whole base cells into the content area at scale 1.
    A fixed grid keeps the user's rows/cols and scales cells so the whole
    grid fits the content area.

    Args:
        options: Sheet options
        geometry: Page geometry

    Returns:
        PageCapacity

    Raises:
        GridTooSmallError: If not even one cell fits
    """
    width_px = geometry.content_width_px
    height_px = geometry.content_height_px
    if width_px <= 0 or height_px <= 0:
        raise GridTooSmallError(
            f"Grid too small for container: margins leave {geometry.content_width_mm}x"
            f"{geometry.content_height_mm} mm"
        )

    if options.fixed_grid is not None:
        rows, cols = options.fixed_grid.rows, options.fixed_grid.cols
        scale = min(width_px / (cols * CELL_SIZE), height_px / (rows * CELL_SIZE))
    else:
        rows = max_fit(height_px, CELL_SIZE, 0)
        cols = max_fit(width_px, CELL_SIZE, 0)
        scale = 1.0

    capacity = PageCapacity(rows=rows, cols=cols, scale=scale)
    logger.debug(f"Page capacity: {capacity.rows} rows x {capacity.cols} cols @ {capacity.scale:.3f}")
    return capacity


def cell_size_mm(capacity: PageCapacity) -> float:
    """Cell edge on paper for a page capacity."""
    return CELL_SIZE / MM_TO_PX * capacity.scale


@dataclass(frozen=True)
class ExportRequest:
    """
    Everything one export needs (immutable).

    Attributes:
        content: Content to export
        font_bytes: Font binary; None uses the default font
        options: Sheet options
        page_capacity: Cells per page; computed from options when None
        strategy: Layout strategy; grid-standard when None
        geometry: Page geometry
        font_name: Name the font is embedded under
        allow_full_font_fallback: Embed the full font if subsetting fails
        allow_missing_font: Continue without any font (glyphs will not render)
        use_default_font: Look for a default font when font_bytes is None
        title: PDF document title
    """

    content: StructuredContent
    font_bytes: Optional[bytes] = None
    options: GridOptions = field(default_factory=GridOptions)
    page_capacity: Optional[PageCapacity] = None
    strategy: Optional[StrategyKind] = None
    geometry: PageGeometry = A4
    font_name: str = DEFAULT_FONT_NAME
    allow_full_font_fallback: bool = True
    allow_missing_font: bool = False
    use_default_font: bool = True
    title: str = "Copybook"

    def __post_init__(self) -> None:
        if self.font_bytes is not None and not isinstance(self.font_bytes, bytes):
            # bytearray / memoryview from a caller must not alias live state
            object.__setattr__(self, "font_bytes", bytes(self.font_bytes))
        if self.strategy is not None:
            object.__setattr__(self, "strategy", StrategyKind.parse(self.strategy))

    @classmethod
    def from_text(cls, text: str, **kwargs: Any) -> "ExportRequest":
        """Request for plain text: one main paragraph, one line per newline."""
        return cls(content=StructuredContent.from_text(text), **kwargs)

    def resolved_capacity(self) -> PageCapacity:
        """Explicit page capacity, or the one the options fit on the page."""
        if self.page_capacity is not None:
            return self.page_capacity
        return compute_page_capacity(self.options, self.geometry)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content.to_dict(),
            "font_bytes": self.font_bytes,
            "options": self.options.to_dict(),
            "page_capacity": self.page_capacity.to_dict() if self.page_capacity else None,
            "strategy": self.strategy.value if self.strategy else None,
            "geometry": {
                "width_mm": self.geometry.width_mm,
                "height_mm": self.geometry.height_mm,
                "margin_mm": self.geometry.margin_mm,
            },
            "font_name": self.font_name,
            "allow_full_font_fallback": self.allow_full_font_fallback,
            "allow_missing_font": self.allow_missing_font,
            "use_default_font": self.use_default_font,
            "title": self.title,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportRequest":
        capacity = data.get("page_capacity")
        geometry = data.get("geometry")
        return cls(
            content=StructuredContent.from_dict(data.get("content", {})),
            font_bytes=data.get("font_bytes"),
            options=GridOptions.from_dict(data.get("options", {})),
            page_capacity=PageCapacity.from_dict(capacity) if capacity else None,
            strategy=data.get("strategy"),
            geometry=PageGeometry(**geometry) if geometry else A4,
            font_name=data.get("font_name", DEFAULT_FONT_NAME),
            allow_full_font_fallback=data.get("allow_full_font_fallback", True),
            allow_missing_font=data.get("allow_missing_font", False),
            use_default_font=data.get("use_default_font", True),
            title=data.get("title", "Copybook"),
        )


@dataclass(frozen=True)
class ExportResponse:
    """
    Result of one export, delivered exactly once.

    Attributes:
        success: True when output_bytes holds the PDF
        output_bytes: PDF bytes (success only)
        error: Human-readable failure reason (failure only)
        error_kind: Class name of the failure (e.g. "GridTooSmallError")
        failed_state: Pipeline state that failed
        page_count: Pages in the PDF
        warnings: Non-fatal problems
        subset_applied: Whether the embedded font was subset
    """

    success: bool
    output_bytes: Optional[bytes] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    failed_state: Optional[str] = None
    page_count: int = 0
    warnings: Tuple[str, ...] = ()
    subset_applied: bool = False

    @classmethod
    def failure(cls, error: str, error_kind: str, failed_state: Optional[str] = None) -> "ExportResponse":
        return cls(success=False, error=error, error_kind=error_kind, failed_state=failed_state)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "output_bytes": self.output_bytes,
            "error": self.error,
            "error_kind": self.error_kind,
            "failed_state": self.failed_state,
            "page_count": self.page_count,
            "warnings": list(self.warnings),
            "subset_applied": self.subset_applied,
        }
