"""
Module: layout.models

Purpose:
    Data models for layout and pagination.
    Immutable dataclasses for placed characters, layout results, grid
    dimensions and page-level cells.

Key Classes:
    - RenderItem: One character placed on the unbounded canvas
    - LayoutResult: Full layout output with viewport query
    - GridDimensions: Rows/cols/gap chosen for a container
    - PageCapacity: Rows x cols that fit one export page
    - PlacedCell: One cell on a specific page
    - PaginationResult: Flat items mapped onto pages

Dependencies:
    - core.models.content: ParagraphType
    - layout.viewport: ScrollIndex

Used By:
    - layout.strategies: Produce LayoutResult
    - layout.paginator: Produce PaginationResult
    - export.output.renderer: Draw PlacedCells
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..core.errors import GridTooSmallError, InvalidConfigurationError
from ..core.models.content import ParagraphType
from .config import StrategyKind
from .viewport import PRE_RENDER_MARGIN, ScrollIndex


@dataclass(frozen=True, slots=True)
class RenderItem:
    """
    One character placed on the canvas.

    Attributes:
        char: Single character, empty or whitespace for a blank cell
        x: Left edge in canvas pixels
        y: Top edge in canvas pixels
        row: Logical row
        col: Logical (visual) column
        paragraph_type: Type of the source paragraph
        width: Cell width
        height: Cell height
        font_size: Suggested font size, if the strategy sets one
        index: Logical index in reading order
    """

    char: str
    x: float
    y: float
    row: int
    col: int
    paragraph_type: ParagraphType = ParagraphType.MAIN
    width: float = 0
    height: float = 0
    font_size: Optional[float] = None
    index: int = 0

    @property
    def is_blank(self) -> bool:
        return not self.char.strip()


@dataclass(frozen=True)
class LayoutResult:
    """
    Output of one layout pass.

    Attributes:
        items: Placed items in reading order
        total_width: Canvas width including padding
        total_height: Canvas height including padding
        line_offsets: Offset of each logical line along the line-advance
            axis, in reading order (non-decreasing)
        strategy: Strategy that produced the result
        warnings: Non-fatal problems found during layout

    Example:
        >>> result = calculate_layout(content, config)
        >>> visible = result.get_viewport_items(scroll_offset=0, view_size=800)
    """

    items: Tuple[RenderItem, ...]
    total_width: float
    total_height: float
    line_offsets: Tuple[float, ...] = ()
    strategy: Optional[StrategyKind] = None
    warnings: Tuple[str, ...] = ()
    _scroll_index: ScrollIndex = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))
        if not isinstance(self.line_offsets, tuple):
            object.__setattr__(self, "line_offsets", tuple(self.line_offsets))
        object.__setattr__(self, "_scroll_index", ScrollIndex(self.items))

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def get_viewport_items(
        self,
        scroll_offset: float,
        view_size: float,
        pre_render_margin: float = PRE_RENDER_MARGIN,
    ) -> Tuple[RenderItem, ...]:
        """Items with y inside the window plus margin, in reading order."""
        start_y = scroll_offset - pre_render_margin
        end_y = scroll_offset + view_size + pre_render_margin
        return tuple(self.items[i] for i in self._scroll_index.query(start_y, end_y))


@dataclass(frozen=True)
class GridDimensions:
    """
    Grid size chosen for a container.

    Attributes:
        rows: Logical rows (>= 1)
        cols: Logical columns (>= 1)
        gap: Gap between cells
        usable_width: Container width minus padding
        usable_height: Container height minus padding
        smart_length: Line length inferred by smart snap, if any
    """

    rows: int
    cols: int
    gap: float
    usable_width: float
    usable_height: float
    smart_length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfigurationError(
                f"Grid dimensions must be at least 1x1, got {self.rows}x{self.cols}"
            )

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols


@dataclass(frozen=True)
class PageCapacity:
    """
    Cells that fit one page.

    Attributes:
        rows: Rows per page
        cols: Columns per page
        scale: Cell scale relative to CELL_SIZE
    """

    rows: int
    cols: int
    scale: float = 1.0

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise GridTooSmallError(
                f"Grid too small for container: {self.rows} rows x {self.cols} cols per page"
            )
        if self.scale <= 0:
            raise InvalidConfigurationError(f"scale must be positive: {self.scale}")

    @property
    def chars_per_page(self) -> int:
        return self.rows * self.cols

    def to_dict(self) -> Dict[str, Any]:
        return {"rows": self.rows, "cols": self.cols, "scale": self.scale}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageCapacity":
        return cls(rows=int(data["rows"]), cols=int(data["cols"]), scale=float(data.get("scale", 1.0)))


@dataclass(frozen=True, slots=True)
class PlacedCell:
    """
    One cell on a page.

    Attributes:
        char: Character, empty for a filler cell
        page_index: 0-based page
        visual_row: Row on the page
        visual_col: Column on the page after mirroring
        index: Logical index of the source item, None for filler cells
    """

    char: str
    page_index: int
    visual_row: int
    visual_col: int
    index: Optional[int] = None

    @property
    def is_blank(self) -> bool:
        return not self.char.strip()


@dataclass(frozen=True)
class PaginationResult:
    """
    Items mapped onto pages.

    Attributes:
        cells: Placed cells in reading order, filler cells last
        page_count: Number of pages
        warnings: Non-fatal problems (page cap reached)
        truncated: True if cells were dropped at the page cap
    """

    cells: Tuple[PlacedCell, ...]
    page_count: int
    warnings: Tuple[str, ...] = ()
    truncated: bool = False

    def cells_on_page(self, page_index: int) -> Tuple[PlacedCell, ...]:
        return tuple(c for c in self.cells if c.page_index == page_index)
