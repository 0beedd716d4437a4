"""
Layout Package

Grid sizing, layout strategies, viewport queries and pagination.
All functions here are pure: they read immutable inputs and return new
immutable results.

Pipeline:
    calculate_grid_dimensions() -> LayoutConfig -> calculate_layout()
    -> LayoutResult -> paginate() -> PaginationResult
"""

from .config import (
    BORDER_GAP,
    CELL_SIZE,
    FONT_RATIO,
    UNBOUNDED,
    UNBOUNDED_THRESHOLD,
    BorderMode,
    ColumnOrder,
    Direction,
    FixedGrid,
    GridDecoration,
    GridOptions,
    LayoutConfig,
    StrategyKind,
)
from .grid_sizing import (
    build_layout_config,
    calculate_grid_dimensions,
    detect_smart_line_length,
    max_fit,
    resolve_gap,
    resolve_screen_config,
)
from .models import (
    GridDimensions,
    LayoutResult,
    PageCapacity,
    PaginationResult,
    PlacedCell,
    RenderItem,
)
from .paginator import MAX_PAGES, map_index, paginate
from .strategies import calculate_layout, detect_strategy, get_strategy
from .viewport import PRE_RENDER_MARGIN, ScrollIndex, get_viewport_items

__all__ = [
    "BORDER_GAP",
    "CELL_SIZE",
    "FONT_RATIO",
    "MAX_PAGES",
    "PRE_RENDER_MARGIN",
    "UNBOUNDED",
    "UNBOUNDED_THRESHOLD",
    "BorderMode",
    "ColumnOrder",
    "Direction",
    "FixedGrid",
    "GridDecoration",
    "GridDimensions",
    "GridOptions",
    "LayoutConfig",
    "LayoutResult",
    "PageCapacity",
    "PaginationResult",
    "PlacedCell",
    "RenderItem",
    "ScrollIndex",
    "StrategyKind",
    "build_layout_config",
    "calculate_grid_dimensions",
    "calculate_layout",
    "detect_smart_line_length",
    "detect_strategy",
    "get_strategy",
    "get_viewport_items",
    "map_index",
    "max_fit",
    "paginate",
    "resolve_gap",
    "resolve_screen_config",
]
