"""
Module: layout.config

Purpose:
    Resolved, immutable configuration for one layout pass, plus the
    user-level grid options it is resolved from.

Key Classes:
    - Direction, ColumnOrder, BorderMode, GridDecoration: Option enums
    - FixedGrid: User-pinned rows/cols override
    - GridOptions: User-facing sheet options (direction, borders, fixed grid)
    - LayoutConfig: Resolved configuration consumed by layout strategies

Dependencies:
    - core.errors: InvalidConfigurationError

Used By:
    - layout.grid_sizing: Produces row/column capacity
    - layout.strategies: All strategies
    - export.controller: Builds the unbounded export configuration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..core.errors import InvalidConfigurationError


# Base cell edge in layout pixels
CELL_SIZE = 96

# Capacity sentinel meaning "unbounded" along an axis
UNBOUNDED = 999_999

# Capacities at or above this are treated as unbounded
UNBOUNDED_THRESHOLD = 10_000

# Gap between cells when borders are drawn
BORDER_GAP = 3

# Character size relative to its cell
FONT_RATIO = 0.55


class Direction(Enum):
    """Text direction. Vertical text scrolls horizontally."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class ColumnOrder(Enum):
    """Order of columns in vertical mode."""

    RTL = "rtl"
    LTR = "ltr"


class BorderMode(Enum):
    """How cell borders are drawn."""

    FULL = "full"
    LINES_ONLY = "lines-only"
    NONE = "none"


class GridDecoration(Enum):
    """Guide lines drawn inside each cell when borders are full."""

    MIZI = "mizi"
    TIANZI = "tianzi"
    HUIGONG = "huigong"
    NONE = "none"


def _parse_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        raise InvalidConfigurationError(
            f"Invalid {enum_cls.__name__} '{value}'. Expected one of: {valid}"
        ) from None


@dataclass(frozen=True)
class FixedGrid:
    """
    User-pinned grid size.

    Rows are authoritative in vertical mode, cols in horizontal mode.
    """

    rows: int
    cols: int

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfigurationError(
                f"Fixed grid rows/cols must be >= 1, got {self.rows}x{self.cols}"
            )

    def to_dict(self) -> Dict[str, int]:
        return {"rows": self.rows, "cols": self.cols}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FixedGrid":
        return cls(rows=int(data["rows"]), cols=int(data["cols"]))


@dataclass(frozen=True)
class GridOptions:
    """
    User-facing sheet options.

    Attributes:
        direction: Vertical or horizontal text
        column_order: Column order for vertical text
        border_mode: Cell border drawing mode
        decoration: Guide lines inside cells
        fixed_grid: Optional pinned rows/cols
        smart_snap: Infer line length from the text when sizing the
            on-screen grid (export pages never snap)
    """

    direction: Direction = Direction.VERTICAL
    column_order: ColumnOrder = ColumnOrder.RTL
    border_mode: BorderMode = BorderMode.FULL
    decoration: GridDecoration = GridDecoration.MIZI
    fixed_grid: Optional[FixedGrid] = None
    smart_snap: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", _parse_enum(Direction, self.direction))
        object.__setattr__(self, "column_order", _parse_enum(ColumnOrder, self.column_order))
        object.__setattr__(self, "border_mode", _parse_enum(BorderMode, self.border_mode))
        object.__setattr__(self, "decoration", _parse_enum(GridDecoration, self.decoration))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "column_order": self.column_order.value,
            "border_mode": self.border_mode.value,
            "decoration": self.decoration.value,
            "fixed_grid": self.fixed_grid.to_dict() if self.fixed_grid else None,
            "smart_snap": self.smart_snap,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridOptions":
        fixed = data.get("fixed_grid")
        return cls(
            direction=data.get("direction", Direction.VERTICAL.value),
            column_order=data.get("column_order", ColumnOrder.RTL.value),
            border_mode=data.get("border_mode", BorderMode.FULL.value),
            decoration=data.get("decoration", GridDecoration.MIZI.value),
            fixed_grid=FixedGrid.from_dict(fixed) if fixed else None,
            smart_snap=bool(data.get("smart_snap", True)),
        )


@dataclass(frozen=True)
class LayoutConfig:
    """
    Resolved configuration for one layout pass (immutable).

    `rows` and `cols` are logical capacities. Either may be the UNBOUNDED
    sentinel, which is how the export precomputes the whole text before
    pagination.

    Attributes:
        cell_size: Cell edge in layout pixels
        line_height: Line advance for flowing strategies (defaults to cell_size)
        gap: Gap between cells before border-mode resolution
        padding_top/bottom/left/right: Canvas padding
        rows: Row capacity (cells per column in vertical mode)
        cols: Column capacity (cells per row in horizontal mode)
        direction: Vertical or horizontal text
        column_order: Column order for vertical text
        border_mode: Cell border drawing mode
        decoration: Guide lines inside cells
        max_rows: Optional cap on logical rows
        fixed_grid: Optional pinned rows/cols the capacities came from
        continuous_flow: Paragraph handling in grid layouts;
            None picks continuous flow only when the cross axis is unbounded
        detect_line_length: Use a uniform first-paragraph line length as wrap width

    Example:
        >>> config = LayoutConfig(rows=5, cols=2)
        >>> config.fill_capacity
        5
    """

    cell_size: float = CELL_SIZE
    line_height: Optional[float] = None
    gap: float = BORDER_GAP

    padding_top: float = 0
    padding_bottom: float = 0
    padding_left: float = 0
    padding_right: float = 0

    rows: int = 10
    cols: int = 10

    direction: Direction = Direction.VERTICAL
    column_order: ColumnOrder = ColumnOrder.RTL
    border_mode: BorderMode = BorderMode.FULL
    decoration: GridDecoration = GridDecoration.MIZI

    max_rows: Optional[int] = None
    fixed_grid: Optional[FixedGrid] = field(default=None)
    continuous_flow: Optional[bool] = None
    detect_line_length: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "direction", _parse_enum(Direction, self.direction))
        object.__setattr__(self, "column_order", _parse_enum(ColumnOrder, self.column_order))
        object.__setattr__(self, "border_mode", _parse_enum(BorderMode, self.border_mode))
        object.__setattr__(self, "decoration", _parse_enum(GridDecoration, self.decoration))

        if self.cell_size <= 0:
            raise InvalidConfigurationError(f"cell_size must be positive: {self.cell_size}")
        if self.line_height is not None and self.line_height <= 0:
            raise InvalidConfigurationError(f"line_height must be positive: {self.line_height}")
        if self.gap < 0:
            raise InvalidConfigurationError(f"gap must be non-negative: {self.gap}")
        if min(self.padding_top, self.padding_bottom, self.padding_left, self.padding_right) < 0:
            raise InvalidConfigurationError("padding must be non-negative")
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfigurationError(
                f"Grid capacity must be at least 1x1, got {self.rows}x{self.cols}"
            )
        if self.max_rows is not None and self.max_rows < 1:
            raise InvalidConfigurationError(f"max_rows must be >= 1: {self.max_rows}")

    # ─────────────────────────────────────────────────────────────────────────
    # Derived values
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_vertical(self) -> bool:
        return self.direction is Direction.VERTICAL

    @property
    def effective_line_height(self) -> float:
        """Line advance for flowing layouts."""
        return self.line_height if self.line_height is not None else self.cell_size

    @property
    def row_gap(self) -> float:
        """Gap between rows after border-mode resolution."""
        if self.border_mode is BorderMode.NONE:
            return 0
        if self.border_mode is BorderMode.LINES_ONLY and self.is_vertical:
            return 0
        return self.gap

    @property
    def col_gap(self) -> float:
        """Gap between columns after border-mode resolution."""
        if self.border_mode is BorderMode.NONE:
            return 0
        if self.border_mode is BorderMode.LINES_ONLY and not self.is_vertical:
            return 0
        return self.gap

    @property
    def fill_capacity(self) -> int:
        """Cells filled before wrapping (rows when vertical, cols when horizontal)."""
        if self.is_vertical:
            return min(self.rows, self.max_rows) if self.max_rows else self.rows
        return self.cols

    @property
    def cross_capacity(self) -> int:
        """Capacity on the axis perpendicular to filling."""
        return self.cols if self.is_vertical else self.rows

    @property
    def is_unbounded(self) -> bool:
        """True when the cross axis has no practical limit."""
        return self.cross_capacity >= UNBOUNDED_THRESHOLD

    @property
    def uses_continuous_flow(self) -> bool:
        """Whether paragraph boundaries are ignored in grid layouts."""
        if self.continuous_flow is not None:
            return self.continuous_flow
        return self.is_unbounded

    @property
    def padding_x(self) -> float:
        return self.padding_left + self.padding_right

    @property
    def padding_y(self) -> float:
        return self.padding_top + self.padding_bottom


class StrategyKind(Enum):
    """Available layout strategies."""

    GRID_STANDARD = "grid-standard"
    FLOW_VARYING = "flow-varying"
    CENTER_ALIGNED = "center-aligned"

    @classmethod
    def parse(cls, value: "StrategyKind | str") -> "StrategyKind":
        """Accept an enum member, its value, or a short alias (grid/flow/center)."""
        if isinstance(value, cls):
            return value
        aliases = {"grid": cls.GRID_STANDARD, "flow": cls.FLOW_VARYING, "center": cls.CENTER_ALIGNED}
        key = str(value).strip().lower()
        if key in aliases:
            return aliases[key]
        return _parse_enum(cls, key)
