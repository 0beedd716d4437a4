"""
Module: layout.grid_sizing

Purpose:
    Decide logical rows/cols/gap for a container.

Key Functions:
    - resolve_gap(): Cell gap for a border mode
    - max_fit(): Cells that physically fit along one axis
    - detect_smart_line_length(): Infer a poem's natural line length
    - calculate_grid_dimensions(): Full sizing decision
    - build_layout_config(): Turn GridDimensions into a LayoutConfig
    - resolve_screen_config(): GridOptions + container -> on-screen LayoutConfig

Algorithm:
    Fixed grid: the pinned fill dimension is authoritative and the other
    one is ceil(text_length / fixed), clamped to >= 1.

    Auto: the fill dimension is the container's max fit, unless smart
    snap proposes a shorter line length that still fits. The other
    dimension is ceil(text_length / fill), so the grid covers the whole
    text rather than one screen. Neither ever returns 0.

Dependencies:
    - layout.config: Enums and constants
    - layout.models: GridDimensions

Used By:
    - export.config: Page capacity
    - export.controller: Cell gap
    - Screen views: resolve_screen_config()
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter
from typing import Any, Optional

from .config import (
    BORDER_GAP,
    CELL_SIZE,
    BorderMode,
    Direction,
    FixedGrid,
    GridOptions,
    LayoutConfig,
)
from .models import GridDimensions

logger = logging.getLogger(__name__)


# Segment separators for smart snap
_SEGMENT_SPLIT = re.compile(r"[，。！？；：、,.!?;:\s]+")

SMART_MIN_LENGTH = 2
SMART_MAX_LENGTH = 14


def resolve_gap(border_mode: BorderMode) -> float:
    """Gap in pixels: BORDER_GAP when borders are drawn, 0 otherwise."""
    if border_mode in (BorderMode.FULL, BorderMode.LINES_ONLY):
        return BORDER_GAP
    return 0


def max_fit(usable: float, cell_size: float = CELL_SIZE, gap: float = 0) -> int:
    """
    Number of cells that fit along one axis.

    Args:
        usable: Available length (container minus padding)
        cell_size: Cell edge
        gap: Gap between cells

    Returns:
        floor((usable + gap) / (cell_size + gap)), never negative
    """
    if usable <= 0:
        return 0
    return max(0, math.floor((usable + gap) / (cell_size + gap)))


def detect_smart_line_length(text: str) -> Optional[int]:
    """
    Infer the natural line length of a poem.

    Splits on punctuation and whitespace, then takes the most common
    segment length. It is accepted when more than half of the segments
    share it and it lies in [2, 14]; one extra cell is added for the
    trailing punctuation mark.

    Args:
        text: Raw text

    Returns:
        Proposed cells per line, or None when there is no clear pattern

    Example:
        >>> detect_smart_line_length("床前明月光，疑是地上霜。")
        6
    """
    segments = [s for s in _SEGMENT_SPLIT.split(text) if s]
    if not segments:
        return None

    counts = Counter(len(s) for s in segments)
    mode_length, mode_count = 0, 0
    # Ascending lengths, strict comparison: ties go to the shortest length
    for length in sorted(counts):
        if counts[length] > mode_count:
            mode_length, mode_count = length, counts[length]

    if mode_count > len(segments) / 2 and SMART_MIN_LENGTH <= mode_length <= SMART_MAX_LENGTH:
        return mode_length + 1
    return None


def _text_length(text: str) -> int:
    return len(text.replace("\r", "").replace("\n", ""))


def calculate_grid_dimensions(
    text: str,
    container_width: float,
    container_height: float,
    *,
    direction: Direction = Direction.VERTICAL,
    border_mode: BorderMode = BorderMode.FULL,
    padding_x: float = 0,
    padding_y: float = 0,
    smart_snap: bool = True,
    fixed_grid: Optional[FixedGrid] = None,
    cell_size: float = CELL_SIZE,
) -> GridDimensions:
    """
    Decide rows/cols/gap for a container.

    Args:
        text: Text to be laid out (newlines are not counted)
        container_width: Container width in pixels
        container_height: Container height in pixels
        direction: Fill direction
        border_mode: Border mode (decides the gap)
        padding_x: Total horizontal padding
        padding_y: Total vertical padding
        smart_snap: Infer the line length from the text in auto mode
        fixed_grid: Pinned rows/cols override
        cell_size: Cell edge

    Returns:
        GridDimensions with rows >= 1 and cols >= 1
    """
    gap = resolve_gap(border_mode)
    usable_width = max(0.0, container_width - padding_x)
    usable_height = max(0.0, container_height - padding_y)
    length = _text_length(text)
    vertical = direction is Direction.VERTICAL

    if fixed_grid is not None:
        if vertical:
            rows = fixed_grid.rows
            cols = max(1, math.ceil(length / rows))
        else:
            cols = fixed_grid.cols
            rows = max(1, math.ceil(length / cols))
        logger.debug(f"Fixed grid: {rows} rows x {cols} cols")
        return GridDimensions(rows, cols, gap, usable_width, usable_height)

    fit_rows = max_fit(usable_height, cell_size, gap)
    fit_cols = max_fit(usable_width, cell_size, gap)
    if fit_rows < 1 or fit_cols < 1:
        logger.warning(
            f"Container {container_width}x{container_height} fits no full cell; clamping to 1"
        )

    smart_length = detect_smart_line_length(text) if smart_snap else None
    fill_fit = fit_rows if vertical else fit_cols
    if smart_length is not None and smart_length <= fill_fit:
        fill = smart_length
    else:
        fill = max(1, fill_fit)
        smart_length = None

    other = max(1, math.ceil(length / fill))
    if vertical:
        rows, cols = fill, other
    else:
        rows, cols = other, fill

    logger.debug(
        f"Auto grid: {rows} rows x {cols} cols (gap={gap}, smart={smart_length})"
    )
    return GridDimensions(rows, cols, gap, usable_width, usable_height, smart_length)


def build_layout_config(dims: GridDimensions, **overrides: Any) -> LayoutConfig:
    """
    Build a LayoutConfig whose capacities come from grid dimensions.

    Args:
        dims: Result of calculate_grid_dimensions()
        **overrides: Any other LayoutConfig field

    Returns:
        LayoutConfig with rows, cols and gap taken from dims
    """
    return LayoutConfig(rows=dims.rows, cols=dims.cols, gap=dims.gap, **overrides)


def resolve_screen_config(
    text: str,
    options: GridOptions,
    container_width: float,
    container_height: float,
    *,
    padding_x: float = 0,
    padding_y: float = 0,
    cell_size: float = CELL_SIZE,
) -> LayoutConfig:
    """
    Size the on-screen grid for a container from the user's sheet options.

    This is the only place GridOptions.smart_snap takes effect. Export
    sizing goes through compute_page_capacity(), which never snaps.

    Args:
        text: Text to be laid out
        options: User-facing sheet options
        container_width: Visible container width in pixels
        container_height: Visible container height in pixels
        padding_x: Total horizontal padding
        padding_y: Total vertical padding
        cell_size: Cell edge

    Returns:
        LayoutConfig carrying the options and the resolved capacities
    """
    dims = calculate_grid_dimensions(
        text,
        container_width,
        container_height,
        direction=options.direction,
        border_mode=options.border_mode,
        padding_x=padding_x,
        padding_y=padding_y,
        smart_snap=options.smart_snap,
        fixed_grid=options.fixed_grid,
        cell_size=cell_size,
    )
    return build_layout_config(
        dims,
        cell_size=cell_size,
        direction=options.direction,
        column_order=options.column_order,
        border_mode=options.border_mode,
        decoration=options.decoration,
        fixed_grid=options.fixed_grid,
    )
