"""
Module: layout.paginator

Purpose:
    Map the flat, ordered item sequence of a layout pass onto pages of a
    fixed capacity. Used for the paged on-screen view and for splitting
    the PDF export into pages.

Key Functions:
    - map_index(): Page/row/col of one logical index
    - paginate(): Map a whole sequence, with page cap and page filling

Algorithm:
    chars_per_page = rows * cols
    page = i div chars_per_page, k = i mod chars_per_page
    vertical:   row = k mod rows, col = k div rows
    horizontal: row = k div cols, col = k mod cols
    vertical right-to-left: col = (cols - 1) - col, per page

Dependencies:
    - layout.models: PageCapacity, PlacedCell, PaginationResult

Used By:
    - export.controller: Page splitting
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple, Union

from .config import ColumnOrder, Direction
from .models import PageCapacity, PaginationResult, PlacedCell, RenderItem

logger = logging.getLogger(__name__)

# Hard ceiling on emitted pages
MAX_PAGES = 200


def map_index(
    index: int,
    capacity: PageCapacity,
    direction: Direction = Direction.VERTICAL,
    column_order: ColumnOrder = ColumnOrder.RTL,
) -> Tuple[int, int, int]:
    """
    Page position of one logical index.

    Args:
        index: 0-based logical index
        capacity: Page capacity
        direction: Fill direction
        column_order: Column order for vertical text

    Returns:
        (page_index, visual_row, visual_col)

    Example:
        >>> map_index(5, PageCapacity(rows=5, cols=2))
        (0, 0, 0)
    """
    if index < 0:
        raise ValueError(f"index must be non-negative: {index}")
    page, k = divmod(index, capacity.chars_per_page)
    if direction is Direction.VERTICAL:
        col, row = divmod(k, capacity.rows)
        if column_order is ColumnOrder.RTL:
            col = (capacity.cols - 1) - col
    else:
        row, col = divmod(k, capacity.cols)
    return page, row, col


def paginate(
    items: Sequence[Union[RenderItem, str]],
    capacity: PageCapacity,
    *,
    direction: Direction = Direction.VERTICAL,
    column_order: ColumnOrder = ColumnOrder.RTL,
    fill_last_page: bool = True,
    max_pages: int = MAX_PAGES,
) -> PaginationResult:
    """
    Map items onto pages in reading order.

    Args:
        items: RenderItems (or bare characters) in reading order
        capacity: Cells per page
        direction: Fill direction
        column_order: Column order for vertical text
        fill_last_page: Complete the last page with blank cells; with no
            items this yields one blank page
        max_pages: Stop emitting at this many pages

    Returns:
        PaginationResult; `truncated` is set when the page cap was hit
    """
    per_page = capacity.chars_per_page
    limit = max_pages * per_page
    cells: List[PlacedCell] = []
    warnings: List[str] = []

    for i, item in enumerate(items):
        if i >= limit:
            warnings.append(
                f"Page limit of {max_pages} reached; {len(items) - limit} character(s) not exported"
            )
            logger.warning(warnings[-1])
            break
        char = item if isinstance(item, str) else item.char
        page, row, col = map_index(i, capacity, direction, column_order)
        cells.append(PlacedCell(char=char, page_index=page, visual_row=row, visual_col=col, index=i))

    truncated = bool(warnings)
    placed = len(cells)

    if fill_last_page and not truncated:
        remainder = placed % per_page
        if placed == 0 or remainder:
            end = placed + (per_page - remainder if placed else per_page)
            for i in range(placed, end):
                page, row, col = map_index(i, capacity, direction, column_order)
                cells.append(PlacedCell(char="", page_index=page, visual_row=row, visual_col=col))

    page_count = (cells[-1].page_index + 1) if cells else 0
    logger.info(f"Paginated {placed} characters into {page_count} page(s)")
    return PaginationResult(
        cells=tuple(cells),
        page_count=page_count,
        warnings=tuple(warnings),
        truncated=truncated,
    )
