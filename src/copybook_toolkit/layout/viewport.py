"""
Module: layout.viewport

Purpose:
    Range query over placed items for virtualized on-screen rendering.
    Only items whose y lies inside the visible window (plus a pre-render
    margin on both sides) are returned.

Key Classes:
    - ScrollIndex: Items ordered by y, built once per LayoutResult

Key Functions:
    - get_viewport_items(): Items visible for a scroll offset

Algorithm:
    1. Binary search for the first item with y >= scroll - margin
    2. Scan forward until y > scroll + view + margin
    3. Return hits in reading order

    Horizontal layouts are already ordered by y, so the index is the
    identity. Column-major layouts are sorted once (stable) at index
    build time; the result is identical to a linear filter either way.

Used By:
    - layout.models: LayoutResult.get_viewport_items()
"""

from __future__ import annotations

from bisect import bisect_left
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .models import RenderItem


PRE_RENDER_MARGIN = 100


class ScrollIndex:
    """Positions of items sorted by y."""

    __slots__ = ("_ys", "_positions", "_in_reading_order")

    def __init__(self, items: Sequence["RenderItem"]):
        order = sorted(range(len(items)), key=lambda i: items[i].y)
        self._positions: List[int] = order
        self._ys: List[float] = [items[i].y for i in order]
        self._in_reading_order = all(pos == k for k, pos in enumerate(order))

    def __len__(self) -> int:
        return len(self._positions)

    def query(self, start_y: float, end_y: float) -> List[int]:
        """Return item positions with start_y <= y <= end_y, in reading order."""
        hits: List[int] = []
        for k in range(bisect_left(self._ys, start_y), len(self._ys)):
            if self._ys[k] > end_y:
                break
            hits.append(self._positions[k])
        if not self._in_reading_order:
            hits.sort()
        return hits


def get_viewport_items(
    items: Sequence["RenderItem"],
    scroll_offset: float,
    view_size: float,
    pre_render_margin: float = PRE_RENDER_MARGIN,
    *,
    index: Optional[ScrollIndex] = None,
) -> Tuple["RenderItem", ...]:
    """
    Items to render for the current scroll position.

    Args:
        items: Placed items in reading order
        scroll_offset: Top of the visible window
        view_size: Height of the visible window
        pre_render_margin: Extra distance rendered above and below
        index: Prebuilt ScrollIndex for items (built on demand if None)

    Returns:
        Items with y in [scroll - margin, scroll + view + margin], in
        reading order

    Example:
        >>> visible = get_viewport_items(result.items, 0, 800)
    """
    if index is None:
        index = ScrollIndex(items)
    start_y = scroll_offset - pre_render_margin
    end_y = scroll_offset + view_size + pre_render_margin
    return tuple(items[i] for i in index.query(start_y, end_y))
