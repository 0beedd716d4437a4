"""
Module: layout.strategies.grid

Purpose:
    Grid-standard layout for fixed-meter poetry: one character per cell
    on a regular grid.

Key Classes:
    - GridStandardStrategy

Algorithm:
    1. Walk the text as a stream of slots; slot s fills
       vertical:   row = s mod R, col = s div R
       horizontal: row = s div C, col = s mod C
    2. Paragraph mode: unless continuous flow is in effect, a new
       paragraph skips to the start of the next column (row)
    3. Vertical right-to-left mirrors the column:
       visual_col = (total_cols - 1) - col
    4. x/y = padding + index * (cell + gap)

Used By:
    - layout.strategies: Strategy registry, and the export precomputation
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

from ...core.models.content import ParagraphType, StructuredContent
from ..config import FONT_RATIO, ColumnOrder, LayoutConfig, StrategyKind
from ..models import LayoutResult, RenderItem
from .base import LayoutStrategy, uniform_line_length

logger = logging.getLogger(__name__)


class GridStandardStrategy(LayoutStrategy):
    """
    Fills a regular grid column by column (vertical) or row by row.

    Example:
        >>> config = LayoutConfig(rows=5, cols=2)
        >>> result = GridStandardStrategy().calculate(
        ...     StructuredContent.from_text("床前明月光疑是地上霜"), config)
        >>> [(i.row, i.col) for i in result.items[:2]]
        [(0, 1), (1, 1)]
    """

    kind = StrategyKind.GRID_STANDARD

    def _wrap_width(self, content: StructuredContent, config: LayoutConfig) -> int:
        wrap = config.fill_capacity
        if config.detect_line_length:
            length = uniform_line_length(content)
            if length:
                wrap = min(length, wrap)
        return wrap

    def _slots(
        self,
        content: StructuredContent,
        wrap: int,
        continuous: bool,
    ) -> Tuple[List[Tuple[str, int, ParagraphType]], int]:
        """Assign a slot to every character. Returns (placements, slots used)."""
        placements: List[Tuple[str, int, ParagraphType]] = []
        slot = 0
        for p_index, paragraph in enumerate(content.paragraphs):
            if p_index > 0 and not continuous and slot % wrap:
                slot += wrap - slot % wrap
            for line in paragraph.lines:
                for char in line:
                    placements.append((char, slot, paragraph.type))
                    slot += 1
        return placements, slot

    def calculate(self, content: StructuredContent, config: LayoutConfig) -> LayoutResult:
        wrap = self._wrap_width(content, config)
        continuous = config.uses_continuous_flow
        placements, slots_used = self._slots(content, wrap, continuous)

        lines_used = max(1, math.ceil(slots_used / wrap))
        if config.is_unbounded:
            total_lines = lines_used
        else:
            total_lines = max(config.cross_capacity, lines_used)

        cell = config.cell_size
        step_x = cell + config.col_gap
        step_y = cell + config.row_gap
        mirror = config.is_vertical and config.column_order is ColumnOrder.RTL

        items: List[RenderItem] = []
        warnings: List[str] = []
        dropped = 0
        for index, (char, slot, paragraph_type) in enumerate(placements):
            if config.is_vertical:
                row, col = slot % wrap, slot // wrap
                if mirror:
                    col = (total_lines - 1) - col
            else:
                row, col = slot // wrap, slot % wrap
                if config.max_rows and row >= config.max_rows:
                    dropped += 1
                    continue
            items.append(RenderItem(
                char=char,
                x=config.padding_left + col * step_x,
                y=config.padding_top + row * step_y,
                row=row,
                col=col,
                paragraph_type=paragraph_type,
                width=cell,
                height=cell,
                font_size=cell * FONT_RATIO,
                index=index,
            ))

        if dropped:
            warnings.append(f"{dropped} character(s) beyond max_rows={config.max_rows} dropped")
            logger.warning(warnings[-1])

        if config.is_vertical:
            n_cols, n_rows = total_lines, wrap
            line_offsets = tuple(config.padding_left + c * step_x for c in range(n_cols))
        else:
            n_rows = min(total_lines, config.max_rows) if config.max_rows else total_lines
            n_cols = wrap
            line_offsets = tuple(config.padding_top + r * step_y for r in range(n_rows))

        total_width = config.padding_x + n_cols * step_x - config.col_gap
        total_height = config.padding_y + n_rows * step_y - config.row_gap

        logger.debug(
            f"Grid layout: {len(items)} cells, {n_rows} rows x {n_cols} cols "
            f"({'continuous' if continuous else 'paragraph breaks'})"
        )
        return LayoutResult(
            items=tuple(items),
            total_width=total_width,
            total_height=total_height,
            line_offsets=line_offsets,
            strategy=self.kind,
            warnings=tuple(warnings),
        )
