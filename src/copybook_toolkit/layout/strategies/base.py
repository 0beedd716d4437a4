"""
Module: layout.strategies.base

Purpose:
    Common contract for layout strategies and the shared line-placement
    fold used by the flowing strategies.

Key Classes:
    - LayoutStrategy: Abstract strategy (calculate(content, config))
    - TypeScale: Per-paragraph-type size factors
    - LineFlowStrategy: Places logical lines centred on the line axis

Key Functions:
    - uniform_line_length(): Shared line length of all lines, if any

Dependencies:
    - layout.config: LayoutConfig, constants
    - layout.models: RenderItem, LayoutResult

Used By:
    - layout.strategies.grid / flow / center
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Tuple

from ...core.models.content import ParagraphType, StructuredContent
from ..config import FONT_RATIO, UNBOUNDED_THRESHOLD, ColumnOrder, LayoutConfig, StrategyKind
from ..models import LayoutResult, RenderItem

logger = logging.getLogger(__name__)


def uniform_line_length(content: StructuredContent) -> Optional[int]:
    """
    Length shared by every line, taken from the first paragraph's first line.

    Returns:
        The common length (0 when every line is empty), or None if lines
        differ or there are none
    """
    if not content.paragraphs or not content.paragraphs[0].lines:
        return None
    length = len(content.paragraphs[0].lines[0])
    for line in content.all_lines():
        if len(line) != length:
            return None
    return length


class LayoutStrategy(ABC):
    """
    A pure layout function over (content, config).

    Implementations keep no state between calls, so one instance can be
    shared across threads.
    """

    kind: ClassVar[StrategyKind]

    @abstractmethod
    def calculate(self, content: StructuredContent, config: LayoutConfig) -> LayoutResult:
        """Place every character of content."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass(frozen=True)
class TypeScale:
    """Size factors applied to a paragraph type."""

    char: float = 1.0
    line: float = 1.0


@dataclass(frozen=True)
class _LogicalLine:
    text: str
    paragraph_type: ParagraphType
    continuation: bool
    paragraph_end: bool
    last_paragraph: bool


class LineFlowStrategy(LayoutStrategy):
    """
    Places logical lines one after another, each centred on the line axis.

    Horizontal text: lines run left to right and advance downwards.
    Vertical text: lines run top to bottom and advance across; right to
    left column order is a mirror pass once every line is placed.

    Subclasses set the type scales, the paragraph spacing and whether
    lines wrap at the page extent.
    """

    type_scales: ClassVar[Dict[ParagraphType, TypeScale]] = {}
    paragraph_spacing: ClassVar[float] = 0.5
    wraps: ClassVar[bool] = True
    clamp_offset: ClassVar[bool] = False

    def _scale(self, paragraph_type: ParagraphType) -> TypeScale:
        return self.type_scales.get(paragraph_type, TypeScale())

    # ─────────────────────────────────────────────────────────────────────────
    # Logical lines
    # ─────────────────────────────────────────────────────────────────────────

    def _logical_lines(
        self,
        content: StructuredContent,
        config: LayoutConfig,
        extent: Optional[float],
    ) -> List[_LogicalLine]:
        """Split source lines into logical lines (explicit breaks + wraps)."""
        lines: List[_LogicalLine] = []
        last_index = len(content.paragraphs) - 1
        for p_index, paragraph in enumerate(content.paragraphs):
            char_w = config.cell_size * self._scale(paragraph.type).char
            per_line = None
            if self.wraps and extent is not None:
                # Cells fit while their total advance stays within the extent
                per_line = max(1, math.floor(extent / char_w + 1e-9))
            for l_index, text in enumerate(paragraph.lines):
                chunks = [text]
                if per_line is not None and len(text) > per_line:
                    chunks = [text[i:i + per_line] for i in range(0, len(text), per_line)]
                for c_index, chunk in enumerate(chunks):
                    lines.append(_LogicalLine(
                        text=chunk,
                        paragraph_type=paragraph.type,
                        continuation=c_index > 0,
                        paragraph_end=(
                            l_index == len(paragraph.lines) - 1 and c_index == len(chunks) - 1
                        ),
                        last_paragraph=p_index == last_index,
                    ))
        return lines

    # ─────────────────────────────────────────────────────────────────────────
    # Placement
    # ─────────────────────────────────────────────────────────────────────────

    def calculate(self, content: StructuredContent, config: LayoutConfig) -> LayoutResult:
        vertical = config.is_vertical
        capacity = config.fill_capacity
        bounded = capacity < UNBOUNDED_THRESHOLD
        extent: Optional[float] = capacity * config.cell_size if bounded else None

        lines = self._logical_lines(content, config, extent)
        warnings: List[str] = []
        if config.max_rows and not vertical and len(lines) > config.max_rows:
            warnings.append(
                f"{len(lines) - config.max_rows} line(s) beyond max_rows={config.max_rows} dropped"
            )
            logger.warning(warnings[-1])
            lines = lines[:config.max_rows]

        if extent is None:
            # Unbounded line axis: no wrapping, centre on the longest line
            extent = max(
                (len(l.text) * config.cell_size * self._scale(l.paragraph_type).char for l in lines),
                default=0.0,
            )

        lead = config.padding_left if vertical else config.padding_top
        start_along = config.padding_top if vertical else config.padding_left

        # Fold over logical lines: (relative cross offset, along offset) per item
        placed: List[Tuple[_LogicalLine, int, int, float, float, float]] = []
        offsets: List[float] = []
        cursor = 0.0
        for line_no, line in enumerate(lines):
            scale = self._scale(line.paragraph_type)
            char_w = config.cell_size * scale.char
            line_h = config.effective_line_height * scale.line

            start = 0.0 if line.continuation else (extent - len(line.text) * char_w) / 2
            if self.clamp_offset:
                start = max(0.0, start)

            offsets.append(lead + cursor)
            for k in range(len(line.text)):
                placed.append((line, line_no, k, cursor, start + k * char_w, char_w))

            cursor += line_h
            if line.paragraph_end and not line.last_paragraph:
                cursor += line_h * self.paragraph_spacing

        content_extent = cursor
        mirror = vertical and config.column_order is ColumnOrder.RTL

        items: List[RenderItem] = []
        for index, (line, line_no, k, rel, along, char_w) in enumerate(placed):
            if vertical:
                cross = content_extent - rel - char_w if mirror else rel
                x, y = config.padding_left + cross, start_along + along
                row, col = k, line_no
            else:
                x, y = start_along + along, config.padding_top + rel
                row, col = line_no, k
            items.append(RenderItem(
                char=line.text[k],
                x=x,
                y=y,
                row=row,
                col=col,
                paragraph_type=line.paragraph_type,
                width=char_w,
                height=char_w,
                font_size=char_w * FONT_RATIO,
                index=index,
            ))

        if vertical:
            total_width = config.padding_x + content_extent
            total_height = config.padding_y + extent
        else:
            total_width = config.padding_x + extent
            total_height = config.padding_y + content_extent

        logger.debug(
            f"{type(self).__name__}: {len(items)} items on {len(lines)} logical lines"
        )
        return LayoutResult(
            items=tuple(items),
            total_width=total_width,
            total_height=total_height,
            line_offsets=tuple(offsets),
            strategy=self.kind,
            warnings=tuple(warnings),
        )
