"""
Layout strategies.

Three pure strategies share the calculate(content, config) contract and
are selected through the StrategyKind enum:

- GRID_STANDARD: one character per grid cell (fixed-meter poetry)
- FLOW_VARYING: centred lines that wrap at the page width (lyric forms)
- CENTER_ALIGNED: independently centred lines (prose)
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from ...core.models.content import ParagraphType, StructuredContent
from ..config import LayoutConfig, StrategyKind
from ..models import LayoutResult
from .base import LayoutStrategy, LineFlowStrategy, TypeScale, uniform_line_length
from .center import CenterAlignedStrategy
from .flow import FlowVaryingStrategy
from .grid import GridStandardStrategy

logger = logging.getLogger(__name__)

# Longest uniform line that still reads as a regular grid poem
GRID_MAX_LINE_LENGTH = 10

_STRATEGIES: Dict[StrategyKind, LayoutStrategy] = {
    StrategyKind.GRID_STANDARD: GridStandardStrategy(),
    StrategyKind.FLOW_VARYING: FlowVaryingStrategy(),
    StrategyKind.CENTER_ALIGNED: CenterAlignedStrategy(),
}


def get_strategy(kind: StrategyKind) -> LayoutStrategy:
    """Return the strategy instance for a kind."""
    return _STRATEGIES[StrategyKind.parse(kind)]


def detect_strategy(content: StructuredContent) -> StrategyKind:
    """
    Pick a strategy from the shape of the content.

    Rules, first match wins:
        1. No paragraphs, or a first paragraph with at most one line: grid
        2. Every line shares one length of at most 10: grid
        3. First paragraph is main text: flow
        4. Otherwise: center
    """
    if not content.paragraphs or len(content.paragraphs[0].lines) <= 1:
        return StrategyKind.GRID_STANDARD

    length = uniform_line_length(content)
    if length is not None and length <= GRID_MAX_LINE_LENGTH:
        return StrategyKind.GRID_STANDARD

    if content.paragraphs[0].type is ParagraphType.MAIN:
        return StrategyKind.FLOW_VARYING
    return StrategyKind.CENTER_ALIGNED


def calculate_layout(
    content: StructuredContent,
    config: LayoutConfig,
    strategy: Optional[StrategyKind] = None,
) -> LayoutResult:
    """
    Lay out content with an explicit or detected strategy.

    Args:
        content: Content to lay out
        config: Resolved layout configuration
        strategy: Forced strategy; detected from content when None

    Returns:
        LayoutResult
    """
    kind = StrategyKind.parse(strategy) if strategy is not None else detect_strategy(content)
    logger.debug(f"Layout strategy: {kind.value}")
    return get_strategy(kind).calculate(content, config)


__all__ = [
    "CenterAlignedStrategy",
    "FlowVaryingStrategy",
    "GridStandardStrategy",
    "LayoutStrategy",
    "LineFlowStrategy",
    "StrategyKind",
    "TypeScale",
    "calculate_layout",
    "detect_strategy",
    "get_strategy",
    "uniform_line_length",
]
