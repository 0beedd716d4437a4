"""
Module: layout.strategies.center

Purpose:
    Center-aligned layout for free-form prose. Every source line is
    centred on its own and never wrapped; paragraphs are separated by
    0.8 of a line height.

Key Classes:
    - CenterAlignedStrategy

Used By:
    - layout.strategies: Strategy registry
"""

from __future__ import annotations

from ...core.models.content import ParagraphType
from ..config import StrategyKind
from .base import LineFlowStrategy, TypeScale


class CenterAlignedStrategy(LineFlowStrategy):
    """Independently centred, unwrapped lines."""

    kind = StrategyKind.CENTER_ALIGNED
    type_scales = {
        ParagraphType.SMALL: TypeScale(char=0.7, line=0.8),
        ParagraphType.NOTE: TypeScale(char=0.7, line=0.8),
    }
    paragraph_spacing = 0.8
    wraps = False
    # Lines wider than the page start at the edge instead of going negative
    clamp_offset = True
