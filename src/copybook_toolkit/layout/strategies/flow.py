"""
Module: layout.strategies.flow

Purpose:
    Flow-varying layout for irregular line lengths (ci, qu lyric forms).
    Explicit line breaks are kept, each line is centred within the page
    width, and lines longer than the page wrap onto a new logical line
    that starts at offset 0.

Key Classes:
    - FlowVaryingStrategy

Used By:
    - layout.strategies: Strategy registry
"""

from __future__ import annotations

from ...core.models.content import ParagraphType
from ..config import StrategyKind
from .base import LineFlowStrategy, TypeScale


class FlowVaryingStrategy(LineFlowStrategy):
    """
    Centred lines with forced wraps at the page extent.

    Small print (small, note) and prefaces use scaled cells; the wrap
    limit is still the page extent measured in base cells.
    """

    kind = StrategyKind.FLOW_VARYING
    type_scales = {
        ParagraphType.SMALL: TypeScale(char=0.6, line=0.7),
        ParagraphType.NOTE: TypeScale(char=0.6, line=0.7),
        ParagraphType.PREFACE: TypeScale(char=0.8, line=0.8),
    }
    paragraph_spacing = 0.5
    wraps = True
    clamp_offset = False
