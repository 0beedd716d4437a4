"""
Core Models Package

Immutable content models. Every layout pass reads these and never
mutates them, so one instance can be shared between the screen and a
background export.
"""

from .content import Paragraph, ParagraphType, StructuredContent

__all__ = [
    "Paragraph",
    "ParagraphType",
    "StructuredContent",
]
