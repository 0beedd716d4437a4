"""
Copybook Toolkit Core Package

Shared content models, the error hierarchy and serialization helpers.
Everything here is immutable or stateless, so layout and export code can
share instances across threads.
"""

from .errors import (
    ContentParseError,
    CopybookError,
    ExportError,
    ExportIOError,
    FontSubsetError,
    FontValidationError,
    GridTooSmallError,
    InvalidConfigurationError,
    MissingFontError,
)
from .models import Paragraph, ParagraphType, StructuredContent

__all__ = [
    "ContentParseError",
    "CopybookError",
    "ExportError",
    "ExportIOError",
    "FontSubsetError",
    "FontValidationError",
    "GridTooSmallError",
    "InvalidConfigurationError",
    "MissingFontError",
    "Paragraph",
    "ParagraphType",
    "StructuredContent",
]
