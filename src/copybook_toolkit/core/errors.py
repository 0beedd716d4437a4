"""
Module: core.errors

Purpose:
    Exception hierarchy shared by layout, font and export code.
    Each failure a user must act on differently has its own class so
    callers can tell "no font available", "grid too small for container"
    and "export write failed" apart without parsing messages.

Key Classes:
    - CopybookError: Base class for all toolkit errors
    - InvalidConfigurationError: Rejected configuration values
    - GridTooSmallError: Page capacity resolved to zero rows or columns
    - MissingFontError: No font available and no consent to continue
    - FontValidationError: Unsupported or unusable font file
    - ContentParseError: Malformed structured content
    - FontSubsetError: Subsetting failed as a whole
    - ExportIOError: Serialization or write failure
    - ExportError: Export pipeline failure carrying the failed state

Used By:
    - Every package in copybook_toolkit
"""

from __future__ import annotations

from typing import Optional


class CopybookError(Exception):
    """Base class for all copybook toolkit errors."""
    pass


class InvalidConfigurationError(CopybookError, ValueError):
    """Raised when a configuration value cannot produce a valid layout."""
    pass


class GridTooSmallError(InvalidConfigurationError):
    """Raised when the grid does not fit a single cell in the container."""
    pass


class MissingFontError(InvalidConfigurationError):
    """Raised when no font is available and the caller did not accept that."""
    pass


class FontValidationError(InvalidConfigurationError):
    """Raised when a font file is not a supported outline font."""
    pass


class ContentParseError(CopybookError):
    """Raised when structured content is malformed."""
    pass


class FontSubsetError(CopybookError):
    """Raised when a font cannot be subset at all."""
    pass


class ExportIOError(CopybookError):
    """Raised when the export output cannot be serialized or written."""
    pass


class ExportError(CopybookError):
    """
    Raised when an export fails.

    Attributes:
        state: Name of the pipeline state that was running when it failed
        kind: Class name of the underlying error
    """

    def __init__(self, message: str, state: str, kind: Optional[str] = None):
        super().__init__(message)
        self.state = state
        self.kind = kind or "ExportError"
