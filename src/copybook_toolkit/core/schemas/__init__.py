"""JSON schemas and validation for structured content."""

from .validator import ValidationError, validate_content

__all__ = ["ValidationError", "validate_content"]
