"""
Serialization Utilities

JSON to/from StructuredContent, plus the plain-text rendering of content
used for subsetting and clipboard export.

Two loaders are provided:
- `load_content()` is strict and raises ContentParseError
- `parse_content_json()` recovers to empty content so downstream layout
  still runs on malformed input
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

from ..errors import ContentParseError
from ..models.content import StructuredContent
from ..schemas.validator import validate_content

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Content Deserialization
# ─────────────────────────────────────────────────────────────────────────────

def deserialize_content(data: dict[str, Any], *, validate: bool = True) -> StructuredContent:
    """
    Build StructuredContent from a decoded payload.

    Args:
        data: Dictionary with a "paragraphs" list
        validate: Run schema validation first

    Returns:
        StructuredContent instance

    Raises:
        ContentParseError: If the payload is invalid
    """
    if validate:
        validate_content(data)
    try:
        return StructuredContent.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise ContentParseError(f"Invalid content payload: {e}") from e


def load_content(source: Union[str, Path]) -> StructuredContent:
    """
    Strictly load structured content from a JSON string or file path.

    Raises:
        ContentParseError: On unreadable file, invalid JSON or bad structure
    """
    if isinstance(source, Path):
        try:
            source = source.read_text(encoding="utf-8")
        except OSError as e:
            raise ContentParseError(f"Cannot read content file: {e}") from e
    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        raise ContentParseError(f"Invalid content JSON: {e}") from e
    return deserialize_content(data)


def parse_content_json(json_string: str) -> StructuredContent:
    """
    Parse structured content, substituting empty content on any error.

    Args:
        json_string: JSON text of the form {"paragraphs": [...]}

    Returns:
        Parsed content, or empty content if the input is malformed
    """
    try:
        return load_content(json_string)
    except ContentParseError as e:
        logger.warning(f"Failed to parse content JSON, using empty content: {e}")
        return StructuredContent.empty()


# ─────────────────────────────────────────────────────────────────────────────
# Plain Text
# ─────────────────────────────────────────────────────────────────────────────

def generate_plain_text(content: StructuredContent) -> str:
    """
    Render content as plain text.

    Lines are joined with a newline and paragraphs with a blank line.
    """
    return "\n\n".join("\n".join(p.lines) for p in content.paragraphs)


def serialize_content(content: StructuredContent) -> str:
    """Serialize content to a JSON string (non-ASCII kept readable)."""
    return json.dumps(content.to_dict(), ensure_ascii=False)
