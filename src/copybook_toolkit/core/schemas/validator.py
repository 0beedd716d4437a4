"""
Schema Validation Utilities

Validates structured content payloads before they become
StructuredContent instances.

Basic structural checks run first so the common mistakes get a short,
path-qualified message; the full JSON Schema check runs afterwards.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import jsonschema

from ..errors import ContentParseError


@lru_cache(maxsize=None)
def _load_schema(name: str) -> dict:
    """Read and cache ``<name>.schema.json`` shipped beside this module."""
    schema_path = Path(__file__).with_name(f"{name}.schema.json")
    try:
        return json.loads(schema_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise FileNotFoundError(f"Schema not found: {schema_path}") from None


class ValidationError(ContentParseError):
    """
    Content payload rejected before model construction.

    Attributes:
        path: Dotted location of the offending value ("" for the root)
        errors: Individual problems found at that location
    """

    def __init__(self, message: str, path: str = "", errors: Optional[list[str]] = None):
        super().__init__(message)
        self.path = path
        self.errors = list(errors) if errors else []


def validate_content(data: Any) -> None:
    """
    Validate a structured content payload.

    Args:
        data: Decoded JSON value

    Raises:
        ValidationError: If data is not a valid content payload
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Content must be an object, got {type(data).__name__}",
            path="",
        )
    if "paragraphs" not in data:
        raise ValidationError(
            "Missing required fields: ['paragraphs']",
            path="",
            errors=["Missing field: paragraphs"],
        )
    if not isinstance(data["paragraphs"], list):
        raise ValidationError("paragraphs must be a list", path="paragraphs")

    schema = _load_schema("content")
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e
