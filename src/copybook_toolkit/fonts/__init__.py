"""
Fonts Package

Font subsetting, validation, default font discovery and glyph previews.
"""

from .defaults import find_default_font, resolve_default_font
from .preview import glyph_difference, render_glyph
from .subsetter import (
    SAFETY_CHARS,
    collect_codepoints,
    glyph_count,
    subset_font,
    subset_font_with_fallback,
)
from .validation import (
    FontFormat,
    FontMetadata,
    detect_font_format,
    inspect_font,
    validate_font,
)

__all__ = [
    "SAFETY_CHARS",
    "FontFormat",
    "FontMetadata",
    "collect_codepoints",
    "detect_font_format",
    "find_default_font",
    "glyph_count",
    "glyph_difference",
    "inspect_font",
    "render_glyph",
    "resolve_default_font",
    "subset_font",
    "subset_font_with_fallback",
    "validate_font",
]
