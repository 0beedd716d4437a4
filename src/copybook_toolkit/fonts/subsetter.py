"""
Module: fonts.subsetter

Purpose:
    Reduce a full font binary to the glyphs a text actually uses, so an
    exported PDF embeds kilobytes instead of tens of megabytes.

Key Functions:
    - collect_codepoints(): Unique code points of a text plus the safety set
    - subset_font(): Subset font bytes for a text
    - subset_font_with_fallback(): Subset, or return the full font on failure
    - glyph_count(): Number of glyphs in font bytes

Algorithm:
    1. Collect the unique code points of the text plus SAFETY_CHARS
    2. Load the font with fontTools (TTC: first face; WOFF/WOFF2 accepted)
    3. Keep .notdef (glyph 0) plus each mapped code point's glyph;
       unmapped code points are skipped and render as .notdef
    4. Renumber glyphs, keep head/hhea/OS/2 metrics, save as plain sfnt

Dependencies:
    - fontTools.subset, fontTools.ttLib

Used By:
    - export.controller: FONT_READY stage
"""

from __future__ import annotations

import io
import logging
import struct
from typing import Iterable, List, Set, Tuple

from fontTools import subset
from fontTools.ttLib import TTFont, TTLibError

from ..core.errors import FontSubsetError

logger = logging.getLogger(__name__)

# Always kept so page furniture (spaces, digits) never falls back to .notdef
SAFETY_CHARS = " 0123456789"


def collect_codepoints(text: str, extra_chars: str = SAFETY_CHARS) -> List[int]:
    """
    Sorted unique code points of text plus extra_chars.

    Line breaks and other control characters are not drawn, so they are
    left out.
    """
    points: Set[int] = {ord(c) for c in text if c.isprintable()}
    points.update(ord(c) for c in extra_chars)
    return sorted(points)


def load_font(font_bytes: bytes, *, lazy: bool = False) -> TTFont:
    """
    Parse font bytes with fontTools.

    Collections (.ttc) load their first face.

    Raises:
        FontSubsetError: If the bytes are not a readable font
    """
    if not font_bytes:
        raise FontSubsetError("Font data is empty")
    font_number = 0 if font_bytes[:4] == b"ttcf" else -1
    try:
        return TTFont(io.BytesIO(font_bytes), fontNumber=font_number, lazy=lazy)
    except (TTLibError, OSError, ValueError, KeyError, AssertionError, struct.error) as e:
        raise FontSubsetError(f"Cannot parse font: {e}") from e


def glyph_count(font_bytes: bytes) -> int:
    """Number of glyphs in a font binary."""
    font = load_font(font_bytes, lazy=True)
    try:
        return len(font.getGlyphOrder())
    finally:
        font.close()


def mapped_codepoints(font: TTFont, codepoints: Iterable[int]) -> Tuple[List[int], List[int]]:
    """Split code points into (mapped, unmapped) using the font's best cmap."""
    cmap = font.getBestCmap() or {}
    mapped, unmapped = [], []
    for cp in codepoints:
        (mapped if cp in cmap else unmapped).append(cp)
    return mapped, unmapped


def _subset_options() -> subset.Options:
    options = subset.Options()
    options.notdef_glyph = True
    options.notdef_outline = True
    options.recalc_bounds = True
    options.ignore_missing_glyphs = True
    options.ignore_missing_unicodes = True
    # Keep every name record; PDF embedding needs the PostScript name
    options.name_IDs = ["*"]
    options.name_languages = ["*"]
    options.name_legacy = True
    options.layout_features = ["*"]
    options.desubroutinize = True
    return options


def subset_font(font_bytes: bytes, text: str, *, extra_chars: str = SAFETY_CHARS) -> bytes:
    """
    Subset a font to the glyphs needed for text.

    Args:
        font_bytes: Full font binary (TTF, OTF, TTC, WOFF or WOFF2)
        text: Text that will be drawn
        extra_chars: Characters always kept

    Returns:
        Standalone sfnt binary with .notdef first and glyphs renumbered

    Raises:
        FontSubsetError: If the font cannot be parsed or subset

    Example:
        >>> small = subset_font(full_bytes, "永字八法")
        >>> len(small) < len(full_bytes)
        True
    """
    font = load_font(font_bytes)
    try:
        codepoints = collect_codepoints(text, extra_chars)
        mapped, unmapped = mapped_codepoints(font, codepoints)
        if unmapped:
            missing = "".join(chr(cp) for cp in unmapped)
            logger.warning(f"{len(unmapped)} character(s) have no glyph and will render as .notdef: {missing!r}")

        try:
            subsetter = subset.Subsetter(options=_subset_options())
            subsetter.populate(unicodes=mapped)
            subsetter.subset(font)
        except Exception as e:
            raise FontSubsetError(f"Font subsetting failed: {e}") from e

        # Output must be a plain sfnt for PDF embedding
        font.flavor = None
        out = io.BytesIO()
        try:
            font.save(out)
        except Exception as e:
            raise FontSubsetError(f"Cannot serialize subset font: {e}") from e
        result = out.getvalue()
    finally:
        font.close()

    logger.info(
        f"Font subset: {len(font_bytes) / 1024:.2f} KB -> {len(result) / 1024:.2f} KB "
        f"({len(mapped)} code points)"
    )
    return result


def subset_font_with_fallback(
    font_bytes: bytes,
    text: str,
    *,
    allow_fallback: bool = True,
) -> Tuple[bytes, bool]:
    """
    Subset a font, falling back to the full font when permitted.

    Args:
        font_bytes: Full font binary
        text: Text that will be drawn
        allow_fallback: Return the full font if subsetting fails

    Returns:
        (font bytes, subset_applied)

    Raises:
        FontSubsetError: If subsetting fails and fallback is not allowed
    """
    try:
        return subset_font(font_bytes, text), True
    except FontSubsetError as e:
        if not allow_fallback:
            raise
        logger.warning(f"Subsetting failed, embedding full font instead: {e}")
        return font_bytes, False
