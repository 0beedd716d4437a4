"""
Module: fonts.validation

Purpose:
    Identify font files and check they can be used for copybook sheets.

Key Functions:
    - detect_font_format(): Container format from magic bytes
    - inspect_font(): Metadata for font bytes
    - validate_font(): Load a font file and require CJK coverage

Key Classes:
    - FontFormat: ttf / otf / woff / woff2 / ttc
    - FontMetadata: Family name, format, glyph count, CJK support

Dependencies:
    - fontTools.ttLib

Used By:
    - cli: Validates --font before export
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

from ..core.errors import FontSubsetError, FontValidationError
from .subsetter import load_font

logger = logging.getLogger(__name__)

# 永 contains all eight basic strokes; a font without it is not a CJK font
CJK_SAMPLE_CHAR = "\u6c38"

NAME_ID_FAMILY = 1


class FontFormat(Enum):
    TTF = "ttf"
    OTF = "otf"
    WOFF = "woff"
    WOFF2 = "woff2"
    TTC = "ttc"


_MAGIC = {
    b"\x00\x01\x00\x00": FontFormat.TTF,
    b"true": FontFormat.TTF,
    b"OTTO": FontFormat.OTF,
    b"wOFF": FontFormat.WOFF,
    b"wOF2": FontFormat.WOFF2,
    b"ttcf": FontFormat.TTC,
}


@dataclass(frozen=True)
class FontMetadata:
    """
    Facts about a font binary.

    Attributes:
        family_name: Family name (name ID 1), or the source name
        format: Container format
        glyph_count: Glyphs in the (first) face
        units_per_em: Design units per em
        supports_cjk: Whether 永 is mapped
        size_bytes: Binary size
    """

    family_name: str
    format: FontFormat
    glyph_count: int
    units_per_em: int
    supports_cjk: bool
    size_bytes: int

    @property
    def has_truetype_outlines(self) -> bool:
        """True for glyf-based fonts, which PDF embedding requires."""
        return self.format is not FontFormat.OTF


def detect_font_format(data: bytes) -> FontFormat:
    """
    Detect the font container from the first four bytes.

    Raises:
        FontValidationError: If the signature is not a known font format
    """
    fmt = _MAGIC.get(bytes(data[:4]))
    if fmt is None:
        raise FontValidationError("Unsupported font format: unrecognised file signature")
    return fmt


def inspect_font(data: bytes, source_name: str = "Custom Font") -> FontMetadata:
    """
    Read metadata from font bytes.

    Args:
        data: Font binary
        source_name: Fallback family name (usually the file stem)

    Returns:
        FontMetadata

    Raises:
        FontValidationError: If the bytes are not a readable font
    """
    fmt = detect_font_format(data)
    try:
        font = load_font(data, lazy=True)
    except FontSubsetError as e:
        raise FontValidationError(f"Failed to parse font: {e}") from e

    try:
        family = None
        if "name" in font:
            family = font["name"].getDebugName(NAME_ID_FAMILY)
        cmap = font.getBestCmap() or {}
        metadata = FontMetadata(
            family_name=family or source_name,
            format=fmt,
            glyph_count=len(font.getGlyphOrder()),
            units_per_em=font["head"].unitsPerEm if "head" in font else 0,
            supports_cjk=ord(CJK_SAMPLE_CHAR) in cmap,
            size_bytes=len(data),
        )
    finally:
        font.close()

    logger.debug(f"Font inspected: {metadata.family_name} ({metadata.format.value}, {metadata.glyph_count} glyphs)")
    return metadata


def validate_font(path: Union[str, Path]) -> FontMetadata:
    """
    Load a font file and check it can be used for Chinese copybooks.

    Args:
        path: Font file path

    Returns:
        FontMetadata of the file

    Raises:
        FontValidationError: If the file is unreadable, not a font, or has
            no glyph for 永
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FontValidationError(f"Failed to read font file: {e}") from e

    metadata = inspect_font(data, source_name=path.stem)
    if not metadata.supports_cjk:
        raise FontValidationError(
            f"Font '{metadata.family_name}' does not support Chinese characters (missing {CJK_SAMPLE_CHAR})"
        )
    logger.info(f"Validated font {metadata.family_name} ({metadata.size_bytes / 1024:.0f} KB)")
    return metadata
