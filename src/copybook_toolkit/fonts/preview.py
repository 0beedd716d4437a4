"""
Module: fonts.preview

Purpose:
    Rasterize single glyphs with Pillow, for font picker previews and
    for comparing a subset font against its source.

Key Functions:
    - render_glyph(): Grayscale image of one character
    - glyph_difference(): Pixel difference of one character in two fonts
"""

from __future__ import annotations

import io

from PIL import Image, ImageChops, ImageDraw, ImageFont

DEFAULT_PREVIEW_SIZE = 128


def render_glyph(font_bytes: bytes, char: str, size: int = DEFAULT_PREVIEW_SIZE) -> Image.Image:
    """
    Draw one character black on white, centred on a square canvas.

    Args:
        font_bytes: Font binary
        char: Character to draw
        size: Canvas edge and font size in pixels

    Returns:
        Grayscale ("L") image
    """
    font = ImageFont.truetype(io.BytesIO(font_bytes), size=int(size * 0.8))
    image = Image.new("L", (size, size), color=255)
    draw = ImageDraw.Draw(image)
    draw.text((size / 2, size / 2), char, font=font, fill=0, anchor="mm")
    return image


def glyph_difference(font_a: bytes, font_b: bytes, char: str, size: int = DEFAULT_PREVIEW_SIZE) -> int:
    """
    Number of differing pixels when char is drawn with each font.

    0 means the glyphs render identically at this size.
    """
    a = render_glyph(font_a, char, size)
    b = render_glyph(font_b, char, size)
    diff = ImageChops.difference(a, b)
    # Histogram bucket 0 counts identical pixels
    return sum(diff.histogram()[1:])
