import io
import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

# Add src to sys.path so we can import copybook_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from copybook_toolkit.core.models.content import Paragraph, ParagraphType, StructuredContent  # noqa: E402


POEM_LINES = ("床前明月光", "疑是地上霜", "举头望明月", "低头思故乡")
SAFETY = " 0123456789"


def _glyph(seed: int):
    """Box glyph with a counter; the proportions vary with seed so outlines differ."""
    pen = TTGlyphPen(None)
    inset = 40 + (seed * 7) % 200
    pen.moveTo((inset, -80))
    pen.lineTo((inset, 760))
    pen.lineTo((1000 - inset, 760))
    pen.lineTo((1000 - inset, -80))
    pen.closePath()
    k = 300 + (seed * 13) % 100
    pen.moveTo((k, 200))
    pen.lineTo((1000 - k, 200))
    pen.lineTo((1000 - k, 500))
    pen.lineTo((k, 500))
    pen.closePath()
    return pen.glyph()


def build_font(chars: Iterable[str], family: str = "TestKai") -> bytes:
    """Build a TrueType font with one glyph per character."""
    unique = list(dict.fromkeys(chars))
    names = [f"uni{ord(c):04X}" for c in unique]
    glyph_order = [".notdef"] + names

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(c): name for c, name in zip(unique, names)})
    fb.setupGlyf({name: _glyph(i) for i, name in enumerate(glyph_order)})
    fb.setupMaxp()
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics({name: (1000, glyf[name].xMin) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=880, descent=-120)
    fb.setupNameTable({
        "familyName": family,
        "styleName": "Regular",
        "psName": f"{family}-Regular",
    })
    fb.setupOS2(
        sTypoAscender=880,
        sTypoDescender=-120,
        usWinAscent=880,
        usWinDescent=120,
        fsType=0,
    )
    fb.setupPost()

    buffer = io.BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


@pytest.fixture(scope="session")
def font_factory() -> Callable[..., bytes]:
    """Return the font builder function."""
    return build_font


@pytest.fixture(scope="session")
def cjk_font_bytes() -> bytes:
    """Small CJK font covering the sample poem, 永, A and the safety set."""
    return build_font("".join(POEM_LINES) + "永字八法A" + SAFETY)


@pytest.fixture(scope="session")
def large_font_bytes() -> bytes:
    """Font with 3000 CJK glyphs (U+4E00 upwards) plus the safety set."""
    chars = "".join(chr(0x4E00 + i) for i in range(3000))
    return build_font(chars + SAFETY, family="TestLarge")


@pytest.fixture
def poem_content() -> StructuredContent:
    """Four-line, five-character poem as one main paragraph."""
    return StructuredContent(paragraphs=(Paragraph(ParagraphType.MAIN, POEM_LINES),))


@pytest.fixture(autouse=True)
def no_default_font(monkeypatch, tmp_path):
    """Keep host-installed fonts out of tests unless a test opts in."""
    import copybook_toolkit.fonts.defaults as defaults

    monkeypatch.delenv(defaults.ENV_DEFAULT_FONT, raising=False)
    monkeypatch.setattr(defaults, "BUNDLED_FONT", tmp_path / "missing-default.ttf")
    monkeypatch.setattr(defaults, "_system_font_dirs", lambda: [])
