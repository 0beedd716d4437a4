"""
Module: export.output.canvas

Purpose:
    Page-drawing service used by the export. Coordinates are millimetres
    from the top-left corner of the page, y growing downwards.

Key Classes:
    - DrawingService: Protocol the export draws against
    - ReportLabDrawingService: ReportLab-backed implementation

Implementation notes:
    ReportLab draws pages strictly in sequence, while the export may
    revisit a page it allocated earlier. Drawing calls are therefore
    recorded per page, each with the drawing state it was issued under,
    and replayed onto a ReportLab canvas in serialize().

Dependencies:
    - reportlab: PDF generation and TrueType embedding

Used By:
    - export.output.renderer: Cell drawing
    - export.controller: Serialization
"""

from __future__ import annotations

import hashlib
import io
import logging
import threading
from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Tuple

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from ...core.errors import ExportIOError, FontValidationError

logger = logging.getLogger(__name__)

# Used when the export proceeds without a font; CJK glyphs will not render
FALLBACK_FONT = "Helvetica"

DASH_PATTERN_MM = (0.5, 0.5)

RGB = Tuple[int, int, int]

_REGISTRY_LOCK = threading.Lock()


class DrawingService(Protocol):
    """Minimal page-drawing interface needed by the export."""

    @property
    def page_count(self) -> int: ...

    def add_page(self) -> int: ...

    def select_page(self, index: int) -> None: ...

    def set_draw_color(self, rgb: RGB) -> None: ...

    def set_line_width(self, width_mm: float) -> None: ...

    def draw_rect(self, x: float, y: float, w: float, h: float, dashed: bool = False) -> None: ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, dashed: bool = False) -> None: ...

    def set_font(self, font_bytes: Optional[bytes], name: str) -> str: ...

    def set_font_size(self, size_pt: float) -> None: ...

    def measure_text_width(self, text: str) -> float: ...

    def draw_text(self, text: str, x: float, y: float) -> None: ...

    def serialize(self) -> bytes: ...


@dataclass(frozen=True)
class _DrawState:
    stroke: RGB = (0, 0, 0)
    line_width_mm: float = 0.1
    font_name: str = FALLBACK_FONT
    font_size: float = 12.0


# (operation, state, arguments)
_Op = Tuple[str, _DrawState, tuple]


def register_font(font_bytes: bytes, name: str) -> str:
    """
    Register a TrueType font with ReportLab under a content-derived name.

    The name carries a digest of the bytes, so different fonts never
    collide in ReportLab's process-wide registry.

    Returns:
        Registered font name

    Raises:
        FontValidationError: If ReportLab cannot embed the font
    """
    digest = hashlib.sha1(font_bytes).hexdigest()[:12]
    registered = f"{name}-{digest}"
    with _REGISTRY_LOCK:
        if registered not in pdfmetrics.getRegisteredFontNames():
            try:
                pdfmetrics.registerFont(TTFont(registered, io.BytesIO(font_bytes)))
            except TTFError as e:
                raise FontValidationError(f"Font cannot be embedded: {e}") from e
            logger.debug(f"Registered font {registered} ({len(font_bytes) / 1024:.1f} KB)")
    return registered


class ReportLabDrawingService:
    """
    DrawingService that produces a PDF with ReportLab.

    Example:
        >>> service = ReportLabDrawingService(210, 297)
        >>> service.add_page()
        0
        >>> service.draw_rect(15, 15, 25.4, 25.4)
        >>> pdf_bytes = service.serialize()
    """

    def __init__(self, page_width_mm: float, page_height_mm: float, *, title: str = "Copybook"):
        self.page_width_pt = page_width_mm * mm
        self.page_height_pt = page_height_mm * mm
        self.title = title
        self._pages: List[List[_Op]] = []
        self._current: Optional[int] = None
        self._state = _DrawState()

    # ─────────────────────────────────────────────────────────────────────────
    # Pages
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def add_page(self) -> int:
        """Append a page and make it current. Returns its index."""
        self._pages.append([])
        self._current = len(self._pages) - 1
        return self._current

    def select_page(self, index: int) -> None:
        if not 0 <= index < len(self._pages):
            raise IndexError(f"Page {index} does not exist ({len(self._pages)} pages)")
        self._current = index

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    def set_draw_color(self, rgb: RGB) -> None:
        self._state = replace(self._state, stroke=tuple(rgb))

    def set_line_width(self, width_mm: float) -> None:
        self._state = replace(self._state, line_width_mm=width_mm)

    def set_font(self, font_bytes: Optional[bytes], name: str) -> str:
        """
        Use a font for following text.

        Args:
            font_bytes: TrueType binary, or None for the built-in fallback font
            name: Base name to register the font under

        Returns:
            Name the font is registered under
        """
        if font_bytes is None:
            logger.warning(f"No font supplied; using {FALLBACK_FONT}, CJK characters will not render")
            font_name = FALLBACK_FONT
        else:
            font_name = register_font(font_bytes, name)
        self._state = replace(self._state, font_name=font_name)
        return font_name

    def set_font_size(self, size_pt: float) -> None:
        self._state = replace(self._state, font_size=size_pt)

    def measure_text_width(self, text: str) -> float:
        """Width of text in the current font and size, in millimetres."""
        return pdfmetrics.stringWidth(text, self._state.font_name, self._state.font_size) / mm

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing
    # ─────────────────────────────────────────────────────────────────────────

    def _record(self, op: str, *args) -> None:
        if self._current is None:
            raise RuntimeError("No page allocated; call add_page() first")
        self._pages[self._current].append((op, self._state, args))

    def draw_rect(self, x: float, y: float, w: float, h: float, dashed: bool = False) -> None:
        self._record("rect", x, y, w, h, dashed)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, dashed: bool = False) -> None:
        self._record("line", x1, y1, x2, y2, dashed)

    def draw_text(self, text: str, x: float, y: float) -> None:
        """Draw text with its baseline starting at (x, y)."""
        self._record("text", text, x, y)

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def _transform_y(self, y_mm: float) -> float:
        """Top-down millimetres to ReportLab's bottom-up points."""
        return self.page_height_pt - y_mm * mm

    def _apply_state(self, c: canvas.Canvas, state: _DrawState) -> None:
        r, g, b = state.stroke
        c.setStrokeColorRGB(r / 255, g / 255, b / 255)
        c.setLineWidth(state.line_width_mm * mm)
        c.setFont(state.font_name, state.font_size)

    def _set_dash(self, c: canvas.Canvas, dashed: bool) -> None:
        if dashed:
            c.setDash(DASH_PATTERN_MM[0] * mm, DASH_PATTERN_MM[1] * mm)
        else:
            c.setDash()

    def _replay(self, c: canvas.Canvas, ops: List[_Op]) -> None:
        c.setFillColorRGB(0, 0, 0)
        applied: Optional[_DrawState] = None
        for op, state, args in ops:
            if state != applied:
                self._apply_state(c, state)
                applied = state
            if op == "rect":
                x, y, w, h, dashed = args
                self._set_dash(c, dashed)
                c.rect(x * mm, self._transform_y(y + h), w * mm, h * mm, stroke=1, fill=0)
            elif op == "line":
                x1, y1, x2, y2, dashed = args
                self._set_dash(c, dashed)
                c.line(x1 * mm, self._transform_y(y1), x2 * mm, self._transform_y(y2))
            elif op == "text":
                text, x, y = args
                c.drawString(x * mm, self._transform_y(y), text)

    def serialize(self) -> bytes:
        """
        Render every recorded page to PDF bytes.

        Raises:
            ExportIOError: If ReportLab fails to produce the document
        """
        buffer = io.BytesIO()
        try:
            c = canvas.Canvas(buffer, pagesize=(self.page_width_pt, self.page_height_pt))
            c.setTitle(self.title)
            c.setCreator("copybook-toolkit")
            for ops in self._pages or [[]]:
                self._replay(c, ops)
                c.showPage()
            c.save()
        except Exception as e:
            raise ExportIOError(f"PDF serialization failed: {e}") from e
        data = buffer.getvalue()
        logger.info(f"Serialized {max(1, self.page_count)} page(s), {len(data) / 1024:.1f} KB")
        return data
