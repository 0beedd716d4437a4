from typing import List, Optional

import pytest


class RecordingService:
    """DrawingService stand-in that records calls instead of drawing."""

    def __init__(self, *args, **kwargs):
        self.calls: List[tuple] = []
        self.pages = 0
        self.current: Optional[int] = None
        self.font_bytes: Optional[bytes] = None
        self.font_size: Optional[float] = None
        self.serialize_error: Optional[Exception] = None

    @property
    def page_count(self) -> int:
        return self.pages

    def add_page(self) -> int:
        self.pages += 1
        self.current = self.pages - 1
        return self.current

    def select_page(self, index: int) -> None:
        if not 0 <= index < self.pages:
            raise IndexError(index)
        self.current = index

    def set_draw_color(self, rgb) -> None:
        self.calls.append(("color", rgb))

    def set_line_width(self, width_mm: float) -> None:
        self.calls.append(("line_width", width_mm))

    def draw_rect(self, x, y, w, h, dashed=False) -> None:
        self.calls.append(("rect", self.current, x, y, w, h, dashed))

    def draw_line(self, x1, y1, x2, y2, dashed=False) -> None:
        self.calls.append(("line", self.current, x1, y1, x2, y2, dashed))

    def set_font(self, font_bytes, name: str) -> str:
        self.font_bytes = font_bytes
        return name if font_bytes is not None else "Helvetica"

    def set_font_size(self, size_pt: float) -> None:
        self.font_size = size_pt

    def measure_text_width(self, text: str) -> float:
        return 5.0 * len(text)

    def draw_text(self, text: str, x: float, y: float) -> None:
        self.calls.append(("text", self.current, text, x, y))

    def serialize(self) -> bytes:
        if self.serialize_error is not None:
            raise self.serialize_error
        return b"%PDF-recorded"

    def ops(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def recording_service() -> RecordingService:
    return RecordingService()


@pytest.fixture
def service_factory(recording_service):
    """Service factory that always hands out the same recording service."""
    return lambda request: recording_service
