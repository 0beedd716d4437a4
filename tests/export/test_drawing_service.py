"""
Tests for the ReportLab drawing service.
"""

import io

import pytest
from pypdf import PdfReader

from copybook_toolkit.core.errors import FontValidationError
from copybook_toolkit.export.output.canvas import FALLBACK_FONT, ReportLabDrawingService, register_font


def _read(pdf_bytes):
    return PdfReader(io.BytesIO(pdf_bytes))


@pytest.fixture
def service():
    return ReportLabDrawingService(210, 297, title="Test Sheet")


class TestPages:
    def test_add_page_returns_index(self, service):
        assert service.add_page() == 0
        assert service.add_page() == 1
        assert service.page_count == 2

    def test_select_missing_page_raises(self, service):
        service.add_page()

        with pytest.raises(IndexError):
            service.select_page(3)

    def test_draw_before_add_page_raises(self, service):
        with pytest.raises(RuntimeError, match="add_page"):
            service.draw_rect(0, 0, 10, 10)


class TestSerialize:
    def test_empty_document_has_one_blank_page(self, service):
        reader = _read(service.serialize())

        assert len(reader.pages) == 1

    def test_page_count_and_a4_media_box(self, service):
        for _ in range(3):
            service.add_page()
            service.draw_rect(15, 15, 25.4, 25.4)
            service.draw_line(15, 15, 40.4, 40.4, dashed=True)

        reader = _read(service.serialize())

        assert len(reader.pages) == 3
        box = reader.pages[0].mediabox
        assert float(box.width) == pytest.approx(595.28, abs=0.1)
        assert float(box.height) == pytest.approx(841.89, abs=0.1)

    def test_title_is_written(self, service):
        service.add_page()

        reader = _read(service.serialize())

        assert reader.metadata.title == "Test Sheet"

    def test_text_in_embedded_font(self, service, cjk_font_bytes):
        service.add_page()
        service.set_font(cjk_font_bytes, "Kai")
        service.set_font_size(40)
        service.draw_text("永", 20, 40)

        pdf = service.serialize()

        assert pdf.startswith(b"%PDF")
        assert len(_read(pdf).pages) == 1


class TestFonts:
    def test_missing_font_uses_fallback(self, service):
        assert service.set_font(None, "Kai") == FALLBACK_FONT

    def test_register_font_is_stable_per_content(self, cjk_font_bytes):
        first = register_font(cjk_font_bytes, "Kai")
        second = register_font(cjk_font_bytes, "Kai")

        assert first == second
        assert first.startswith("Kai-")

    def test_different_fonts_get_different_names(self, cjk_font_bytes, font_factory):
        other = font_factory("永字", family="Other")

        assert register_font(cjk_font_bytes, "Kai") != register_font(other, "Kai")

    def test_unreadable_font_raises_validation_error(self, service):
        with pytest.raises(FontValidationError):
            service.set_font(b"definitely not a font", "Broken")

    def test_measure_text_width_scales_with_size(self, service, cjk_font_bytes):
        service.set_font(cjk_font_bytes, "Kai")
        service.set_font_size(10)
        small = service.measure_text_width("永")
        service.set_font_size(20)
        large = service.measure_text_width("永")

        assert small > 0
        assert large == pytest.approx(2 * small)
