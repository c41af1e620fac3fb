"""
Tests for the reportlab PDF writer.
"""

import pytest

from pdfcomposer.backend import ReportLabBackend, get_standard_font
from pdfcomposer.exceptions import BackendIOError, InvalidConfigurationError
from pdfcomposer.utils.color_utils import LIGHT_GRAY


@pytest.fixture
def pdf_backend():
    backend = ReportLabBackend(dpi=72, compression_quality=0.7, title="Test", author="Tests")
    yield backend
    backend.close()


class TestReportLabBackend:
    """Test cases for ReportLabBackend."""

    def test_invalid_settings(self):
        with pytest.raises(InvalidConfigurationError):
            ReportLabBackend(dpi=0)
        with pytest.raises(InvalidConfigurationError):
            ReportLabBackend(compression_quality=1.5)

    def test_save_without_pages(self, pdf_backend, temp_dir):
        with pytest.raises(BackendIOError):
            pdf_backend.save(temp_dir / "empty.pdf")

    def test_writes_pdf(self, pdf_backend, temp_dir, png_path):
        page = pdf_backend.add_page(595, 842)
        image = pdf_backend.load_image_from_file(png_path)
        with pdf_backend.open_stream(page) as stream:
            stream.draw_string("Hello", 50, 700, get_standard_font("Helvetica"), 12)
            stream.draw_line(50, 690, 300, 690, 1)
            stream.set_non_stroking_color(LIGHT_GRAY)
            stream.add_rect(50, 600, 100, 50)
            stream.fill()
            stream.save_graphics_state()
            stream.transform((1, 0, 0, 1, 10, 10))
            stream.draw_image(image, 50, 400, 100, 50)
            stream.restore_graphics_state()
        pdf_backend.add_page(842, 595)
        pdf_backend.open_stream(pdf_backend.pages[1]).close()

        path = temp_dir / "out.pdf"
        pdf_backend.save(path)
        content = path.read_bytes()
        assert content.startswith(b"%PDF")
        assert b"%%EOF" in content[-32:]

    def test_image_downsampled_to_dpi(self, pdf_backend, png_path):
        """At 72 dpi a 100x50 point placement needs 100x50 pixels."""
        image = pdf_backend.load_image_from_file(png_path)
        reader = pdf_backend._prepare_image(image, 100, 50, 1.0)
        assert reader.getSize() == (100, 50)

    def test_small_image_not_upscaled(self, pdf_backend, png_path):
        image = pdf_backend.load_image_from_file(png_path)
        reader = pdf_backend._prepare_image(image, 400, 200, 1.0)
        assert reader.getSize() == (200, 100)

    def test_prepared_images_cached(self, pdf_backend, png_path):
        image = pdf_backend.load_image_from_file(png_path)
        first = pdf_backend._prepare_image(image, 100, 50, None)
        assert pdf_backend._prepare_image(image, 100, 50, None) is first
