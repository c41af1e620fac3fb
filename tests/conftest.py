"""
Pytest configuration for PDF Composer
"""

import io
import logging
import sys
import tempfile
from pathlib import Path

import pytest
from PIL import Image

from pdfcomposer.backend import Font, RecordingBackend
from pdfcomposer.configuration import PDFConfiguration
from pdfcomposer.document import Document
from pdfcomposer.styles import TextStyle


class FixedWidthFont(Font):
    """Font where every glyph is 500 units wide and a space 250 units."""

    def __init__(self, name: str = "Fixed", char_width: float = 500.0, space: float = 250.0):
        super().__init__(name)
        self.char_width = char_width
        self.space = space

    def string_width(self, text: str) -> float:
        return sum(self.space if ch == " " else self.char_width for ch in text)


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def fixed_font():
    return FixedWidthFont()


@pytest.fixture
def fixed_style(fixed_font):
    """12 pt style: a glyph is 6 pt wide, a space 3 pt."""
    return TextStyle(fixed_font, 12)


@pytest.fixture
def backend():
    backend = RecordingBackend()
    yield backend
    backend.close()


@pytest.fixture
def page(backend):
    return backend.add_page(595.0, 842.0)


@pytest.fixture
def stream(backend, page):
    """Open content stream on a fresh A4-sized page."""
    stream = backend.open_stream(page)
    yield stream
    stream.close()


@pytest.fixture
def document():
    """Document on the default configuration that records instead of writing PDF."""
    doc = Document(PDFConfiguration(), backend=RecordingBackend())
    yield doc
    doc.close()


@pytest.fixture
def png_bytes():
    """A 200x100 RGB PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (200, 100), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_path(temp_dir, png_bytes):
    path = temp_dir / "sample.png"
    path.write_bytes(png_bytes)
    return path
