"""
PDF Composer - paginated document composition on top of reportlab.

Callers describe the content (headings, styled paragraphs, lists, tables,
images) and the engine places it on pages: it wraps and aligns text,
opens new pages when content would overflow and repeats headers, footers,
logos and page numbers on every page.

Quick Start:
    from pdfcomposer import Document, PDFConfiguration

    with Document(PDFConfiguration()) as doc:
        doc.add_heading("Quarterly report")
        doc.add_paragraph("Revenue grew in every region.")
        doc.save("report.pdf")
"""

from .version import __version__, __version_info__

from .exceptions import (
    BackendIOError,
    FontMissingError,
    FontNotRegisteredError,
    FooterNotEnabledError,
    GeometryError,
    HeaderNotEnabledError,
    InvalidConfigurationError,
    InvalidMoveError,
    InvalidPercentError,
    ListEmptyError,
    MissingRequiredFieldError,
    PDFComposerError,
    RenderingError,
)

from .backend import (
    DisplayListBackend,
    ImageHandle,
    RecordingBackend,
    RenderBackend,
    ReportLabBackend,
    get_standard_font,
)
from .configuration import PDFConfiguration, load_configuration
from .document import Document
from .engine import A3, A4, A5, LEGAL, LETTER, Cursor, PageSize, Rect, SafeArea
from .layout import Logo, LogoStyle, NumberFormat, NumberPosition, PageNumbering, PageSection
from .layout import page_section_style
from .renderers import Heading, ImageBlock, ListBlock, ListItem, Paragraph, SimpleText, Table
from .resources import ResourceManager
from .styles import HeadingLevel, StyledRun, TextAlignment, TextStyle

__all__ = [
    "__version__",
    "__version_info__",
    # Exceptions
    "BackendIOError",
    "FontMissingError",
    "FontNotRegisteredError",
    "FooterNotEnabledError",
    "GeometryError",
    "HeaderNotEnabledError",
    "InvalidConfigurationError",
    "InvalidMoveError",
    "InvalidPercentError",
    "ListEmptyError",
    "MissingRequiredFieldError",
    "PDFComposerError",
    "RenderingError",
    # Engine
    "A3",
    "A4",
    "A5",
    "LEGAL",
    "LETTER",
    "Cursor",
    "Document",
    "PDFConfiguration",
    "PageSize",
    "Rect",
    "ResourceManager",
    "SafeArea",
    "load_configuration",
    # Backends
    "DisplayListBackend",
    "ImageHandle",
    "RecordingBackend",
    "RenderBackend",
    "ReportLabBackend",
    "get_standard_font",
    # Blocks and styles
    "Heading",
    "HeadingLevel",
    "ImageBlock",
    "ListBlock",
    "ListItem",
    "Paragraph",
    "SimpleText",
    "StyledRun",
    "Table",
    "TextAlignment",
    "TextStyle",
    # Chrome
    "Logo",
    "LogoStyle",
    "NumberFormat",
    "NumberPosition",
    "PageNumbering",
    "PageSection",
    "page_section_style",
]
