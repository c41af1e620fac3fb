"""Rendering backends: the drawing interface, fonts and writers."""

from .base import IDENTITY, ContentStream, ImageHandle, Matrix, RenderBackend
from .display_list import DisplayListBackend, DisplayListStream, DrawOp, PageHandle, RecordingBackend
from .fonts import (
    STANDARD_FONT_NAMES,
    Font,
    ReportLabFont,
    StandardFont,
    TrueTypeFont,
    default_bold_font,
    default_font,
    get_standard_font,
)
from .reportlab_backend import ReportLabBackend

__all__ = [
    "IDENTITY",
    "STANDARD_FONT_NAMES",
    "ContentStream",
    "DisplayListBackend",
    "DisplayListStream",
    "DrawOp",
    "Font",
    "ImageHandle",
    "Matrix",
    "PageHandle",
    "RecordingBackend",
    "RenderBackend",
    "ReportLabBackend",
    "ReportLabFont",
    "StandardFont",
    "TrueTypeFont",
    "default_bold_font",
    "default_font",
    "get_standard_font",
]
