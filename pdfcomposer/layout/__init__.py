"""Page chrome: headers, footers, page numbers and logos."""

from . import page_section_style
from .logo import Logo, LogoStyle
from .page_numbering import NumberFormat, NumberPosition, PageNumbering
from .page_section import PageSection

__all__ = [
    "Logo",
    "LogoStyle",
    "NumberFormat",
    "NumberPosition",
    "PageNumbering",
    "PageSection",
    "page_section_style",
]
