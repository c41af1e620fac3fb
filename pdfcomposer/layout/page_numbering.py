"""
Page number formatting and placement.

A numbering is either embedded in a header/footer section, which then
prints it right-aligned on its own baseline, or rendered standalone at the
top or bottom of the page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from reportlab.lib.colors import Color

from ..backend.base import ContentStream
from ..backend.fonts import Font, default_font
from ..engine.text_metrics import text_width
from ..exceptions import InvalidConfigurationError
from ..styles.text_style import TextAlignment
from ..utils.color_utils import BLACK

logger = logging.getLogger(__name__)


class NumberFormat(Enum):
    """Page number formats."""

    SIMPLE = "simple"
    WITH_TOTAL = "with_total"
    DASH_TOTAL = "dash_total"
    PARENTHESES_TOTAL = "parentheses_total"


class NumberPosition(Enum):
    """Vertical placement of a standalone page number."""

    TOP = "top"
    BOTTOM = "bottom"


@dataclass
class PageNumbering:
    """Page number format, placement and typography."""

    format: NumberFormat = NumberFormat.SIMPLE
    position: NumberPosition = NumberPosition.BOTTOM
    font: Optional[Font] = None
    font_size: float = 10.0
    color: Color = field(default=BLACK)
    alignment: TextAlignment = TextAlignment.CENTER
    margin_x: float = 50.0
    margin_y: float = 30.0

    def __post_init__(self):
        if self.font is None:
            self.font = default_font()
        if self.font_size <= 0:
            raise InvalidConfigurationError("Font size must be greater than zero",
                                            str(self.font_size))
        self.format = NumberFormat(self.format)
        self.position = NumberPosition(self.position)
        self.alignment = TextAlignment.from_value(self.alignment)

    def format_page_number(self, page_number: int, total_pages: int) -> str:
        if self.format is NumberFormat.WITH_TOTAL:
            return f"{page_number} de {total_pages}"
        if self.format is NumberFormat.DASH_TOTAL:
            return f"{page_number} - {total_pages}"
        if self.format is NumberFormat.PARENTHESES_TOTAL:
            return f"{page_number} ({total_pages})"
        return str(page_number)

    def calculate_x(self, page_width: float, text_width: float) -> float:
        if self.alignment is TextAlignment.CENTER:
            return (page_width - text_width) / 2
        if self.alignment is TextAlignment.RIGHT:
            return page_width - text_width - self.margin_x
        # JUSTIFIED is placed like LEFT
        return self.margin_x

    def calculate_y(self, page_height: float) -> float:
        if self.position is NumberPosition.TOP:
            return page_height - self.margin_y
        return self.margin_y + self.font_size

    def render(self, stream: ContentStream, page_width: float, page_height: float,
               page_number: int, total_pages: int) -> None:
        """Draw the number at its own TOP/BOTTOM position."""
        text = self.format_page_number(page_number, total_pages)
        width = text_width(text, self.font, self.font_size)
        x = self.calculate_x(page_width, width)
        y = self.calculate_y(page_height)
        stream.draw_string(text, x, y, self.font, self.font_size, self.color)
        logger.debug("Page number %r at (%.1f, %.1f)", text, x, y)
