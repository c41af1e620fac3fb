"""Header and footer bands."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from reportlab.lib.colors import Color

from ..backend.base import ContentStream
from ..backend.fonts import Font, default_font
from ..engine.text_metrics import text_width
from ..exceptions import InvalidConfigurationError
from ..utils.color_utils import BLACK
from .page_numbering import PageNumbering


@dataclass
class PageSection:
    """
    A header or footer: left, center and right text on one baseline with an
    optional rule below.

    An embedded :class:`PageNumbering` prints the page number right-aligned
    and replaces ``center_text`` and ``right_text``; the number is drawn
    separately through :meth:`render_page_number` once the page count is
    known.
    """

    left_text: Optional[str] = None
    center_text: Optional[str] = None
    right_text: Optional[str] = None
    font: Optional[Font] = None
    font_size: float = 10.0
    color: Color = field(default=BLACK)
    draw_line: bool = True
    line_width: float = 0.5
    line_color: Color = field(default=BLACK)
    page_numbering: Optional[PageNumbering] = None

    def __post_init__(self):
        if self.font is None:
            self.font = default_font()
        if self.font_size <= 0:
            raise InvalidConfigurationError("Font size must be greater than zero",
                                            str(self.font_size))

    @property
    def has_page_numbering(self) -> bool:
        return self.page_numbering is not None

    def with_page_numbering(self, numbering: Optional[PageNumbering]) -> "PageSection":
        return replace(self, page_numbering=numbering)

    def render(self, stream: ContentStream, page_width: float, y: float, margin_left: float,
               margin_right: float, page_number: Optional[int] = None,
               total_pages: Optional[int] = None) -> None:
        """Draw the section texts and rule with the text baseline at ``y``.

        The page number is included only when both ``page_number`` and
        ``total_pages`` are given.
        """
        content_width = page_width - margin_left - margin_right

        if self.left_text:
            stream.draw_string(self.left_text, margin_left, y, self.font, self.font_size, self.color)

        if self.page_numbering is None and self.center_text:
            width = text_width(self.center_text, self.font, self.font_size)
            stream.draw_string(self.center_text, margin_left + (content_width - width) / 2, y,
                               self.font, self.font_size, self.color)

        if self.page_numbering is None and self.right_text:
            self._draw_right(stream, self.right_text, page_width, y, margin_right)

        if self.page_numbering is not None and page_number is not None and total_pages is not None:
            self.render_page_number(stream, page_width, y, margin_right, page_number, total_pages)

        if self.draw_line:
            line_y = y - self.font_size / 2
            stream.draw_line(margin_left, line_y, page_width - margin_right, line_y,
                             self.line_width, self.line_color)

    def render_page_number(self, stream: ContentStream, page_width: float, y: float,
                           margin_right: float, page_number: int, total_pages: int) -> None:
        if self.page_numbering is None:
            return
        text = self.page_numbering.format_page_number(page_number, total_pages)
        self._draw_right(stream, text, page_width, y, margin_right)

    def _draw_right(self, stream: ContentStream, text: str, page_width: float, y: float,
                    margin_right: float) -> None:
        width = text_width(text, self.font, self.font_size)
        stream.draw_string(text, page_width - margin_right - width, y, self.font, self.font_size,
                           self.color)
