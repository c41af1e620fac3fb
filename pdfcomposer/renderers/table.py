"""Rendering routines for table blocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.colors import Color

from ..backend.base import ContentStream
from ..backend.fonts import Font, default_font
from ..engine.line_breaker import LineBreaker
from ..engine.text_metrics import text_width
from ..exceptions import InvalidConfigurationError, MissingRequiredFieldError
from ..utils.color_utils import BLACK, LIGHT_GRAY
from .base import Block

logger = logging.getLogger(__name__)

CELL_PADDING_X = 5.0
CELL_PADDING_Y = 10.0


@dataclass
class Table(Block):
    """
    Grid of text cells with borders and an optional shaded header row.

    Rows grow to fit their wrapped cells: a row is
    ``max(row_height, lines * font_size + 20)`` tall. When the columns are
    wider than the available width they are scaled down uniformly.
    """

    data: List[List[str]] = field(default_factory=list)
    column_widths: List[float] = field(default_factory=list)
    row_height: float = 20.0
    font: Optional[Font] = None
    font_size: float = 12.0
    text_color: Color = field(default=BLACK)
    border_color: Color = field(default=BLACK)
    border_width: float = 0.5
    draw_header: bool = True
    header_background_color: Optional[Color] = field(default=LIGHT_GRAY)
    header_text_color: Color = field(default=BLACK)

    spacing_after_block = 20.0

    def __post_init__(self):
        self.data = [[str(cell) for cell in row] for row in self.data]
        if not self.data:
            raise MissingRequiredFieldError("Table requires at least one row")
        if self.font is None:
            self.font = default_font()
        if not self.column_widths:
            columns = max(len(row) for row in self.data) or 1
            self.column_widths = [100.0] * columns
        self.column_widths = [float(w) for w in self.column_widths]
        if any(w <= 0 for w in self.column_widths):
            raise InvalidConfigurationError("Column widths must be greater than zero",
                                            str(self.column_widths))
        if self.row_height <= 0 or self.font_size <= 0:
            raise InvalidConfigurationError(
                "Row height and font size must be greater than zero",
                f"row_height={self.row_height}, font_size={self.font_size}",
            )
        if self.border_width < 0:
            raise InvalidConfigurationError("Border width must be non-negative",
                                            str(self.border_width))

    @property
    def column_count(self) -> int:
        return len(self.column_widths)

    @property
    def table_width(self) -> float:
        return sum(self.column_widths)

    def adjusted_column_widths(self, available_width: float) -> List[float]:
        """Column widths scaled down uniformly to ``available_width`` if needed."""
        total = self.table_width
        if total > available_width:
            scale = available_width / total
            return [w * scale for w in self.column_widths]
        return list(self.column_widths)

    def calculate_height(self, max_width: float = float("inf")) -> float:
        """Estimate that ignores cell wrapping: base row heights plus borders."""
        rows = len(self.data)
        return rows * self.row_height + (rows + 1) * self.border_width

    def wrap_cell(self, text: str, column_width: float) -> List[str]:
        breaker = LineBreaker(split_long_words=True)
        return breaker.break_text(text, self.font, self.font_size, column_width - 2 * CELL_PADDING_X)

    def _wrap_row(self, row: Sequence[str], widths: List[float]) -> List[List[str]]:
        # Cells past the last column are dropped.
        return [self.wrap_cell(text, width) for text, width in zip(row, widths)]

    def _row_height(self, wrapped: List[List[str]]) -> float:
        text_height = max((len(lines) * self.font_size for lines in wrapped), default=0.0)
        return max(self.row_height, text_height + 2 * CELL_PADDING_Y)

    def row_heights(self, available_width: float) -> List[float]:
        widths = self.adjusted_column_widths(available_width)
        return [self._row_height(self._wrap_row(row, widths)) for row in self.data]

    def measure_height(self, available_width: float) -> float:
        """Height after wrapping every cell at ``available_width``."""
        return sum(self.row_heights(available_width))

    def required_height(self, max_width: float) -> float:
        return self.measure_height(max_width)

    def split(self, max_width: float, available_height: float) -> Optional[Tuple["Table", "Table"]]:
        heights = self.row_heights(max_width)
        first_body = 1 if self.draw_header else 0
        used = sum(heights[:first_body])
        count = first_body
        for height in heights[first_body:]:
            if used + height > available_height:
                break
            used += height
            count += 1
        if count <= first_body or count == len(self.data):
            return None

        header = self.data[:first_body]
        head = replace(self, data=self.data[:count])
        tail = replace(self, data=header + self.data[count:])
        logger.debug("Split table after %d of %d rows", count, len(self.data))
        return head, tail

    def render(self, stream: ContentStream, x: float, y: float, max_width: float) -> float:
        widths = self.adjusted_column_widths(max_width)
        current_y = y
        for index, row in enumerate(self.data):
            is_header = self.draw_header and index == 0
            current_y = self._draw_row(stream, row, x, current_y, is_header, widths)
        return current_y

    def _draw_row(self, stream: ContentStream, row: Sequence[str], x: float, y: float,
                  is_header: bool, widths: List[float]) -> float:
        wrapped = self._wrap_row(row, widths)
        height = self._row_height(wrapped)
        bottom = y - height
        text_color = self.header_text_color if is_header else self.text_color

        if is_header and self.header_background_color is not None:
            stream.set_non_stroking_color(self.header_background_color)
            stream.add_rect(x, bottom, sum(widths), height)
            stream.fill()

        current_x = x
        for lines, width in zip(wrapped, widths):
            if self.border_width > 0:
                stream.set_stroking_color(self.border_color)
                stream.set_line_width(self.border_width)
                stream.add_rect(current_x, bottom, width, height)
                stream.stroke()

            # Baseline of the last line; the stack is centered in the row.
            start_y = bottom + (height - len(lines) * self.font_size) / 2
            for line_index, line in enumerate(lines):
                line_width = text_width(line, self.font, self.font_size)
                text_x = current_x + (width - line_width) / 2
                text_y = start_y + (len(lines) - 1 - line_index) * self.font_size
                stream.draw_string(line, text_x, text_y, self.font, self.font_size, text_color)
            current_x += width

        return bottom
