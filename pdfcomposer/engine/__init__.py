"""Layout engine: geometry, cursor, measurement and line breaking."""

from .cursor import Cursor
from .geometry import (
    A3,
    A4,
    A5,
    FOOTER_HEIGHT,
    HEADER_HEIGHT,
    LEGAL,
    LETTER,
    NAMED_PAGE_SIZES,
    PageSize,
    Rect,
    SafeArea,
    inches_to_points,
    mm_to_points,
)
from .line_breaker import Line, LineBreaker, break_runs, break_text
from .text_alignment import TextAlignmentEngine, calculate_x
from .text_metrics import line_height, space_width, text_width

__all__ = [
    "A3",
    "A4",
    "A5",
    "FOOTER_HEIGHT",
    "HEADER_HEIGHT",
    "LEGAL",
    "LETTER",
    "NAMED_PAGE_SIZES",
    "Cursor",
    "Line",
    "LineBreaker",
    "PageSize",
    "Rect",
    "SafeArea",
    "TextAlignmentEngine",
    "break_runs",
    "break_text",
    "calculate_x",
    "inches_to_points",
    "line_height",
    "mm_to_points",
    "space_width",
    "text_width",
]
