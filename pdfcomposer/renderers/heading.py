"""Rendering of section headings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from reportlab.lib.colors import Color

from ..backend.base import ContentStream
from ..backend.fonts import Font, default_bold_font
from ..engine.line_breaker import LineBreaker
from ..engine.text_alignment import TextAlignmentEngine
from ..engine.text_metrics import text_width
from ..exceptions import InvalidConfigurationError, MissingRequiredFieldError
from ..styles.text_style import HeadingLevel, TextAlignment
from ..utils.color_utils import BLACK
from .base import Block

HEADING_LEADING = 1.2


@dataclass
class Heading(Block):
    """
    Heading text at one of six levels.

    Sizes and spacing default to the level's values; the text wraps to the
    available width and lines are ``font_size * 1.2`` apart. JUSTIFIED is
    set as LEFT.
    """

    text: str
    level: HeadingLevel = HeadingLevel.H1
    font: Optional[Font] = None
    font_size: Optional[float] = None
    color: Color = field(default=BLACK)
    alignment: TextAlignment = TextAlignment.LEFT
    numbered: bool = False
    number: Optional[str] = None
    spacing_before: Optional[float] = None
    spacing_after: Optional[float] = None

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise MissingRequiredFieldError("Heading requires text")
        if self.font is None:
            self.font = default_bold_font()
        if self.font_size is None:
            self.font_size = self.level.font_size
        if self.font_size <= 0:
            raise InvalidConfigurationError("Font size must be greater than zero",
                                            str(self.font_size))
        if self.spacing_before is None:
            self.spacing_before = self.level.spacing_before
        if self.spacing_after is None:
            self.spacing_after = self.level.spacing_after
        self.alignment = TextAlignment.from_value(self.alignment)
        if self.alignment is TextAlignment.JUSTIFIED:
            self.alignment = TextAlignment.LEFT

    @property
    def display_text(self) -> str:
        if self.numbered and self.number:
            return f"{self.number} {self.text}"
        return self.text

    @property
    def leading(self) -> float:
        return self.font_size * HEADING_LEADING

    def wrap(self, max_width: float) -> List[str]:
        return LineBreaker().break_text(self.display_text, self.font, self.font_size, max_width)

    def calculate_height(self, max_width: float = float("inf")) -> float:
        return self.spacing_before + len(self.wrap(max_width)) * self.leading + self.spacing_after

    def render(self, stream: ContentStream, x: float, y: float, max_width: float) -> float:
        top = y - self.spacing_before
        lines = self.wrap(max_width)
        baseline = top - self.font_size
        for line in lines:
            width = text_width(line, self.font, self.font_size)
            line_x = TextAlignmentEngine.calculate_x(x, max_width, width, self.alignment)
            stream.draw_string(line, line_x, baseline, self.font, self.font_size, self.color)
            baseline -= self.leading
        return top - len(lines) * self.leading - self.spacing_after
