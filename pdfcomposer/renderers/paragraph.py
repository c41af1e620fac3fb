"""Rendering of paragraphs made of styled runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..backend.base import ContentStream
from ..engine.line_breaker import Line, LineBreaker
from ..engine.text_alignment import TextAlignmentEngine
from ..engine.text_metrics import line_height, natural_line_width, run_width, style_space_width
from ..exceptions import InvalidConfigurationError, MissingRequiredFieldError
from ..styles.text_style import StyledRun, TextAlignment, TextStyle
from .base import Block

logger = logging.getLogger(__name__)


@dataclass
class Paragraph(Block):
    """
    Paragraph of styled runs with LEFT, CENTER, RIGHT or JUSTIFIED lines.

    The first run's font size sets the line pitch: each line advances the
    cursor by ``font_size * line_spacing``. A line's baseline sits one font
    size below the top of its line box.
    """

    runs: List[StyledRun] = field(default_factory=list)
    alignment: TextAlignment = TextAlignment.LEFT
    line_spacing: float = 1.2

    def __post_init__(self):
        self.runs = list(self.runs)
        if not self.runs:
            raise MissingRequiredFieldError("Paragraph requires at least one styled run")
        if self.line_spacing <= 0:
            raise InvalidConfigurationError("Line spacing must be greater than zero",
                                            str(self.line_spacing))
        self.alignment = TextAlignment.from_value(self.alignment)

    @classmethod
    def from_text(cls, text: str, style: TextStyle, **kwargs) -> "Paragraph":
        return cls([StyledRun(text, style)], **kwargs)

    @classmethod
    def from_runs(cls, runs: Sequence[StyledRun], **kwargs) -> "Paragraph":
        return cls(list(runs), **kwargs)

    @property
    def font_size(self) -> float:
        return self.runs[0].style.font_size

    @property
    def line_pitch(self) -> float:
        return line_height(self.font_size, self.line_spacing)

    def layout_lines(self, max_width: float) -> List[Line]:
        return LineBreaker().break_runs(self.runs, max_width)

    def calculate_height(self, max_width: float = float("inf")) -> float:
        """Height of the wrapped paragraph; a single line when unbounded."""
        return len(self.layout_lines(max_width)) * self.line_pitch

    def _justifies(self, line: Line, index: int, line_count: int) -> bool:
        # The closing line of a multi-line paragraph stays ragged.
        if self.alignment is not TextAlignment.JUSTIFIED or line.word_count < 2:
            return False
        return index < line_count - 1 or line_count == 1

    def render(self, stream: ContentStream, x: float, y: float, max_width: float) -> float:
        if max_width <= 0:
            raise InvalidConfigurationError("Paragraph width must be greater than zero",
                                            str(max_width))
        lines = self.layout_lines(max_width)
        baseline = y - self.font_size

        for index, line in enumerate(lines):
            widths = [run_width(run) for run in line.runs]
            if self._justifies(line, index, len(lines)):
                gap = TextAlignmentEngine.justified_space(max_width, widths)
                start_x = x
            else:
                gap = None
                start_x = TextAlignmentEngine.calculate_x(x, max_width, natural_line_width(line.runs),
                                                          self.alignment)

            self._draw_line(stream, line, widths, start_x, baseline, gap)
            baseline -= self.line_pitch

        logger.debug("Rendered paragraph with %d lines", len(lines))
        return y - len(lines) * self.line_pitch

    @staticmethod
    def _draw_line(stream: ContentStream, line: Line, widths: List[float],
                   x: float, baseline: float, gap: Optional[float]) -> None:
        """Draw one line; without a fixed ``gap`` each word is followed by its own space."""
        current_x = x
        for run, width in zip(line.runs, widths):
            style = run.style
            stream.draw_string(run.text, current_x, baseline, style.font, style.font_size,
                               style.color)
            if style.underline:
                underline_y = baseline + style.underline_offset
                stream.draw_line(current_x, underline_y, current_x + width, underline_y,
                                 style.underline_thickness, style.color)
            current_x += width + (style_space_width(style) if gap is None else gap)
