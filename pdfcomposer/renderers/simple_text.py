"""Single-style wrapped text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from reportlab.lib.colors import Color

from ..backend.base import ContentStream
from ..backend.fonts import Font
from ..engine.line_breaker import LineBreaker
from ..engine import text_metrics
from ..exceptions import FontMissingError, InvalidConfigurationError, MissingRequiredFieldError
from ..utils.color_utils import BLACK
from .base import Block


@dataclass
class SimpleText(Block):
    """Plain text in one font, wrapped to the available width and set flush left."""

    text: str
    font: Optional[Font] = None
    font_size: float = 12.0
    line_spacing: float = 1.2
    color: Color = field(default=BLACK)

    def __post_init__(self):
        if self.text is None:
            raise MissingRequiredFieldError("SimpleText requires text")
        if self.font is None:
            raise FontMissingError("SimpleText requires a font")
        if self.font_size <= 0 or self.line_spacing <= 0:
            raise InvalidConfigurationError(
                "Font size and line spacing must be greater than zero",
                f"font_size={self.font_size}, line_spacing={self.line_spacing}",
            )

    @property
    def line_height(self) -> float:
        return text_metrics.line_height(self.font_size, self.line_spacing)

    def wrap(self, max_width: float) -> List[str]:
        return LineBreaker().break_text(self.text, self.font, self.font_size, max_width)

    def calculate_height(self, max_width: float = float("inf")) -> float:
        return len(self.wrap(max_width)) * self.line_height

    def render(self, stream: ContentStream, x: float, y: float, max_width: float) -> float:
        lines = self.wrap(max_width)
        baseline = y - self.font_size
        for line in lines:
            stream.draw_string(line, x, baseline, self.font, self.font_size, self.color)
            baseline -= self.line_height
        return y - len(lines) * self.line_height
