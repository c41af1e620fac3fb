"""Logo band: a centered title between optional images, over a rule."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from reportlab.lib.colors import Color

from ..backend.base import ContentStream, ImageHandle
from ..backend.fonts import Font, default_bold_font
from ..engine.text_metrics import text_width
from ..exceptions import InvalidConfigurationError
from ..utils.color_utils import BLACK, GRAY


@dataclass(frozen=True)
class LogoStyle:
    """Typography, image box and separator rule of a :class:`Logo`."""

    font: Optional[Font] = None
    font_size: float = 12.0
    color: Color = field(default=BLACK)
    image_width: float = 30.0
    image_height: float = 30.0
    image_margin: float = 10.0
    maintain_aspect_ratio: bool = True
    margin_bottom: float = 20.0
    draw_line: bool = True
    line_width: float = 1.0
    line_color: Color = field(default=GRAY)

    def __post_init__(self):
        if self.font is None:
            object.__setattr__(self, "font", default_bold_font())
        if self.font_size <= 0:
            raise InvalidConfigurationError("Font size must be greater than zero",
                                            str(self.font_size))
        if self.image_width < 0 or self.image_height < 0:
            raise InvalidConfigurationError(
                "Image dimensions must be non-negative",
                f"{self.image_width}x{self.image_height}",
            )


@dataclass
class Logo:
    """
    Title centered across the content width at ``y``, with an optional
    image inside each margin edge and a rule under the band.
    """

    title: str = ""
    style: LogoStyle = field(default_factory=LogoStyle)
    left_image: Optional[ImageHandle] = None
    right_image: Optional[ImageHandle] = None

    @property
    def total_height(self) -> float:
        """Vertical space the band takes below its baseline."""
        style = self.style
        base = max(style.font_size, style.image_height)
        rule = style.line_width + 10 if style.draw_line else 0.0
        return base + style.margin_bottom + rule

    def image_size(self, image: ImageHandle) -> Tuple[float, float]:
        width = self.style.image_width
        height = self.style.image_height
        if self.style.maintain_aspect_ratio and image.width:
            ratio = image.height / image.width
            if width > 0:
                height = width * ratio
            elif height > 0:
                width = height / ratio
        return width, height

    def render(self, stream: ContentStream, page_width: float, y: float,
               margin_left: float, margin_right: float) -> None:
        style = self.style
        content_width = page_width - margin_left - margin_right
        image_y = y - style.image_height + style.font_size / 2

        if self.left_image is not None:
            width, height = self.image_size(self.left_image)
            stream.draw_image(self.left_image, margin_left + style.image_margin, image_y,
                              width, height)

        if self.title:
            width = text_width(self.title, style.font, style.font_size)
            stream.draw_string(self.title, margin_left + (content_width - width) / 2, y,
                               style.font, style.font_size, style.color)

        if self.right_image is not None:
            width, height = self.image_size(self.right_image)
            x = page_width - margin_right - style.image_width - style.image_margin
            stream.draw_image(self.right_image, x, image_y, width, height)

        if style.draw_line:
            line_y = y - style.font_size / 2 - 5
            stream.draw_line(margin_left, line_y, page_width - margin_right, line_y,
                             style.line_width, style.line_color)
