"""Rendering of raster images with optional captions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..backend.base import ContentStream, ImageHandle, Matrix
from ..backend.fonts import Font, default_font
from ..engine.text_alignment import TextAlignmentEngine
from ..engine.text_metrics import text_width
from ..exceptions import InvalidConfigurationError, MissingRequiredFieldError
from ..styles.text_style import TextAlignment
from ..utils.color_utils import BLACK
from .base import Block

CAPTION_GAP = 5.0
CAPTION_SPACING = 10.0


def rotation_matrix(degrees: float, center_x: float, center_y: float) -> Matrix:
    """Rotation by ``degrees`` counter-clockwise about (center_x, center_y)."""
    radians = math.radians(degrees)
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    return (
        cos_a,
        sin_a,
        -sin_a,
        cos_a,
        center_x - center_x * cos_a + center_y * sin_a,
        center_y - center_x * sin_a - center_y * cos_a,
    )


@dataclass
class ImageBlock(Block):
    """
    Image scaled to the available width, aligned and optionally captioned.

    A requested ``width`` (or ``height``, converted through the aspect
    ratio) is capped at the available width; the height always follows
    the intrinsic aspect ratio.
    """

    image: ImageHandle
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: float = 0.0
    quality: Optional[float] = None
    alignment: TextAlignment = TextAlignment.LEFT
    caption: Optional[str] = None
    caption_font_size: float = 10.0
    caption_font: Optional[Font] = None

    spacing_after_block = 20.0

    def __post_init__(self):
        if self.image is None:
            raise MissingRequiredFieldError("Image block requires an image")
        if self.image.width <= 0 or self.image.height <= 0:
            raise InvalidConfigurationError(
                "Image has no intrinsic size", f"{self.image.width}x{self.image.height}"
            )
        for name in ("width", "height"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise InvalidConfigurationError(f"Image {name} must be greater than zero", str(value))
        if self.quality is not None:
            self.quality = max(0.0, min(1.0, self.quality))
        self.alignment = TextAlignment.from_value(self.alignment)
        if self.alignment is TextAlignment.JUSTIFIED:
            self.alignment = TextAlignment.LEFT
        if self.caption_font is None:
            self.caption_font = default_font()

    @property
    def has_caption(self) -> bool:
        return bool(self.caption)

    @property
    def requested_width(self) -> float:
        if self.width is not None:
            return self.width
        if self.height is not None:
            return self.height * self.image.width / self.image.height
        return float(self.image.width)

    def target_size(self, available_width: float) -> Tuple[float, float]:
        width = min(available_width, self.requested_width)
        return width, width * self.image.height / self.image.width

    def calculate_height(self, max_width: float) -> float:
        _, height = self.target_size(max_width)
        if self.has_caption:
            height += self.caption_font_size + CAPTION_SPACING
        return height

    def render(self, stream: ContentStream, x: float, y: float, max_width: float) -> float:
        width, height = self.target_size(max_width)
        image_x = TextAlignmentEngine.calculate_x(x, max_width, width, self.alignment)

        stream.save_graphics_state()
        try:
            if self.rotation:
                stream.transform(rotation_matrix(self.rotation, image_x + width / 2, y - height / 2))
            stream.draw_image(self.image, image_x, y - height, width, height, self.quality)
        finally:
            stream.restore_graphics_state()

        new_y = y - height
        if self.has_caption:
            caption_width = text_width(self.caption, self.caption_font, self.caption_font_size)
            caption_x = TextAlignmentEngine.calculate_x(image_x, width, caption_width, self.alignment)
            stream.draw_string(self.caption, caption_x, new_y - self.caption_font_size - CAPTION_GAP,
                               self.caption_font, self.caption_font_size, BLACK)
            new_y -= self.caption_font_size + CAPTION_SPACING
        return new_y
