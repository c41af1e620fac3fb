"""Text style model: fonts, sizes, colors, alignment and heading levels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from reportlab.lib.colors import Color

from ..backend.fonts import Font
from ..exceptions import FontMissingError, InvalidConfigurationError
from ..utils.color_utils import BLACK


class TextAlignment(Enum):
    """Horizontal alignment of a line within its box."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFIED = "justified"

    @classmethod
    def from_value(cls, value: "TextAlignment | str") -> "TextAlignment":
        if isinstance(value, TextAlignment):
            return value
        token = str(value).strip().lower()
        aliases = {
            "left": cls.LEFT, "start": cls.LEFT, "l": cls.LEFT,
            "center": cls.CENTER, "middle": cls.CENTER, "c": cls.CENTER,
            "right": cls.RIGHT, "end": cls.RIGHT, "r": cls.RIGHT,
            "justify": cls.JUSTIFIED, "justified": cls.JUSTIFIED, "j": cls.JUSTIFIED,
        }
        try:
            return aliases[token]
        except KeyError:
            raise ValueError(f"Unknown alignment: {value!r}") from None


class HeadingLevel(Enum):
    """Heading levels with (font size, spacing before, spacing after) in points."""

    H1 = (24.0, 30.0, 20.0)
    H2 = (20.0, 25.0, 15.0)
    H3 = (16.0, 20.0, 12.0)
    H4 = (14.0, 16.0, 10.0)
    H5 = (12.0, 14.0, 8.0)
    H6 = (11.0, 12.0, 6.0)

    @property
    def font_size(self) -> float:
        return self.value[0]

    @property
    def spacing_before(self) -> float:
        return self.value[1]

    @property
    def spacing_after(self) -> float:
        return self.value[2]


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Font, size, color and underline parameters of a run."""

    font: Font
    font_size: float = 12.0
    color: Color = field(default=BLACK)
    underline: bool = False
    underline_thickness: float = 0.5
    underline_offset: float = -2.5

    def __post_init__(self):
        if self.font is None:
            raise FontMissingError("TextStyle requires a font")
        if self.font_size <= 0:
            raise InvalidConfigurationError("Font size must be greater than zero", str(self.font_size))


@dataclass(frozen=True, slots=True)
class StyledRun:
    """A span of text carrying a single style."""

    text: str
    style: TextStyle

    def __post_init__(self):
        if "\n" in self.text or "\r" in self.text:
            raise ValueError("Styled runs must not contain line breaks")

