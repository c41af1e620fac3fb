"""Style model for text blocks."""

from .text_style import HeadingLevel, StyledRun, TextAlignment, TextStyle

__all__ = ["HeadingLevel", "StyledRun", "TextAlignment", "TextStyle"]
