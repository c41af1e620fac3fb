"""

Text measurement in points.

Fonts report widths in font units per 1000 em; everything past this
module works in points:

    advance = font.string_width(text) / 1000 * size

"""

from __future__ import annotations

from typing import Iterable, Sequence

from ..backend.fonts import UNITS_PER_EM, Font
from ..styles.text_style import StyledRun, TextStyle


def text_width(text: str, font: Font, font_size: float) -> float:
    """Advance of ``text`` set in ``font`` at ``font_size``."""
    if not text:
        return 0.0
    return font.string_width(text) / UNITS_PER_EM * font_size


def space_width(font: Font, font_size: float) -> float:
    """Advance of a single space."""
    return font.space_width() / UNITS_PER_EM * font_size


def style_text_width(text: str, style: TextStyle) -> float:
    return text_width(text, style.font, style.font_size)


def style_space_width(style: TextStyle) -> float:
    return space_width(style.font, style.font_size)


def run_width(run: StyledRun) -> float:
    return text_width(run.text, run.style.font, run.style.font_size)


def words_width(runs: Iterable[StyledRun]) -> float:
    """Sum of the advances of ``runs`` without any inter-word space."""
    return sum(run_width(run) for run in runs)


def natural_line_width(runs: Sequence[StyledRun]) -> float:
    """Width of ``runs`` with each word followed by its own style's space."""
    if not runs:
        return 0.0
    gaps = sum(style_space_width(run.style) for run in runs[:-1])
    return words_width(runs) + gaps


def line_height(font_size: float, line_spacing: float = 1.2) -> float:
    return font_size * line_spacing
