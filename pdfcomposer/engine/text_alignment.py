"""

Horizontal placement of a line inside its box.

Supports:
- LEFT: flush with the box's left edge (default)
- CENTER: centered in the box
- RIGHT: flush with the box's right edge
- JUSTIFIED: starts at the left edge; the renderer widens the spaces

"""

from __future__ import annotations

from typing import List

from ..styles.text_style import TextAlignment


class TextAlignmentEngine:
    """Computes line origins and justified space widths."""

    @staticmethod
    def calculate_x(
        x: float,
        available_width: float,
        line_width: float,
        alignment: TextAlignment | str = TextAlignment.LEFT,
    ) -> float:
        """

        Calculates the X position of a line.

        Args:
        x: left edge of the box
        available_width: box width in points
        line_width: natural width of the line in points
        alignment: alignment of the line

        Returns:
        X position of the first glyph

        """
        alignment = TextAlignment.from_value(alignment)

        if alignment is TextAlignment.CENTER:
            # Don't go beyond left edge
            return max(x, x + (available_width - line_width) / 2)

        if alignment is TextAlignment.RIGHT:
            return max(x, x + available_width - line_width)

        return x

    @staticmethod
    def justified_space(available_width: float, word_widths: List[float]) -> float:
        """Space between words so the line spans exactly ``available_width``.

        Only meaningful for two or more words.
        """
        gaps = len(word_widths) - 1
        if gaps < 1:
            raise ValueError("Justification needs at least two words")
        return (available_width - sum(word_widths)) / gaps


def calculate_x(x: float, available_width: float, line_width: float,
                alignment: TextAlignment | str = TextAlignment.LEFT) -> float:
    return TextAlignmentEngine.calculate_x(x, available_width, line_width, alignment)
