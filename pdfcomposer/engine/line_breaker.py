"""Greedy line breaking of styled runs and plain strings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from ..backend.fonts import Font
from ..styles.text_style import StyledRun
from .text_metrics import space_width, style_space_width, style_text_width, text_width

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Line:
    """One output line: a word per run, in reading order."""

    runs: List[StyledRun] = field(default_factory=list)
    width: float = 0.0

    @property
    def text(self) -> str:
        return " ".join(run.text for run in self.runs)

    @property
    def word_count(self) -> int:
        return len(self.runs)

    def __len__(self) -> int:
        return len(self.runs)


class LineBreaker:
    """
    Simple greedy line breaker.

    Words are appended to the current line until the next
    ``space + word`` would overflow ``max_width``; the space after a word is
    set in that word's style. The first word of a line
    is always placed, so no line is ever empty. With ``split_long_words``
    a word wider than ``max_width`` is cut at the longest prefix that fits.
    """

    def __init__(self, *, split_long_words: bool = False) -> None:
        self.split_long_words = split_long_words

    def break_runs(self, runs: Iterable[StyledRun], max_width: float) -> List[Line]:
        lines: List[Line] = []
        current = Line()

        for run in runs:
            style = run.style
            for word in run.text.split():
                word_width = style_text_width(word, style)
                if not current.runs:
                    current.runs.append(StyledRun(word, style))
                    current.width = word_width
                    continue

                gap = style_space_width(current.runs[-1].style)
                if current.width + gap + word_width > max_width:
                    lines.append(current)
                    current = Line([StyledRun(word, style)], word_width)
                else:
                    current.runs.append(StyledRun(word, style))
                    current.width += gap + word_width

        if current.runs:
            lines.append(current)
        return lines

    def break_text(self, text: str, font: Font, font_size: float, max_width: float) -> List[str]:
        lines: List[str] = []
        current: List[str] = []
        current_width = 0.0
        gap = space_width(font, font_size)

        for word in text.split():
            word_width = text_width(word, font, font_size)

            if self.split_long_words and word_width > max_width:
                if current:
                    lines.append(" ".join(current))
                pieces = self._split_word(word, font, font_size, max_width)
                lines.extend(pieces[:-1])
                current = [pieces[-1]]
                current_width = text_width(pieces[-1], font, font_size)
                continue

            if not current:
                current = [word]
                current_width = word_width
            elif current_width + gap + word_width > max_width:
                lines.append(" ".join(current))
                current = [word]
                current_width = word_width
            else:
                current.append(word)
                current_width += gap + word_width

        if current:
            lines.append(" ".join(current))
        return lines

    @staticmethod
    def _split_word(word: str, font: Font, font_size: float, max_width: float) -> List[str]:
        """Cut ``word`` into pieces that each fit ``max_width``.

        A piece holds at least one character even when that character alone
        is wider than ``max_width``.
        """
        pieces: List[str] = []
        rest = word
        while rest:
            cut = 1
            while cut < len(rest) and text_width(rest[: cut + 1], font, font_size) <= max_width:
                cut += 1
            pieces.append(rest[:cut])
            rest = rest[cut:]
        logger.debug("Split over-wide word %r into %d pieces", word, len(pieces))
        return pieces


def break_runs(runs: Iterable[StyledRun], max_width: float) -> List[Line]:
    return LineBreaker().break_runs(runs, max_width)


def break_text(text: str, font: Font, font_size: float, max_width: float,
               split_long_words: bool = False) -> List[str]:
    return LineBreaker(split_long_words=split_long_words).break_text(
        text, font, font_size, max_width
    )
