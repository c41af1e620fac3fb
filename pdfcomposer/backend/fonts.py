"""Font handles backed by reportlab metrics.

All widths returned by a :class:`Font` are expressed in font units per
1000 em, the PDF convention. Convert to points with
:func:`pdfcomposer.engine.text_metrics.text_width`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from reportlab.pdfbase import pdfmetrics  # type: ignore
from reportlab.pdfbase.ttfonts import TTFError, TTFont  # type: ignore

from ..exceptions import BackendIOError, FontNotRegisteredError

logger = logging.getLogger(__name__)

# Standard Type-1 fonts every PDF viewer must provide.
STANDARD_FONT_NAMES: Tuple[str, ...] = (
    "Helvetica",
    "Helvetica-Bold",
    "Helvetica-Oblique",
    "Helvetica-BoldOblique",
    "Times-Roman",
    "Times-Bold",
    "Times-Italic",
    "Times-BoldItalic",
    "Courier",
    "Courier-Bold",
    "Courier-Oblique",
    "Courier-BoldOblique",
    "Symbol",
    "ZapfDingbats",
)

UNITS_PER_EM = 1000.0


class Font(ABC):
    """Opaque font handle; compared by identity."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def string_width(self, text: str) -> float:
        """Advance of ``text`` in font units."""

    def space_width(self) -> float:
        return self.string_width(" ")

    def ascent_descent(self) -> Tuple[float, float]:
        """Return (ascent, descent) in font units; descent is negative."""
        return (718.0, -207.0)

    def bounding_box_height(self) -> float:
        ascent, descent = self.ascent_descent()
        return ascent - descent

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class ReportLabFont(Font):
    """Font whose metrics come from reportlab's registry."""

    def string_width(self, text: str) -> float:
        if not text:
            return 0.0
        return pdfmetrics.stringWidth(text, self.name, UNITS_PER_EM)

    def ascent_descent(self) -> Tuple[float, float]:
        ascent, descent = pdfmetrics.getAscentDescent(self.name)
        return (float(ascent), float(descent))


class StandardFont(ReportLabFont):
    """One of the 14 standard PDF fonts."""

    def __init__(self, name: str):
        if name not in STANDARD_FONT_NAMES:
            raise FontNotRegisteredError("Not a standard PDF font", name)
        super().__init__(name)


class TrueTypeFont(ReportLabFont):
    """TrueType font loaded from disk and registered with reportlab."""

    def __init__(self, name: str, font_path: str | Path):
        path = Path(font_path)
        try:
            pdfmetrics.registerFont(TTFont(name, str(path)))
        except (OSError, TTFError) as exc:
            raise BackendIOError(f"Failed to load TrueType font {name}", str(exc)) from exc
        super().__init__(name)
        self.font_path = path
        logger.debug("Registered TrueType font %s from %s", name, path)


@lru_cache(maxsize=None)
def get_standard_font(name: str) -> StandardFont:
    """Return the shared handle for a standard font name."""
    return StandardFont(name)


def default_font() -> StandardFont:
    return get_standard_font("Helvetica")


def default_bold_font() -> StandardFont:
    return get_standard_font("Helvetica-Bold")
