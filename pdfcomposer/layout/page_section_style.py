"""Ready-made header and footer styles."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..backend.fonts import default_bold_font, default_font
from ..utils.color_utils import rgb
from .page_numbering import PageNumbering
from .page_section import PageSection

MUTED_TEXT = rgb(128, 128, 128)
MUTED_LINE = rgb(200, 200, 200)
CORPORATE_GRAY = rgb(68, 68, 68)
MODERN_BLUE = rgb(41, 128, 185)


def minimal(title: str) -> PageSection:
    """Centered gray title over a light rule."""
    return PageSection(
        center_text=title,
        font=default_font(),
        font_size=10,
        color=MUTED_TEXT,
        draw_line=True,
        line_width=0.5,
        line_color=MUTED_LINE,
    )


def corporate(company: str, document_title: str, today: Optional[date] = None) -> PageSection:
    """Company, title and ISO date in bold dark gray."""
    today = today or date.today()
    return PageSection(
        left_text=company,
        center_text=document_title,
        right_text=today.isoformat(),
        font=default_bold_font(),
        font_size=10,
        color=CORPORATE_GRAY,
        draw_line=True,
        line_width=0.5,
        line_color=CORPORATE_GRAY,
    )


def modern(title: str) -> PageSection:
    return PageSection(
        center_text=title,
        font=default_font(),
        font_size=12,
        color=MODERN_BLUE,
        draw_line=True,
        line_width=2.0,
        line_color=rgb(41, 128, 185, 128),
    )


def page_number_footer(left_text: Optional[str] = None, center_text: Optional[str] = None,
                       page_numbering: Optional[PageNumbering] = None) -> PageSection:
    """Small gray footer that carries the page number on the right."""
    return PageSection(
        left_text=left_text,
        center_text=center_text,
        font=default_font(),
        font_size=8,
        color=MUTED_TEXT,
        draw_line=True,
        line_width=0.5,
        line_color=MUTED_LINE,
        page_numbering=page_numbering,
    )


def confidential_footer(company: str, today: Optional[date] = None) -> PageSection:
    today = today or date.today()
    return PageSection(
        left_text=f"© {today.year} {company}",
        center_text="CONFIDENCIAL",
        font=default_font(),
        font_size=8,
        color=MUTED_TEXT,
        draw_line=True,
        line_width=0.5,
        line_color=MUTED_LINE,
    )
