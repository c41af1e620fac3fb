"""
Tests for header and footer sections and their ready-made styles.
"""

from datetime import date

import pytest

from pdfcomposer.engine import text_width
from pdfcomposer.layout import NumberFormat, PageNumbering, PageSection, page_section_style


class TestPageSection:
    """Test cases for PageSection rendering."""

    def test_three_slots(self, stream, page, fixed_font):
        section = PageSection("L", "C", "R", font=fixed_font, font_size=10, draw_line=False)
        section.render(stream, 600, 700, 50, 50)

        positions = {op.args["text"]: op.args["x"] for op in page.iter_text()}
        assert positions["L"] == 50
        assert positions["C"] == pytest.approx(50 + (500 - 5) / 2)
        assert positions["R"] == pytest.approx(550 - 5)
        assert all(op.args["y"] == 700 for op in page.iter_text())

    def test_rule_below_baseline(self, stream, page):
        PageSection(center_text="Title", font_size=10, line_width=0.75).render(stream, 600, 700, 50, 50)
        rule = next(page.iter_lines()).args
        assert (rule["x1"], rule["x2"]) == (50, 550)
        assert rule["y1"] == 695
        assert rule["line_width"] == 0.75

    def test_numbering_replaces_right_text(self, stream, page):
        section = PageSection("left", "center", "right",
                              page_numbering=PageNumbering(NumberFormat.WITH_TOTAL))
        section.render(stream, 600, 700, 50, 50, page_number=2, total_pages=4)
        assert page.texts() == ["left", "2 de 4"]

    def test_number_skipped_without_total(self, stream, page):
        section = PageSection(page_numbering=PageNumbering(), draw_line=False)
        section.render(stream, 600, 700, 50, 50, page_number=1)
        assert page.texts() == []

    def test_render_page_number_right_aligned(self, stream, page):
        section = PageSection(font_size=8, page_numbering=PageNumbering(NumberFormat.DASH_TOTAL))
        section.render_page_number(stream, 600, 50, 50, 3, 9)
        op = next(page.iter_text())
        assert op.args["text"] == "3 - 9"
        assert op.args["x"] == pytest.approx(550 - text_width("3 - 9", section.font, 8))

    def test_with_page_numbering_returns_copy(self):
        section = PageSection(left_text="x")
        numbered = section.with_page_numbering(PageNumbering())
        assert numbered.has_page_numbering
        assert not section.has_page_numbering


class TestPageSectionStyles:
    """Test cases for the ready-made styles."""

    def test_minimal(self):
        section = page_section_style.minimal("Report")
        assert section.center_text == "Report"
        assert section.color == page_section_style.MUTED_TEXT

    def test_corporate(self):
        section = page_section_style.corporate("ACME", "Annual", today=date(2024, 3, 9))
        assert (section.left_text, section.center_text, section.right_text) == ("ACME", "Annual", "2024-03-09")
        assert section.font.name == "Helvetica-Bold"

    def test_modern(self):
        section = page_section_style.modern("Deck")
        assert section.font_size == 12
        assert section.line_width == 2.0

    def test_page_number_footer(self):
        numbering = PageNumbering(NumberFormat.WITH_TOTAL)
        section = page_section_style.page_number_footer("left", page_numbering=numbering)
        assert section.page_numbering is numbering
        assert section.font_size == 8

    def test_confidential_footer(self):
        section = page_section_style.confidential_footer("ACME", today=date(2023, 1, 1))
        assert section.left_text == "© 2023 ACME"
        assert section.center_text == "CONFIDENCIAL"
