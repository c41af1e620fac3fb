"""
Tests for the document engine: pagination, chrome, cursor moves and errors.
"""

import logging

import pytest

from pdfcomposer.backend import RecordingBackend
from pdfcomposer.backend.display_list import DisplayListStream
from pdfcomposer.configuration import PDFConfiguration
from pdfcomposer.document import Document
from pdfcomposer.engine import PageSize
from pdfcomposer.exceptions import InvalidConfigurationError, InvalidMoveError, RenderingError
from pdfcomposer.layout import NumberFormat, PageNumbering, PageSection, page_section_style
from pdfcomposer.renderers import ListBlock, Paragraph, Table
from pdfcomposer.styles import HeadingLevel, TextAlignment, TextStyle

TOLERANCE = 1.0


@pytest.fixture
def small_document():
    """600 x 800 page with 50 pt margins: the content area is 500 x 700."""
    doc = Document(PDFConfiguration(page_size=PageSize(600, 800)), backend=RecordingBackend())
    yield doc
    doc.close()


def block_of(font, height):
    """Single-line paragraph exactly ``height`` points tall."""
    return Paragraph.from_text("a", TextStyle(font, height / 2), line_spacing=2.0)


def assert_inside(page, area):
    for op in page.iter_text():
        args = op.args
        assert area.left - TOLERANCE <= args["x"]
        assert args["x"] + args["width"] <= area.right + TOLERANCE
        assert area.bottom - TOLERANCE <= args["y"] <= area.top + TOLERANCE
    for op in list(page.iter_rects()) + list(page.iter_images()):
        args = op.args
        assert area.left - TOLERANCE <= args["x"]
        assert args["x"] + args["width"] <= area.right + TOLERANCE
        assert area.bottom - TOLERANCE <= args["y"]
        assert args["y"] + args["height"] <= area.top + TOLERANCE
    for op in page.iter_lines():
        args = op.args
        for x, y in ((args["x1"], args["y1"]), (args["x2"], args["y2"])):
            assert area.left - TOLERANCE <= x <= area.right + TOLERANCE
            assert area.bottom - TOLERANCE <= y <= area.top + TOLERANCE


class TestDocumentBasics:
    """Test cases for document state."""

    def test_starts_with_one_page(self, document):
        assert document.page_count == 1
        area = document.content_area
        assert (document.cursor.x, document.cursor.y) == (area.left, area.top)

    def test_add_new_page(self, small_document):
        small_document.move_down(100)
        small_document.add_new_page()
        assert small_document.page_count == 2
        assert small_document.cursor.y == 750

    def test_check_new_page(self, small_document):
        assert not small_document.check_new_page(700)
        small_document.move_down(10)
        assert small_document.check_new_page(700)
        assert small_document.page_count == 2

    def test_blocks_chain(self, small_document):
        result = small_document.add_heading("Title").add_paragraph("Body")
        assert result is small_document

    def test_set_font_size_and_spacing(self, document):
        document.set_font_size(14).set_line_spacing(2)
        assert document.font_size == 14
        assert document.line_spacing == 2
        with pytest.raises(InvalidConfigurationError):
            document.set_font_size(0)
        with pytest.raises(InvalidConfigurationError):
            document.set_line_spacing(0)

    def test_with_page_size_builds_new_document(self, document):
        landscape = document.with_page_size(document.page_size.landscape, backend=RecordingBackend())
        try:
            assert landscape is not document
            assert landscape.page_size.width > landscape.page_size.height
        finally:
            landscape.close()


class TestCursorMoves:
    """Test cases for document-level cursor moves."""

    def test_relative_moves(self, small_document):
        small_document.move_right(10).move_down(20)
        assert (small_document.cursor.x, small_document.cursor.y) == (60, 730)
        small_document.move_to_start()
        assert small_document.cursor.x == 50

    def test_top_and_bottom(self, small_document):
        small_document.move_to_bottom()
        assert small_document.cursor.y == 50
        small_document.move_to_top()
        assert small_document.cursor.y == 750

    def test_percent_move_is_idempotent(self, small_document):
        small_document.move_to_content_percent(30, 40)
        first = small_document.cursor
        small_document.move_to_content_percent(30, 40)
        assert small_document.cursor == first

    def test_header_move_requires_header(self, small_document):
        with pytest.raises(InvalidMoveError):
            small_document.move_to_header(0, 0)

    def test_set_margins_affects_current_page_only(self, small_document):
        small_document.set_margins(left=100)
        assert small_document.content_area.left == 100
        assert small_document.cursor.x == 100
        small_document.add_new_page()
        assert small_document.content_area.left == 50


class TestPagination:
    """Test cases for page turns."""

    def test_fourteen_blocks_fill_a_page(self, small_document, fixed_font):
        """700 pt of content holds 14 blocks of 50 pt; the 15th opens page 2."""
        for _ in range(20):
            small_document.add_block(block_of(fixed_font, 50))

        first, second = small_document.pages
        assert len(first.texts()) == 14
        assert len(second.texts()) == 6
        assert next(second.iter_text()).args["y"] == pytest.approx(750 - 25)

    def test_no_block_crosses_the_bottom(self, small_document, fixed_font):
        heights = [30, 120, 75, 200, 10, 180, 60, 90, 140, 25]
        for height in heights * 3:
            area = small_document.content_area
            available = small_document.cursor.y - area.bottom
            pages_before = small_document.page_count
            small_document.add_block(block_of(fixed_font, height))
            if height > available + 1e-6:
                assert small_document.page_count == pages_before + 1

    def test_cursor_is_monotone_within_a_page(self, small_document, fixed_font):
        last = (small_document.page_count, small_document.cursor.y)
        for height in [40, 80, 15, 300, 120, 60, 90] * 3:
            small_document.add_block(block_of(fixed_font, height))
            current = (small_document.page_count, small_document.cursor.y)
            if current[0] == last[0]:
                assert current[1] <= last[1]
            last = current

    def test_oversized_block_renders_at_page_top_with_warning(self, small_document, fixed_font, caplog):
        small_document.move_down(100)
        with caplog.at_level(logging.WARNING, logger="pdfcomposer.document"):
            small_document.add_block(block_of(fixed_font, 900))

        assert small_document.page_count == 2
        assert small_document.pages[0].texts() == []
        assert small_document.pages[1].texts() == ["a"]
        assert any("rendering it anyway" in record.getMessage() for record in caplog.records)

    def test_table_splits_with_repeated_header(self, small_document):
        rows = [["Item", "Value"]] + [[f"row {i}", str(i)] for i in range(40)]
        small_document.add_table(rows)

        assert small_document.page_count >= 2
        for page in small_document.pages:
            texts = page.texts()
            assert texts[:2] == ["Item", "Value"]
        all_rows = [t for page in small_document.pages for t in page.texts() if t.startswith("row")]
        assert all_rows == [f"row {i}" for i in range(40)]

    def test_list_splits_between_items(self, small_document):
        small_document.add_list([f"item {i}" for i in range(60)], ordered=True)

        assert small_document.page_count >= 2
        second = small_document.pages[1].texts()
        first_marker = second[0]
        first_count = len([t for t in small_document.pages[0].texts() if t.endswith(".")])
        assert first_marker == f"{first_count + 1}."

    def test_spacing_after_list(self, small_document):
        block = ListBlock.from_strings(["one"], font=small_document.resources.get_default_font(),
                                       font_size=12)
        small_document.add_block(block)
        assert small_document.cursor.y == pytest.approx(750 - 17 - 20)

    def test_content_stays_in_safe_area(self, small_document, png_path):
        small_document.add_heading("Safe area", HeadingLevel.H1)
        for alignment in TextAlignment:
            small_document.add_paragraph("Lorem ipsum dolor sit amet " * 12, alignment=alignment)
        small_document.add_list(["first", "second", "third " * 30], ordered=True)
        small_document.add_table([["A", "B", "C"], ["x" * 80, "y", "z"]], column_widths=[300, 200, 200])
        small_document.add_image(png_path, width=300, caption="Figure", alignment="center")
        small_document.add_simple_text("Closing words " * 20)

        for page in small_document.pages:
            assert_inside(page, small_document.content_area)


class TestChrome:
    """Test cases for headers, footers, logos and page numbers."""

    def test_header_enables_band(self, small_document, caplog):
        with caplog.at_level(logging.WARNING, logger="pdfcomposer.document"):
            small_document.set_header(PageSection(center_text="Head"))
        assert small_document.safe_area.has_header
        assert small_document.cursor.y == 710
        assert any("header band" in record.getMessage() for record in caplog.records)

    def test_header_and_footer_on_every_page(self, small_document, temp_dir):
        small_document.set_header(PageSection(center_text="Head", font_size=10))
        small_document.set_footer(PageSection(left_text="Foot", font_size=10))
        small_document.add_new_page().add_new_page()
        small_document.save(temp_dir / "out.json")

        for page in small_document.pages:
            ops = {op.args["text"]: op for op in page.iter_text()}
            assert ops["Head"].args["y"] == 740
            assert ops["Foot"].args["y"] == 50

    def test_footer_band_shrinks_content(self, small_document):
        small_document.set_footer(PageSection(left_text="Foot"))
        assert small_document.content_area.bottom == 90

    def test_page_numbers_with_total(self, small_document, temp_dir):
        small_document.set_page_numbering(PageNumbering(NumberFormat.WITH_TOTAL))
        small_document.add_new_page().add_new_page()
        small_document.save(temp_dir / "out.json")

        numbers = [page.texts()[-1] for page in small_document.pages]
        assert numbers == ["1 de 3", "2 de 3", "3 de 3"]

    def test_page_numbers_embedded_in_footer(self, small_document, temp_dir):
        small_document.set_footer(page_section_style.page_number_footer("Report"))
        small_document.set_page_numbering(PageNumbering(NumberFormat.DASH_TOTAL))
        small_document.add_new_page()
        small_document.save(temp_dir / "out.json")

        for index, page in enumerate(small_document.pages, start=1):
            number = next(op for op in page.iter_text() if op.args["text"] == f"{index} - 2")
            assert number.args["y"] == 50
            assert number.args["x"] + number.args["width"] == pytest.approx(550)

    def test_numbering_set_before_footer_is_embedded(self, small_document, temp_dir):
        small_document.set_page_numbering(PageNumbering(NumberFormat.WITH_TOTAL))
        small_document.set_footer(PageSection(left_text="Foot", right_text="R", font_size=10))
        assert small_document.footer.has_page_numbering
        small_document.save(temp_dir / "out.json")

        ops = [(op.args["text"], op.args["y"]) for op in small_document.current_page.iter_text()]
        assert ops == [("Foot", 50), ("1 de 1", 50)]

    def test_numbering_set_before_header_is_embedded(self, small_document, temp_dir):
        small_document.set_page_numbering(PageNumbering())
        small_document.set_header(PageSection(left_text="L", right_text="RIGHT", font_size=10))
        small_document.save(temp_dir / "out.json")

        assert small_document.header.has_page_numbering
        ops = [(op.args["text"], op.args["y"]) for op in small_document.current_page.iter_text()]
        assert ops == [("L", 740), ("1", 740)]

    def test_header_drawn_before_numbering_keeps_its_text(self, small_document, temp_dir):
        """The page whose header is already drawn gets a standalone number instead of an overlap."""
        small_document.set_header(PageSection(left_text="L", right_text="RIGHT", font_size=10))
        small_document.set_page_numbering(PageNumbering())
        small_document.add_new_page()
        small_document.save(temp_dir / "out.json")

        first, second = small_document.pages
        assert first.texts() == ["L", "RIGHT", "1"]
        standalone = [op for op in first.iter_text() if op.args["text"] == "1"]
        assert standalone[0].args["y"] != 740

        assert second.texts() == ["L", "2"]
        assert [op.args["y"] for op in second.iter_text()] == [740, 740]

    def test_footer_takes_numbering_from_header(self, small_document, temp_dir):
        small_document.set_header(PageSection(left_text="L", font_size=10))
        small_document.set_page_numbering(PageNumbering())
        small_document.set_footer(PageSection(left_text="Foot", font_size=10))
        assert small_document.footer.has_page_numbering
        assert not small_document.header.has_page_numbering

        small_document.add_new_page()
        small_document.save(temp_dir / "out.json")
        for index, page in enumerate(small_document.pages, start=1):
            number = next(op for op in page.iter_text() if op.args["text"] == str(index))
            assert number.args["y"] == 50

    def test_logo_repeats_and_moves_cursor(self, small_document):
        small_document.set_logo("Company")
        top = small_document.cursor.y
        assert top == pytest.approx(750 - small_document.logo.total_height)

        small_document.add_new_page()
        assert small_document.cursor.y == pytest.approx(top)
        assert "Company" in small_document.current_page.texts()

    def test_logo_images_loaded(self, small_document, png_path):
        small_document.set_logo("Company", left_image_path=png_path)
        assert small_document.resources.has_image("logo-left")
        assert [op.args["name"] for op in small_document.current_page.iter_images()] == ["logo-left"]


class TestTextHelpers:
    """Test cases for raw text output."""

    def test_add_text_keeps_cursor(self, small_document):
        small_document.add_text("hello")
        op = next(small_document.current_page.iter_text())
        assert (op.args["x"], op.args["y"]) == (50, 750)
        assert small_document.cursor.y == 750

    def test_add_line_advances(self, small_document):
        font = small_document.resources.get_default_font()
        small_document.move_right(30).add_line("hello")
        step = font.bounding_box_height() / 1000 * 12 * 1.5
        assert small_document.cursor.y == pytest.approx(750 - step)
        assert small_document.cursor.x == 50

    def test_text_width(self, small_document):
        assert small_document.text_width("abc") > 0


class TestDocumentErrors:
    """Test cases for error handling and lifecycle."""

    def test_append_after_save(self, small_document, temp_dir):
        small_document.save(temp_dir / "out.json")
        with pytest.raises(RenderingError):
            small_document.add_paragraph("late")

    def test_save_twice(self, small_document, temp_dir):
        small_document.add_paragraph("text")
        small_document.save(temp_dir / "first.json")
        small_document.save(temp_dir / "second.json")
        assert (temp_dir / "second.json").exists()

    def test_backend_failure_is_wrapped(self, small_document, monkeypatch):
        def broken(self, text):
            raise OSError("disk gone")

        monkeypatch.setattr(DisplayListStream, "show_text", broken)
        with pytest.raises(RenderingError):
            small_document.add_paragraph("text")
        small_document.close()

    def test_close_is_idempotent(self, small_document):
        small_document.close()
        small_document.close()
        with pytest.raises(RenderingError):
            small_document.add_paragraph("late")
        with pytest.raises(RenderingError):
            small_document.save("never.json")

    def test_context_manager_closes(self):
        with Document(backend=RecordingBackend()) as doc:
            doc.add_paragraph("inside")
        with pytest.raises(RenderingError):
            doc.add_paragraph("outside")

    def test_writes_pdf_with_reportlab(self, temp_dir, png_path):
        path = temp_dir / "report.pdf"
        with Document(PDFConfiguration(dpi=72)) as doc:
            doc.set_header(page_section_style.minimal("Report"))
            doc.set_footer(page_section_style.page_number_footer("ACME"))
            doc.set_page_numbering(PageNumbering(NumberFormat.WITH_TOTAL))
            doc.add_heading("Report")
            doc.add_paragraph("Body text " * 50, alignment=TextAlignment.JUSTIFIED)
            doc.add_table([["A", "B"], ["1", "2"]])
            doc.add_image(png_path, width=200)
            doc.save(path)
        assert path.read_bytes().startswith(b"%PDF")

    def test_table_instance_passthrough(self, small_document):
        table = Table([["a"]], column_widths=[50])
        small_document.add_table(table)
        assert "a" in small_document.current_page.texts()
