#!/usr/bin/env python3
"""
Complete example of the pdfcomposer API.

Builds a multi-page report with a logo, header, numbered footer, headings,
styled paragraphs, nested lists, a table and a captioned image.
"""

import io
from pathlib import Path

from PIL import Image

from pdfcomposer import (
    Document,
    HeadingLevel,
    ListItem,
    NumberFormat,
    PageNumbering,
    PDFConfiguration,
    StyledRun,
    TextAlignment,
    TextStyle,
    page_section_style,
)
from pdfcomposer.utils import configure_logging, rgb


def sample_chart() -> bytes:
    """Small generated bar chart so the example needs no input files."""
    image = Image.new("RGB", (400, 200), (255, 255, 255))
    for index, height in enumerate((60, 120, 90, 170, 140)):
        for x in range(30 + index * 75, 80 + index * 75):
            for y in range(200 - height, 200):
                image.putpixel((x, y), (41, 128, 185))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def main():
    """Compose the report."""
    configure_logging("INFO")
    output = Path("output/complete_example.pdf")
    output.parent.mkdir(parents=True, exist_ok=True)

    config = PDFConfiguration().with_margins(50, 50, 40, 40).with_dpi(150)

    with Document(config) as doc:
        # 1. Chrome
        print("Setting up header, footer and page numbers...")
        doc.set_header(page_section_style.corporate("ACME", "Quarterly Report"))
        doc.set_footer(page_section_style.page_number_footer("ACME"))
        doc.set_page_numbering(PageNumbering(NumberFormat.WITH_TOTAL))
        doc.set_logo("ACME Corporation")

        fonts = doc.resources
        body = TextStyle(fonts.get_font("Helvetica"), 11)
        bold = TextStyle(fonts.get_font("Helvetica-Bold"), 11)
        accent = TextStyle(fonts.get_font("Helvetica-Oblique"), 11, rgb(41, 128, 185), underline=True)

        # 2. Text
        print("Adding headings and paragraphs...")
        doc.add_heading("Quarterly Report", HeadingLevel.H1, alignment=TextAlignment.CENTER)
        doc.add_heading("Summary", HeadingLevel.H2, numbered=True, number="1.")
        doc.add_paragraph(
            [
                StyledRun("Revenue grew", bold),
                StyledRun("in every region this quarter, led by", body),
                StyledRun("online sales", accent),
                StyledRun("and a strong holiday season. " * 6, body),
            ],
            alignment=TextAlignment.JUSTIFIED,
        )
        for alignment in (TextAlignment.LEFT, TextAlignment.CENTER, TextAlignment.RIGHT):
            doc.add_paragraph(f"This paragraph is aligned {alignment.value}. " * 4, alignment=alignment)

        # 3. Lists
        print("Adding lists...")
        doc.add_heading("Highlights", HeadingLevel.H2, numbered=True, number="2.")
        doc.add_list(["New office in Lisbon", "Two product launches", "Hiring on plan"])
        doc.add_list(
            [
                ListItem.of("Sales"),
                ListItem.of("Operations", "Logistics", "Support"),
                ListItem.of("Finance"),
            ],
            ordered=True,
        )

        # 4. Table
        print("Adding a table...")
        doc.add_heading("Figures", HeadingLevel.H2, numbered=True, number="3.")
        rows = [["Region", "Q1", "Q2", "Q3", "Q4"]]
        rows += [[f"Region {i}", *(str(100 + i * q) for q in range(1, 5))] for i in range(1, 31)]
        doc.add_table(rows, header_background_color=rgb(220, 230, 241))

        # 5. Image
        print("Adding an image...")
        chart = fonts.load_image_bytes("chart", sample_chart())
        doc.add_image(chart, width=360, alignment=TextAlignment.CENTER, caption="Figure 1. Sales by month")

        doc.add_simple_text("End of report.", font_size=9)

        print(f"Saving {doc.page_count} pages...")
        doc.save(output)

    print(f"PDF saved: {output}")


if __name__ == "__main__":
    main()
