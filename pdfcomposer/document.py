"""
Document engine.

:class:`Document` owns the backend, the pages and the cursor. Each block
append measures the block, turns the page when it would cross the bottom
of the content area, renders it and moves the cursor below it. Headers,
footers and the logo are repeated on every page; page numbers are drawn
when the document is saved, once the page count is final.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from reportlab.lib.colors import Color

from .backend.base import ContentStream, ImageHandle, RenderBackend
from .backend.display_list import PageHandle
from .backend.fonts import Font
from .backend.reportlab_backend import ReportLabBackend
from .configuration import PDFConfiguration
from .engine.cursor import Cursor
from .engine.geometry import PageSize, Rect, SafeArea
from .engine.text_metrics import text_width
from .exceptions import (
    BackendIOError,
    InvalidConfigurationError,
    MissingRequiredFieldError,
    RenderingError,
)
from .layout.logo import Logo, LogoStyle
from .layout.page_numbering import PageNumbering
from .layout.page_section import PageSection
from .renderers.base import Block
from .renderers.heading import Heading
from .renderers.image import ImageBlock
from .renderers.list_block import ListBlock, ListItem
from .renderers.paragraph import Paragraph
from .renderers.simple_text import SimpleText
from .renderers.table import Table
from .resources import ResourceManager
from .styles.text_style import HeadingLevel, StyledRun, TextAlignment, TextStyle
from .utils.color_utils import BLACK

logger = logging.getLogger(__name__)

EPSILON = 1e-6

PageNumberJob = Callable[[ContentStream, int, int], None]


class Document:
    """
    A paginated document under construction.

    Block-append methods return the document so calls can be chained::

        with Document() as doc:
            doc.add_heading("Report").add_paragraph("Body text").save("out.pdf")
    """

    def __init__(self, configuration: Optional[PDFConfiguration] = None,
                 backend: Optional[RenderBackend] = None):
        self._configuration = configuration or PDFConfiguration()
        self._backend = backend or ReportLabBackend(
            dpi=self._configuration.dpi,
            compression_quality=self._configuration.compression_quality,
        )
        self._resources = ResourceManager(self._backend)
        self._safe_area: SafeArea = self._configuration.safe_area
        self._font_size = self._configuration.font_size
        self._line_spacing = self._configuration.line_spacing

        self._header: Optional[PageSection] = None
        self._footer: Optional[PageSection] = None
        self._page_numbering: Optional[PageNumbering] = None
        self._logo: Optional[Logo] = None

        self._pages: List[PageHandle] = []
        self._stream: Optional[ContentStream] = None
        self._page_number_jobs: List[Tuple[PageHandle, PageNumberJob]] = []
        self._page_top_y = 0.0
        self._numbered_header_drawn = False
        self._saved = False
        self._closed = False

        self._open_page()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def configuration(self) -> PDFConfiguration:
        return self._configuration

    @property
    def page_size(self) -> PageSize:
        return self._configuration.page_size

    @property
    def safe_area(self) -> SafeArea:
        return self._safe_area

    @property
    def content_area(self) -> Rect:
        return self._safe_area.content_area(self.page_size)

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    @property
    def pages(self) -> List[PageHandle]:
        return list(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def current_page(self) -> PageHandle:
        return self._pages[-1]

    @property
    def resources(self) -> ResourceManager:
        return self._resources

    @property
    def backend(self) -> RenderBackend:
        return self._backend

    @property
    def font_size(self) -> float:
        return self._font_size

    @property
    def line_spacing(self) -> float:
        return self._line_spacing

    @property
    def header(self) -> Optional[PageSection]:
        return self._header

    @property
    def footer(self) -> Optional[PageSection]:
        return self._footer

    @property
    def page_numbering(self) -> Optional[PageNumbering]:
        return self._page_numbering

    @property
    def logo(self) -> Optional[Logo]:
        return self._logo

    # ------------------------------------------------------------------
    # Page lifecycle
    # ------------------------------------------------------------------
    def _open_page(self) -> None:
        self._safe_area = self._safe_area.reset()
        width, height = self.page_size.as_tuple()
        page = self._backend.add_page(width, height)
        self._pages.append(page)
        self._stream = self._backend.open_stream(page)
        self._cursor = Cursor.top_of_content(self.page_size, self._safe_area)
        self._numbered_header_drawn = False
        self._render_header()
        self._render_logo()
        self._page_top_y = self._cursor.y
        logger.debug("Opened page %d", page.number)

    def _close_page(self) -> None:
        if self._stream is None:
            return
        stream = self._stream
        self._stream = None
        try:
            self._render_footer(stream)
            self._schedule_page_number(self.current_page)
        finally:
            self._backend.close_stream(stream)

    def _turn_page(self) -> None:
        self._close_page()
        self._open_page()

    def add_new_page(self) -> "Document":
        self._check_writable()
        self._guarded(self._turn_page)
        return self

    def check_new_page(self, needed_height: float) -> bool:
        """Turn the page if ``needed_height`` does not fit below the cursor."""
        if self._cursor.y - needed_height < self.content_area.bottom - EPSILON:
            self._guarded(self._turn_page)
            return True
        return False

    def _at_page_top(self) -> bool:
        return self._cursor.y >= self._page_top_y - EPSILON

    def _check_writable(self) -> None:
        if self._closed:
            raise RenderingError("Document is closed")
        if self._saved:
            raise RenderingError("Document has already been saved")

    def _guarded(self, action: Callable, *args):
        """Run a backend-facing action, wrapping backend failures."""
        try:
            return action(*args)
        except (BackendIOError, OSError) as exc:
            raise RenderingError("Backend failure while rendering", str(exc)) from exc

    # ------------------------------------------------------------------
    # Chrome
    # ------------------------------------------------------------------
    def _header_baseline(self, section: PageSection) -> float:
        return self._safe_area.header_area(self.page_size).top - section.font_size

    def _footer_baseline(self) -> float:
        return self._safe_area.margin_bottom

    def _render_header(self) -> None:
        if self._header is None or self._stream is None:
            return
        self._header.render(
            self._stream,
            self.page_size.width,
            self._header_baseline(self._header),
            self._safe_area.margin_left,
            self._safe_area.margin_right,
        )
        # Only a header drawn without its right text can take the number later.
        self._numbered_header_drawn = self._header.has_page_numbering

    def _render_footer(self, stream: ContentStream) -> None:
        if self._footer is None:
            return
        self._footer.render(
            stream,
            self.page_size.width,
            self._footer_baseline(),
            self._safe_area.margin_left,
            self._safe_area.margin_right,
        )

    def _render_logo(self) -> None:
        if self._logo is None or self._stream is None:
            return
        self._logo.render(
            self._stream,
            self.page_size.width,
            self._cursor.y,
            self._safe_area.margin_left,
            self._safe_area.margin_right,
        )
        self._cursor = self._cursor.move_by(0, -self._logo.total_height)

    def _schedule_page_number(self, page: PageHandle) -> None:
        page_width = self.page_size.width
        page_height = self.page_size.height
        margin_right = self._safe_area.margin_right

        if self._footer is not None and self._footer.has_page_numbering:
            section, y = self._footer, self._footer_baseline()
        elif (self._header is not None and self._header.has_page_numbering
              and self._numbered_header_drawn):
            section, y = self._header, self._header_baseline(self._header)
        elif self._page_numbering is not None:
            numbering = self._page_numbering

            def draw_standalone(stream: ContentStream, number: int, total: int) -> None:
                numbering.render(stream, page_width, page_height, number, total)

            self._page_number_jobs.append((page, draw_standalone))
            return
        else:
            return

        def draw_in_section(stream: ContentStream, number: int, total: int) -> None:
            section.render_page_number(stream, page_width, y, margin_right, number, total)

        self._page_number_jobs.append((page, draw_in_section))

    def _draw_page_numbers(self) -> None:
        total = len(self._pages)
        for page, job in self._page_number_jobs:
            with self._backend.open_stream(page, append=True) as stream:
                job(stream, page.number, total)
        self._page_number_jobs.clear()

    def _enable_band(self, header: Optional[bool] = None, footer: Optional[bool] = None) -> None:
        updated = self._safe_area.with_bands(header=header, footer=footer)
        if updated == self._safe_area:
            return
        logger.warning("Enabling %s band; the content area shrinks by its height",
                       "header" if header else "footer")
        self._safe_area = updated
        top = updated.content_area(self.page_size).top
        self._cursor = Cursor(self._cursor.x, min(self._cursor.y, top), self.page_size, updated)
        self._page_top_y = min(self._page_top_y, top)

    def set_header(self, header: Optional[PageSection]) -> "Document":
        """Use ``header`` on this and every following page."""
        self._check_writable()
        self._header = header
        if header is not None:
            self._enable_band(header=True)
            if self._page_numbering is not None:
                self._place_page_numbering()
            self._guarded(self._render_header)
        return self

    def set_footer(self, footer: Optional[PageSection]) -> "Document":
        """Use ``footer`` on this and every following page; it is drawn when the page closes."""
        self._check_writable()
        self._footer = footer
        if footer is not None:
            self._enable_band(footer=True)
        if self._page_numbering is not None:
            self._place_page_numbering()
        return self

    def set_page_numbering(self, numbering: Optional[PageNumbering]) -> "Document":
        """
        Number the pages.

        The numbering goes into the footer when there is one, else into the
        header; without either it is drawn standalone at its own position.
        Headers and footers set later pick it up as well.
        """
        self._check_writable()
        self._page_numbering = numbering
        self._place_page_numbering()
        return self

    def _place_page_numbering(self) -> None:
        numbering = self._page_numbering
        if self._footer is not None:
            self._footer = self._footer.with_page_numbering(numbering)
            if self._header is not None and self._header.has_page_numbering:
                self._header = self._header.with_page_numbering(None)
        elif self._header is not None:
            self._header = self._header.with_page_numbering(numbering)

    def set_logo(self, logo: Union[Logo, str], style: Optional[LogoStyle] = None,
                 left_image_path: Optional[Union[str, Path]] = None,
                 right_image_path: Optional[Union[str, Path]] = None) -> "Document":
        """Show a logo band at the cursor now and at the top of every new page."""
        self._check_writable()
        if not isinstance(logo, Logo):
            left = self._resources.load_image("logo-left", left_image_path) if left_image_path else None
            right = self._resources.load_image("logo-right", right_image_path) if right_image_path else None
            logo = Logo(str(logo), style or LogoStyle(), left, right)
        self._logo = logo

        at_top = self._at_page_top()
        self._guarded(self._render_logo)
        if at_top:
            self._page_top_y = self._cursor.y
        return self

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def set_font_size(self, font_size: float) -> "Document":
        if font_size <= 0:
            raise InvalidConfigurationError("Font size must be greater than zero", str(font_size))
        self._font_size = font_size
        return self

    def set_line_spacing(self, line_spacing: float) -> "Document":
        if line_spacing <= 0:
            raise InvalidConfigurationError("Line spacing must be greater than zero",
                                            str(line_spacing))
        self._line_spacing = line_spacing
        return self

    def set_margins(self, left: Optional[float] = None, right: Optional[float] = None,
                    top: Optional[float] = None, bottom: Optional[float] = None) -> "Document":
        """Override margins for the current page only; the next page starts from the original ones."""
        area = self._safe_area.with_margins(left=left, right=right, top=top, bottom=bottom)
        area.content_area(self.page_size)
        self._safe_area = area
        self._cursor = Cursor(self._cursor.x, self._cursor.y, self.page_size, area).ensure_in_safe_area()
        return self

    def with_configuration(self, configuration: PDFConfiguration,
                           backend: Optional[RenderBackend] = None) -> "Document":
        """Return a new document built with ``configuration``."""
        return Document(configuration, backend)

    def with_page_size(self, page_size: PageSize,
                       backend: Optional[RenderBackend] = None) -> "Document":
        return Document(self._configuration.with_page_size(page_size), backend)

    def load_image(self, name: str, path: Union[str, Path]) -> ImageHandle:
        return self._resources.load_image(name, path)

    # ------------------------------------------------------------------
    # Cursor moves
    # ------------------------------------------------------------------
    def _set_cursor(self, cursor: Cursor) -> "Document":
        self._cursor = cursor
        return self

    def move_to(self, x: float, y: float) -> "Document":
        return self._set_cursor(self._cursor.move_to(x, y))

    def move_by(self, delta_x: float, delta_y: float) -> "Document":
        return self._set_cursor(self._cursor.move_by(delta_x, delta_y))

    def move_right(self, distance: float) -> "Document":
        return self.move_by(distance, 0)

    def move_down(self, distance: float) -> "Document":
        return self.move_by(0, -distance)

    def move_to_content_percent(self, percent_x: float, percent_y: float) -> "Document":
        return self._set_cursor(self._cursor.move_to_content_percent(percent_x, percent_y))

    def move_to_header(self, percent_x: float, percent_y: float) -> "Document":
        return self._set_cursor(self._cursor.move_to_header(percent_x, percent_y))

    def move_to_footer(self, percent_x: float, percent_y: float) -> "Document":
        return self._set_cursor(self._cursor.move_to_footer(percent_x, percent_y))

    def move_to_top(self) -> "Document":
        return self._set_cursor(self._cursor.move_to_top())

    def move_to_start(self) -> "Document":
        return self._set_cursor(self._cursor.move_to_start())

    def move_to_bottom(self) -> "Document":
        return self._set_cursor(self._cursor.move_to_bottom())

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------
    def add_block(self, block: Block) -> "Document":
        """Place ``block`` at the cursor, turning or splitting pages as needed."""
        self._check_writable()
        remaining: Optional[Block] = block

        while remaining is not None:
            area = self.content_area
            x = self._cursor.x
            width = area.right - x
            height = remaining.required_height(width)
            available = self._cursor.y - area.bottom

            if height <= available + EPSILON:
                self._render_block(remaining, x, width)
                return self

            at_top = self._at_page_top()
            capacity = self._page_top_y - area.bottom
            if not at_top and height <= capacity + EPSILON:
                self._guarded(self._turn_page)
                continue

            parts = remaining.split(width, available)
            if parts is not None:
                head, remaining = parts
                self._render_block(head, x, width, spacing=False)
                self._guarded(self._turn_page)
                continue

            if at_top:
                logger.warning(
                    "%s is %.1f pt tall but only %.1f pt are available; rendering it anyway",
                    type(remaining).__name__, height, available,
                )
                self._render_block(remaining, x, width)
                return self

            self._guarded(self._turn_page)
        return self

    def _render_block(self, block: Block, x: float, width: float, spacing: bool = True) -> None:
        new_y = self._guarded(block.render, self._stream, x, self._cursor.y, width)
        if spacing:
            new_y -= block.spacing_after_block
        self._cursor = self._cursor.move_to(x, new_y)
        logger.debug("Rendered %s on page %d, cursor at %.2f",
                     type(block).__name__, self.page_count, new_y)

    def add_heading(self, heading: Union[Heading, str], level: HeadingLevel = HeadingLevel.H1,
                    **options) -> "Document":
        if not isinstance(heading, Heading):
            heading = Heading(heading, level, **options)
        return self.add_block(heading)

    def add_paragraph(self, paragraph: Union[Paragraph, str, Sequence[StyledRun]],
                      alignment: TextAlignment = TextAlignment.LEFT,
                      style: Optional[TextStyle] = None, line_spacing: float = 1.2) -> "Document":
        if isinstance(paragraph, str):
            style = style or TextStyle(self._resources.get_default_font(), self._font_size)
            paragraph = Paragraph.from_text(paragraph, style, alignment=alignment,
                                            line_spacing=line_spacing)
        elif not isinstance(paragraph, Paragraph):
            paragraph = Paragraph.from_runs(paragraph, alignment=alignment,
                                            line_spacing=line_spacing)
        return self.add_block(paragraph)

    def add_simple_text(self, text: Union[SimpleText, str], font: Optional[Font] = None,
                        font_size: Optional[float] = None, **options) -> "Document":
        if not isinstance(text, SimpleText):
            text = SimpleText(text, font or self._resources.get_default_font(),
                              font_size or self._font_size, **options)
        return self.add_block(text)

    def add_list(self, items: Union[ListBlock, Iterable[Union[ListItem, str]]],
                 ordered: bool = False, **options) -> "Document":
        if not isinstance(items, ListBlock):
            options.setdefault("font", self._resources.get_default_font())
            options.setdefault("font_size", self._font_size)
            items = ListBlock(list(items), ordered=ordered, **options)
        return self.add_block(items)

    def add_table(self, table: Union[Table, Sequence[Sequence[str]]],
                  column_widths: Optional[Sequence[float]] = None, **options) -> "Document":
        if not isinstance(table, Table):
            if column_widths is None:
                columns = max((len(row) for row in table), default=1) or 1
                column_widths = [self.content_area.width / columns] * columns
            table = Table([list(row) for row in table], list(column_widths), **options)
        return self.add_block(table)

    def add_image(self, image: Union[ImageBlock, ImageHandle, str, Path], **options) -> "Document":
        if isinstance(image, (str, Path)):
            path = Path(image)
            image = self._resources.get_image(str(image)) or self._resources.load_image(str(image), path)
        if isinstance(image, ImageHandle):
            image = ImageBlock(image, **options)
        return self.add_block(image)

    def add_text(self, text: str, color: Color = BLACK) -> "Document":
        """Draw ``text`` with its baseline at the cursor without moving it."""
        self._check_writable()
        if text is None:
            raise MissingRequiredFieldError("Text must not be None")
        font = self._resources.get_default_font()
        self._guarded(self._stream.draw_string, text, self._cursor.x, self._cursor.y,
                      font, self._font_size, color)
        return self

    def add_line(self, text: str, color: Color = BLACK) -> "Document":
        """Draw ``text`` at the cursor, then move to the start of the next line."""
        self.add_text(text, color)
        font = self._resources.get_default_font()
        step = font.bounding_box_height() / 1000.0 * self._font_size * self._line_spacing
        self._cursor = self._cursor.move_by(0, -step).move_to_start()
        return self

    def text_width(self, text: str, font_size: Optional[float] = None) -> float:
        return text_width(text, self._resources.get_default_font(), font_size or self._font_size)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def save(self, path: Union[str, Path]) -> None:
        """Finish the last page, draw page numbers and write the document."""
        if self._closed:
            raise RenderingError("Document is closed")
        if not self._saved:
            self._guarded(self._close_page)
            self._guarded(self._draw_page_numbers)
            self._saved = True
        self._backend.save(path)
        logger.info("Saved %d pages to %s", self.page_count, path)

    def close(self) -> None:
        """Release backend resources; safe to call more than once and after failures."""
        if self._closed:
            return
        self._closed = True
        if self._stream is not None:
            try:
                self._close_page()
            except Exception as exc:
                logger.warning("Failed to finish page while closing: %s", exc)
            self._stream = None
        try:
            self._backend.close()
        except Exception as exc:
            logger.warning("Failed to close backend: %s", exc)

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
