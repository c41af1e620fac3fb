"""
In-memory display-list backend.

Every drawing operation is recorded as a :class:`DrawOp` on the page it
was issued for. The display list is what the PDF writer replays at save
time, and it is what tests inspect to check where content landed.
"""

from __future__ import annotations

import io
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from PIL import Image, UnidentifiedImageError
from reportlab.lib.colors import Color

from ..exceptions import BackendIOError, FontNotRegisteredError, RenderingError
from ..utils.color_utils import BLACK, color_components
from .base import IDENTITY, ContentStream, ImageHandle, Matrix, RenderBackend, multiply
from .fonts import STANDARD_FONT_NAMES, Font, TrueTypeFont, get_standard_font

logger = logging.getLogger(__name__)


@dataclass
class DrawOp:
    """A single recorded drawing operation.

    ``args`` holds plain values; ``payload`` carries objects that are not
    serializable (image handles).
    """

    kind: str
    args: Dict[str, Any] = field(default_factory=dict)
    payload: Any = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        data = {"kind": self.kind}
        for key, value in self.args.items():
            data[key] = list(color_components(value)) if isinstance(value, Color) else value
        return data


@dataclass
class PageHandle:
    """A page of the display list."""

    index: int
    width: float
    height: float
    ops: List[DrawOp] = field(default_factory=list)
    stream_open: bool = False
    stream_count: int = 0

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    def iter_ops(self, kind: Optional[str] = None) -> Iterator[DrawOp]:
        for op in self.ops:
            if kind is None or op.kind == kind:
                yield op

    def iter_text(self) -> Iterator[DrawOp]:
        return self.iter_ops("text")

    def iter_images(self) -> Iterator[DrawOp]:
        return self.iter_ops("image")

    def iter_rects(self) -> Iterator[DrawOp]:
        return self.iter_ops("rect")

    def iter_lines(self) -> Iterator[DrawOp]:
        return self.iter_ops("line")

    def texts(self) -> List[str]:
        return [op.args["text"] for op in self.iter_text()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "width": self.width,
            "height": self.height,
            "ops": [op.to_dict() for op in self.ops],
        }


@dataclass
class _GraphicsState:
    line_width: float = 1.0
    stroke_color: Color = BLACK
    fill_color: Color = BLACK
    ctm: Matrix = IDENTITY


class DisplayListStream(ContentStream):
    """Content stream that appends operations to a page's display list."""

    def __init__(self, page: PageHandle, append: bool = False):
        self.page = page
        self.append = append
        self._closed = False
        self._in_text = False
        self._font: Optional[Font] = None
        self._font_size = 0.0
        self._text_x = 0.0
        self._text_y = 0.0
        self._state = _GraphicsState()
        self._stack: List[_GraphicsState] = []
        self._path: List[Tuple] = []

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise RenderingError("Content stream is closed", f"page {self.page.number}")

    def _record(self, kind: str, payload: Any = None, **args: Any) -> None:
        self.page.ops.append(DrawOp(kind, args, payload))

    # Text

    def begin_text(self) -> None:
        self._check_open()
        if self._in_text:
            raise RenderingError("Nested begin_text is not allowed")
        self._in_text = True
        self._text_x = 0.0
        self._text_y = 0.0

    def end_text(self) -> None:
        self._check_open()
        if not self._in_text:
            raise RenderingError("end_text called outside a text object")
        self._in_text = False

    def set_font(self, font: Font, size: float) -> None:
        self._check_open()
        self._font = font
        self._font_size = size

    def set_non_stroking_color(self, color: Color) -> None:
        self._check_open()
        self._state.fill_color = color

    def new_line_offset(self, x: float, y: float) -> None:
        self._check_open()
        if not self._in_text:
            raise RenderingError("new_line_offset called outside a text object")
        self._text_x = x
        self._text_y = y

    def show_text(self, text: str) -> None:
        self._check_open()
        if not self._in_text:
            raise RenderingError("show_text called outside a text object")
        if self._font is None:
            raise RenderingError("show_text called before set_font")
        width = self._font.string_width(text) / 1000.0 * self._font_size
        self._record(
            "text",
            text=text,
            x=self._text_x,
            y=self._text_y,
            width=width,
            font=self._font.name,
            size=self._font_size,
            color=self._state.fill_color,
        )
        # The text position advances past the shown glyphs.
        self._text_x += width

    # Images and graphics state

    def draw_image(self, image: ImageHandle, x: float, y: float, width: float, height: float,
                   quality: Optional[float] = None) -> None:
        self._check_open()
        if self._in_text:
            raise RenderingError("Images cannot be drawn inside a text object")
        self._record(
            "image",
            payload=image,
            name=image.name,
            x=x,
            y=y,
            width=width,
            height=height,
            quality=quality,
            ctm=list(self._state.ctm),
        )

    def save_graphics_state(self) -> None:
        self._check_open()
        self._stack.append(
            _GraphicsState(
                self._state.line_width,
                self._state.stroke_color,
                self._state.fill_color,
                self._state.ctm,
            )
        )
        self._record("save_state")

    def restore_graphics_state(self) -> None:
        self._check_open()
        if not self._stack:
            raise RenderingError("restore_graphics_state without matching save")
        self._state = self._stack.pop()
        self._record("restore_state")

    def transform(self, matrix: Matrix) -> None:
        self._check_open()
        self._state.ctm = multiply(tuple(matrix), self._state.ctm)
        self._record("transform", matrix=list(matrix))

    # Paths

    def move_to(self, x: float, y: float) -> None:
        self._check_open()
        self._path.append(("move", x, y))

    def line_to(self, x: float, y: float) -> None:
        self._check_open()
        if not self._path:
            raise RenderingError("line_to without a current point")
        self._path.append(("line", x, y))

    def add_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._check_open()
        self._path.append(("rect", x, y, width, height))

    def set_line_width(self, width: float) -> None:
        self._check_open()
        self._state.line_width = width

    def set_stroking_color(self, color: Color) -> None:
        self._check_open()
        self._state.stroke_color = color

    def stroke(self) -> None:
        self._check_open()
        current: Optional[Tuple[float, float]] = None
        for element in self._path:
            if element[0] == "move":
                current = (element[1], element[2])
            elif element[0] == "line":
                x, y = element[1], element[2]
                self._record(
                    "line",
                    x1=current[0],
                    y1=current[1],
                    x2=x,
                    y2=y,
                    line_width=self._state.line_width,
                    color=self._state.stroke_color,
                )
                current = (x, y)
            else:
                _, x, y, w, h = element
                self._record(
                    "rect", x=x, y=y, width=w, height=h, stroke=True, fill=False,
                    line_width=self._state.line_width, color=self._state.stroke_color,
                )
                current = (x, y)
        self._path.clear()

    def fill(self) -> None:
        self._check_open()
        for element in self._path:
            if element[0] == "rect":
                _, x, y, w, h = element
                self._record(
                    "rect", x=x, y=y, width=w, height=h, stroke=False, fill=True,
                    line_width=self._state.line_width, color=self._state.fill_color,
                )
        self._path.clear()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.page.stream_open = False
        if self._in_text:
            self._in_text = False
            raise RenderingError("Content stream closed inside a text object")


class DisplayListBackend(RenderBackend):
    """Backend that keeps every page as a list of drawing operations."""

    def __init__(self) -> None:
        self._pages: List[PageHandle] = []
        self._fonts: Dict[str, Font] = {}
        self._images: List[ImageHandle] = []
        self._closed = False

    @property
    def pages(self) -> List[PageHandle]:
        return self._pages

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise RenderingError("Backend document is closed")

    def add_page(self, width: float, height: float) -> PageHandle:
        self._check_open()
        page = PageHandle(len(self._pages), float(width), float(height))
        self._pages.append(page)
        logger.debug("Added page %d (%.1f x %.1f)", page.number, page.width, page.height)
        return page

    def open_stream(self, page: PageHandle, append: bool = False) -> DisplayListStream:
        self._check_open()
        if page.stream_open:
            raise RenderingError("Page already has an open content stream", f"page {page.number}")
        if page.stream_count and not append:
            raise RenderingError(
                "Page already has content; reopen it in append mode", f"page {page.number}"
            )
        page.stream_open = True
        page.stream_count += 1
        return DisplayListStream(page, append=append)

    def _check_streams_closed(self) -> None:
        still_open = [page.number for page in self._pages if page.stream_open]
        if still_open:
            raise RenderingError("Cannot save with open content streams", f"pages {still_open}")

    # Resources

    def load_image_from_file(self, path: str | Path, name: Optional[str] = None) -> ImageHandle:
        self._check_open()
        path = Path(path)
        try:
            with Image.open(path) as source:
                source.load()
                image = source.copy()
        except (OSError, UnidentifiedImageError) as exc:
            raise BackendIOError(f"Failed to load image {path}", str(exc)) from exc
        handle = ImageHandle(name or path.name, image.width, image.height, image, str(path))
        self._images.append(handle)
        logger.debug("Loaded image %s (%dx%d)", handle.name, handle.width, handle.height)
        return handle

    def load_image_from_bytes(self, data: bytes, name: str) -> ImageHandle:
        self._check_open()
        try:
            with Image.open(io.BytesIO(data)) as source:
                source.load()
                image = source.copy()
        except (OSError, UnidentifiedImageError) as exc:
            raise BackendIOError(f"Failed to decode image {name}", str(exc)) from exc
        handle = ImageHandle(name, image.width, image.height, image)
        self._images.append(handle)
        return handle

    def get_font(self, name: str) -> Font:
        if name in self._fonts:
            return self._fonts[name]
        if name in STANDARD_FONT_NAMES:
            return get_standard_font(name)
        raise FontNotRegisteredError("Font is not registered", name)

    def register_true_type_font(self, name: str, path: str | Path) -> Font:
        self._check_open()
        font = TrueTypeFont(name, path)
        self._fonts[name] = font
        return font

    def to_dict(self) -> Dict[str, Any]:
        return {"pages": [page.to_dict() for page in self._pages]}

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for handle in self._images:
            if handle.image is not None:
                handle.image.close()
        self._images.clear()


class RecordingBackend(DisplayListBackend):
    """Display-list backend whose ``save`` writes the display list as JSON."""

    def save(self, path: str | Path) -> None:
        self._check_open()
        self._check_streams_closed()
        path = Path(path)
        try:
            with open(path, "w", encoding="utf-8") as handle:
                json.dump(self.to_dict(), handle, indent=2)
        except OSError as exc:
            raise BackendIOError(f"Failed to write {path}", str(exc)) from exc
        logger.debug("Wrote display list with %d pages to %s", len(self._pages), path)
