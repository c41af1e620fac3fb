"""
PDF writer backend built on reportlab.

Pages are recorded as display lists while the document is composed and
replayed onto a :class:`reportlab.pdfgen.canvas.Canvas` when the document
is saved. Raster images are downsampled to the configured DPI and
re-encoded as JPEG when their quality is below 1.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..exceptions import BackendIOError, InvalidConfigurationError
from .base import ImageHandle
from .display_list import DisplayListBackend, DrawOp, PageHandle

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72.0


class ReportLabBackend(DisplayListBackend):
    """Backend that writes PDF files through reportlab."""

    def __init__(self, dpi: int = 300, compression_quality: float = 0.7,
                 title: Optional[str] = None, author: Optional[str] = None):
        super().__init__()
        if dpi <= 0:
            raise InvalidConfigurationError("DPI must be greater than zero", str(dpi))
        if not 0.0 <= compression_quality <= 1.0:
            raise InvalidConfigurationError(
                "Compression quality must be between 0 and 1", str(compression_quality)
            )
        self.dpi = dpi
        self.compression_quality = compression_quality
        self.title = title
        self.author = author
        self._prepared: Dict[Tuple[int, int, int, float], ImageReader] = {}

    def save(self, path: str | Path) -> None:
        self._check_open()
        self._check_streams_closed()
        path = Path(path)
        if not self._pages:
            raise BackendIOError("Cannot save a document without pages", str(path))

        first = self._pages[0]
        c = canvas.Canvas(str(path), pagesize=first.size, pageCompression=1)
        if self.title:
            c.setTitle(self.title)
        if self.author:
            c.setAuthor(self.author)

        for page in self._pages:
            c.setPageSize(page.size)
            self._render_page(c, page)
            c.showPage()

        try:
            c.save()
        except OSError as exc:
            raise BackendIOError(f"Failed to write PDF {path}", str(exc)) from exc
        logger.debug("Wrote %d pages to %s", len(self._pages), path)

    def _render_page(self, c: canvas.Canvas, page: PageHandle) -> None:
        for op in page.ops:
            handler = getattr(self, f"_draw_{op.kind}")
            handler(c, op)

    def _draw_text(self, c: canvas.Canvas, op: DrawOp) -> None:
        args = op.args
        c.setFont(args["font"], args["size"])
        c.setFillColor(args["color"])
        c.drawString(args["x"], args["y"], args["text"])

    def _draw_line(self, c: canvas.Canvas, op: DrawOp) -> None:
        args = op.args
        c.setLineWidth(args["line_width"])
        c.setStrokeColor(args["color"])
        c.line(args["x1"], args["y1"], args["x2"], args["y2"])

    def _draw_rect(self, c: canvas.Canvas, op: DrawOp) -> None:
        args = op.args
        c.saveState()
        if args["fill"]:
            c.setFillColor(args["color"])
        else:
            c.setLineWidth(args["line_width"])
            c.setStrokeColor(args["color"])
        c.rect(
            args["x"], args["y"], args["width"], args["height"],
            stroke=1 if args["stroke"] else 0,
            fill=1 if args["fill"] else 0,
        )
        c.restoreState()

    def _draw_image(self, c: canvas.Canvas, op: DrawOp) -> None:
        args = op.args
        reader = self._prepare_image(op.payload, args["width"], args["height"], args["quality"])
        c.drawImage(reader, args["x"], args["y"], width=args["width"], height=args["height"],
                    mask="auto")

    def _draw_save_state(self, c: canvas.Canvas, op: DrawOp) -> None:
        c.saveState()

    def _draw_restore_state(self, c: canvas.Canvas, op: DrawOp) -> None:
        c.restoreState()

    def _draw_transform(self, c: canvas.Canvas, op: DrawOp) -> None:
        c.transform(*op.args["matrix"])

    def _prepare_image(self, handle: ImageHandle, width: float, height: float,
                       quality: Optional[float]) -> ImageReader:
        """Downsample and re-encode ``handle`` for a placement of width x height points."""
        if quality is None:
            quality = self.compression_quality
        target_w = max(1, round(width / POINTS_PER_INCH * self.dpi))
        target_h = max(1, round(height / POINTS_PER_INCH * self.dpi))
        key = (id(handle), target_w, target_h, quality)
        if key in self._prepared:
            return self._prepared[key]

        image = handle.image
        if image is None:
            if handle.source is None:
                raise BackendIOError("Image has no pixel data", handle.name)
            try:
                image = Image.open(handle.source)
                image.load()
            except OSError as exc:
                raise BackendIOError(f"Failed to load image {handle.source}", str(exc)) from exc

        if image.width > target_w or image.height > target_h:
            image = image.resize((min(image.width, target_w), min(image.height, target_h)),
                                 Image.Resampling.LANCZOS)
            logger.debug("Downsampled %s to %dx%d", handle.name, image.width, image.height)

        if quality < 1.0:
            buffer = io.BytesIO()
            image.convert("RGB").save(buffer, format="JPEG", quality=max(1, round(quality * 100)))
            buffer.seek(0)
            image = Image.open(buffer)

        reader = ImageReader(image)
        self._prepared[key] = reader
        return reader

    def close(self) -> None:
        self._prepared.clear()
        super().close()
