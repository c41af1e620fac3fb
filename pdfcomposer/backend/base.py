"""
Rendering backend interface.

The layout engine talks to the byte-level writer only through
:class:`RenderBackend` and :class:`ContentStream`. Coordinates are in
points with a bottom-left origin.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple

from reportlab.lib.colors import Color

from .fonts import Font

Matrix = Tuple[float, float, float, float, float, float]
IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def multiply(first: Matrix, second: Matrix) -> Matrix:
    """Concatenate two affine matrices, ``first`` applied before ``second``."""
    a1, b1, c1, d1, e1, f1 = first
    a2, b2, c2, d2, e2, f2 = second
    return (
        a1 * a2 + b1 * c2,
        a1 * b2 + b1 * d2,
        c1 * a2 + d1 * c2,
        c1 * b2 + d1 * d2,
        e1 * a2 + f1 * c2 + e2,
        e1 * b2 + f1 * d2 + f2,
    )


@dataclass
class ImageHandle:
    """Raster image loaded by a backend."""

    name: str
    width: int
    height: int
    image: Any = field(default=None, repr=False, compare=False)
    source: Optional[str] = None

    @property
    def intrinsic_width(self) -> int:
        return self.width

    @property
    def intrinsic_height(self) -> int:
        return self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height else 1.0


class ContentStream(ABC):
    """Drawing surface of a single page."""

    @property
    @abstractmethod
    def closed(self) -> bool: ...

    # Text state machine
    @abstractmethod
    def begin_text(self) -> None: ...

    @abstractmethod
    def end_text(self) -> None: ...

    @abstractmethod
    def set_font(self, font: Font, size: float) -> None: ...

    @abstractmethod
    def set_non_stroking_color(self, color: Color) -> None: ...

    def set_color(self, color: Color) -> None:
        self.set_non_stroking_color(color)

    @abstractmethod
    def new_line_offset(self, x: float, y: float) -> None: ...

    @abstractmethod
    def show_text(self, text: str) -> None: ...

    # Images and graphics state
    @abstractmethod
    def draw_image(self, image: ImageHandle, x: float, y: float, width: float, height: float,
                   quality: Optional[float] = None) -> None: ...

    @abstractmethod
    def save_graphics_state(self) -> None: ...

    @abstractmethod
    def restore_graphics_state(self) -> None: ...

    @abstractmethod
    def transform(self, matrix: Matrix) -> None: ...

    # Paths
    @abstractmethod
    def move_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def line_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def add_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    @abstractmethod
    def stroke(self) -> None: ...

    @abstractmethod
    def fill(self) -> None: ...

    @abstractmethod
    def set_line_width(self, width: float) -> None: ...

    @abstractmethod
    def set_stroking_color(self, color: Color) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    # Convenience built on the primitives above
    def draw_string(self, text: str, x: float, y: float, font: Font, size: float,
                    color: Optional[Color] = None) -> None:
        """Show ``text`` with its baseline starting at (x, y)."""
        self.begin_text()
        try:
            self.set_font(font, size)
            if color is not None:
                self.set_non_stroking_color(color)
            self.new_line_offset(x, y)
            self.show_text(text)
        finally:
            self.end_text()

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, width: float,
                  color: Optional[Color] = None) -> None:
        self.set_line_width(width)
        if color is not None:
            self.set_stroking_color(color)
        self.move_to(x1, y1)
        self.line_to(x2, y2)
        self.stroke()

    def __enter__(self) -> "ContentStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class RenderBackend(ABC):
    """Document-level operations of a rendering backend."""

    @property
    @abstractmethod
    def pages(self) -> List[Any]: ...

    @abstractmethod
    def add_page(self, width: float, height: float) -> Any: ...

    @abstractmethod
    def open_stream(self, page: Any, append: bool = False) -> ContentStream: ...

    def close_stream(self, stream: ContentStream) -> None:
        stream.close()

    @abstractmethod
    def save(self, path: str | Path) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def load_image_from_file(self, path: str | Path, name: Optional[str] = None) -> ImageHandle: ...

    @abstractmethod
    def load_image_from_bytes(self, data: bytes, name: str) -> ImageHandle: ...

    @abstractmethod
    def get_font(self, name: str) -> Font: ...

    @abstractmethod
    def register_true_type_font(self, name: str, path: str | Path) -> Font: ...
