"""Geometry primitives: page sizes, rectangles and the safe area model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from reportlab.lib import pagesizes

from ..exceptions import (
    FooterNotEnabledError,
    GeometryError,
    HeaderNotEnabledError,
    InvalidConfigurationError,
)

POINTS_PER_INCH = 72.0

HEADER_HEIGHT = 40.0
FOOTER_HEIGHT = 40.0


@dataclass(frozen=True, slots=True)
class PageSize:
    """Page dimensions in points (1/72 inch)."""

    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfigurationError(
                "Page size must be positive", f"{self.width}x{self.height}"
            )

    @classmethod
    def from_tuple(cls, value: Iterable[float]) -> "PageSize":
        width, height = value
        return cls(float(width), float(height))

    @property
    def landscape(self) -> "PageSize":
        return PageSize(max(self.width, self.height), min(self.width, self.height))

    def as_tuple(self) -> tuple[float, float]:
        return (self.width, self.height)


A3 = PageSize.from_tuple(pagesizes.A3)
A4 = PageSize.from_tuple(pagesizes.A4)
A5 = PageSize.from_tuple(pagesizes.A5)
LETTER = PageSize.from_tuple(pagesizes.LETTER)
LEGAL = PageSize.from_tuple(pagesizes.LEGAL)

NAMED_PAGE_SIZES = {
    "A3": A3,
    "A4": A4,
    "A5": A5,
    "LETTER": LETTER,
    "LEGAL": LEGAL,
}


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis aligned rectangle, bottom-left origin."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y

    @property
    def top(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float, tolerance: float = 0.0) -> bool:
        """Check if the point lies inside the rectangle or on its border."""
        return (
            self.left - tolerance <= x <= self.right + tolerance
            and self.bottom - tolerance <= y <= self.top + tolerance
        )

    def contains_rect(self, other: "Rect", tolerance: float = 0.0) -> bool:
        return self.contains(other.left, other.bottom, tolerance) and self.contains(
            other.right, other.top, tolerance
        )

    def intersects(self, other: "Rect") -> bool:
        """Check if this rectangle intersects with another rectangle."""
        return not (
            self.right < other.left or
            self.left > other.right or
            self.top < other.bottom or
            self.bottom > other.top
        )


@dataclass(frozen=True, slots=True)
class SafeArea:
    """
    Margins plus optional header/footer bands.

    The area is immutable. ``with_margins`` derives a new area that keeps a
    reference to the one it came from so ``reset`` can restore the original
    margin values.
    """

    margin_left: float = 50.0
    margin_right: float = 50.0
    margin_top: float = 50.0
    margin_bottom: float = 50.0
    has_header: bool = False
    has_footer: bool = False
    _original: Optional["SafeArea"] = field(default=None, repr=False, compare=False)

    header_height = HEADER_HEIGHT
    footer_height = FOOTER_HEIGHT

    def __post_init__(self):
        margins = (self.margin_left, self.margin_right, self.margin_top, self.margin_bottom)
        if any(m < 0 for m in margins):
            raise InvalidConfigurationError("Margins must be non-negative", str(margins))

    @classmethod
    def uniform(cls, value: float, *, has_header: bool = False, has_footer: bool = False) -> "SafeArea":
        return cls(value, value, value, value, has_header, has_footer)

    @property
    def header_band(self) -> float:
        return HEADER_HEIGHT if self.has_header else 0.0

    @property
    def footer_band(self) -> float:
        return FOOTER_HEIGHT if self.has_footer else 0.0

    def content_area(self, page_size: PageSize) -> Rect:
        """Page rectangle minus margins and the enabled bands."""
        if page_size is None:
            raise GeometryError("page_size must not be None")
        width = page_size.width - self.margin_left - self.margin_right
        height = (
            page_size.height
            - self.margin_top
            - self.margin_bottom
            - self.header_band
            - self.footer_band
        )
        if width < 0 or height < 0:
            raise GeometryError(
                "Margins leave no content area",
                f"width={width:.2f}, height={height:.2f}",
            )
        return Rect(self.margin_left, self.margin_bottom + self.footer_band, width, height)

    def header_area(self, page_size: PageSize) -> Rect:
        if page_size is None:
            raise GeometryError("page_size must not be None")
        if not self.has_header:
            raise HeaderNotEnabledError("Header band is not enabled")
        return Rect(
            self.margin_left,
            page_size.height - self.margin_top - HEADER_HEIGHT,
            page_size.width - self.margin_left - self.margin_right,
            HEADER_HEIGHT,
        )

    def footer_area(self, page_size: PageSize) -> Rect:
        if page_size is None:
            raise GeometryError("page_size must not be None")
        if not self.has_footer:
            raise FooterNotEnabledError("Footer band is not enabled")
        return Rect(
            self.margin_left,
            self.margin_bottom,
            page_size.width - self.margin_left - self.margin_right,
            FOOTER_HEIGHT,
        )

    def is_point_in_safe_area(self, x: float, y: float, page_size: PageSize) -> bool:
        return self.content_area(page_size).contains(x, y)

    def with_margins(
        self,
        *,
        left: Optional[float] = None,
        right: Optional[float] = None,
        top: Optional[float] = None,
        bottom: Optional[float] = None,
    ) -> "SafeArea":
        """Derive an area with some margins overridden."""
        return replace(
            self,
            margin_left=self.margin_left if left is None else left,
            margin_right=self.margin_right if right is None else right,
            margin_top=self.margin_top if top is None else top,
            margin_bottom=self.margin_bottom if bottom is None else bottom,
            _original=self.original,
        )

    def with_bands(self, *, header: Optional[bool] = None, footer: Optional[bool] = None) -> "SafeArea":
        """Derive an area with the header and/or footer band toggled.

        The bands carry over to the original area so ``reset`` keeps them.
        """
        has_header = self.has_header if header is None else header
        has_footer = self.has_footer if footer is None else footer
        original = None
        if self._original is not None:
            original = replace(self._original, has_header=has_header, has_footer=has_footer)
        return replace(self, has_header=has_header, has_footer=has_footer, _original=original)

    @property
    def original(self) -> "SafeArea":
        return self._original if self._original is not None else self

    def reset(self) -> "SafeArea":
        """Return the area with the margins it was originally built with."""
        return self.original


def inches_to_points(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    return float(value) * POINTS_PER_INCH


def mm_to_points(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    return float(value) * POINTS_PER_INCH / 25.4
