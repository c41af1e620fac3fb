"""Immutable insertion point bound to a page and its safe area."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..exceptions import InvalidMoveError, InvalidPercentError
from .geometry import PageSize, Rect, SafeArea

logger = logging.getLogger(__name__)


def _check_percent(percent_x: float, percent_y: float) -> None:
    if not (0 <= percent_x <= 100 and 0 <= percent_y <= 100):
        raise InvalidPercentError(
            "Percentages must be between 0 and 100", f"({percent_x}, {percent_y})"
        )


@dataclass(frozen=True, slots=True)
class Cursor:
    """
    (x, y) position on the current page.

    Every move returns a new cursor; the page size and safe area are carried
    along unchanged so the cursor always refers to the page it was created
    for.
    """

    x: float
    y: float
    page_size: PageSize
    safe_area: SafeArea

    @classmethod
    def origin(cls, page_size: PageSize, safe_area: SafeArea) -> "Cursor":
        return cls(0.0, 0.0, page_size, safe_area)

    @classmethod
    def top_of_content(cls, page_size: PageSize, safe_area: SafeArea) -> "Cursor":
        area = safe_area.content_area(page_size)
        return cls(area.left, area.top, page_size, safe_area)

    @property
    def content_area(self) -> Rect:
        return self.safe_area.content_area(self.page_size)

    def move_to(self, x: float, y: float) -> "Cursor":
        return Cursor(x, y, self.page_size, self.safe_area)

    def move_by(self, delta_x: float, delta_y: float) -> "Cursor":
        return Cursor(self.x + delta_x, self.y + delta_y, self.page_size, self.safe_area)

    def _move_to_percent_of(self, area: Rect, percent_x: float, percent_y: float) -> "Cursor":
        return Cursor(
            area.left + area.width * percent_x / 100,
            area.bottom + area.height * percent_y / 100,
            self.page_size,
            self.safe_area,
        )

    def move_to_content_percent(self, percent_x: float, percent_y: float) -> "Cursor":
        _check_percent(percent_x, percent_y)
        return self._move_to_percent_of(self.content_area, percent_x, percent_y)

    def move_to_header(self, percent_x: float, percent_y: float) -> "Cursor":
        _check_percent(percent_x, percent_y)
        if not self.safe_area.has_header:
            raise InvalidMoveError("Header area is not enabled")
        return self._move_to_percent_of(
            self.safe_area.header_area(self.page_size), percent_x, percent_y
        )

    def move_to_footer(self, percent_x: float, percent_y: float) -> "Cursor":
        _check_percent(percent_x, percent_y)
        if not self.safe_area.has_footer:
            raise InvalidMoveError("Footer area is not enabled")
        return self._move_to_percent_of(
            self.safe_area.footer_area(self.page_size), percent_x, percent_y
        )

    def move_to_top(self) -> "Cursor":
        return Cursor(self.x, self.content_area.top, self.page_size, self.safe_area)

    def move_to_bottom(self) -> "Cursor":
        return Cursor(self.x, self.content_area.bottom, self.page_size, self.safe_area)

    def move_to_start(self) -> "Cursor":
        return Cursor(self.content_area.left, self.y, self.page_size, self.safe_area)

    def is_in_safe_area(self) -> bool:
        return self.safe_area.is_point_in_safe_area(self.x, self.y, self.page_size)

    def ensure_in_safe_area(self) -> "Cursor":
        """Clamp each axis independently into the content rectangle."""
        if self.is_in_safe_area():
            return self

        area = self.content_area
        new_x = min(max(self.x, area.left), area.right)
        new_y = min(max(self.y, area.bottom), area.top)

        logger.debug(
            "Clamping cursor from (%.2f, %.2f) to (%.2f, %.2f)", self.x, self.y, new_x, new_y
        )
        return Cursor(new_x, new_y, self.page_size, self.safe_area)
