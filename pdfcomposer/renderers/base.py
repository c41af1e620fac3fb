"""Base classes and interfaces for block renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from ..backend.base import ContentStream


class Block(ABC):
    """
    A content element that the document engine places on pages.

    Blocks measure themselves before rendering so the engine can decide
    whether a page turn is needed, then draw at the given top-left corner
    and return the Y where the next block starts.
    """

    #: Extra vertical gap the document leaves after the block.
    spacing_after_block: float = 0.0

    @abstractmethod
    def calculate_height(self, max_width: float) -> float:
        """Height the block occupies when set in ``max_width`` points."""

    def required_height(self, max_width: float) -> float:
        """Height the engine paginates on; defaults to :meth:`calculate_height`."""
        return self.calculate_height(max_width)

    @abstractmethod
    def render(self, stream: ContentStream, x: float, y: float, max_width: float) -> float:
        """Draw the block with its top edge at ``y`` and return the new Y."""

    def split(self, max_width: float, available_height: float) -> Optional[Tuple["Block", "Block"]]:
        """Split into a part fitting ``available_height`` and the remainder.

        Returns ``None`` when the block cannot be split.
        """
        return None
