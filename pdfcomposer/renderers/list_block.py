"""Renderer for numbered and bulleted lists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.colors import Color

from ..backend.base import ContentStream
from ..backend.fonts import Font
from ..engine.line_breaker import Line, LineBreaker
from ..engine.text_metrics import run_width, style_space_width
from ..exceptions import FontMissingError, InvalidConfigurationError, ListEmptyError
from ..styles.text_style import StyledRun, TextStyle
from ..utils.color_utils import BLACK
from .base import Block

logger = logging.getLogger(__name__)

DEFAULT_BULLET = "•"


@dataclass
class ListItem:
    """
    One entry of a list.

    Either ``runs`` or plain ``text`` is given; plain text takes the list's
    font, size and color. ``number`` overrides the generated label of an
    ordered list (e.g. ``"1.2."``).
    """

    text: Optional[str] = None
    runs: List[StyledRun] = field(default_factory=list)
    number: Optional[str] = None
    children: List["ListItem"] = field(default_factory=list)

    @classmethod
    def of(cls, text: str, *children: "ListItem | str", number: Optional[str] = None) -> "ListItem":
        return cls(text=text, number=number,
                   children=[c if isinstance(c, ListItem) else cls(text=c) for c in children])

    def add_child(self, item: "ListItem | str") -> "ListItem":
        self.children.append(item if isinstance(item, ListItem) else ListItem(text=item))
        return self

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def styled_runs(self, default_style: TextStyle) -> List[StyledRun]:
        if self.runs:
            return list(self.runs)
        return [StyledRun(self.text or "", default_style)]


def _check_tree(items: Sequence[ListItem], seen: set) -> None:
    for item in items:
        if id(item) in seen:
            raise InvalidConfigurationError("List items must form a tree", repr(item.text))
        seen.add(id(item))
        _check_tree(item.children, seen)


@dataclass
class ListBlock(Block):
    """
    Ordered or bulleted list with nested sub-lists.

    For an item at ``level`` rendered from ``x`` the marker sits at
    ``x + indentation * level`` and the text ``bullet_spacing`` further
    right. Sub-lists restart at the outer ``x`` with ``level + 1`` and
    number their items from one. ``start`` offsets ordered numbering for
    lists continued on another page.
    """

    items: List[ListItem] = field(default_factory=list)
    ordered: bool = False
    font: Optional[Font] = None
    font_size: float = 12.0
    text_color: Color = field(default=BLACK)
    indentation: float = 20.0
    line_spacing: float = 5.0
    bullet: str = DEFAULT_BULLET
    bullet_spacing: float = 10.0
    level: int = 1
    start: int = 0

    spacing_after_block = 20.0

    def __post_init__(self):
        self.items = [i if isinstance(i, ListItem) else ListItem(text=i) for i in self.items]
        if self.font is None:
            raise FontMissingError("List requires a font")
        if not self.items:
            raise ListEmptyError("List must have at least one item")
        if self.level < 1:
            raise InvalidConfigurationError("List level must be at least 1", str(self.level))
        if self.font_size <= 0:
            raise InvalidConfigurationError("Font size must be greater than zero",
                                            str(self.font_size))
        if self.level == 1:
            _check_tree(self.items, set())

    @classmethod
    def from_strings(cls, texts: Sequence[str], **kwargs) -> "ListBlock":
        return cls([ListItem(text=t) for t in texts], **kwargs)

    @property
    def default_style(self) -> TextStyle:
        return TextStyle(self.font, self.font_size, self.text_color)

    @property
    def line_step(self) -> float:
        return self.font_size + self.line_spacing

    @property
    def bullet_offset(self) -> float:
        return self.indentation * self.level

    def marker(self, index: int, item: ListItem) -> str:
        """Label for the item at 1-based ``index`` within this list."""
        if not self.ordered:
            return self.bullet
        if item.number is not None:
            return item.number
        return f"{self.start + index}."

    def text_width(self, available_width: float) -> float:
        return available_width - self.bullet_offset - self.bullet_spacing

    def _wrap(self, item: ListItem, available_width: float) -> List[Line]:
        runs = item.styled_runs(self.default_style)
        return LineBreaker().break_runs(runs, self.text_width(available_width))

    def _sublist(self, item: ListItem) -> "ListBlock":
        return replace(self, items=item.children, level=self.level + 1, start=0)

    def item_height(self, item: ListItem, available_width: float) -> float:
        height = max(1, len(self._wrap(item, available_width))) * self.line_step
        if item.has_children:
            height += self._sublist(item).calculate_height(available_width)
        return height

    def calculate_height(self, max_width: float) -> float:
        return sum(self.item_height(item, max_width) for item in self.items)

    def split(self, max_width: float, available_height: float) -> Optional[Tuple["ListBlock", "ListBlock"]]:
        used = 0.0
        count = 0
        for item in self.items:
            height = self.item_height(item, max_width)
            if used + height > available_height:
                break
            used += height
            count += 1
        if count == 0 or count == len(self.items):
            return None
        head = replace(self, items=self.items[:count])
        tail = replace(self, items=self.items[count:], start=self.start + count)
        return head, tail

    def render(self, stream: ContentStream, x: float, y: float, max_width: float) -> float:
        bullet_x = x + self.bullet_offset
        text_x = bullet_x + self.bullet_spacing
        current_y = y

        for index, item in enumerate(self.items, start=1):
            baseline = current_y - self.font_size
            stream.draw_string(self.marker(index, item), bullet_x, baseline, self.font,
                               self.font_size, self.text_color)

            lines = self._wrap(item, max_width)
            for line in lines:
                self._draw_line(stream, line, text_x, baseline)
                baseline -= self.line_step
            current_y -= max(1, len(lines)) * self.line_step

            if item.has_children:
                current_y = self._sublist(item).render(stream, x, current_y, max_width)

        logger.debug("Rendered level-%d list with %d items", self.level, len(self.items))
        return current_y

    @staticmethod
    def _draw_line(stream: ContentStream, line: Line, x: float, baseline: float) -> None:
        current_x = x
        for run in line.runs:
            style = run.style
            stream.draw_string(run.text, current_x, baseline, style.font, style.font_size,
                               style.color)
            current_x += run_width(run) + style_space_width(style)
