"""Block renderers placed by the document engine."""

from .base import Block
from .heading import Heading
from .image import ImageBlock, rotation_matrix
from .list_block import ListBlock, ListItem
from .paragraph import Paragraph
from .simple_text import SimpleText
from .table import Table

__all__ = [
    "Block",
    "Heading",
    "ImageBlock",
    "ListBlock",
    "ListItem",
    "Paragraph",
    "SimpleText",
    "Table",
    "rotation_matrix",
]
