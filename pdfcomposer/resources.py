"""Fonts and images owned by a document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from .backend.base import ImageHandle, RenderBackend
from .backend.fonts import Font
from .exceptions import FontNotRegisteredError

logger = logging.getLogger(__name__)

# Registered up front; Symbol and ZapfDingbats stay resolvable on demand.
SEEDED_FONTS = (
    "Helvetica",
    "Helvetica-Bold",
    "Helvetica-Oblique",
    "Helvetica-BoldOblique",
    "Times-Roman",
    "Times-Bold",
    "Times-Italic",
    "Times-BoldItalic",
    "Courier",
    "Courier-Bold",
    "Courier-Oblique",
    "Courier-BoldOblique",
)


class ResourceManager:
    """
    Name-to-handle registry for the fonts and images of one document.

    Handles are bound to the backend the manager was created with.
    """

    def __init__(self, backend: RenderBackend):
        self.backend = backend
        self._fonts: Dict[str, Font] = {name: backend.get_font(name) for name in SEEDED_FONTS}
        self._images: Dict[str, ImageHandle] = {}
        self._default_font_name = "Helvetica"

    @property
    def font_names(self):
        return list(self._fonts)

    @property
    def image_names(self):
        return list(self._images)

    def get_default_font(self) -> Font:
        return self._fonts[self._default_font_name]

    def set_default_font(self, name: str) -> None:
        self.get_font(name)
        self._default_font_name = name
        logger.debug("Default font set to %s", name)

    def has_font(self, name: str) -> bool:
        return name in self._fonts

    def get_font(self, name: str) -> Font:
        """Return the font registered as ``name``.

        Standard PDF fonts that were not seeded are registered on first use.
        """
        font = self._fonts.get(name)
        if font is not None:
            return font
        try:
            font = self.backend.get_font(name)
        except FontNotRegisteredError:
            raise FontNotRegisteredError("Font is not registered", name) from None
        self._fonts[name] = font
        return font

    def register_font(self, name: str, path: str | Path) -> Font:
        font = self.backend.register_true_type_font(name, path)
        self._fonts[name] = font
        logger.debug("Registered font %s from %s", name, path)
        return font

    def load_image(self, name: str, path: str | Path) -> ImageHandle:
        image = self.backend.load_image_from_file(path, name)
        self._images[name] = image
        return image

    def load_image_bytes(self, name: str, data: bytes) -> ImageHandle:
        image = self.backend.load_image_from_bytes(data, name)
        self._images[name] = image
        return image

    def get_image(self, name: str) -> Optional[ImageHandle]:
        return self._images.get(name)

    def has_image(self, name: str) -> bool:
        return name in self._images

    def remove_image(self, name: str) -> Optional[ImageHandle]:
        return self._images.pop(name, None)
