"""
Document configuration.

``PDFConfiguration`` bundles the page geometry and output settings a
:class:`~pdfcomposer.document.Document` is built with. It is immutable;
the ``with_*`` methods return modified copies and every copy is
validated on construction.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from .engine.geometry import A4, NAMED_PAGE_SIZES, PageSize, SafeArea
from .exceptions import GeometryError, InvalidConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DPI = 300
DEFAULT_COMPRESSION_QUALITY = 0.7
DEFAULT_FONT_SIZE = 12.0
DEFAULT_LINE_SPACING = 1.5


@dataclass(frozen=True)
class PDFConfiguration:
    """Page size, safe area and output settings."""

    page_size: PageSize = A4
    safe_area: SafeArea = field(default_factory=SafeArea)
    dpi: int = DEFAULT_DPI
    compression_quality: float = DEFAULT_COMPRESSION_QUALITY
    font_size: float = DEFAULT_FONT_SIZE
    line_spacing: float = DEFAULT_LINE_SPACING

    def __post_init__(self):
        if self.page_size is None:
            raise InvalidConfigurationError("Page size must not be None")
        if self.safe_area is None:
            raise InvalidConfigurationError("Safe area must not be None")
        if self.dpi <= 0:
            raise InvalidConfigurationError("DPI must be greater than zero", str(self.dpi))
        if not 0.0 <= self.compression_quality <= 1.0:
            raise InvalidConfigurationError(
                "Compression quality must be between 0 and 1", str(self.compression_quality)
            )
        if self.font_size <= 0:
            raise InvalidConfigurationError("Font size must be greater than zero",
                                            str(self.font_size))
        if self.line_spacing <= 0:
            raise InvalidConfigurationError("Line spacing must be greater than zero",
                                            str(self.line_spacing))
        try:
            self.safe_area.content_area(self.page_size)
        except GeometryError as exc:
            raise InvalidConfigurationError("Margins do not fit the page", str(exc)) from exc

    @property
    def content_area(self):
        return self.safe_area.content_area(self.page_size)

    def with_page_size(self, page_size: PageSize) -> "PDFConfiguration":
        return replace(self, page_size=page_size)

    def with_safe_area(self, safe_area: SafeArea) -> "PDFConfiguration":
        return replace(self, safe_area=safe_area)

    def with_dpi(self, dpi: int) -> "PDFConfiguration":
        return replace(self, dpi=dpi)

    def with_compression_quality(self, quality: float) -> "PDFConfiguration":
        return replace(self, compression_quality=quality)

    def with_font_size(self, font_size: float) -> "PDFConfiguration":
        return replace(self, font_size=font_size)

    def with_line_spacing(self, line_spacing: float) -> "PDFConfiguration":
        return replace(self, line_spacing=line_spacing)

    def with_margins(self, left: float, right: float, top: float, bottom: float) -> "PDFConfiguration":
        return replace(self, safe_area=self.safe_area.with_margins(
            left=left, right=right, top=top, bottom=bottom))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PDFConfiguration":
        """
        Build a configuration from plain values.

        Recognized keys: ``page_size`` (a name such as ``"A4"`` or a
        ``[width, height]`` pair), ``landscape``, ``margins`` (a single
        number or ``[left, right, top, bottom]``), ``header``, ``footer``,
        ``dpi``, ``compression_quality``, ``font_size`` and ``line_spacing``.
        """
        known = {"page_size", "landscape", "margins", "header", "footer", "dpi",
                 "compression_quality", "font_size", "line_spacing"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfigurationError("Unknown configuration keys", ", ".join(unknown))

        page_size = _parse_page_size(data.get("page_size", "A4"))
        if data.get("landscape"):
            page_size = page_size.landscape

        safe_area = _parse_margins(data.get("margins"))
        safe_area = safe_area.with_bands(header=bool(data.get("header", False)),
                                         footer=bool(data.get("footer", False)))

        try:
            return cls(
                page_size=page_size,
                safe_area=safe_area,
                dpi=int(data.get("dpi", DEFAULT_DPI)),
                compression_quality=float(data.get("compression_quality",
                                                   DEFAULT_COMPRESSION_QUALITY)),
                font_size=float(data.get("font_size", DEFAULT_FONT_SIZE)),
                line_spacing=float(data.get("line_spacing", DEFAULT_LINE_SPACING)),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationError("Invalid configuration value", str(exc)) from exc

    def to_dict(self) -> dict:
        area = self.safe_area
        return {
            "page_size": [self.page_size.width, self.page_size.height],
            "margins": [area.margin_left, area.margin_right, area.margin_top, area.margin_bottom],
            "header": area.has_header,
            "footer": area.has_footer,
            "dpi": self.dpi,
            "compression_quality": self.compression_quality,
            "font_size": self.font_size,
            "line_spacing": self.line_spacing,
        }


def _parse_page_size(value: Any) -> PageSize:
    if isinstance(value, PageSize):
        return value
    if isinstance(value, str):
        try:
            return NAMED_PAGE_SIZES[value.strip().upper()]
        except KeyError:
            raise InvalidConfigurationError("Unknown page size", value) from None
    try:
        return PageSize.from_tuple(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError("Page size must be a name or [width, height]",
                                        repr(value)) from exc


def _parse_margins(value: Any) -> SafeArea:
    if value is None:
        return SafeArea()
    if isinstance(value, (int, float)):
        return SafeArea.uniform(float(value))
    try:
        left, right, top, bottom = (float(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError(
            "Margins must be a number or [left, right, top, bottom]", repr(value)
        ) from exc
    return SafeArea(left, right, top, bottom)


def load_configuration(path: str | Path) -> PDFConfiguration:
    """Read a configuration from a JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise InvalidConfigurationError("Configuration file not found", str(path)) from exc
    except json.JSONDecodeError as exc:
        raise InvalidConfigurationError("Configuration file is not valid JSON", str(exc)) from exc
    if not isinstance(data, dict):
        raise InvalidConfigurationError("Configuration file must contain an object", str(path))
    logger.debug("Loaded configuration from %s", path)
    return PDFConfiguration.from_dict(data)
