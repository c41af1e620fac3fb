"""Utility helpers for PDF Composer."""

from .color_utils import BLACK, GRAY, LIGHT_GRAY, color_components, rgb, to_color
from .logger import configure_logging, get_logger, set_log_level

__all__ = [
    "BLACK",
    "GRAY",
    "LIGHT_GRAY",
    "color_components",
    "rgb",
    "to_color",
    "configure_logging",
    "get_logger",
    "set_log_level",
]
