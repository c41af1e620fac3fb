"""Color helpers shared by styles and chrome."""

from __future__ import annotations

from typing import Any, Sequence

from reportlab.lib.colors import Color, HexColor, black

BLACK: Color = black
LIGHT_GRAY = Color(240 / 255, 240 / 255, 240 / 255)
GRAY = Color(128 / 255, 128 / 255, 128 / 255)


def rgb(red: int, green: int, blue: int, alpha: int = 255) -> Color:
    """Build a color from 0-255 channel values."""
    return Color(red / 255.0, green / 255.0, blue / 255.0, alpha=alpha / 255.0)


def to_color(value: Any, fallback: Color = BLACK) -> Color:
    """Normalize ``value`` into a reportlab ``Color``.

    Accepts ``Color`` instances, ``#RRGGBB`` strings (with or without the
    hash) and 3- or 4-tuples of 0-1 floats. ``None`` and ``"auto"`` map to
    ``fallback``.
    """
    if value is None:
        return fallback
    if isinstance(value, Color):
        return value
    if isinstance(value, (tuple, list)):
        return _from_sequence(value)

    token = str(value).strip()
    if not token or token.lower() == "auto":
        return fallback
    if not token.startswith("#"):
        token = f"#{token}"
    try:
        return HexColor(token)
    except ValueError as exc:
        raise ValueError(f"Unrecognized color value: {value!r}") from exc


def _from_sequence(value: Sequence[float]) -> Color:
    if len(value) == 3:
        r, g, b = (float(v) for v in value)
        return Color(r, g, b)
    if len(value) == 4:
        r, g, b, a = (float(v) for v in value)
        return Color(r, g, b, alpha=a)
    raise ValueError(f"Color sequence must have 3 or 4 components, got {len(value)}")


def color_components(color: Color) -> tuple[float, float, float, float]:
    """Return the RGBA components of ``color`` as plain floats."""
    return (float(color.red), float(color.green), float(color.blue), float(color.alpha))
