"""Small formatting and colour helpers shared by the renderer and CLI."""

from __future__ import annotations

import math
from typing import Optional

LEN_OF_MINUTE = 60
LEN_OF_HOUR = 60 * LEN_OF_MINUTE
LEN_OF_DAY = 24 * LEN_OF_HOUR
LEN_OF_WEEK = 7 * LEN_OF_DAY
LEN_OF_MONTH = 30 * LEN_OF_DAY
LEN_OF_YEAR = 365 * LEN_OF_DAY


def duration_string(elapsed: int) -> str:
    """Format a number of seconds as a compact duration such as ``1d2h``.

    Durations under ten seconds read ``"Now"``.  Months are 30 days and
    years 365 days; zero components are omitted.
    """
    if elapsed < 10:
        return "Now"

    components = [
        (elapsed // LEN_OF_YEAR, "y"),
        ((elapsed % LEN_OF_YEAR) // LEN_OF_MONTH, "m"),
        (((elapsed % LEN_OF_YEAR) % LEN_OF_MONTH) // LEN_OF_WEEK, "w"),
        ((((elapsed % LEN_OF_YEAR) % LEN_OF_MONTH) % LEN_OF_WEEK) // LEN_OF_DAY, "d"),
        ((elapsed % LEN_OF_DAY) // LEN_OF_HOUR, "h"),
        ((elapsed % LEN_OF_HOUR) // LEN_OF_MINUTE, "m"),
        (elapsed % LEN_OF_MINUTE, "s"),
    ]
    return "".join(f"{value}{unit}" for value, unit in components if value > 0)


def keep_msf(num: float, sigfigs: int) -> float:
    """Round ``num`` to ``sigfigs`` significant figures."""
    if sigfigs == 0 or num == 0:
        return 0.0
    magnitude = math.floor(math.log10(abs(num)))
    factor = 10.0 ** (magnitude - sigfigs + 1)
    return round(num / factor) * factor


def format_number(value: float) -> str:
    """Render a float without trailing zeros or float noise (``2.5``, ``1200``)."""
    value = round(value, 6)
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")


def format_value(value: float, prefix: str = "", suffix: str = "", max_chars: Optional[int] = None) -> str:
    """Format a price label, truncating it to ``max_chars`` characters if given."""
    label = f"{prefix}{format_number(value)}{suffix}"
    if max_chars is not None:
        label = label[:max(max_chars, 0)]
    return label


def nice_interval(span: float, steps: int = 8) -> float:
    """Pick a round grid spacing (1, 2 or 5 times a power of ten).

    The returned interval splits ``span`` into roughly ``steps`` parts.
    A non-positive span yields ``0.0`` so callers can skip the grid.
    """
    if span <= 0 or steps <= 0:
        return 0.0
    raw = span / steps
    magnitude = 10.0 ** math.floor(math.log10(raw))
    for multiple in (1.0, 2.0, 5.0):
        if raw <= multiple * magnitude:
            return multiple * magnitude
    return 10.0 * magnitude


def parse_colour(value: str) -> int:
    """Parse ``#RRGGBB``, ``#RRGGBBAA`` or ``0xRRGGBBAA`` into packed RGBA.

    Six-digit colours are treated as fully opaque.

    Raises:
        ValueError: If the string is not a hexadecimal colour.
    """
    text = value.strip()
    if text.startswith("#"):
        text = text[1:]
    elif text.lower().startswith("0x"):
        text = text[2:]
    if len(text) not in (6, 8):
        raise ValueError(f"Invalid colour '{value}'; expected RRGGBB or RRGGBBAA")
    try:
        packed = int(text, 16)
    except ValueError:
        raise ValueError(f"Invalid colour '{value}'; expected hexadecimal digits") from None
    if len(text) == 6:
        packed = (packed << 8) | 0xFF
    return packed


def with_alpha(rgba: int, alpha: int) -> int:
    """Replace the alpha byte of a packed colour."""
    return (rgba & 0xFFFFFF00) | (alpha & 0xFF)
