"""Bitmap glyph table used by :meth:`Painter.text`.

Each glyph is a 10x17 cell of 8-bit intensities stored row-major
(index ``x + y * 10``).  The table is indexed by ASCII code: control
characters, space and DEL are blank cells.  Glyphs are rasterized once
per process from the DejaVu Sans Mono face bundled with matplotlib so
output does not depend on fonts installed on the host.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from matplotlib import font_manager
from PIL import Image, ImageDraw, ImageFont

from ..config import GLYPH_HEIGHT, GLYPH_WIDTH

FONT_FAMILY = "DejaVu Sans Mono"
# Pixel size chosen so the advance (~0.6 em) fits a 10px cell
FONT_SIZE = 15
# Baseline row inside the 17px cell; leaves room for descenders
BASELINE = 13
TABLE_SIZE = 128


@lru_cache(maxsize=1)
def glyph_table() -> Tuple[bytes, ...]:
    """Return the 128-entry glyph table, building it on first use."""
    font_path = font_manager.findfont(
        font_manager.FontProperties(family=FONT_FAMILY), fallback_to_default=True
    )
    font = ImageFont.truetype(font_path, FONT_SIZE)

    glyphs = []
    for code in range(TABLE_SIZE):
        cell = Image.new("L", (GLYPH_WIDTH, GLYPH_HEIGHT), 0)
        if 0x20 < code < 0x7F:
            draw = ImageDraw.Draw(cell)
            draw.text((GLYPH_WIDTH / 2, BASELINE), chr(code), fill=255, font=font, anchor="ms")
        glyphs.append(cell.tobytes())
    return tuple(glyphs)


def glyph(char: str) -> bytes:
    """Return the intensity cell for ``char``; non-ASCII maps to space."""
    code = ord(char)
    if code >= TABLE_SIZE:
        code = 0x20
    return glyph_table()[code]
