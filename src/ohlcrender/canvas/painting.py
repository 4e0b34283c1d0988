"""Painting primitives over a packed RGB byte buffer.

:class:`Painter` implements pixel blending, lines, rectangles and
bitmap text on top of a flat ``bytearray`` holding three bytes per
pixel (row-major).  Colours are packed RGBA integers; the alpha byte is
only used for blending and is never stored.  Subclasses provide the
``width``, ``height``, ``background`` and ``pixels`` attributes.
"""

from __future__ import annotations

import math
from typing import Tuple

from ..config import GLYPH_HEIGHT, GLYPH_WIDTH
from .fonts import glyph

Point = Tuple[int, int]

# Alpha shortcuts: near-opaque overwrites, near-transparent is skipped
OPAQUE_THRESHOLD = 0.96
TRANSPARENT_THRESHOLD = 0.04


def rgb_bytes(rgba: int) -> bytes:
    """Return the three colour bytes of a packed RGBA value."""
    return bytes(((rgba >> 24) & 0xFF, (rgba >> 16) & 0xFF, (rgba >> 8) & 0xFF))


def fill_buffer(area: int, rgba: int) -> bytearray:
    """Allocate a buffer of ``area`` pixels painted in ``rgba`` (alpha ignored)."""
    return bytearray(rgb_bytes(rgba) * area)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def text_extent(text: str) -> Tuple[int, int]:
    """Pixel width and height of ``text`` laid out in glyph cells."""
    lines = text.split("\n")
    return max(len(line) for line in lines) * GLYPH_WIDTH, len(lines) * GLYPH_HEIGHT


class Painter:
    """Mixin providing the drawing primitives shared by canvases."""

    width: int
    height: int
    background: int
    pixels: bytearray

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """Return the ``(r, g, b)`` value stored at ``(x, y)``."""
        i = (x + y * self.width) * 3
        return self.pixels[i], self.pixels[i + 1], self.pixels[i + 2]

    def colour(self, x: int, y: int, rgba: int) -> None:
        """Blend ``rgba`` into the pixel at ``(x, y)``.

        Coordinates outside the buffer are ignored.  Alpha at or above
        96% overwrites the pixel, alpha at or below 4% leaves it
        untouched and anything in between is blended per channel as
        ``round(a * fg + (1 - a) * bg)``.
        """
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return

        alpha = (rgba & 0xFF) / 255.0
        if alpha <= TRANSPARENT_THRESHOLD:
            return

        i = (x + y * self.width) * 3
        if alpha >= OPAQUE_THRESHOLD:
            self.pixels[i:i + 3] = rgb_bytes(rgba)
            return

        for j, fg in enumerate(rgb_bytes(rgba)):
            bg = self.pixels[i + j]
            self.pixels[i + j] = _round_half_up(alpha * fg + (1.0 - alpha) * bg)

    def colour_point(self, point: Point, rgba: int) -> None:
        self.colour(point[0], point[1], rgba)

    def line(self, p1: Point, p2: Point, rgba: int) -> None:
        """Draw a line between two points, both ends included.

        The endpoints are put in a canonical order first so that
        ``line(a, b)`` and ``line(b, a)`` paint the same pixels.  The
        walk steps one pixel at a time along the dominant axis and
        interpolates the other one; each pixel is painted once.
        """
        (x1, y1), (x2, y2) = sorted((tuple(p1), tuple(p2)))
        dx = x2 - x1
        dy = y2 - y1
        steps = max(abs(dx), abs(dy))

        if steps == 0:
            self.colour(x1, y1, rgba)
            return

        last = None
        for step in range(steps + 1):
            point = (x1 + _round_half_up(dx * step / steps), y1 + _round_half_up(dy * step / steps))
            if point != last:
                self.colour(point[0], point[1], rgba)
                last = point

    def rect(self, x1: int, y1: int, x2: int, y2: int, rgba: int) -> None:
        """Fill the box spanned by two corners given in any order (inclusive)."""
        if x1 > x2:
            x1, x2 = x2, x1
        if y1 > y2:
            y1, y2 = y2, y1

        if (rgba & 0xFF) / 255.0 >= OPAQUE_THRESHOLD:
            # Opaque fills are written row by row after clipping
            xs, xe = max(x1, 0), min(x2, self.width - 1)
            ys, ye = max(y1, 0), min(y2, self.height - 1)
            if xs > xe or ys > ye:
                return
            row = rgb_bytes(rgba) * (xe - xs + 1)
            for y in range(ys, ye + 1):
                start = (xs + y * self.width) * 3
                self.pixels[start:start + len(row)] = row
            return

        for x in range(x1, x2 + 1):
            for y in range(y1, y2 + 1):
                self.colour(x, y, rgba)

    def rect_point(self, p1: Point, p2: Point, rgba: int) -> None:
        self.rect(p1[0], p1[1], p2[0], p2[1], rgba)

    def text(self, top_left: Point, text: str, rgba: int) -> None:
        """Paint ``text`` with its first glyph cell at ``top_left``.

        Each glyph pixel's intensity scales the alpha of ``rgba``.  The
        cursor advances 10px per character; a newline moves it down
        17px and back to the left edge.
        """
        x0, y = top_left
        alpha = (rgba & 0xFF) / 255.0
        base = rgba & 0xFFFFFF00

        column = 0
        for char in text:
            if char == "\n":
                y += GLYPH_HEIGHT
                column = 0
                continue

            cell = glyph(char)
            left = x0 + column * GLYPH_WIDTH
            for dy in range(GLYPH_HEIGHT):
                for dx in range(GLYPH_WIDTH):
                    shade = cell[dx + dy * GLYPH_WIDTH]
                    if shade:
                        self.colour(left + dx, y + dy, base | int(alpha * shade))
            column += 1

    def text_with_outline(self, top_left: Point, text: str, rgba: int) -> None:
        """Paint ``text`` inside a 1px border, clearing the box to the background."""
        width, height = text_extent(text)
        x0, y0 = top_left
        right = x0 + width + 1
        bottom = y0 + height + 1

        self.rect(x0 + 1, y0 + 1, right - 1, bottom - 1, self.background)
        self.rect(x0, y0, right, y0, rgba)
        self.rect(x0, bottom, right, bottom, rgba)
        self.rect(x0, y0 + 1, x0, bottom - 1, rgba)
        self.rect(right, y0 + 1, right, bottom - 1, rgba)

        self.text((x0 + 1, y0 + 1), text, rgba)

    def text_with_background(self, top_left: Point, text: str, rgba: int, background_rgba: int) -> None:
        """Paint ``text`` over a backing rectangle the size of the text."""
        width, height = text_extent(text)
        x0, y0 = top_left
        if width > 0:
            self.rect(x0, y0, x0 + width - 1, y0 + height - 1, background_rgba)
        self.text(top_left, text, rgba)
