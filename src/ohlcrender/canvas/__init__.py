"""Pixel buffer, painting primitives and the price/time projection."""

from .canvas import Canvas, Margin, SubCanvas
from .painting import Painter, Point, fill_buffer, text_extent

__all__ = [
    "Canvas",
    "Margin",
    "SubCanvas",
    "Painter",
    "Point",
    "fill_buffer",
    "text_extent",
]
