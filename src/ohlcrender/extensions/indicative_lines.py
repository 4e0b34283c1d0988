"""Horizontal high, low and last-close lines with value labels."""

from __future__ import annotations

from typing import Any, Sequence

from ..candles import aggregate
from ..canvas import Canvas
from ..utils import format_value
from .base import RendererExtension


class BasicIndicativeLines(RendererExtension):
    """Lines at the series high, low and last close, labelled in the right margin."""

    def __init__(
        self,
        max_colour: int,
        min_colour: int,
        current_colour: int,
        value_prefix: str = "",
        value_suffix: str = "",
    ) -> None:
        self.max_colour = max_colour
        self.min_colour = min_colour
        self.current_colour = current_colour
        self.value_prefix = value_prefix
        self.value_suffix = value_suffix

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        if not candles:
            return
        summary = aggregate(candles)
        self._draw(canvas, summary.high, self.max_colour)
        self._draw(canvas, summary.low, self.min_colour)
        self._draw(canvas, summary.close, self.current_colour)

    def _draw(self, canvas: Canvas, price: float, rgba: int) -> None:
        p1 = canvas.data_to_coords(price, 0)
        p2 = canvas.data_to_coords(price, canvas.timeframe)
        canvas.line(p1, p2, rgba)

        max_chars = (canvas.margin.right - 5) // 10
        label = format_value(price, self.value_prefix, self.value_suffix, max_chars)
        canvas.text_with_outline((p2[0] + 3, p2[1] - 9), label, rgba)

    def name(self) -> str:
        return "CORE_BasicIndicativeLines()"
