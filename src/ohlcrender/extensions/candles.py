"""Candle bodies, wicks and the current-value marker."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..canvas import Canvas
from .base import RendererExtension, body_width, candle_period, slot_centre, wick_span


class CandleBody(RendererExtension):
    """Paints one body and one wick per candle.

    A candle is "up" when ``close >= open`` and "down" otherwise.  The
    body spans the open and close prices over the first four fifths of
    the candle's time slot; the wick spans high to low, centred in the
    body.  When ``current_colour`` is set a small star marks the last
    close.
    """

    def __init__(self, up_colour: int, down_colour: int, current_colour: Optional[int] = None) -> None:
        self.up_colour = up_colour
        self.down_colour = down_colour
        self.current_colour = current_colour

    def colour_for(self, candle: Any) -> int:
        return self.down_colour if candle.open > candle.close else self.up_colour

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        if not candles:
            return
        period = candle_period(canvas.timeframe, len(candles))
        width = body_width(period)

        for i, candle in enumerate(candles):
            colour = self.colour_for(candle)
            left = period * i

            p1 = canvas.data_to_coords(candle.open, left)
            p2 = canvas.data_to_coords(candle.close, int(left + width))
            canvas.rect_point(p1, p2, colour)

            wick_left, wick_right = wick_span(period, i)
            p1 = canvas.data_to_coords(candle.high, wick_left)
            p2 = canvas.data_to_coords(candle.low, wick_right)
            canvas.rect_point(p1, p2, colour)

        if self.current_colour is not None:
            last = len(candles) - 1
            x, y = canvas.data_to_coords(candles[last].close, slot_centre(period, last))
            for dx in range(-2, 3):
                for dy in range(-2, 3):
                    if dx == dy or dx + dy == 0 or dx == 0:
                        canvas.colour(x + dx, y + dy, self.current_colour)

    def name(self) -> str:
        return "CORE_CandleBody()"
