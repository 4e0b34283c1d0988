"""Price and time grid lines with optional axis labels."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..canvas import Canvas
from ..utils import duration_string, format_value
from .base import RendererExtension

logger = logging.getLogger(__name__)

# Length of the tick a vertical grid line extends below the plot
TICK_LENGTH = 15


class GridLines(RendererExtension):
    """Horizontal lines every ``price_interval`` and vertical ones every
    ``time_interval`` seconds.

    Horizontal lines start at the first interval boundary above the
    bottom of the price window.  Vertical lines are laid out from the
    right edge backwards and labelled with the time elapsed since the
    right edge ("Now", "1d", ...).  A non-positive interval disables
    that direction, as does one mapping to less than a pixel.
    """

    def __init__(
        self,
        colour: int,
        label: bool,
        price_interval: float,
        time_interval: int,
        value_prefix: str = "",
        value_suffix: str = "",
    ) -> None:
        self.colour = colour
        self.label = label
        self.price_interval = price_interval
        self.time_interval = time_interval
        self.value_prefix = value_prefix
        self.value_suffix = value_suffix

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        if self.price_interval > 0:
            self._price_lines(canvas)
        if self.time_interval > 0:
            self._time_lines(canvas)

    def _price_lines(self, canvas: Canvas) -> None:
        interval = self.price_interval
        plot_height = canvas.height - canvas.margin.top - canvas.margin.bottom
        if interval * plot_height / (canvas.price_max - canvas.price_min) < 1:
            logger.debug("Price grid interval %s is below one pixel, skipping price lines", interval)
            return
        start = round_start_price(canvas.price_min, interval)
        max_chars = (canvas.margin.right - 10) // 10

        step = 0
        price = start
        while price <= canvas.price_max:
            p1 = canvas.data_to_coords(price, 0)
            p2 = canvas.data_to_coords(price, canvas.timeframe)
            canvas.line(p1, p2, self.colour)
            if self.label:
                text = format_value(price, self.value_prefix, self.value_suffix, max_chars)
                canvas.text((p2[0] + 4, p2[1] - 8), text, self.colour)
            step += 1
            price = start + step * interval

    def _time_lines(self, canvas: Canvas) -> None:
        plot_width = canvas.width - canvas.margin.left - canvas.margin.right
        if self.time_interval * plot_width / canvas.timeframe < 1:
            logger.debug("Time grid interval %s is below one pixel, skipping time lines", self.time_interval)
            return
        for k in range(canvas.timeframe // self.time_interval + 1):
            time = canvas.timeframe - k * self.time_interval
            x, y = canvas.data_to_coords(canvas.price_min, time)
            p1 = (x, y + TICK_LENGTH)
            p2 = canvas.data_to_coords(canvas.price_max, time)
            canvas.line(p1, p2, self.colour)

            if self.label:
                elapsed = duration_string(canvas.timeframe - time)
                canvas.text((p1[0] - 10, p1[1] + 2), elapsed, self.colour)

    def name(self) -> str:
        return "CORE_GridLines()"


def round_start_price(price_min: float, interval: float) -> float:
    """First grid boundary above ``price_min``."""
    return price_min + interval - (price_min % interval)
