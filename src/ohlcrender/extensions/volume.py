"""Volume bars in their own sub-panel."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..canvas import Canvas, SubCanvas
from ..config import VOLUME_PANEL_HEIGHT
from ..utils import format_number, keep_msf
from .base import RendererExtension, body_width, candle_period

logger = logging.getLogger(__name__)

AXIS_LEVELS = (0.0, 0.5, 1.0)


class Volume(RendererExtension):
    """One bar per candle scaled to the largest total volume.

    Candles reporting a buy volume get a two-part bar: the buy share at
    the bottom and the remaining sell share on top.  Other candles get
    a single bar in the generic colour.
    """

    def __init__(self, label_colour: int, buy_colour: int, sell_colour: int, generic_colour: int) -> None:
        self.label_colour = label_colour
        self.buy_colour = buy_colour
        self.sell_colour = sell_colour
        self.generic_colour = generic_colour

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        volumes = [(c.buy_volume, c.total_volume) for c in candles]
        max_volume = max((total for _, total in volumes), default=0.0)
        count = len(candles)
        if max_volume <= 0:
            logger.warning("No volume in %d candles; volume panel left empty", count)

        def paint(panel: SubCanvas) -> None:
            panel.text((8, 8), "Volume", self.label_colour)

            for level in AXIS_LEVELS:
                p1 = panel.data_to_coords(level, 0)
                p2 = panel.data_to_coords(level, panel.timeframe)
                panel.line(p1, p2, self.label_colour)
                label = format_number(keep_msf(level * max_volume, 3))
                panel.text_with_outline((p2[0] + 5, p2[1] - 9), label, self.label_colour)

            if max_volume <= 0:
                return

            period = candle_period(panel.timeframe, count)
            width = body_width(period)
            for i, (buy, total) in enumerate(volumes):
                left = period * i
                right = int(left + width)
                bottom_left = panel.data_to_coords(0.0, left)
                if buy is not None:
                    mid_right = panel.data_to_coords(buy / max_volume, right)
                    panel.rect_point(bottom_left, mid_right, self.buy_colour)
                    top_left = panel.data_to_coords(total / max_volume, left)
                    panel.rect_point(mid_right, top_left, self.sell_colour)
                else:
                    top_right = panel.data_to_coords(total / max_volume, right)
                    panel.rect_point(bottom_left, top_right, self.generic_colour)

        canvas.create_sub_panel(VOLUME_PANEL_HEIGHT, paint)

    def name(self) -> str:
        return "Volume"
