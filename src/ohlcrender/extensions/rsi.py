"""Relative strength index in its own sub-panel."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np

from ..canvas import Canvas, SubCanvas
from ..config import RSI_PANEL_HEIGHT, RSI_PERIODS
from ..errors import PreconditionViolation
from ..utils import with_alpha
from .base import RendererExtension, series_points

OVERBOUGHT = 70.0
OVERSOLD = 30.0
REFERENCE_LEVELS = (0.0, OVERSOLD, 50.0, OVERBOUGHT, 100.0)
BAND_ALPHA = 0x28


def rsi_series(candles: Sequence[Any], periods: int = RSI_PERIODS) -> List[Optional[float]]:
    """RSI aligned with ``candles``; ``None`` where there is not enough history.

    For candle ``i >= periods`` the window is the ``periods`` candles
    before it.  Each candle contributes its body move ``close - open``:
    rises count as gains and falls as losses (zero elsewhere), and
    ``rsi = 100 - 100 / (1 + mean(gains) / mean(losses))``.  A window
    without losses reads 100, or 0 when it has no gains either.
    """
    if periods < 1:
        raise PreconditionViolation(f"RSI periods must be >= 1, got {periods}")

    deltas = np.array([c.close - c.open for c in candles], dtype=float)
    gains = np.clip(deltas, 0.0, None)
    losses = np.clip(-deltas, 0.0, None)

    out: List[Optional[float]] = [None] * len(candles)
    for i in range(periods, len(candles)):
        avg_gain = gains[i - periods:i].mean()
        avg_loss = losses[i - periods:i].mean()
        if avg_loss == 0:
            out[i] = 100.0 if avg_gain > 0 else 0.0
        else:
            out[i] = float(100.0 - 100.0 / (1.0 + avg_gain / avg_loss))
    return out


class RSI(RendererExtension):
    """RSI line over shaded overbought (70-100) and oversold (0-30) bands
    with reference lines at 0, 30, 50, 70 and 100."""

    def __init__(
        self,
        line_colour: int,
        reference_colour: int,
        overbought_colour: int,
        oversold_colour: int,
        periods: int = RSI_PERIODS,
    ) -> None:
        if periods < 1:
            raise PreconditionViolation(f"RSI periods must be >= 1, got {periods}")
        self.line_colour = line_colour
        self.reference_colour = reference_colour
        self.overbought_colour = overbought_colour
        self.oversold_colour = oversold_colour
        self.periods = periods

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        values = rsi_series(candles, self.periods)
        count = len(candles)

        def paint(panel: SubCanvas) -> None:
            panel.text((8, 8), self.name(), self.line_colour)

            for low, high, colour in (
                (OVERBOUGHT, 100.0, self.overbought_colour),
                (0.0, OVERSOLD, self.oversold_colour),
            ):
                p1 = panel.data_to_coords(low / 100.0, 0)
                p2 = panel.data_to_coords(high / 100.0, panel.timeframe)
                panel.rect_point(p1, p2, with_alpha(colour, BAND_ALPHA))

            for level in REFERENCE_LEVELS:
                p1 = panel.data_to_coords(level / 100.0, 0)
                p2 = panel.data_to_coords(level / 100.0, panel.timeframe)
                panel.line(p1, p2, self.reference_colour)
                panel.text((p2[0] + 4, p2[1] - 8), f"{level:g}", self.reference_colour)

            for p1, p2 in series_points(panel, values, self.periods, count, lambda v: v / 100.0):
                panel.line(p1, p2, self.line_colour)

        canvas.create_sub_panel(RSI_PANEL_HEIGHT, paint)

    def name(self) -> str:
        return f"RSI({self.periods})"
