"""Moving average convergence/divergence in its own sub-panel."""

from __future__ import annotations

from typing import Any, NamedTuple, Sequence

import numpy as np

from ..canvas import Canvas, SubCanvas
from ..config import MACD_PANEL_HEIGHT
from .base import RendererExtension, candle_period, series_points, wick_span
from .moving_averages import check_ema_parameters, ema, median_list

SHORT_PERIODS = 12
LONG_PERIODS = 26
SIGNAL_PERIODS = 9
# Samples skipped while the long EMA (and then the signal EMA) settle
DIVERGENCE_OFFSET = LONG_PERIODS
SIGNAL_OFFSET = LONG_PERIODS + SIGNAL_PERIODS

LEGEND_BACKING = 0x7F7F7F7F


class MACDSeries(NamedTuple):
    divergence: np.ndarray
    signal: np.ndarray
    histogram: np.ndarray


def macd(values: Sequence[float], smoothing_factor: float) -> MACDSeries:
    """Compute divergence, signal and histogram for a price series.

    ``divergence = EMA12 - EMA26``, ``signal = EMA9(divergence)`` and
    ``histogram = divergence - signal``.
    """
    short = ema(values, SHORT_PERIODS, smoothing_factor)
    long = ema(values, LONG_PERIODS, smoothing_factor)
    divergence = short - long
    signal = ema(divergence, SIGNAL_PERIODS, smoothing_factor)
    return MACDSeries(divergence, signal, divergence - signal)


class MACD(RendererExtension):
    """MACD(12, 26, 9) over the median price.

    The panel shows the divergence and signal lines, the histogram as
    bars around a labelled zero line, and a small key.  Values before
    the long EMA has settled are not drawn.
    """

    def __init__(
        self,
        divergence_colour: int,
        signal_colour: int,
        histogram_colour: int,
        label_colour: int,
        smoothing_factor: float,
    ) -> None:
        check_ema_parameters(LONG_PERIODS, smoothing_factor)
        self.divergence_colour = divergence_colour
        self.signal_colour = signal_colour
        self.histogram_colour = histogram_colour
        self.label_colour = label_colour
        self.smoothing_factor = smoothing_factor

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        series = macd(median_list(candles), self.smoothing_factor)
        count = len(candles)

        # Vertical scale covers the settled part of all three series and zero
        settled = [s[DIVERGENCE_OFFSET:] for s in series if len(s) > DIVERGENCE_OFFSET]
        if settled:
            lowest = min(0.0, min(float(s.min()) for s in settled))
            highest = max(0.0, max(float(s.max()) for s in settled))
        else:
            lowest, highest = 0.0, 0.0
        span = highest - lowest
        if span == 0:
            span = 1.0

        def scale(value: float) -> float:
            return (value - lowest) / span

        def paint(panel: SubCanvas) -> None:
            panel.text((8, 8), self.name(), self.label_colour)
            panel.text_with_background((8, 8 + 17), "MACD Divergence", self.divergence_colour, LEGEND_BACKING)
            panel.text_with_background((8, 8 + 17 * 2), "MACD Signal", self.signal_colour, LEGEND_BACKING)

            period = candle_period(panel.timeframe, count)
            zero = scale(0.0)

            for i in range(SIGNAL_OFFSET, count):
                left, right = wick_span(period, i)
                p1 = panel.data_to_coords(scale(series.histogram[i]), left)
                p2 = panel.data_to_coords(zero, right)
                panel.rect_point(p1, p2, self.histogram_colour)

            p1 = panel.data_to_coords(zero, 0)
            p2 = panel.data_to_coords(zero, panel.timeframe)
            panel.line(p1, p2, self.label_colour)
            panel.text((p2[0] + 4, p2[1] - 8), "Zero", self.label_colour)

            for values, colour, start in (
                (series.signal, self.signal_colour, SIGNAL_OFFSET),
                (series.divergence, self.divergence_colour, DIVERGENCE_OFFSET),
            ):
                for p1, p2 in series_points(panel, values, start, count, scale):
                    panel.line(p1, p2, colour)

        canvas.create_sub_panel(MACD_PANEL_HEIGHT, paint)

    def name(self) -> str:
        return f"MACD({SHORT_PERIODS}, {LONG_PERIODS}, {SIGNAL_PERIODS}, sf={self.smoothing_factor:g})"
