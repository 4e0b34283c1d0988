"""Bollinger bands over the median price."""

from __future__ import annotations

from typing import Any, NamedTuple, Sequence

import numpy as np
import pandas as pd

from ..canvas import Canvas
from ..errors import PreconditionViolation
from .base import RendererExtension, series_points
from .moving_averages import median_list


class Bands(NamedTuple):
    upper: np.ndarray
    average: np.ndarray
    lower: np.ndarray


def bollinger_bands(values: Sequence[float], periods: int, deviations: float) -> Bands:
    """Centred rolling mean plus/minus ``deviations`` sample standard deviations.

    The window holds ``periods`` samples around each index (half before,
    half after) and shrinks at the ends of the series.  A window of one
    sample has zero deviation.
    """
    if periods < 1:
        raise PreconditionViolation(f"Bollinger periods must be >= 1, got {periods}")
    series = pd.Series(np.asarray(values, dtype=float))
    window = series.rolling(window=periods, center=True, min_periods=1)
    average = window.mean()
    deviation = window.std(ddof=1).fillna(0.0)
    return Bands(
        upper=(average + deviations * deviation).to_numpy(),
        average=average.to_numpy(),
        lower=(average - deviations * deviation).to_numpy(),
    )


class BollingerBands(RendererExtension):
    """Upper, middle and lower band drawn as polylines on the main plot."""

    def __init__(self, periods: int, deviations: float, colour: int) -> None:
        if periods < 1:
            raise PreconditionViolation(f"Bollinger periods must be >= 1, got {periods}")
        self.periods = periods
        self.deviations = deviations
        self.colour = colour

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        bands = bollinger_bands(median_list(candles), self.periods, self.deviations)
        for values in bands:
            for p1, p2 in series_points(canvas, values, 0, len(candles)):
                canvas.line(p1, p2, self.colour)

    def lore_colour(self) -> int:
        return self.colour

    def name(self) -> str:
        return f"BB({self.periods}, {self.deviations:g})"
