"""Median price basis and the exponential moving average family.

Every average here is computed over the median price of each candle,
``low + (high - low) / 2``.  :func:`ema` weights the trailing window
``[max(0, p - periods), p]`` with ``(1 - sf) ** (p + 1 - i)`` and
normalizes by the weight sum, so the first few outputs simply use a
shorter window.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from ..canvas import Canvas
from ..errors import PreconditionViolation
from .base import RendererExtension, series_points


def median_of(candle: Any) -> float:
    return candle.low + (candle.high - candle.low) / 2.0


def median_list(candles: Sequence[Any]) -> np.ndarray:
    """Median price of every candle as a float array."""
    return np.array([median_of(c) for c in candles], dtype=float)


def check_ema_parameters(periods: int, smoothing_factor: float) -> None:
    if periods < 1:
        raise PreconditionViolation(f"EMA periods must be >= 1, got {periods}")
    if not 0.0 < smoothing_factor < 1.0:
        raise PreconditionViolation(f"smoothing factor must be in (0, 1), got {smoothing_factor}")


def ema(values: Sequence[float], periods: int, smoothing_factor: float) -> np.ndarray:
    """Exponentially weighted average over a trailing window of ``periods``.

    Args:
        values: Input series.
        periods: Window length; index ``p`` averages ``values[p - periods:p + 1]``.
        smoothing_factor: Decay parameter in ``(0, 1)``.

    Returns:
        An array the same length as ``values``.
    """
    check_ema_parameters(periods, smoothing_factor)
    data = np.asarray(values, dtype=float)
    decay = 1.0 - smoothing_factor
    out = np.empty(len(data), dtype=float)

    for p in range(len(data)):
        lo = max(0, p - periods)
        weights = decay ** (p + 1 - np.arange(lo, p + 1))
        out[p] = np.dot(data[lo:p + 1], weights) / weights.sum()
    return out


def dema(values: Sequence[float], periods: int, smoothing_factor: float) -> np.ndarray:
    """Double EMA: ``2 * EMA(x) - EMA(EMA(x))``."""
    first = ema(values, periods, smoothing_factor)
    return 2.0 * first - ema(first, periods, smoothing_factor)


class EMA(RendererExtension):
    """EMA of the median price drawn as a line over the main plot.

    Nothing is drawn for the first ``periods`` candles.
    """

    def __init__(self, periods: int, smoothing_factor: float, colour: int) -> None:
        check_ema_parameters(periods, smoothing_factor)
        self.periods = periods
        self.smoothing_factor = smoothing_factor
        self.colour = colour

    def series(self, candles: Sequence[Any]) -> np.ndarray:
        return ema(median_list(candles), self.periods, self.smoothing_factor)

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        values = self.series(candles)
        for p1, p2 in series_points(canvas, values, self.periods, len(candles)):
            canvas.line(p1, p2, self.colour)

    def lore_colour(self) -> int:
        return self.colour

    def name(self) -> str:
        return f"EMA({self.periods}, sf={self.smoothing_factor:g})"


class DEMA(RendererExtension):
    """Double EMA of the median price, sharing the wrapped EMA's settings."""

    def __init__(self, inner: EMA) -> None:
        self.inner = inner

    def series(self, candles: Sequence[Any]) -> np.ndarray:
        return dema(median_list(candles), self.inner.periods, self.inner.smoothing_factor)

    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        values = self.series(candles)
        for p1, p2 in series_points(canvas, values, self.inner.periods, len(candles)):
            canvas.line(p1, p2, self.inner.colour)

    def lore_colour(self) -> int:
        return self.inner.colour

    def name(self) -> str:
        return f"DEMA({self.inner.periods}, sf={self.inner.smoothing_factor:g})"
