"""Renderer extension protocol and shared time-slot helpers.

An extension paints derived geometry onto a canvas.  The orchestrator
calls :meth:`RendererExtension.apply` for every configured extension
in order, so later extensions draw over earlier ones.  Extensions hold
configuration only; any series they derive is recomputed on each call.

``apply`` has no error channel: an extension that cannot compute a
value for some index (e.g. before a moving average has enough samples)
skips drawing there instead of failing the chart.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, Optional, Sequence, Tuple

from ..canvas import Canvas, Point


class RendererExtension(ABC):
    """A pluggable overlay painting onto a :class:`~ohlcrender.canvas.Canvas`."""

    @abstractmethod
    def apply(self, canvas: Canvas, candles: Sequence[Any]) -> None:
        """Paint onto ``canvas`` using the (already validated) candles."""

    @abstractmethod
    def name(self) -> str:
        """Stable identifier used in legends and to drop duplicates."""

    def lore_colour(self) -> Optional[int]:
        """Colour shown next to :meth:`name` in the chart legend, if any."""
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name()}>"


def candle_period(timeframe: int, count: int) -> int:
    """Seconds of the time axis allotted to each of ``count`` candles."""
    return timeframe // count


def body_width(period: int) -> float:
    """Width of a candle body: four fifths of its slot."""
    return 4.0 * period / 5.0


def slot_centre(period: int, index: int) -> int:
    """Time of the middle of candle ``index``'s body."""
    return period * index + int(body_width(period) / 2.0)


def wick_span(period: int, index: int) -> Tuple[int, int]:
    """Left and right time of the wick centred in candle ``index``'s slot."""
    centre = slot_centre(period, index)
    half = body_width(period) / 12.0
    return centre - math.ceil(half), centre + math.floor(half)


def series_points(
    canvas: Any,
    values: Sequence[Optional[float]],
    start: int,
    count: int,
    scale: Optional[Callable[[float], float]] = None,
) -> Iterator[Tuple[Point, Point]]:
    """Yield consecutive point pairs of a per-candle series from ``start``.

    ``values[i]`` is plotted at candle ``i``'s centre; ``None`` and NaN
    entries break the polyline.  ``scale`` maps a value to the canvas's
    vertical coordinate (identity by default).
    """
    period = candle_period(canvas.timeframe, count)
    previous: Optional[Point] = None
    for i in range(max(start, 0), len(values)):
        value = values[i]
        if value is None or math.isnan(value):
            previous = None
            continue
        if scale is not None:
            value = scale(value)
        point = canvas.data_to_coords(value, slot_centre(period, i))
        if previous is not None:
            yield previous, point
        previous = point
