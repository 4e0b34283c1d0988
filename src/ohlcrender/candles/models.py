"""Candle model, set aggregate and OHLC validation.

The renderer accepts any object exposing ``open``, ``high``, ``low``,
``close``, ``buy_volume`` and ``total_volume`` attributes.  :class:`Candle`
is the canonical pydantic model used when reading input files; the
aggregate and the validation helpers below only rely on the attribute
names so callers may pass their own bar objects as well.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..errors import CandleValidationError


class Candle(BaseModel):
    """A single OHLC(V) price bar for a fixed time bucket.

    Attributes:
        open: The opening price.
        high: The highest price.
        low: The lowest price.
        close: The closing price.
        buy_volume: Volume traded on the buy side, if known.
        total_volume: Total traded volume (``0.0`` when unknown).

    Input documents may use the short keys ``o``, ``h``, ``l``, ``c``,
    ``bv`` and ``v``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    open: float = Field(alias="o")
    high: float = Field(alias="h")
    low: float = Field(alias="l")
    close: float = Field(alias="c")
    buy_volume: Optional[float] = Field(default=None, alias="bv")
    total_volume: float = Field(default=0.0, alias="v")

    @property
    def range(self) -> float:
        return abs(self.high - self.low)


@dataclass(frozen=True)
class Aggregate:
    """Summary of a whole candle series.

    ``open`` comes from the first candle, ``close`` from the last one and
    ``high``/``low`` are the extremes over the set.  Volumes mirror the
    last candle.
    """

    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    buy_volume: Optional[float] = None
    total_volume: float = 0.0

    @property
    def range(self) -> float:
        return abs(self.high - self.low)


def aggregate(candles: Sequence[Any]) -> Aggregate:
    """Reduce a candle series to its overall open/high/low/close.

    An empty sequence yields a zeroed :class:`Aggregate`; the renderer
    refuses to draw empty series before it gets here.
    """
    if len(candles) == 0:
        return Aggregate()

    high = candles[0].high
    low = candles[0].low
    for candle in candles:
        if candle.high > high:
            high = candle.high
        if candle.low < low:
            low = candle.low

    last = candles[-1]
    return Aggregate(
        open=candles[0].open,
        high=high,
        low=low,
        close=last.close,
        buy_volume=last.buy_volume,
        total_volume=last.total_volume,
    )


def check_candle(candle: Any) -> Optional[str]:
    """Return a description of the first OHLC ordering problem, or ``None``."""
    for field in ("open", "high", "low", "close"):
        if not math.isfinite(getattr(candle, field)):
            return f"{field.capitalize()} value is not a finite number."
    if candle.open > candle.high:
        return "Opening value is higher than high value."
    if candle.close > candle.high:
        return "Closing value is higher than high value."
    if candle.low > candle.high:
        return "Low value is higher than high value."
    if candle.open < candle.low:
        return "Opening value is lower than low value."
    if candle.close < candle.low:
        return "Closing value is lower than low value."
    return None


def validate_candles(candles: Sequence[Any]) -> None:
    """Fail fast on the first candle breaking ``low <= open, close <= high``.

    Raises:
        CandleValidationError: For an empty series or the first invalid
            candle, carrying its index.
    """
    if len(candles) == 0:
        raise CandleValidationError("Cannot render an empty candle series.")
    for index, candle in enumerate(candles):
        reason = check_candle(candle)
        if reason is not None:
            raise CandleValidationError(reason, index=index)
