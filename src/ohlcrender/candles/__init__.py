"""Candle data model, aggregation, validation and input loading."""

from .models import Aggregate, Candle, aggregate, check_candle, validate_candles
from .io import load_candles, parse_candles

__all__ = [
    "Aggregate",
    "Candle",
    "aggregate",
    "check_candle",
    "validate_candles",
    "load_candles",
    "parse_candles",
]
