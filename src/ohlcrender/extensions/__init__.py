"""Renderer extensions: the overlay protocol and built-in indicators.

Extensions are applied in the order they are configured; each one may
read the candles and paint onto the canvas or request a sub-panel
below it.  Built-ins cover the base layers (grid, candles, indicative
lines) and the technical indicators (EMA, DEMA, MACD, RSI, Bollinger
bands, volume).
"""

from .base import RendererExtension
from .bollinger import BollingerBands, bollinger_bands
from .candles import CandleBody
from .grid_lines import GridLines
from .indicative_lines import BasicIndicativeLines
from .macd import MACD, macd
from .moving_averages import DEMA, EMA, dema, ema, median_list, median_of
from .rsi import RSI, rsi_series
from .volume import Volume

__all__ = [
    "RendererExtension",
    "BasicIndicativeLines",
    "BollingerBands",
    "CandleBody",
    "DEMA",
    "EMA",
    "GridLines",
    "MACD",
    "RSI",
    "Volume",
    "bollinger_bands",
    "dema",
    "ema",
    "macd",
    "median_list",
    "median_of",
    "rsi_series",
]
