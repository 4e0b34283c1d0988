"""Top-level package for ohlcrender.

This package renders candlestick charts from OHLC(V) candles into RGB
raster images.  The candle model lives in :mod:`ohlcrender.candles`,
the pixel buffer and painting primitives in :mod:`ohlcrender.canvas`,
indicator overlays in :mod:`ohlcrender.extensions` and the render
orchestrator in :mod:`ohlcrender.render`.  A command-line interface is
exposed via :mod:`ohlcrender.cli`.
"""

from .candles import Aggregate, Candle, aggregate, validate_candles
from .errors import ChartError, CandleValidationError, EncodingError, PreconditionViolation
from .render import RenderOptions, render, render_canvas, render_with_callback

__all__ = [
    "Aggregate",
    "Candle",
    "aggregate",
    "validate_candles",
    "ChartError",
    "CandleValidationError",
    "EncodingError",
    "PreconditionViolation",
    "RenderOptions",
    "render",
    "render_canvas",
    "render_with_callback",
]
