"""Exception types raised by ohlcrender.

Two families are kept apart so callers can tell malformed input from
misuse of the API: :class:`CandleValidationError` reports candles that
break the OHLC ordering (recoverable, shown to the user) while
:class:`PreconditionViolation` signals a programming error such as an
inverted price range or margins that do not fit the canvas.
"""

from __future__ import annotations

from typing import Optional


class ChartError(Exception):
    """Base class for every error raised while building a chart."""


class CandleValidationError(ChartError, ValueError):
    """A candle in the input series breaks ``low <= open, close <= high``.

    Attributes:
        index: Position of the first offending candle, or ``None`` when
            the series as a whole is unusable (e.g. empty).
        reason: The bare description without the index prefix.
    """

    def __init__(self, reason: str, index: Optional[int] = None) -> None:
        self.reason = reason
        self.index = index
        if index is None:
            message = f"Data validation error: {reason}"
        else:
            message = f"Data validation error: candle {index}: {reason}"
        super().__init__(message)


class PreconditionViolation(ChartError):
    """The canvas or an extension was used outside its contract."""


class EncodingError(ChartError):
    """The finished pixel buffer could not be written as an image."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


__all__ = ["ChartError", "CandleValidationError", "PreconditionViolation", "EncodingError"]
