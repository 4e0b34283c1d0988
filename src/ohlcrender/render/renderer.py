"""Render orchestration: candles in, canvas or image file out.

A render runs in fixed stages: validate the series, aggregate it,
allocate the canvas, paint the base layers (grid, candles, indicative
lines), apply the configured extensions in order, draw the title and
legend, and finally encode the buffer.  Nothing is written when any
stage before encoding fails.
"""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Tuple, TypeVar, Union

from ..candles import aggregate, validate_candles
from ..canvas import Canvas
from ..config import GLYPH_HEIGHT, GLYPH_WIDTH
from .encoder import write_image
from .options import RenderOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")

TITLE_ORIGIN = (8, 8)
LEGEND_GAP = 16


def price_window(high: float, low: float) -> Tuple[float, float]:
    """Return the ``(max, min)`` prices mapped to the plot edges.

    A flat series (``high == low``) is widened by one percent of its
    price, or by one unit around zero, so the projection stays defined.
    """
    if high > low:
        return high, low
    pad = abs(high) * 0.01 or 1.0
    logger.warning("Flat price series at %s, padding window by %s", high, pad)
    return high + pad, low - pad


def _draw_title(canvas: Canvas, options: RenderOptions) -> None:
    if options.title:
        canvas.text(TITLE_ORIGIN, options.title, options.title_colour)


def _draw_legend(canvas: Canvas, options: RenderOptions) -> None:
    x = TITLE_ORIGIN[0]
    y = TITLE_ORIGIN[1] + GLYPH_HEIGHT + 6
    for extension in options.extensions:
        colour = extension.lore_colour()
        if colour is None:
            continue
        label = extension.name()
        canvas.text_with_background((x, y), label, options.title_colour, colour)
        x += len(label) * GLYPH_WIDTH + LEGEND_GAP


def render_canvas(candles: Sequence[Any], options: Optional[RenderOptions] = None) -> Canvas:
    """Paint ``candles`` onto a new :class:`Canvas` and return it.

    Raises:
        CandleValidationError: If the series is empty or a candle breaks
            OHLC ordering.
        PreconditionViolation: If the configured geometry is unusable.
    """
    options = options or RenderOptions()
    started = time.perf_counter()

    validate_candles(candles)
    totals = aggregate(candles)
    price_max, price_min = price_window(totals.high, totals.low)

    canvas = Canvas(
        options.width,
        options.height,
        options.margin,
        price_max,
        price_min,
        len(candles) * options.time_units,
        options.background_colour,
    )

    for layer in options.base_layers():
        logger.debug("Painting base layer %s", layer.name())
        layer.apply(canvas, candles)
    for extension in options.extensions:
        logger.debug("Applying extension %s", extension.name())
        extension.apply(canvas, candles)

    _draw_title(canvas, options)
    _draw_legend(canvas, options)

    logger.debug(
        "Rendering process took %.1f ms (%d candles, %dx%d)",
        (time.perf_counter() - started) * 1000,
        len(candles),
        canvas.width,
        canvas.height,
    )
    return canvas


def render(
    candles: Sequence[Any],
    output_path: Union[str, Path],
    options: Optional[RenderOptions] = None,
) -> Path:
    """Render ``candles`` and write the image to ``output_path``.

    The image format follows the file extension.  Returns the written path.

    Raises:
        CandleValidationError: If the series is invalid; no file is written.
        EncodingError: If the image cannot be encoded or written.
    """
    canvas = render_canvas(candles, options)
    return write_image(canvas.to_bytes(), canvas.width, canvas.height, output_path)


def render_with_callback(
    candles: Sequence[Any],
    callback: Callable[[Path], T],
    options: Optional[RenderOptions] = None,
) -> T:
    """Render into a temporary PNG, pass its path to ``callback`` and clean up.

    The file only exists for the duration of the call; the callback's
    return value is passed through.
    """
    with tempfile.TemporaryDirectory(prefix="ohlc_render_") as tmp:
        path = render(candles, Path(tmp) / "chart.png", options)
        return callback(path)
