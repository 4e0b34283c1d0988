"""Command-line interface for ohlcrender.

This module uses the :mod:`click` library to expose two commands:

* ``render`` draws a candle file (JSON or CSV) into an image, with
  optional indicator overlays and panels.
* ``summary`` validates a candle file and prints its aggregate as JSON.

Library errors are reported as :class:`click.ClickException` so the
process exits with status 1 and a one-line message.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

import click

from .candles import Candle, aggregate, load_candles, validate_candles
from .config import (
    BB_COLOUR,
    BB_DEVIATIONS,
    BB_PERIODS,
    CLI_BACKGROUND_COLOUR,
    CLI_GRID_COLOUR,
    CLI_GRID_TIME_CANDLES,
    CLI_TITLE_COLOUR,
    DEFAULT_TIME_UNITS,
    DEMA_COLOUR,
    EMA_COLOUR,
    EMA_PERIODS,
    EMA_SMOOTHING,
    MACD_DIVERGENCE_COLOUR,
    MACD_HISTOGRAM_COLOUR,
    MACD_LABEL_COLOUR,
    MACD_SIGNAL_COLOUR,
    MACD_SMOOTHING,
    RSI_LINE_COLOUR,
    RSI_OVERBOUGHT_COLOUR,
    RSI_OVERSOLD_COLOUR,
    RSI_PERIODS,
    RSI_REFERENCE_COLOUR,
    VOLUME_BUY_COLOUR,
    VOLUME_GENERIC_COLOUR,
    VOLUME_LABEL_COLOUR,
    VOLUME_SELL_COLOUR,
)
from .errors import ChartError
from .extensions import DEMA, EMA, MACD, RSI, BollingerBands, Volume
from .render import RenderOptions, render as render_chart
from .utils import nice_interval, parse_colour

DEFAULT_OUTPUT = "chart.png"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _colour_option(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[int]:
    """Click callback turning a hex colour string into packed RGBA."""
    if value is None:
        return None
    try:
        return parse_colour(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param)


def _load(input_path: str) -> List[Candle]:
    try:
        return load_candles(input_path)
    except (OSError, ValueError) as exc:
        raise click.ClickException(f"Could not read candles from {input_path}: {exc}")


def build_options(
    candles: List[Candle],
    *,
    title: str,
    background: Optional[int],
    grid_price: Optional[float],
    grid_time: int,
    time_units: int,
    prefix: str,
    suffix: str,
) -> RenderOptions:
    """Assemble the CLI's dark-theme :class:`RenderOptions`.

    ``grid_price`` of ``None`` picks a round interval from the price range.
    """
    if grid_price is None:
        grid_price = nice_interval(aggregate(candles).range)
    return RenderOptions(
        title=title,
        title_colour=CLI_TITLE_COLOUR,
        background_colour=CLI_BACKGROUND_COLOUR if background is None else background,
        value_prefix=prefix,
        value_suffix=suffix,
        time_units=time_units,
        line_colour=CLI_GRID_COLOUR,
        price_line_interval=grid_price,
        time_line_interval=grid_time,
    )


@click.group()
def cli() -> None:
    """ohlcrender command-line interface."""
    pass


# -----------------------------------------------------------------------------
# Render command
#
# Reads a candle file, paints the chart and writes the image.  The output
# path defaults to $OHLCRENDER_OUTPUT and then to chart.png; the title to
# $OHLCRENDER_TITLE.  Indicator switches are applied in a fixed order:
# overlays on the main plot first, then the panels below it.
@cli.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Image file to write (format from its extension).")
@click.option("--title", type=str, default=None, help="Chart title (default: env OHLCRENDER_TITLE).")
@click.option("--background", type=str, default=None, callback=_colour_option, help="Background colour as #RRGGBB or #RRGGBBAA.")
@click.option("--grid-price", type=float, default=None, help="Price step between grid lines; 0 disables (default: automatic).")
@click.option("--grid-time", type=int, default=CLI_GRID_TIME_CANDLES, show_default=True, help="Candles between vertical grid lines; 0 disables.")
@click.option("--time-units", type=int, default=DEFAULT_TIME_UNITS, show_default=True, help="Seconds represented by one candle.")
@click.option("--prefix", type=str, default="", help="Prefix for price labels, e.g. '$'.")
@click.option("--suffix", type=str, default="", help="Suffix for price labels.")
@click.option("--bb", is_flag=True, default=False, help="Overlay Bollinger bands.")
@click.option("--ema", is_flag=True, default=False, help="Overlay an exponential moving average.")
@click.option("--dema", is_flag=True, default=False, help="Overlay a double exponential moving average.")
@click.option("--macd", is_flag=True, default=False, help="Add a MACD panel.")
@click.option("--rsi", is_flag=True, default=False, help="Add an RSI panel.")
@click.option("--volume", is_flag=True, default=False, help="Add a volume panel.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def render(
    input_path: str,
    output: Optional[str],
    title: Optional[str],
    background: Optional[int],
    grid_price: Optional[float],
    grid_time: int,
    time_units: int,
    prefix: str,
    suffix: str,
    bb: bool,
    ema: bool,
    dema: bool,
    macd: bool,
    rsi: bool,
    volume: bool,
    verbose: bool,
) -> None:
    """Render the candles in INPUT (JSON or CSV) to an image."""
    _configure_logging(verbose)
    if time_units <= 0:
        raise click.UsageError("--time-units must be positive")
    if grid_time < 0:
        raise click.UsageError("--grid-time cannot be negative")

    candles = _load(input_path)
    output_path = Path(output or os.getenv("OHLCRENDER_OUTPUT") or DEFAULT_OUTPUT)
    chart_title = title if title is not None else os.getenv("OHLCRENDER_TITLE", "")

    try:
        validate_candles(candles)
        options = build_options(
            candles,
            title=chart_title,
            background=background,
            grid_price=grid_price,
            grid_time=grid_time,
            time_units=time_units,
            prefix=prefix,
            suffix=suffix,
        )
        if bb:
            options.add_extension(BollingerBands(BB_PERIODS, BB_DEVIATIONS, BB_COLOUR))
        if ema:
            options.add_extension(EMA(EMA_PERIODS, EMA_SMOOTHING, EMA_COLOUR))
        if dema:
            options.add_extension(DEMA(EMA(EMA_PERIODS, EMA_SMOOTHING, DEMA_COLOUR)))
        if macd:
            options.add_extension(
                MACD(
                    MACD_DIVERGENCE_COLOUR,
                    MACD_SIGNAL_COLOUR,
                    MACD_HISTOGRAM_COLOUR,
                    MACD_LABEL_COLOUR,
                    MACD_SMOOTHING,
                )
            )
        if rsi:
            options.add_extension(
                RSI(
                    RSI_LINE_COLOUR,
                    RSI_REFERENCE_COLOUR,
                    RSI_OVERBOUGHT_COLOUR,
                    RSI_OVERSOLD_COLOUR,
                    RSI_PERIODS,
                )
            )
        if volume:
            options.add_extension(
                Volume(VOLUME_LABEL_COLOUR, VOLUME_BUY_COLOUR, VOLUME_SELL_COLOUR, VOLUME_GENERIC_COLOUR)
            )
        written = render_chart(candles, output_path, options)
    except ChartError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"WROTE {written} ({len(candles)} candles)")


@cli.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def summary(input_path: str, verbose: bool) -> None:
    """Validate INPUT and print its open/high/low/close as JSON."""
    _configure_logging(verbose)
    candles = _load(input_path)
    try:
        validate_candles(candles)
    except ChartError as exc:
        raise click.ClickException(str(exc))
    totals = aggregate(candles)
    payload = {
        "open": totals.open,
        "high": totals.high,
        "low": totals.low,
        "close": totals.close,
        "range": totals.range,
        "candles": len(candles),
    }
    click.echo(json.dumps(payload, indent=2))
