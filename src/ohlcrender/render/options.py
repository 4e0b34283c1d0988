"""Per-render chart configuration.

:class:`RenderOptions` gathers the look of a chart (size, colours,
title, grid) and the ordered list of extensions painted over the base
layers.  Defaults come from :mod:`ohlcrender.config`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from ..canvas import Margin
from ..config import (
    BACKGROUND_COLOUR,
    CURRENT_VALUE_COLOUR,
    DEFAULT_HEIGHT,
    DEFAULT_TIME_UNITS,
    DEFAULT_WIDTH,
    DOWN_COLOUR,
    GRID_LINE_COLOUR,
    MARGIN_BOTTOM,
    MARGIN_LEFT,
    MARGIN_RIGHT,
    MARGIN_TOP,
    TITLE_COLOUR,
    UP_COLOUR,
)
from ..extensions import BasicIndicativeLines, CandleBody, GridLines, RendererExtension

logger = logging.getLogger(__name__)


def default_margin() -> Margin:
    return Margin(top=MARGIN_TOP, bottom=MARGIN_BOTTOM, left=MARGIN_LEFT, right=MARGIN_RIGHT)


@dataclass
class RenderOptions:
    """Configuration for one chart.

    Attributes
    ----------
    title : str
        Text drawn in the top-left corner; empty for none.
    title_colour : int
        Packed RGBA colour of the title and legend text.
    background_colour : int
        Fill colour of the whole image (alpha ignored).
    current_value_colour : int
        Colour of the last-close line and marker.
    up_colour, down_colour : int
        Candle colours for rising (``close >= open``) and falling candles.
    value_prefix, value_suffix : str
        Wrapped around every price label, e.g. ``"$"``.
    time_units : int
        Seconds represented by one candle.
    line_colour : int
        Grid line and grid label colour.
    price_line_interval : float
        Price distance between horizontal grid lines; ``0`` disables them.
    time_line_interval : int
        Number of candles between vertical grid lines; ``0`` disables them.
    grid_labels : bool
        Whether grid lines carry value/time labels.
    indicative_lines : bool
        Whether the high/low/last-close lines are drawn.
    width, height : int
        Size of the main plot image in pixels.
    margin : Margin
        Space around the plot area.
    extensions : list of RendererExtension
        Overlays applied after the base layers, in order.
    """

    title: str = ""
    title_colour: int = TITLE_COLOUR
    background_colour: int = BACKGROUND_COLOUR
    current_value_colour: int = CURRENT_VALUE_COLOUR
    up_colour: int = UP_COLOUR
    down_colour: int = DOWN_COLOUR
    value_prefix: str = ""
    value_suffix: str = ""
    time_units: int = DEFAULT_TIME_UNITS
    line_colour: int = GRID_LINE_COLOUR
    price_line_interval: float = 0.0
    time_line_interval: int = 0
    grid_labels: bool = True
    indicative_lines: bool = True
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    margin: Margin = field(default_factory=default_margin)
    extensions: List[RendererExtension] = field(default_factory=list)

    def add_extension(self, extension: RendererExtension) -> "RenderOptions":
        """Append ``extension`` unless one with the same name is present."""
        name = extension.name()
        if name in self.extension_names():
            logger.debug("Skipping duplicate extension %s", name)
            return self
        self.extensions.append(extension)
        return self

    def extension_names(self) -> List[str]:
        return [ext.name() for ext in self.extensions]

    def base_layers(self) -> List[RendererExtension]:
        """Grid, candles and indicative lines, in painting order."""
        layers: List[RendererExtension] = []
        if self.line_colour & 0xFF and (self.price_line_interval > 0 or self.time_line_interval > 0):
            layers.append(
                GridLines(
                    self.line_colour,
                    self.grid_labels,
                    self.price_line_interval,
                    self.time_line_interval * self.time_units,
                    self.value_prefix,
                    self.value_suffix,
                )
            )
        layers.append(CandleBody(self.up_colour, self.down_colour, self.current_value_colour))
        if self.indicative_lines:
            layers.append(
                BasicIndicativeLines(
                    self.up_colour,
                    self.down_colour,
                    self.current_value_colour,
                    self.value_prefix,
                    self.value_suffix,
                )
            )
        return layers
