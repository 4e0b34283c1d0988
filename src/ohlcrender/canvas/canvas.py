"""Chart canvas: pixel buffer plus the data-to-pixel projection.

A :class:`Canvas` owns the RGB buffer of one render call together with
the margins, the visible price window and the time window.  Prices grow
upwards and time grows to the right; both projections clamp to the plot
area so extensions can pass out-of-range values safely.

Extensions that need their own panel (oscillators, volume) call
:meth:`Canvas.create_sub_panel`.  The panel is a :class:`SubCanvas`
sharing the time axis of the main plot whose vertical axis is a
progress value in ``[0, 1]``.  Once the configure callback returns the
panel's pixels are appended below the existing image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..config import SUB_PANEL_MARGIN_BOTTOM, SUB_PANEL_MARGIN_TOP
from ..errors import PreconditionViolation
from .painting import Painter, Point, fill_buffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Margin:
    """Space in pixels between the image edges and the plot area."""

    top: int
    bottom: int
    left: int
    right: int


def _time_to_x(time: int, timeframe: int, width: int, margin: Margin) -> int:
    progress = time / timeframe
    if progress <= 0:
        return margin.left
    if progress >= 1:
        return width - margin.right
    return margin.left + int(progress * (width - margin.left - margin.right))


def _progress_to_y(progress: float, height: int, margin: Margin) -> int:
    if progress >= 1:
        return margin.top
    bottom = height - margin.bottom
    if progress <= 0:
        return bottom
    return int(bottom - progress * (bottom - margin.top))


def _check_geometry(width: int, height: int, margin: Margin, timeframe: int) -> None:
    if width <= 0 or height <= 0:
        raise PreconditionViolation(f"canvas size must be positive, got {width}x{height}")
    if timeframe <= 0:
        raise PreconditionViolation(f"timeframe must be > 0, got {timeframe}")
    if min(margin.top, margin.bottom, margin.left, margin.right) < 0:
        raise PreconditionViolation(f"margins cannot be negative: {margin}")
    if margin.top + margin.bottom >= height or margin.left + margin.right >= width:
        raise PreconditionViolation(
            f"margins {margin} leave no plot area on a {width}x{height} canvas"
        )


class SubCanvas(Painter):
    """A panel below the main plot with its own margins and a [0, 1] y axis."""

    def __init__(self, width: int, height: int, margin: Margin, timeframe: int, background: int) -> None:
        _check_geometry(width, height, margin, timeframe)
        self.width = width
        self.height = height
        self.margin = margin
        self.timeframe = timeframe
        self.background = background | 0xFF
        self.pixels = fill_buffer(width * height, background)

    def data_to_coords(self, progress: float, time: int) -> Point:
        """Project a vertical progress in ``[0, 1]`` and a time to pixels."""
        return (
            _time_to_x(time, self.timeframe, self.width, self.margin),
            _progress_to_y(progress, self.height, self.margin),
        )


class Canvas(Painter):
    """Pixel buffer and price/time projection for one chart.

    Args:
        width: Image width in pixels.
        height: Image height in pixels of the main plot.
        margin: Space around the plot area.
        price_max: Price mapped to the top of the plot area.
        price_min: Price mapped to the bottom of the plot area.
        timeframe: Seconds covered by the horizontal axis.
        background: Packed RGBA fill colour (alpha ignored).

    Raises:
        PreconditionViolation: If the price window is inverted or empty,
            the timeframe is not positive or the margins do not leave a
            plot area.
    """

    def __init__(
        self,
        width: int,
        height: int,
        margin: Margin,
        price_max: float,
        price_min: float,
        timeframe: int,
        background: int,
    ) -> None:
        if price_max < price_min:
            raise PreconditionViolation(f"price_max {price_max} is below price_min {price_min}")
        if price_max == price_min:
            raise PreconditionViolation(f"price window is empty ({price_min} == {price_max})")
        _check_geometry(width, height, margin, timeframe)

        self.width = width
        self.height = height
        self.margin = margin
        self.price_max = price_max
        self.price_min = price_min
        self.timeframe = timeframe
        self.background = background | 0xFF
        self.pixels = fill_buffer(width * height, background)

    @property
    def plot_width(self) -> int:
        return self.width - self.margin.left - self.margin.right

    @property
    def plot_height(self) -> int:
        return self.height - self.margin.top - self.margin.bottom

    def data_to_coords(self, price: float, time: int) -> Point:
        """Project a price and a time offset (seconds) to pixel coordinates.

        Both axes clamp: times at or before ``0`` land on the left plot
        edge, at or after ``timeframe`` on the right one; prices at or
        above ``price_max`` land on the top edge, at or below
        ``price_min`` on the bottom edge.
        """
        progress = (price - self.price_min) / (self.price_max - self.price_min)
        return (
            _time_to_x(time, self.timeframe, self.width, self.margin),
            _progress_to_y(progress, self.height, self.margin),
        )

    def create_sub_panel(self, height: int, configure: Callable[[SubCanvas], None]) -> SubCanvas:
        """Append a panel of ``height`` pixels below the image.

        ``configure`` paints into a fresh :class:`SubCanvas` that shares
        this canvas's width, horizontal margins, time axis and
        background.  The main plot's geometry is unchanged: its bottom
        margin grows by ``height`` together with the image height.

        Raises:
            PreconditionViolation: If ``height`` cannot hold the panel
                margins or the painted buffer has the wrong size.
        """
        if height <= SUB_PANEL_MARGIN_TOP + SUB_PANEL_MARGIN_BOTTOM:
            raise PreconditionViolation(f"sub-panel height {height} is too small")

        margin = Margin(
            top=SUB_PANEL_MARGIN_TOP,
            bottom=SUB_PANEL_MARGIN_BOTTOM,
            left=self.margin.left,
            right=self.margin.right,
        )
        panel = SubCanvas(self.width, height, margin, self.timeframe, self.background)
        configure(panel)

        if len(panel.pixels) != self.width * height * 3:
            raise PreconditionViolation(
                f"sub-panel buffer holds {len(panel.pixels)} bytes, expected {self.width * height * 3}"
            )

        self.pixels.extend(panel.pixels)
        self.height += height
        self.margin = Margin(
            top=self.margin.top,
            bottom=self.margin.bottom + height,
            left=self.margin.left,
            right=self.margin.right,
        )
        logger.debug("Appended %dpx sub-panel, canvas is now %dx%d", height, self.width, self.height)
        return panel

    def to_bytes(self) -> bytes:
        """Return a snapshot of the RGB buffer."""
        return bytes(self.pixels)
