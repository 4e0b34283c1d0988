"""
Configuration constants for ohlcrender.

This module centralises the default geometry, colours and indicator
parameters used across the renderer and the CLI.  Colours are packed
32-bit RGBA integers: red in the most significant byte, alpha in the
least significant one.
"""

from typing import Final

# Canvas geometry of the main plot.  Sub-panels requested by extensions
# grow the image below this area.
DEFAULT_WIDTH: Final[int] = 1300
DEFAULT_HEIGHT: Final[int] = 650
MARGIN_TOP: Final[int] = 60
MARGIN_BOTTOM: Final[int] = 35
MARGIN_LEFT: Final[int] = 10
MARGIN_RIGHT: Final[int] = 105

# Sub-panels keep the horizontal margins of the main plot and reserve
# room for a heading on top and labels at the bottom.
SUB_PANEL_MARGIN_TOP: Final[int] = 40
SUB_PANEL_MARGIN_BOTTOM: Final[int] = 35

# Glyph cell geometry of the bitmap font.
GLYPH_WIDTH: Final[int] = 10
GLYPH_HEIGHT: Final[int] = 17

# Seconds represented by a single candle (one hour).
DEFAULT_TIME_UNITS: Final[int] = 3600

# Default colours
BACKGROUND_COLOUR: Final[int] = 0xDDDDDDFF
TITLE_COLOUR: Final[int] = 0x000000FF
UP_COLOUR: Final[int] = 0x27A819FF
DOWN_COLOUR: Final[int] = 0xD33040FF
CURRENT_VALUE_COLOUR: Final[int] = 0x2E44EAFF
GRID_LINE_COLOUR: Final[int] = 0x0000007F

# Sub-panel heights per extension
MACD_PANEL_HEIGHT: Final[int] = 135
RSI_PANEL_HEIGHT: Final[int] = 175
VOLUME_PANEL_HEIGHT: Final[int] = 175

# Indicator defaults.  The CLI switches use these values.
BB_PERIODS: Final[int] = 20
BB_DEVIATIONS: Final[float] = 2.0
BB_COLOUR: Final[int] = 0x00AAAAFF

RSI_PERIODS: Final[int] = 10
RSI_LINE_COLOUR: Final[int] = 0xFFFFFFFF
RSI_REFERENCE_COLOUR: Final[int] = 0xFF7F00FF
RSI_OVERBOUGHT_COLOUR: Final[int] = 0xFF0000FF
RSI_OVERSOLD_COLOUR: Final[int] = 0x00FF00FF

EMA_PERIODS: Final[int] = 20
EMA_SMOOTHING: Final[float] = 0.1
EMA_COLOUR: Final[int] = 0xEE00EE9F
DEMA_COLOUR: Final[int] = 0x007FFF9F

MACD_SMOOTHING: Final[float] = 0.1
MACD_DIVERGENCE_COLOUR: Final[int] = 0x00FF00FF
MACD_SIGNAL_COLOUR: Final[int] = 0xFF0000FF
MACD_HISTOGRAM_COLOUR: Final[int] = 0x7F9F00FF
MACD_LABEL_COLOUR: Final[int] = 0xFFFFFFFF

VOLUME_LABEL_COLOUR: Final[int] = 0xFFFFFFFF
VOLUME_BUY_COLOUR: Final[int] = 0x27A819CF
VOLUME_SELL_COLOUR: Final[int] = 0xD33040CF
VOLUME_GENERIC_COLOUR: Final[int] = 0x7F7FBFCF

# Look of the CLI charts
CLI_BACKGROUND_COLOUR: Final[int] = 0x444444FF
CLI_TITLE_COLOUR: Final[int] = 0xFFFFFFFF
CLI_GRID_COLOUR: Final[int] = 0xEEEEEE5F
CLI_GRID_TIME_CANDLES: Final[int] = 24
