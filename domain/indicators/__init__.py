"""Technical indicators for chart overlays and sub-charts.

This package provides pure Python implementations of the indicators the
charting front end plots, plus an engine that computes them over an
OHLCV series with index alignment preserved.

Indicators:
    - Moving Averages: SMA, EMA (SMA-seeded), WMA
    - RSI: Relative Strength Index using Wilder's smoothing
    - MACD: MACD line, signal line and histogram
    - Volume: Volume SMA

Every function returns a list as long as its input, with None for the
warm-up entries that do not have enough history yet.

Example:
    >>> from domain.indicators import rsi, macd, sma
    >>>
    >>> closes = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42,
    ...           45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28, 46.00]
    >>>
    >>> rsi_values = rsi(closes, period=14)
    >>> sma_values = sma(closes, period=5)
    >>> macd_line, signal_line, histogram = macd(closes, fast=3, slow=6, signal=3)
"""

from domain.indicators.base import IndicatorValue
from domain.indicators.engine import (
    DEFAULT_REQUESTS,
    IndicatorKind,
    IndicatorRequest,
    IndicatorSet,
    augment_series,
    compute_indicators,
)
from domain.indicators.macd import macd
from domain.indicators.moving_averages import ema, sma, wma
from domain.indicators.rsi import rsi
from domain.indicators.volume import volume_sma

__all__ = [
    # Base types
    "IndicatorValue",
    # Engine
    "IndicatorKind",
    "IndicatorRequest",
    "IndicatorSet",
    "DEFAULT_REQUESTS",
    "compute_indicators",
    "augment_series",
    # Moving averages
    "sma",
    "ema",
    "wma",
    # Oscillators
    "rsi",
    "macd",
    # Volume
    "volume_sma",
]
