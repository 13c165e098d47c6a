from .series import Bar, OHLCVSeries
from .generator import generate_series, trading_days, is_trading_day
from .indicators import (
    IndicatorKind,
    IndicatorRequest,
    IndicatorSet,
    DEFAULT_REQUESTS,
    compute_indicators,
    augment_series,
)

__all__ = [
    # Data model
    "Bar",
    "OHLCVSeries",
    # Generator
    "generate_series",
    "trading_days",
    "is_trading_day",
    # Engine
    "IndicatorKind",
    "IndicatorRequest",
    "IndicatorSet",
    "DEFAULT_REQUESTS",
    "compute_indicators",
    "augment_series",
]
