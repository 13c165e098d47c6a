"""Volume-based indicators."""

from domain.indicators.base import IndicatorValue, Numbers
from domain.indicators.moving_averages import sma


def volume_sma(volumes: Numbers, period: int = 20) -> list[IndicatorValue]:
    """Calculate Simple Moving Average of volume.

    Args:
        volumes: List of volume values
        period: Period for moving average (default: 20)

    Returns:
        List of volume SMA values, with None for insufficient data points

    Example:
        >>> volumes = [1000000, 1100000, 1200000, 1300000, 1400000,
        ...            1500000, 1600000, 1700000, 1800000, 1900000,
        ...            2000000, 2100000, 2200000, 2300000, 2400000,
        ...            2500000, 2600000, 2700000, 2800000, 2900000, 3000000]
        >>> result = volume_sma(volumes, 20)
        >>> result[-1]
        2050000.0
    """
    return sma(volumes, period)
