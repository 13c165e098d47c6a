"""Moving average indicators."""

from ports import require_positive_period

from domain.indicators.base import IndicatorValue, Numbers, undefined


def sma(values: Numbers, period: int) -> list[IndicatorValue]:
    """Calculate Simple Moving Average.

    Args:
        values: List of values to calculate SMA over
        period: Number of periods for the moving average

    Returns:
        List of SMA values, with None for insufficient data points

    Raises:
        InvalidParameter: If period is not a positive integer

    Example:
        >>> prices = [10, 11, 12, 13, 14, 15]
        >>> sma(prices, 3)
        [None, None, 11.0, 12.0, 13.0, 14.0]
    """
    require_positive_period("period", period)
    if len(values) < period:
        return undefined(len(values))

    result = undefined(period - 1)

    # WHY: Sum each window directly so the value is exactly the window mean
    for i in range(period - 1, len(values)):
        window = values[i - period + 1:i + 1]
        result.append(sum(window) / period)

    return result


def ema(values: Numbers, period: int) -> list[IndicatorValue]:
    """Calculate Exponential Moving Average.

    Seeded with the SMA of the first `period` values, then smoothed with
    multiplier k = 2/(period+1):

        EMA[i] = (value[i] - EMA[i-1]) * k + EMA[i-1]

    Args:
        values: List of values to calculate EMA over
        period: Number of periods for the moving average

    Returns:
        List of EMA values, with None for insufficient data points

    Raises:
        InvalidParameter: If period is not a positive integer

    Example:
        >>> prices = [10, 11, 12, 13, 14, 15]
        >>> ema(prices, 3)
        [None, None, 11.0, 12.0, 13.0, 14.0]
    """
    require_positive_period("period", period)
    if len(values) < period:
        return undefined(len(values))

    multiplier = 2.0 / (period + 1)
    result = undefined(period - 1)

    # WHY: First EMA value is SMA of first 'period' values
    prev_ema = sum(values[:period]) / period
    result.append(prev_ema)

    for i in range(period, len(values)):
        prev_ema = (values[i] - prev_ema) * multiplier + prev_ema
        result.append(prev_ema)

    return result


def wma(values: Numbers, period: int) -> list[IndicatorValue]:
    """Calculate Weighted Moving Average.

    Weights are linearly decreasing: period, period-1, ..., 2, 1
    Most recent value has highest weight.

    Args:
        values: List of values to calculate WMA over
        period: Number of periods for the moving average

    Returns:
        List of WMA values, with None for insufficient data points

    Example:
        >>> prices = [10, 11, 12, 13, 14, 15]
        >>> wma(prices, 3)
        [None, None, 11.333..., 12.333..., 13.333..., 14.333...]
    """
    require_positive_period("period", period)
    if len(values) < period:
        return undefined(len(values))

    result = undefined(period - 1)

    weights = range(1, period + 1)
    weight_sum = period * (period + 1) / 2

    for i in range(period - 1, len(values)):
        window = values[i - period + 1:i + 1]
        weighted_sum = sum(v * w for v, w in zip(window, weights))
        result.append(weighted_sum / weight_sum)

    return result
