"""Relative Strength Index (RSI) indicator."""

from ports import require_positive_period

from domain.indicators.base import IndicatorValue, Numbers, undefined


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    # No losses in the window: RSI saturates at 100 rather than dividing by zero
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def rsi(closes: Numbers, period: int = 14) -> list[IndicatorValue]:
    """Calculate RSI using Wilder's smoothing method.

    Returns values on 0-100 scale. Uses Wilder's smoothing (RMA) rather
    than simple moving average after the first window.

    Args:
        closes: List of closing prices
        period: RSI period (default: 14)

    Returns:
        List of RSI values (0-100), with None for insufficient data points

    Raises:
        InvalidParameter: If period is not a positive integer

    Example:
        >>> prices = [44, 44.34, 44.09, 43.61, 44.33, 44.83, 45.10, 45.42,
        ...           45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28, 46.00]
        >>> result = rsi(prices, 14)
        >>> result[13] is None and 0 <= result[-1] <= 100
        True

    Notes:
        - Wilder's smoothing: New avg = (prev_avg * (period-1) + current) / period
        - First RSI value appears at index (period), not (period-1)
        - Returns None for first (period) values
        - A window with zero average loss yields 100.0, never NaN
    """
    require_positive_period("period", period)
    if len(closes) <= period:
        return undefined(len(closes))

    result = undefined(period)

    gains = []
    losses = []

    for i in range(1, period + 1):
        change = closes[i] - closes[i - 1]
        gains.append(max(change, 0))
        losses.append(max(-change, 0))

    # WHY: First average is simple average
    avg_gain = sum(gains) / period
    avg_loss = sum(losses) / period
    result.append(_rsi_value(avg_gain, avg_loss))

    for i in range(period + 1, len(closes)):
        change = closes[i] - closes[i - 1]
        gain = max(change, 0)
        loss = max(-change, 0)

        # Wilder's smoothing formula
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

        result.append(_rsi_value(avg_gain, avg_loss))

    return result
