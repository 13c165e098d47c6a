"""MACD (Moving Average Convergence Divergence) indicator."""

from ports import InvalidParameter, require_positive_period

from domain.indicators.base import IndicatorValue, Numbers, undefined
from domain.indicators.moving_averages import ema


def macd(
    closes: Numbers,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9
) -> tuple[list[IndicatorValue], list[IndicatorValue], list[IndicatorValue]]:
    """Calculate MACD indicator.

    MACD Line = EMA(fast) - EMA(slow)
    Signal Line = EMA(MACD Line, signal periods)
    Histogram = MACD Line - Signal Line

    Args:
        closes: List of closing prices
        fast: Fast EMA period (default: 12)
        slow: Slow EMA period (default: 26)
        signal: Signal line EMA period (default: 9)

    Returns:
        Tuple of (macd_line, signal_line, histogram)
        Each is a list with None for insufficient data points

    Raises:
        InvalidParameter: If any period is not positive or fast >= slow

    Example:
        >>> prices = list(range(10, 50))
        >>> macd_line, signal_line, histogram = macd(prices)
        >>> macd_line[24] is None and macd_line[25] is not None
        True
        >>> signal_line[32] is None and signal_line[33] is not None
        True

    Notes:
        - MACD line is defined from index slow - 1
        - Signal line is seeded by the SMA of the first 'signal' MACD values,
          so it is defined from index slow + signal - 2
        - Histogram is simply the difference between MACD and Signal
    """
    require_positive_period("fast", fast)
    require_positive_period("slow", slow)
    require_positive_period("signal", signal)
    if fast >= slow:
        raise InvalidParameter("fast", fast, f"fast period must be less than slow ({slow})")

    n = len(closes)
    if n < slow:
        return (undefined(n), undefined(n), undefined(n))

    fast_ema = ema(closes, fast)
    slow_ema = ema(closes, slow)

    macd_line: list[IndicatorValue] = []
    for f, s in zip(fast_ema, slow_ema):
        if f is None or s is None:
            macd_line.append(None)
        else:
            macd_line.append(f - s)

    # WHY: Signal EMA runs over the defined MACD values only, never over
    # warm-up placeholders, then maps back onto the original indices
    first_valid_idx = slow - 1
    signal_values = ema(macd_line[first_valid_idx:], signal)

    signal_line = undefined(first_valid_idx) + signal_values
    histogram: list[IndicatorValue] = []
    for m, s in zip(macd_line, signal_line):
        if m is None or s is None:
            histogram.append(None)
        else:
            histogram.append(m - s)

    return (macd_line, signal_line, histogram)
