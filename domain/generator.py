"""
Synthetic OHLCV series generator.

Produces a random walk of daily bars for demos and tests where no real
market feed exists. Only OHLCV is generated; indicators for a generated
series come from the indicator engine like for any other series.
"""

import logging
import math
import random
from datetime import date, timedelta

from ports import InvalidParameter

from .series import Bar, OHLCVSeries

logger = logging.getLogger(__name__)

DEFAULT_BASE_PRICE = 28000.0  # Hang Seng index level
DEFAULT_VOLATILITY = 0.02
DEFAULT_VOLUME_MIN = 500_000
DEFAULT_VOLUME_MAX = 10_500_000

# Saturday, Sunday
WEEKEND = (5, 6)


def is_trading_day(day: date) -> bool:
    """Weekdays only; holidays are not modelled."""
    return day.weekday() not in WEEKEND


def trading_days(start: date, n: int) -> list[date]:
    """Return the first n weekdays on or after start."""
    days = []
    current = start
    while len(days) < n:
        if is_trading_day(current):
            days.append(current)
        current += timedelta(days=1)
    return days


def trailing_trading_days(n: int, end: date | None = None) -> list[date]:
    """Return the last n weekdays on or before end (default: today), oldest first."""
    current = end or date.today()
    days = []
    while len(days) < n:
        if is_trading_day(current):
            days.append(current)
        current -= timedelta(days=1)
    days.reverse()
    return days


def generate_series(
    n: int,
    base_price: float = DEFAULT_BASE_PRICE,
    volatility: float = DEFAULT_VOLATILITY,
    start: date | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
    volume_min: int = DEFAULT_VOLUME_MIN,
    volume_max: int = DEFAULT_VOLUME_MAX,
    symbol: str | None = None,
) -> OHLCVSeries:
    """Generate n daily bars as a random walk starting at base_price.

    Args:
        n: Number of bars (>= 1)
        base_price: Opening price of the first bar (> 0)
        volatility: Maximum fractional close-to-open move per bar (0 < v < 1)
        start: First calendar date to consider; weekends are skipped.
            Defaults to a run ending today
        seed: Seed for a private random.Random (ignored if rng is given)
        rng: Random source to draw from
        volume_min: Smallest volume drawn
        volume_max: Largest volume drawn
        symbol: Optional label carried on the series

    Returns:
        OHLCVSeries with exactly n bars on strictly increasing weekdays

    Raises:
        InvalidParameter: If n < 1, base_price <= 0, volatility outside (0, 1)
            or volume bounds are inconsistent

    Example:
        >>> series = generate_series(30, base_price=28000, seed=7)
        >>> len(series)
        30
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidParameter("n", n, "bar count must be a positive integer")
    if not (math.isfinite(base_price) and base_price > 0):
        raise InvalidParameter("base_price", base_price, "base price must be positive and finite")
    if not 0 < volatility < 1:
        raise InvalidParameter("volatility", volatility, "volatility must be in (0, 1)")
    if volume_min < 0 or volume_max < volume_min:
        raise InvalidParameter(
            "volume_min", volume_min, f"need 0 <= volume_min <= volume_max ({volume_max})"
        )

    rng = rng or random.Random(seed)
    days = trading_days(start, n) if start else trailing_trading_days(n)

    bars = []
    prev_close = float(base_price)

    for day in days:
        open_ = prev_close
        close = open_ * (1.0 + rng.uniform(-1.0, 1.0) * volatility)

        # Wicks extend beyond the body by up to half the volatility band
        wick = open_ * volatility
        high = max(open_, close) + rng.uniform(0.0, 0.5) * wick
        low = min(open_, close) - rng.uniform(0.0, 0.5) * wick
        # Keep low positive and under the body
        low = min(max(low, min(open_, close) * 0.5), min(open_, close))

        volume = float(rng.randint(volume_min, volume_max))

        bars.append(Bar(
            timestamp=day,
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=volume,
        ))
        prev_close = close

    logger.debug(
        f"Generated {n} bars from {days[0].isoformat()} to {days[-1].isoformat()}"
    )
    return OHLCVSeries(bars=tuple(bars), symbol=symbol)
