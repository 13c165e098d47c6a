"""
Indicator engine.

Single entry point that turns an OHLCV series plus a set of indicator
requests into aligned value columns. Pure and synchronous: every call
recomputes from the full series, and the input is never modified.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator

from ports import InvalidParameter, require_positive_period
from domain.series import OHLCVSeries

from domain.indicators.base import IndicatorValue
from domain.indicators.macd import macd
from domain.indicators.moving_averages import ema, sma, wma
from domain.indicators.rsi import rsi
from domain.indicators.volume import volume_sma

logger = logging.getLogger(__name__)


class IndicatorKind(str, Enum):
    """Indicator families the engine can compute."""
    SMA = "sma"
    EMA = "ema"
    WMA = "wma"
    RSI = "rsi"
    MACD = "macd"
    VOLUME_SMA = "volume_sma"


# Defaults used when a request omits its period(s)
DEFAULT_PERIODS: dict[IndicatorKind, int] = {
    IndicatorKind.SMA: 20,
    IndicatorKind.EMA: 20,
    IndicatorKind.WMA: 20,
    IndicatorKind.RSI: 14,
    IndicatorKind.VOLUME_SMA: 20,
}
DEFAULT_MACD = (12, 26, 9)


@dataclass(frozen=True)
class IndicatorRequest:
    """
    One indicator to compute.

    Single-line kinds use `period`; MACD uses `fast`, `slow` and `signal`.
    """
    kind: IndicatorKind
    period: int | None = None
    fast: int | None = None
    slow: int | None = None
    signal: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, IndicatorKind):
            try:
                object.__setattr__(self, "kind", IndicatorKind(self.kind))
            except ValueError as e:
                raise InvalidParameter("kind", self.kind, "unknown indicator kind") from e

        # Fill defaults so equal requests compare equal
        if self.kind == IndicatorKind.MACD:
            fast, slow, signal = DEFAULT_MACD
            if self.fast is None:
                object.__setattr__(self, "fast", fast)
            if self.slow is None:
                object.__setattr__(self, "slow", slow)
            if self.signal is None:
                object.__setattr__(self, "signal", signal)
        elif self.period is None:
            object.__setattr__(self, "period", DEFAULT_PERIODS[self.kind])

    def validate(self) -> "IndicatorRequest":
        """Raise InvalidParameter for non-positive periods or fast >= slow."""
        if self.kind == IndicatorKind.MACD:
            require_positive_period("fast", self.fast)
            require_positive_period("slow", self.slow)
            require_positive_period("signal", self.signal)
            if self.fast >= self.slow:
                raise InvalidParameter(
                    "fast", self.fast, f"fast period must be less than slow ({self.slow})"
                )
        else:
            require_positive_period("period", self.period)
        return self

    @property
    def key(self) -> str:
        """Column name of the primary output, e.g. 'sma_20' or 'macd_12_26_9'."""
        if self.kind == IndicatorKind.MACD:
            return f"macd_{self.fast}_{self.slow}_{self.signal}"
        return f"{self.kind.value}_{self.period}"

    @property
    def columns(self) -> tuple[str, ...]:
        if self.kind == IndicatorKind.MACD:
            return (self.key, f"{self.key}_signal", f"{self.key}_histogram")
        return (self.key,)

    @property
    def warmup(self) -> int:
        """Index of the first defined value of the last-defined column."""
        if self.kind == IndicatorKind.MACD:
            return self.slow + self.signal - 2
        if self.kind == IndicatorKind.RSI:
            return self.period
        return self.period - 1

    @classmethod
    def parse(cls, text: str) -> "IndicatorRequest":
        """
        Build a request from 'kind[:params]'.

        Examples: 'sma:20', 'ema:50', 'rsi', 'rsi:9', 'macd:12,26,9',
        'volume_sma:20'.
        """
        raw = text.strip().lower()
        kind_text, _, params_text = raw.partition(":")
        try:
            kind = IndicatorKind(kind_text.strip().replace("-", "_"))
        except ValueError as e:
            raise InvalidParameter("kind", kind_text, "unknown indicator kind") from e

        params = []
        for part in filter(None, (p.strip() for p in params_text.split(","))):
            try:
                params.append(int(part))
            except ValueError as e:
                raise InvalidParameter("period", part, "period must be an integer") from e

        if kind == IndicatorKind.MACD:
            if len(params) not in (0, 3):
                raise InvalidParameter("macd", params_text, "expected fast,slow,signal")
            if params:
                return cls(kind, fast=params[0], slow=params[1], signal=params[2])
            return cls(kind)

        if len(params) > 1:
            raise InvalidParameter(kind.value, params_text, "expected a single period")
        return cls(kind, period=params[0] if params else None)


DEFAULT_REQUESTS: tuple[IndicatorRequest, ...] = (
    IndicatorRequest(IndicatorKind.SMA, 10),
    IndicatorRequest(IndicatorKind.SMA, 20),
    IndicatorRequest(IndicatorKind.SMA, 50),
    IndicatorRequest(IndicatorKind.SMA, 100),
    IndicatorRequest(IndicatorKind.SMA, 150),
    IndicatorRequest(IndicatorKind.RSI, 14),
    IndicatorRequest(IndicatorKind.MACD, fast=12, slow=26, signal=9),
    IndicatorRequest(IndicatorKind.VOLUME_SMA, 20),
)


class IndicatorSet(Mapping):
    """Read-only mapping of column name -> aligned tuple of values."""

    def __init__(self, length: int, columns: dict[str, tuple[IndicatorValue, ...]]):
        self._length = length
        self._columns = MappingProxyType(dict(columns))

    def __getitem__(self, column: str) -> tuple[IndicatorValue, ...]:
        return self._columns[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"IndicatorSet(length={self._length}, columns={list(self._columns)})"

    @property
    def length(self) -> int:
        """Number of bars every column is aligned to."""
        return self._length

    def defined_count(self, column: str) -> int:
        return sum(1 for v in self._columns[column] if v is not None)

    def first_defined_index(self, column: str) -> int | None:
        for i, v in enumerate(self._columns[column]):
            if v is not None:
                return i
        return None


def _compute(series: OHLCVSeries, request: IndicatorRequest) -> dict[str, list[IndicatorValue]]:
    closes = series.closes
    kind = request.kind

    if kind == IndicatorKind.SMA:
        return {request.key: sma(closes, request.period)}
    if kind == IndicatorKind.EMA:
        return {request.key: ema(closes, request.period)}
    if kind == IndicatorKind.WMA:
        return {request.key: wma(closes, request.period)}
    if kind == IndicatorKind.RSI:
        return {request.key: rsi(closes, request.period)}
    if kind == IndicatorKind.VOLUME_SMA:
        return {request.key: volume_sma(series.volumes, request.period)}

    macd_line, signal_line, histogram = macd(
        closes, request.fast, request.slow, request.signal
    )
    key, signal_key, histogram_key = request.columns
    return {key: macd_line, signal_key: signal_line, histogram_key: histogram}


def _normalize_requests(
    requests: Iterable[IndicatorRequest | str],
) -> list[IndicatorRequest]:
    seen: dict[IndicatorRequest, None] = {}
    for req in requests:
        if isinstance(req, str):
            req = IndicatorRequest.parse(req)
        seen.setdefault(req.validate(), None)
    return list(seen)


def compute_indicators(
    series: OHLCVSeries,
    requests: Iterable[IndicatorRequest | str] = DEFAULT_REQUESTS,
) -> IndicatorSet:
    """Compute every requested indicator over the series.

    Args:
        series: Input OHLCV series (not modified)
        requests: IndicatorRequest objects or 'kind:params' strings.
            Duplicates are computed once.

    Returns:
        IndicatorSet whose columns all have exactly len(series) entries,
        None before each indicator's warm-up completes

    Raises:
        InvalidParameter: For a non-positive period or fast >= slow. All
            requests are validated before anything is computed.

    Example:
        >>> from domain.generator import generate_series
        >>> series = generate_series(60, seed=1)
        >>> result = compute_indicators(series, ["sma:5", "macd"])
        >>> sorted(result)
        ['macd_12_26_9', 'macd_12_26_9_histogram', 'macd_12_26_9_signal', 'sma_5']
    """
    normalized = _normalize_requests(requests)
    n = len(series)

    columns: dict[str, tuple[IndicatorValue, ...]] = {}
    for request in normalized:
        if n <= request.warmup:
            logger.debug(
                f"{request.key}: {n} bars is less than the {request.warmup + 1} required"
            )
        for column, values in _compute(series, request).items():
            columns[column] = tuple(values)

    logger.debug(f"Computed {len(columns)} column(s) over {n} bars")
    return IndicatorSet(n, columns)


def augment_series(series: OHLCVSeries, indicators: IndicatorSet) -> list[dict[str, Any]]:
    """
    Merge OHLCV fields and indicator columns into new per-bar rows.

    Rows are fresh dicts; the series itself is untouched. Undefined
    indicator entries stay None.
    """
    if indicators.length != len(series):
        raise InvalidParameter(
            "indicators",
            indicators.length,
            f"indicator set is aligned to {indicators.length} bars, series has {len(series)}",
        )

    rows = []
    for i, bar in enumerate(series):
        row = bar.to_record()
        for column, values in indicators.items():
            row[column] = values[i]
        rows.append(row)
    return rows
