"""
OHLCV data model.

Bars and series are immutable. Indicator computation reads them and
produces new structures; nothing downstream writes back into a series.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Iterator, Mapping

from ports import ErrorCode, InvalidParameter


@dataclass(frozen=True)
class Bar:
    """
    One trading-period observation.

    Invariant: low <= min(open, close) <= max(open, close) <= high.
    """
    timestamp: date
    open: float
    high: float
    low: float
    close: float
    volume: float

    def __post_init__(self) -> None:
        for name in ("open", "high", "low", "close", "volume"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidParameter(
                    name, value, "value must be finite", code=ErrorCode.VALIDATION_BAR
                )
        for name in ("open", "high", "low", "close"):
            value = getattr(self, name)
            if not value > 0:
                raise InvalidParameter(
                    name, value, "prices must be positive", code=ErrorCode.VALIDATION_BAR
                )
        if self.volume < 0:
            raise InvalidParameter(
                "volume", self.volume, "volume must be non-negative", code=ErrorCode.VALIDATION_BAR
            )
        if self.low > min(self.open, self.close):
            raise InvalidParameter(
                "low", self.low, "low must be <= open and close", code=ErrorCode.VALIDATION_BAR
            )
        if self.high < max(self.open, self.close):
            raise InvalidParameter(
                "high", self.high, "high must be >= open and close", code=ErrorCode.VALIDATION_BAR
            )

    def to_record(self) -> dict[str, Any]:
        """Plain dict with an ISO date, as consumed by chart renderers."""
        return {
            "date": self.timestamp.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise InvalidParameter(
                "date", value, "expected YYYY-MM-DD", code=ErrorCode.VALIDATION_BAR
            ) from e
    raise InvalidParameter("date", value, "unsupported date type", code=ErrorCode.VALIDATION_BAR)


@dataclass(frozen=True)
class OHLCVSeries:
    """Ordered run of bars with strictly increasing dates."""
    bars: tuple[Bar, ...]
    symbol: str | None = None

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple
        if not isinstance(self.bars, tuple):
            object.__setattr__(self, "bars", tuple(self.bars))

        for prev, cur in zip(self.bars, self.bars[1:]):
            if cur.timestamp <= prev.timestamp:
                raise InvalidParameter(
                    "timestamp",
                    cur.timestamp.isoformat(),
                    f"dates must be strictly increasing (follows {prev.timestamp.isoformat()})",
                    code=ErrorCode.VALIDATION_SERIES,
                )

    def __len__(self) -> int:
        return len(self.bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self.bars)

    def __getitem__(self, index: int) -> Bar:
        return self.bars[index]

    @property
    def timestamps(self) -> tuple[date, ...]:
        return tuple(b.timestamp for b in self.bars)

    @property
    def opens(self) -> tuple[float, ...]:
        return tuple(b.open for b in self.bars)

    @property
    def highs(self) -> tuple[float, ...]:
        return tuple(b.high for b in self.bars)

    @property
    def lows(self) -> tuple[float, ...]:
        return tuple(b.low for b in self.bars)

    @property
    def closes(self) -> tuple[float, ...]:
        return tuple(b.close for b in self.bars)

    @property
    def volumes(self) -> tuple[float, ...]:
        return tuple(b.volume for b in self.bars)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        symbol: str | None = None,
    ) -> "OHLCVSeries":
        """
        Build a series from row mappings.

        Each row needs `date` (or `timestamp`), `open`, `high`, `low`,
        `close` and `volume`. Numeric strings are accepted, so rows read
        with csv.DictReader can be passed straight in.
        """
        bars = []
        for i, row in enumerate(records):
            raw_date = row.get("date", row.get("timestamp"))
            if raw_date is None:
                raise InvalidParameter(
                    "date", None, f"row {i} has no date", code=ErrorCode.VALIDATION_BAR
                )
            try:
                bars.append(Bar(
                    timestamp=_parse_date(raw_date),
                    open=float(row["open"]),
                    high=float(row["high"]),
                    low=float(row["low"]),
                    close=float(row["close"]),
                    volume=float(row.get("volume", 0) or 0),
                ))
            except KeyError as e:
                raise InvalidParameter(
                    str(e.args[0]), None, f"row {i} is missing a field", code=ErrorCode.VALIDATION_BAR
                ) from e
            except (TypeError, ValueError) as e:
                if isinstance(e, InvalidParameter):
                    raise e.with_context(row=i)
                raise InvalidParameter(
                    "row", i, f"non-numeric value: {e}", code=ErrorCode.VALIDATION_BAR
                ) from e
        return cls(bars=tuple(bars), symbol=symbol)

    def to_records(self) -> list[dict[str, Any]]:
        return [b.to_record() for b in self.bars]
