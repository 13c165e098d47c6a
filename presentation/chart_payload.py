"""
Chart payloads for the rendering layer.

Transforms a series and its indicator columns into the point lists chart
widgets consume. Undefined indicator entries are dropped from point lists
(they must not be plotted) and kept as null in the full row table.
"""

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel, Field

from domain import OHLCVSeries, IndicatorSet, augment_series
from domain.indicators import IndicatorValue

logger = logging.getLogger(__name__)

DEFAULT_UP_COLOR = "#26a69a"
DEFAULT_DOWN_COLOR = "#ef5350"


# ============================================================================
# Response Models
# ============================================================================

class CandlePoint(BaseModel):
    """One candlestick."""
    time: str
    open: float
    high: float
    low: float
    close: float


class LinePoint(BaseModel):
    """One plotted value of a line series."""
    time: str
    value: float


class HistogramPoint(BaseModel):
    """One coloured histogram bar (volume, MACD histogram)."""
    time: str
    value: float
    color: str


class ChartPayload(BaseModel):
    """Everything a chart page needs for one series."""
    symbol: str | None = None
    bar_count: int
    candles: list[CandlePoint]
    volume: list[HistogramPoint]
    lines: dict[str, list[LinePoint]] = Field(default_factory=dict)
    histograms: dict[str, list[HistogramPoint]] = Field(default_factory=dict)
    rows: list[dict[str, Any]] = Field(default_factory=list)


# ============================================================================
# Converters
# ============================================================================

def _check_aligned(series: OHLCVSeries, values: Sequence[IndicatorValue]) -> None:
    if len(values) != len(series):
        raise ValueError(
            f"values has {len(values)} entries but series has {len(series)} bars"
        )


def candle_data(series: OHLCVSeries) -> list[CandlePoint]:
    return [
        CandlePoint(
            time=bar.timestamp.isoformat(),
            open=bar.open,
            high=bar.high,
            low=bar.low,
            close=bar.close,
        )
        for bar in series
    ]


def line_data(series: OHLCVSeries, values: Sequence[IndicatorValue]) -> list[LinePoint]:
    """Pair values with bar dates, skipping undefined entries."""
    _check_aligned(series, values)
    return [
        LinePoint(time=bar.timestamp.isoformat(), value=value)
        for bar, value in zip(series, values)
        if value is not None
    ]


def histogram_data(
    series: OHLCVSeries,
    values: Sequence[IndicatorValue],
    up_color: str = DEFAULT_UP_COLOR,
    down_color: str = DEFAULT_DOWN_COLOR,
) -> list[HistogramPoint]:
    """Histogram bars coloured by sign, skipping undefined entries."""
    _check_aligned(series, values)
    return [
        HistogramPoint(
            time=bar.timestamp.isoformat(),
            value=value,
            color=up_color if value >= 0 else down_color,
        )
        for bar, value in zip(series, values)
        if value is not None
    ]


def volume_data(
    series: OHLCVSeries,
    up_color: str = DEFAULT_UP_COLOR,
    down_color: str = DEFAULT_DOWN_COLOR,
) -> list[HistogramPoint]:
    """Volume bars coloured by close versus previous close (first bar is up)."""
    points = []
    prev_close = None
    for bar in series:
        is_up = prev_close is None or bar.close >= prev_close
        points.append(HistogramPoint(
            time=bar.timestamp.isoformat(),
            value=bar.volume,
            color=up_color if is_up else down_color,
        ))
        prev_close = bar.close
    return points


def build_chart_payload(
    series: OHLCVSeries,
    indicators: IndicatorSet,
    up_color: str = DEFAULT_UP_COLOR,
    down_color: str = DEFAULT_DOWN_COLOR,
    include_rows: bool = True,
) -> ChartPayload:
    """
    Build the chart payload for a series and its computed indicators.

    MACD histogram columns become coloured histograms; every other column
    becomes a line.
    """
    lines: dict[str, list[LinePoint]] = {}
    histograms: dict[str, list[HistogramPoint]] = {}

    for column, values in indicators.items():
        if column.endswith("_histogram"):
            histograms[column] = histogram_data(series, values, up_color, down_color)
        else:
            lines[column] = line_data(series, values)

    return ChartPayload(
        symbol=series.symbol,
        bar_count=len(series),
        candles=candle_data(series),
        volume=volume_data(series, up_color, down_color),
        lines=lines,
        histograms=histograms,
        rows=augment_series(series, indicators) if include_rows else [],
    )


def payload_to_json(payload: ChartPayload, indent: int | None = 2) -> str:
    return json.dumps(payload.model_dump(), indent=indent, default=str)


def write_payload(payload: ChartPayload, path: Path | str, indent: int | None = 2) -> Path:
    """Write payload JSON to path, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload_to_json(payload, indent=indent))
    logger.info(f"Wrote chart payload ({payload.bar_count} bars) to {path}")
    return path
