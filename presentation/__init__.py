from .chart_payload import (
    CandlePoint,
    LinePoint,
    HistogramPoint,
    ChartPayload,
    candle_data,
    line_data,
    histogram_data,
    volume_data,
    build_chart_payload,
    payload_to_json,
    write_payload,
)

__all__ = [
    "CandlePoint",
    "LinePoint",
    "HistogramPoint",
    "ChartPayload",
    "candle_data",
    "line_data",
    "histogram_data",
    "volume_data",
    "build_chart_payload",
    "payload_to_json",
    "write_payload",
]
