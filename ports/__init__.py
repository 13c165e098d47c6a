from .errors import (
    ChartCoreError,
    InvalidParameter,
    ErrorCode,
    require_positive_period,
)

__all__ = [
    "ChartCoreError",
    "InvalidParameter",
    "ErrorCode",
    "require_positive_period",
]
