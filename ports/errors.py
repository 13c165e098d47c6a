"""
Error types for the indicator core.

Only one failure kind exists in the computation layer: a bad parameter.
Insufficient history and flat price series are data states, not errors.
"""

from datetime import datetime
from enum import Enum
from typing import Any


# ============================================================================
# Error Codes
# ============================================================================

class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # Validation errors (5xx)
    VALIDATION_PARAM = "E502"
    VALIDATION_CONFIG = "E503"
    VALIDATION_BAR = "E504"
    VALIDATION_SERIES = "E505"

    # Internal errors (9xx)
    INTERNAL = "E901"
    UNKNOWN = "E999"


# ============================================================================
# Error Classes
# ============================================================================

class ChartCoreError(Exception):
    """
    Base exception for the indicator core.

    Provides structured error information for debugging and logging.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now()
        self.message = message
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }

    def with_context(self, **kwargs: Any) -> "ChartCoreError":
        """Add additional context and return self for chaining."""
        self.context.update(kwargs)
        return self


class InvalidParameter(ChartCoreError, ValueError):
    """Raised when a caller passes a parameter the computation cannot accept.

    Examples: non-positive period, fast >= slow in MACD, non-positive bar
    count or base price, a bar whose high/low do not bracket open/close.
    """

    def __init__(
        self,
        parameter: str,
        value: Any,
        reason: str,
        code: ErrorCode = ErrorCode.VALIDATION_PARAM,
    ):
        self.parameter = parameter
        self.value = value
        self.reason = reason

        super().__init__(
            message=f"Invalid {parameter}={value!r}: {reason}",
            code=code,
            context={"parameter": parameter, "value": repr(value)},
        )


def require_positive_period(name: str, period: Any) -> int:
    """Validate a window length and return it as int."""
    if isinstance(period, bool) or not isinstance(period, int):
        raise InvalidParameter(name, period, "period must be an integer")
    if period <= 0:
        raise InvalidParameter(name, period, "period must be positive")
    return period
