"""
Configuration schema with validation.

All configuration is validated at load time using Pydantic.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.indicators import IndicatorKind, IndicatorRequest


class GeneratorConfig(BaseModel):
    """Synthetic series defaults."""

    bars: int = Field(default=90, ge=1, le=100_000)
    base_price: float = Field(default=28000.0, gt=0, description="Opening price of the first bar")
    volatility: float = Field(default=0.02, gt=0.0, lt=1.0, description="Max fractional move per bar")
    seed: int | None = Field(default=None, description="Fix for reproducible series")
    start_date: date | None = None
    volume_min: int = Field(default=500_000, ge=0)
    volume_max: int = Field(default=10_500_000, ge=0)

    @model_validator(mode="after")
    def volume_bounds_ordered(self) -> "GeneratorConfig":
        if self.volume_max < self.volume_min:
            raise ValueError("volume_max must be >= volume_min")
        return self


class IndicatorConfig(BaseModel):
    """Indicators computed for a chart."""

    sma_periods: list[int] = Field(default_factory=lambda: [10, 20, 50, 100, 150])
    ema_periods: list[int] = Field(default_factory=list)
    wma_periods: list[int] = Field(default_factory=list)
    rsi_period: int | None = Field(default=14, ge=1)
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=2)
    macd_signal: int = Field(default=9, ge=1)
    macd_enabled: bool = True
    volume_sma_period: int | None = Field(default=20, ge=1)

    @field_validator("sma_periods", "ema_periods", "wma_periods")
    @classmethod
    def periods_positive(cls, v: list[int]) -> list[int]:
        for period in v:
            if period <= 0:
                raise ValueError(f"periods must be positive, got {period}")
        return v

    @model_validator(mode="after")
    def slow_gt_fast(self) -> "IndicatorConfig":
        if self.macd_slow <= self.macd_fast:
            raise ValueError("macd_slow must be greater than macd_fast")
        return self

    def to_requests(self) -> list[IndicatorRequest]:
        """Convert to engine requests, in display order."""
        requests = [IndicatorRequest(IndicatorKind.SMA, p) for p in self.sma_periods]
        requests += [IndicatorRequest(IndicatorKind.EMA, p) for p in self.ema_periods]
        requests += [IndicatorRequest(IndicatorKind.WMA, p) for p in self.wma_periods]
        if self.rsi_period is not None:
            requests.append(IndicatorRequest(IndicatorKind.RSI, self.rsi_period))
        if self.macd_enabled:
            requests.append(IndicatorRequest(
                IndicatorKind.MACD,
                fast=self.macd_fast,
                slow=self.macd_slow,
                signal=self.macd_signal,
            ))
        if self.volume_sma_period is not None:
            requests.append(IndicatorRequest(IndicatorKind.VOLUME_SMA, self.volume_sma_period))
        return requests


class OutputConfig(BaseModel):
    """Output preferences."""

    indent: int | None = Field(default=2, ge=0, le=8)
    up_color: str = Field(default="#26a69a", min_length=1)
    down_color: str = Field(default="#ef5350", min_length=1)


class ChartCoreConfig(BaseModel):
    """
    Root configuration model.

    All settings are validated on load.
    """

    log_level: str = Field(default="INFO")

    # Subsections
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    indicators: IndicatorConfig = Field(default_factory=IndicatorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper().strip()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level
