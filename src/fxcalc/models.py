"""
fxcalc Data Models

All monetary values and rates are decimal.Decimal; results are immutable
response values created fresh per calculation and never persisted.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# === Enums ===

class FeeMode(str, Enum):
    """Fee policy selecting the percentage rate applied to a conversion."""
    STANDARD = "standard"  # 1.0%
    EXPRESS = "express"    # 1.5%
    ECONOMY = "economy"    # 0.5%

    @classmethod
    def resolve(cls, value: "FeeMode | str | None") -> "FeeMode":
        """
        Case-insensitive lookup. Unknown or missing input falls back to STANDARD.
        """
        if isinstance(value, FeeMode):
            return value
        if value is None:
            return cls.STANDARD
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.STANDARD


# === Calculator Policy ===

class CalculatorConfig(BaseModel):
    """
    Fee policy and limits injected into ExchangeCalculator.

    Built from Settings in production; tests construct it directly.
    """
    model_config = ConfigDict(frozen=True)

    fee_rates: dict[FeeMode, Decimal] = Field(
        default_factory=lambda: {
            FeeMode.STANDARD: Decimal("0.010"),
            FeeMode.EXPRESS: Decimal("0.015"),
            FeeMode.ECONOMY: Decimal("0.005"),
        },
        description="Percentage fee per mode, as a fraction"
    )
    min_fee: Decimal = Field(default=Decimal("2.99"), ge=Decimal("0"))
    max_fee: Decimal = Field(default=Decimal("50.00"), ge=Decimal("0"))
    max_amount: Decimal = Field(default=Decimal("1000000"), gt=Decimal("0"))
    rate_variation: Decimal = Field(
        default=Decimal("0.001"),
        gt=Decimal("0"),
        lt=Decimal("1"),
        description="Static perturbation used for optimistic/pessimistic scenarios"
    )
    calculation_version: str = "2.0"

    @field_validator("fee_rates")
    @classmethod
    def check_fee_rates(cls, v: dict[FeeMode, Decimal]) -> dict[FeeMode, Decimal]:
        missing = set(FeeMode) - set(v)
        if missing:
            raise ValueError(f"fee_rates missing modes: {sorted(m.value for m in missing)}")
        for mode, rate in v.items():
            if not Decimal("0") <= rate < Decimal("1"):
                raise ValueError(f"fee rate for {mode.value} must be in [0, 1), got {rate}")
        return v

    @model_validator(mode="after")
    def check_fee_bounds(self) -> "CalculatorConfig":
        if self.min_fee > self.max_fee:
            raise ValueError(
                f"min_fee ({self.min_fee}) must not exceed max_fee ({self.max_fee})"
            )
        return self


# === Results ===

class CalculationResult(BaseModel):
    """
    Breakdown of one single-pair conversion.

    Invariants:
        net_converted_amount = gross_converted_amount - fee_amount * exchange_rate
        effective_rate = net_converted_amount / original_amount
        total_cost = original_amount + fee_amount
    """
    model_config = ConfigDict(frozen=True)

    from_currency: str
    to_currency: str
    original_amount: Decimal
    exchange_rate: Decimal
    gross_converted_amount: Decimal
    fee_mode: FeeMode
    fee_rate: Decimal
    fee_amount: Decimal
    net_converted_amount: Decimal
    total_cost: Decimal
    effective_rate: Decimal
    rate_margin: Decimal = Field(description="exchange_rate - effective_rate")
    calculated_at: datetime
    calculation_version: str


class BatchErrorEntry(BaseModel):
    """Failure recorded for one pair of a batch; the rest of the batch continues."""
    model_config = ConfigDict(frozen=True)

    error: str
    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] | None = None
    from_currency: str
    to_currency: str
    timestamp: datetime
    success: Literal[False] = False


class BatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    batch_results: dict[str, CalculationResult | BatchErrorEntry]
    calculated_at: datetime

    @property
    def succeeded(self) -> dict[str, CalculationResult]:
        return {
            k: v for k, v in self.batch_results.items()
            if isinstance(v, CalculationResult)
        }

    @property
    def failed(self) -> dict[str, BatchErrorEntry]:
        return {
            k: v for k, v in self.batch_results.items()
            if isinstance(v, BatchErrorEntry)
        }


class ReverseResult(BaseModel):
    """
    Source amount estimated to yield target_amount net, plus its forward check.

    required_amount ignores the min/max fee clamp when inverting, so near the
    clamp boundaries verification.net_converted_amount differs from
    target_amount. The difference is reported in net_discrepancy and is never
    reconciled; trust verification for the actual outcome.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    required_amount: Decimal
    target_amount: Decimal
    from_currency: str = Field(alias="from")
    to_currency: str = Field(alias="to")
    exchange_rate: Decimal
    fee_mode: FeeMode
    verification: CalculationResult
    net_discrepancy: Decimal = Field(
        description="verification.net_converted_amount - target_amount"
    )
    fee_clamped: bool = Field(
        description="True when the verification fee hit the min/max fee bound"
    )
    calculated_at: datetime


class RateSpread(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: Decimal
    high: Decimal
    low: Decimal
    spread_percentage: Decimal


class MonitoringResult(BaseModel):
    """Current, optimistic and pessimistic scenarios around one fetched rate."""
    model_config = ConfigDict(frozen=True)

    current_calculation: CalculationResult
    optimistic_calculation: CalculationResult
    pessimistic_calculation: CalculationResult
    rate_spread: RateSpread
