"""
fxcalc API Request / Response Schemas

Request bodies are deliberately loose: presence, format and range checks
happen in the calculator so every failure is reported as a ValidationError
naming the offending field.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CalculateRequest(BaseModel):
    """Body for POST /api/v1/rates/calculate"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"from": "USD", "to": "EUR", "amount": "100", "fee_mode": "standard"}
        },
    )

    from_currency: Any = Field(default=None, alias="from")
    to_currency: Any = Field(default=None, alias="to")
    amount: Any = None
    fee_mode: str | None = Field(
        default=None,
        description="standard | express | economy (unknown values use standard)"
    )


class BatchRequest(BaseModel):
    """Body for POST /api/v1/rates/calculate/batch"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"amount": "250", "currency_pairs": {"USD": "EUR", "GBP": "JPY"}}
        },
    )

    amount: Any = None
    currency_pairs: dict[str, Any] | None = Field(
        default=None,
        description="Mapping of source currency to target currency"
    )
    fee_mode: str | None = None


class ReverseRequest(BaseModel):
    """Body for POST /api/v1/rates/calculate/reverse"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"from": "USD", "to": "EUR", "target_amount": "841.50"}
        },
    )

    from_currency: Any = Field(default=None, alias="from")
    to_currency: Any = Field(default=None, alias="to")
    target_amount: Any = None
    fee_mode: str | None = None


class MonitoringRequest(BaseModel):
    """Body for POST /api/v1/rates/calculate/monitoring"""
    model_config = ConfigDict(populate_by_name=True)

    from_currency: Any = Field(default=None, alias="from")
    to_currency: Any = Field(default=None, alias="to")
    amount: Any = None


class RateResponse(BaseModel):
    """Response for GET /api/v1/rates/{from}/{to}"""
    model_config = ConfigDict(populate_by_name=True)

    from_currency: str = Field(alias="from")
    to_currency: str = Field(alias="to")
    rate: Decimal
    source: str
    last_updated: datetime


class CurrencyInfo(BaseModel):
    code: str
    name: str | None = None


class CurrenciesResponse(BaseModel):
    base: str
    currencies: list[CurrencyInfo]


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status")
    version: str = Field(description="API version")


class ErrorResponse(BaseModel):
    """
    Flat error body returned for every failed request.

    400 validation_error, 503 rate_unavailable, 500 calculation_error / internal_error
    """
    error: str = Field(description="Error kind")
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    field: str | None = Field(default=None, description="Offending request field")
    details: Any = None
    timestamp: datetime
    success: bool = False

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "validation_error",
                "code": "exceeds_maximum",
                "message": "Amount exceeds maximum limit",
                "field": "amount",
                "details": {"value": "2000000", "max_amount": "1000000"},
                "timestamp": "2026-01-15T15:30:00Z",
                "success": False
            }
        }
    }
