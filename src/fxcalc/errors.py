"""
fxcalc Error Taxonomy

ValidationError  - bad, missing or out-of-range input (client error, never retried)
RateUnavailable  - upstream rate lookup failed (service unavailable)
CalculationError - unexpected arithmetic failure (generic server error)
"""

from datetime import datetime, timezone
from typing import Any


class ExchangeError(Exception):
    """Base exception for all calculator errors."""

    error: str = "exchange_error"

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN",
        details: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Structured error body shared by the API and batch error entries."""
        return {
            "error": self.error,
            "code": self.code,
            "message": self.message,
            "details": self.details or None,
            "timestamp": datetime.now(timezone.utc),
            "success": False,
        }


class ValidationError(ExchangeError):
    """Input rejected before any rate lookup takes place."""

    error = "validation_error"

    def __init__(
        self,
        field: str,
        message: str,
        code: str = "invalid",
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code=code, details=details)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["field"] = self.field
        return body


class RateUnavailable(ExchangeError):
    """The rate provider could not resolve a currency pair."""

    error = "rate_unavailable"

    def __init__(
        self,
        message: str,
        provider: str,
        from_currency: str,
        to_currency: str,
        error_type: str = "UNKNOWN",
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code=error_type, details=details)
        self.provider = provider
        self.error_type = error_type
        self.from_currency = from_currency
        self.to_currency = to_currency

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["details"] = {
            "provider": self.provider,
            "from_currency": self.from_currency,
            "to_currency": self.to_currency,
            **self.details,
        }
        return body


class CalculationError(ExchangeError):
    """Wraps unexpected arithmetic failures inside the calculation pipeline."""

    error = "calculation_error"
