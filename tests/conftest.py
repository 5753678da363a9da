"""
Shared fixtures: an in-memory rate provider and a calculator with a fixed clock.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from fxcalc.computation import ExchangeCalculator
from fxcalc.errors import RateUnavailable
from fxcalc.models import CalculatorConfig
from fxcalc.providers import BaseRateProvider

FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class StubRateProvider(BaseRateProvider):
    """Provider answering from a pair table and recording every backend call."""

    PROVIDER_NAME = "stub"

    def __init__(self, rates: dict[tuple[str, str], Decimal] | None = None):
        self.rates = rates or {}
        self.calls: list[tuple[str, str]] = []

    async def fetch_rate(self, from_currency: str, to_currency: str) -> Decimal:
        self.calls.append((from_currency, to_currency))
        try:
            return self.rates[(from_currency, to_currency)]
        except KeyError:
            raise RateUnavailable(
                message=f"No rate for {from_currency}/{to_currency}",
                provider=self.PROVIDER_NAME,
                from_currency=from_currency,
                to_currency=to_currency,
                error_type="UNSUPPORTED_PAIR",
            ) from None

    def supported_currencies(self) -> list[str]:
        return sorted({code for pair in self.rates for code in pair})


@pytest.fixture
def provider() -> StubRateProvider:
    return StubRateProvider({
        ("USD", "EUR"): Decimal("0.85"),
        ("EUR", "USD"): Decimal("1.176471"),
        ("USD", "JPY"): Decimal("110"),
        ("GBP", "EUR"): Decimal("1.133333"),
    })


@pytest.fixture
def config() -> CalculatorConfig:
    return CalculatorConfig()


@pytest.fixture
def calculator(provider, config) -> ExchangeCalculator:
    return ExchangeCalculator(provider, config, clock=lambda: FIXED_NOW)
