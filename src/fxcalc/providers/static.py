"""
Static Rate Provider

Prices pairs from an in-process table quoted against one pivot currency:
table["EUR"] = 0.85 means 1 USD = 0.85 EUR.

    base -> X : table[X]
    X -> base : 1 / table[X]
    X -> Y    : table[Y] / table[X]

Derived rates are rounded to 6 decimal places (HALF_UP).
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from fxcalc.config import get_settings
from fxcalc.errors import RateUnavailable
from fxcalc.providers.base import BaseRateProvider

logger = logging.getLogger(__name__)

RATE_SCALE = Decimal("0.000001")


class StaticRateProvider(BaseRateProvider):
    """Rate provider backed by a fixed pivot table."""

    PROVIDER_NAME = "static"

    def __init__(
        self,
        rates: Mapping[str, Decimal] | None = None,
        base_currency: str | None = None
    ):
        settings = get_settings()
        table = rates if rates is not None else settings.rate_table
        self.base_currency = (base_currency or settings.base_currency).upper()
        self._rates: dict[str, Decimal] = {
            code.upper(): self._to_decimal(value) for code, value in table.items()
        }
        self._rates[self.base_currency] = Decimal("1")

        bad = [code for code, value in self._rates.items() if value <= 0]
        if bad:
            raise ValueError(f"Rate table contains non-positive rates: {bad}")

    async def fetch_rate(self, from_currency: str, to_currency: str) -> Decimal:
        from_rate = self._lookup(from_currency, from_currency, to_currency)
        to_rate = self._lookup(to_currency, from_currency, to_currency)

        if from_currency == self.base_currency:
            return to_rate

        rate = (to_rate / from_rate).quantize(RATE_SCALE, rounding=ROUND_HALF_UP)
        logger.debug(f"Derived {from_currency}/{to_currency}={rate} via {self.base_currency}")
        return rate

    def supported_currencies(self) -> list[str]:
        return sorted(self._rates)

    def _lookup(self, code: str, from_currency: str, to_currency: str) -> Decimal:
        try:
            return self._rates[code]
        except KeyError:
            raise RateUnavailable(
                message=f"Unsupported currency: {code}",
                provider=self.PROVIDER_NAME,
                from_currency=from_currency,
                to_currency=to_currency,
                error_type="UNSUPPORTED_PAIR",
                details={"supported": self.supported_currencies()},
            ) from None
