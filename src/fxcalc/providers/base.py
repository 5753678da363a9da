"""
Base Rate Provider Interface

All rates MUST be returned as decimal.Decimal type.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from fxcalc.errors import RateUnavailable

logger = logging.getLogger(__name__)

ONE = Decimal("1")


class BaseRateProvider(ABC):
    """
    Abstract base class for exchange rate providers.

    Contract of get_rate():
    - exactly Decimal("1") when from == to, without consulting the backend
    - a positive Decimal otherwise
    - RateUnavailable when the pair cannot be resolved

    No caching or retries happen here; one call per pair per invocation.
    """

    PROVIDER_NAME: str = "base"

    async def get_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """
        Units of to_currency per 1 unit of from_currency.

        Raises:
            RateUnavailable: If the backend fails or returns a non-positive rate
        """
        if from_currency == to_currency:
            return ONE

        try:
            rate = self._to_decimal(await self.fetch_rate(from_currency, to_currency))
        except RateUnavailable:
            raise
        except Exception as e:
            logger.error(
                f"{self.PROVIDER_NAME} failed for {from_currency}/{to_currency}: {e}"
            )
            raise RateUnavailable(
                message=str(e) or "Rate lookup failed",
                provider=self.PROVIDER_NAME,
                from_currency=from_currency,
                to_currency=to_currency,
                error_type="UNKNOWN",
            ) from e

        if not rate.is_finite() or rate <= 0:
            raise RateUnavailable(
                message=f"Invalid rate {rate} for {from_currency}/{to_currency}",
                provider=self.PROVIDER_NAME,
                from_currency=from_currency,
                to_currency=to_currency,
                error_type="INVALID_RATE",
            )
        return rate

    @abstractmethod
    async def fetch_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """
        Resolve a rate for two distinct, upper-case currency codes.

        Raises:
            RateUnavailable: If the pair is not supported
        """
        pass

    @abstractmethod
    def supported_currencies(self) -> list[str]:
        """Currency codes this provider can price."""
        pass

    def _to_decimal(self, value: Any) -> Decimal:
        """
        Convert value to exact Decimal.

        NEVER use float conversion - always use str intermediate.
        """
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))
