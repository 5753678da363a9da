"""FastAPI dependency providers."""

from functools import lru_cache

from fastapi import Depends

from fxcalc.computation import ExchangeCalculator
from fxcalc.config import get_settings
from fxcalc.providers import BaseRateProvider, StaticRateProvider


@lru_cache
def get_rate_provider() -> BaseRateProvider:
    return StaticRateProvider()


def get_calculator(
    provider: BaseRateProvider = Depends(get_rate_provider),
) -> ExchangeCalculator:
    return ExchangeCalculator(provider, get_settings().calculator_config())
