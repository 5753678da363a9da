"""
fxcalc Rate Providers Module
"""

from fxcalc.providers.base import BaseRateProvider
from fxcalc.providers.static import StaticRateProvider

__all__ = [
    "BaseRateProvider",
    "StaticRateProvider",
]
