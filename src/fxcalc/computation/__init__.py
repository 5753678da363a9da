"""
fxcalc Computation Module
"""

from fxcalc.computation.fees import FeePolicy
from fxcalc.computation.calculator import ExchangeCalculator

__all__ = [
    "FeePolicy",
    "ExchangeCalculator",
]
