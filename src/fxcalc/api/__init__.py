"""
fxcalc API Module
"""

from fxcalc.api.handlers import register_exception_handlers
from fxcalc.api.routes import router
from fxcalc.api.schemas import (
    CalculateRequest,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "router",
    "register_exception_handlers",
    "CalculateRequest",
    "ErrorResponse",
    "HealthResponse",
]
