"""
fxcalc API Routes

API base URL: /api/v1/
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from fxcalc import __version__
from fxcalc.api.dependencies import get_calculator, get_rate_provider
from fxcalc.api.schemas import (
    BatchRequest,
    CalculateRequest,
    CurrenciesResponse,
    CurrencyInfo,
    ErrorResponse,
    HealthResponse,
    MonitoringRequest,
    RateResponse,
    ReverseRequest,
)
from fxcalc.computation import ExchangeCalculator
from fxcalc.computation.validation import normalize_currency
from fxcalc.models import BatchResult, CalculationResult, MonitoringResult, ReverseResult
from fxcalc.providers import BaseRateProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["fxcalc"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Calculation failed"},
    503: {"model": ErrorResponse, "description": "Exchange rate unavailable"},
}

CURRENCY_NAMES = {
    "USD": "US Dollar",
    "EUR": "Euro",
    "GBP": "British Pound",
    "JPY": "Japanese Yen",
    "CNY": "Chinese Yuan",
    "KRW": "Korean Won",
    "MXN": "Mexican Peso",
    "CAD": "Canadian Dollar",
    "AUD": "Australian Dollar",
    "CHF": "Swiss Franc",
    "SGD": "Singapore Dollar",
}


@router.post(
    "/rates/calculate",
    response_model=CalculationResult,
    summary="Calculate a conversion with fees",
    responses=ERROR_RESPONSES,
)
async def calculate(
    body: CalculateRequest,
    calculator: ExchangeCalculator = Depends(get_calculator),
) -> CalculationResult:
    return await calculator.calculate(
        body.from_currency, body.to_currency, body.amount, body.fee_mode
    )


@router.post(
    "/rates/calculate/batch",
    response_model=BatchResult,
    summary="Calculate one amount across many currency pairs",
    description="Pairs that fail are reported per entry; the batch still succeeds.",
    responses=ERROR_RESPONSES,
)
async def calculate_batch(
    body: BatchRequest,
    calculator: ExchangeCalculator = Depends(get_calculator),
) -> BatchResult:
    return await calculator.calculate_batch(body.amount, body.currency_pairs, body.fee_mode)


@router.post(
    "/rates/calculate/reverse",
    response_model=ReverseResult,
    summary="Estimate the source amount needed for a net target",
    description=(
        "required_amount ignores the min/max fee clamp; verification holds the "
        "forward result and net_discrepancy its difference from the target."
    ),
    responses=ERROR_RESPONSES,
)
async def calculate_reverse(
    body: ReverseRequest,
    calculator: ExchangeCalculator = Depends(get_calculator),
) -> ReverseResult:
    return await calculator.calculate_reverse(
        body.from_currency, body.to_currency, body.target_amount, body.fee_mode
    )


@router.post(
    "/rates/calculate/monitoring",
    response_model=MonitoringResult,
    summary="Calculate at the current rate and +/- a fixed variation",
    responses=ERROR_RESPONSES,
)
async def calculate_with_monitoring(
    body: MonitoringRequest,
    calculator: ExchangeCalculator = Depends(get_calculator),
) -> MonitoringResult:
    return await calculator.calculate_with_monitoring(
        body.from_currency, body.to_currency, body.amount
    )


@router.get(
    "/rates/{from_currency}/{to_currency}",
    response_model=RateResponse,
    summary="Get the rate for one currency pair",
    responses={
        400: ERROR_RESPONSES[400],
        503: ERROR_RESPONSES[503],
    },
)
async def get_rate(
    from_currency: str,
    to_currency: str,
    provider: BaseRateProvider = Depends(get_rate_provider),
) -> RateResponse:
    from_code = normalize_currency(from_currency, "from")
    to_code = normalize_currency(to_currency, "to")
    rate = await provider.get_rate(from_code, to_code)
    return RateResponse(
        from_currency=from_code,
        to_currency=to_code,
        rate=rate,
        source=provider.PROVIDER_NAME,
        last_updated=datetime.now(timezone.utc),
    )


@router.get(
    "/currencies",
    response_model=CurrenciesResponse,
    summary="List supported currencies",
)
async def list_currencies(
    provider: BaseRateProvider = Depends(get_rate_provider),
) -> CurrenciesResponse:
    return CurrenciesResponse(
        base=getattr(provider, "base_currency", "USD"),
        currencies=[
            CurrencyInfo(code=code, name=CURRENCY_NAMES.get(code))
            for code in provider.supported_currencies()
        ],
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", version=__version__)
