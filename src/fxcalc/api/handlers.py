"""
Exception handlers mapping the error taxonomy to HTTP responses.

ValidationError / malformed body -> 400
RateUnavailable                   -> 503
CalculationError / anything else  -> 500 with a generic message
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fxcalc.api.schemas import ErrorResponse
from fxcalc.errors import CalculationError, RateUnavailable, ValidationError

logger = logging.getLogger(__name__)


def _respond(status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(**body).model_dump(mode="json"),
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.field}: {exc.message}")
    return _respond(status.HTTP_400_BAD_REQUEST, exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Malformed body for {request.method} {request.url.path}")
    return _respond(
        status.HTTP_400_BAD_REQUEST,
        {
            "error": "validation_error",
            "code": "malformed_request",
            "message": "Request body could not be parsed",
            "details": jsonable_encoder(exc.errors()),
            "timestamp": datetime.now(timezone.utc),
        },
    )


async def rate_unavailable_handler(request: Request, exc: RateUnavailable) -> JSONResponse:
    logger.warning(
        f"Rate unavailable for {exc.from_currency}/{exc.to_currency} "
        f"({exc.provider}, {exc.error_type}): {exc.message}"
    )
    return _respond(status.HTTP_503_SERVICE_UNAVAILABLE, exc.to_dict())


async def calculation_error_handler(request: Request, exc: CalculationError) -> JSONResponse:
    logger.error(f"Calculation error on {request.url.path}: {exc.message} {exc.details}")
    body = exc.to_dict()
    body["message"] = "Calculation failed"
    body["details"] = None
    return _respond(status.HTTP_500_INTERNAL_SERVER_ERROR, body)


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception")
    return _respond(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {
            "error": "internal_error",
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
            "timestamp": datetime.now(timezone.utc),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RateUnavailable, rate_unavailable_handler)
    app.add_exception_handler(CalculationError, calculation_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
