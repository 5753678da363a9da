"""
Input validation for calculator entry points.

Each failure raises ValidationError naming the offending field. Nothing is
silently coerced.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from fxcalc.errors import ValidationError


def normalize_currency(value: Any, field: str) -> str:
    """Trim and upper-case a currency code; reject missing or blank input."""
    if value is None or not str(value).strip():
        raise ValidationError(
            field=field,
            message=f"Missing required parameter: {field}",
            code="missing",
        )
    return str(value).strip().upper()


def parse_amount(value: Any, field: str, max_amount: Decimal) -> Decimal:
    """
    Parse a strictly positive, finite amount no larger than max_amount.

    Accepts Decimal, int, float (through str) or a numeric string.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(
            field=field,
            message=f"Missing required parameter: {field}",
            code="missing",
        )

    # bool is an int subclass; True must not become 1
    if isinstance(value, bool):
        raise ValidationError(
            field=field,
            message=f"Invalid amount format: {value!r}",
            code="invalid_format",
        )

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(
            field=field,
            message=f"Invalid amount format: {value!r}",
            code="invalid_format",
        ) from None

    if not amount.is_finite():
        raise ValidationError(
            field=field,
            message=f"Invalid amount format: {value!r}",
            code="invalid_format",
        )
    if amount <= 0:
        raise ValidationError(
            field=field,
            message="Amount must be positive",
            code="not_positive",
            details={"value": str(amount)},
        )
    if amount > max_amount:
        raise ValidationError(
            field=field,
            message="Amount exceeds maximum limit",
            code="exceeds_maximum",
            details={"value": str(amount), "max_amount": str(max_amount)},
        )
    return amount


def currency_label(value: Any) -> str:
    """Best-effort upper-case code for reporting; never raises."""
    return "" if value is None else str(value).strip().upper()


def pair_key(from_currency: Any, to_currency: Any) -> str:
    """Batch key "{FROM}_{TO}"; tolerates invalid codes so failures still get a key."""
    return f"{currency_label(from_currency)}_{currency_label(to_currency)}"
