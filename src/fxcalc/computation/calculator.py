"""
Exchange Calculator - fee-aware currency conversion

Fixed-point decimal arithmetic throughout, never float.

Pipeline for one pair (amount A, rate R):
    gross          = round(A * R, 6)
    fee            = clamp(A * fee_rate, min_fee, max_fee), round 2
    net            = round(gross - fee * R, 2)
    total_cost     = A + fee
    effective_rate = round(net / A, 6)
    rate_margin    = R - effective_rate

All rounding is ROUND_HALF_UP.
"""

import asyncio
import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, getcontext, localcontext
from typing import Any, Callable, Mapping

from fxcalc.computation.fees import CENT, FeePolicy
from fxcalc.computation.validation import (
    currency_label,
    normalize_currency,
    pair_key,
    parse_amount,
)
from fxcalc.errors import CalculationError, ExchangeError, ValidationError
from fxcalc.models import (
    BatchErrorEntry,
    BatchResult,
    CalculationResult,
    CalculatorConfig,
    FeeMode,
    MonitoringResult,
    RateSpread,
    ReverseResult,
)
from fxcalc.providers.base import BaseRateProvider

getcontext().prec = 28

logger = logging.getLogger(__name__)

MICRO = Decimal("0.000001")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _working_precision(*operands: Decimal) -> int:
    """
    Context precision that keeps every pipeline step exact for these operands.

    Products need the sum of the operand digits; quotients such as
    net / amount need room for their integer part plus 6 decimal places,
    bounded by the operand exponents.
    """
    digits = sum(len(d.as_tuple().digits) for d in operands)
    span = sum(abs(d.adjusted()) for d in operands)
    return max(getcontext().prec, digits + span + 12)


class ExchangeCalculator:
    """
    Stateless calculator over one rate provider and one fee policy.

    The clock is injectable so identical inputs give identical results in tests.
    """

    def __init__(
        self,
        provider: BaseRateProvider,
        config: CalculatorConfig | None = None,
        clock: Callable[[], datetime] | None = None
    ):
        self.provider = provider
        self.config = config or CalculatorConfig()
        self.fee_policy = FeePolicy(self.config)
        self._clock = clock or _utcnow

    # === Single pair ===

    async def calculate(
        self,
        from_currency: Any,
        to_currency: Any,
        amount: Any,
        fee_mode: FeeMode | str | None = None
    ) -> CalculationResult:
        """
        Convert amount from one currency to another with fees applied.

        Raises:
            ValidationError: Missing currency code or bad amount
            RateUnavailable: Provider could not price the pair (not retried)
            CalculationError: Unexpected arithmetic failure
        """
        from_code = normalize_currency(from_currency, "from")
        to_code = normalize_currency(to_currency, "to")
        value = parse_amount(amount, "amount", self.config.max_amount)

        rate = await self.provider.get_rate(from_code, to_code)
        result = self.compute(from_code, to_code, value, rate, fee_mode)

        logger.info(
            f"Calculated {value} {from_code}->{to_code} @ {rate}: "
            f"net={result.net_converted_amount} fee={result.fee_amount} ({result.fee_mode.value})"
        )
        return result

    def compute(
        self,
        from_currency: str,
        to_currency: str,
        amount: Decimal,
        rate: Decimal,
        fee_mode: FeeMode | str | None = None
    ) -> CalculationResult:
        """
        Run the pipeline for an already validated amount and a known rate.
        """
        mode = FeeMode.resolve(fee_mode)
        fee_rate = self.fee_policy.fee_rate(mode)
        try:
            with localcontext() as ctx:
                ctx.prec = _working_precision(amount, rate, fee_rate, self.config.max_fee)
                gross = (amount * rate).quantize(MICRO, rounding=ROUND_HALF_UP)
                fee = self.fee_policy.fee_amount(amount, fee_rate)
                net = (gross - fee * rate).quantize(CENT, rounding=ROUND_HALF_UP)
                total_cost = amount + fee
                effective_rate = (net / amount).quantize(MICRO, rounding=ROUND_HALF_UP)
                rate_margin = rate - effective_rate
        except ArithmeticError as e:
            logger.error(
                f"Arithmetic failure for {amount} {from_currency}->{to_currency} @ {rate}: {e}"
            )
            raise CalculationError(
                message="Calculation failed",
                code="ARITHMETIC_ERROR",
                details={"from_currency": from_currency, "to_currency": to_currency},
            ) from e

        return CalculationResult(
            from_currency=from_currency,
            to_currency=to_currency,
            original_amount=amount,
            exchange_rate=rate,
            gross_converted_amount=gross,
            fee_mode=mode,
            fee_rate=fee_rate,
            fee_amount=fee,
            net_converted_amount=net,
            total_cost=total_cost,
            effective_rate=effective_rate,
            rate_margin=rate_margin,
            calculated_at=self._clock(),
            calculation_version=self.config.calculation_version,
        )

    # === Batch ===

    async def calculate_batch(
        self,
        amount: Any,
        pairs: Mapping[Any, Any] | None,
        fee_mode: FeeMode | str | None = None
    ) -> BatchResult:
        """
        Convert one amount across many pairs concurrently.

        A failing pair becomes a BatchErrorEntry under its key and never aborts
        the batch. Only a bad amount or an empty pair mapping raise.
        """
        value = parse_amount(amount, "amount", self.config.max_amount)
        if not isinstance(pairs, Mapping) or not pairs:
            raise ValidationError(
                field="currency_pairs",
                message="Missing required parameter: currency_pairs",
                code="missing",
            )
        mode = FeeMode.resolve(fee_mode)

        outcomes = await asyncio.gather(
            *(self._calculate_entry(f, t, value, mode) for f, t in pairs.items())
        )
        results = dict(outcomes)

        failed = sum(1 for v in results.values() if isinstance(v, BatchErrorEntry))
        logger.info(f"Batch of {len(results)} pairs complete ({failed} failed)")

        return BatchResult(batch_results=results, calculated_at=self._clock())

    async def _calculate_entry(
        self,
        from_currency: Any,
        to_currency: Any,
        amount: Decimal,
        mode: FeeMode
    ) -> tuple[str, CalculationResult | BatchErrorEntry]:
        key = pair_key(from_currency, to_currency)
        try:
            from_code = normalize_currency(from_currency, "from")
            to_code = normalize_currency(to_currency, "to")
            rate = await self.provider.get_rate(from_code, to_code)
            return key, self.compute(from_code, to_code, amount, rate, mode)
        except ExchangeError as e:
            logger.warning(f"Failed to calculate {key}: {e.message}")
            return key, BatchErrorEntry(
                error=e.error,
                code=e.code,
                message=e.message,
                field=getattr(e, "field", None),
                details=e.to_dict()["details"],
                from_currency=currency_label(from_currency),
                to_currency=currency_label(to_currency),
                timestamp=self._clock(),
            )

    # === Reverse ===

    async def calculate_reverse(
        self,
        from_currency: Any,
        to_currency: Any,
        target_amount: Any,
        fee_mode: FeeMode | str | None = None
    ) -> ReverseResult:
        """
        Estimate the source amount that yields target_amount net.

            base     = round(target / rate, 6)
            required = round(base / (1 - fee_rate), 2)

        The inversion ignores the min/max fee clamp. The forward pipeline is
        re-run with required_amount as verification and any difference from
        the target is reported in net_discrepancy.
        """
        from_code = normalize_currency(from_currency, "from")
        to_code = normalize_currency(to_currency, "to")
        target = parse_amount(target_amount, "target_amount", self.config.max_amount)
        mode = FeeMode.resolve(fee_mode)

        rate = await self.provider.get_rate(from_code, to_code)
        fee_rate = self.fee_policy.fee_rate(mode)

        try:
            base_amount = (target / rate).quantize(MICRO, rounding=ROUND_HALF_UP)
            required = (base_amount / (ONE - fee_rate)).quantize(CENT, rounding=ROUND_HALF_UP)
        except ArithmeticError as e:
            raise CalculationError(
                message="Reverse calculation failed",
                code="ARITHMETIC_ERROR",
                details={"from_currency": from_code, "to_currency": to_code},
            ) from e

        if required <= 0:
            raise ValidationError(
                field="target_amount",
                message="Target amount is too small to convert",
                code="not_positive",
                details={"required_amount": str(required)},
            )
        if required > self.config.max_amount:
            raise ValidationError(
                field="target_amount",
                message="Required source amount exceeds maximum limit",
                code="exceeds_maximum",
                details={
                    "required_amount": str(required),
                    "max_amount": str(self.config.max_amount),
                },
            )

        verification = self.compute(from_code, to_code, required, rate, mode)
        discrepancy = verification.net_converted_amount - target
        fee_clamped = self.fee_policy.is_clamped(required, fee_rate)

        if discrepancy:
            logger.warning(
                f"Reverse {from_code}->{to_code}: required {required} nets "
                f"{verification.net_converted_amount}, target {target} "
                f"(discrepancy {discrepancy}, fee_clamped={fee_clamped})"
            )

        return ReverseResult(
            required_amount=required,
            target_amount=target,
            from_currency=from_code,
            to_currency=to_code,
            exchange_rate=rate,
            fee_mode=mode,
            verification=verification,
            net_discrepancy=discrepancy,
            fee_clamped=fee_clamped,
            calculated_at=self._clock(),
        )

    # === Rate sensitivity ===

    async def calculate_with_monitoring(
        self,
        from_currency: Any,
        to_currency: Any,
        amount: Any
    ) -> MonitoringResult:
        """
        Standard-fee calculation at the current rate and at rate * (1 +/- delta).

        delta is a static perturbation (config.rate_variation), not a live
        volatility estimate. The rate is fetched once.
        """
        from_code = normalize_currency(from_currency, "from")
        to_code = normalize_currency(to_currency, "to")
        value = parse_amount(amount, "amount", self.config.max_amount)

        rate = await self.provider.get_rate(from_code, to_code)
        delta = self.config.rate_variation
        high = rate * (ONE + delta)
        low = rate * (ONE - delta)

        return MonitoringResult(
            current_calculation=self.compute(from_code, to_code, value, rate, FeeMode.STANDARD),
            optimistic_calculation=self.compute(from_code, to_code, value, high, FeeMode.STANDARD),
            pessimistic_calculation=self.compute(from_code, to_code, value, low, FeeMode.STANDARD),
            rate_spread=RateSpread(
                current=rate,
                high=high,
                low=low,
                spread_percentage=delta * HUNDRED,
            ),
        )
