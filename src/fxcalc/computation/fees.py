"""
Fee Policy - fee rate lookup and fee clamping

Fee rate lookup is the one deliberately lenient step: unknown fee modes fall
back to STANDARD instead of raising.
"""

from decimal import ROUND_HALF_UP, Decimal

from fxcalc.models import CalculatorConfig, FeeMode

CENT = Decimal("0.01")


class FeePolicy:
    """
    Fee computation for one CalculatorConfig.

    fee = clamp(amount * fee_rate, min_fee, max_fee), rounded to cents HALF_UP
    """

    def __init__(self, config: CalculatorConfig):
        self.config = config

    def fee_rate(self, fee_mode: FeeMode | str | None) -> Decimal:
        return self.config.fee_rates[FeeMode.resolve(fee_mode)]

    def fee_amount(self, amount: Decimal, fee_rate: Decimal) -> Decimal:
        fee = amount * fee_rate

        if fee < self.config.min_fee:
            fee = self.config.min_fee
        elif fee > self.config.max_fee:
            fee = self.config.max_fee

        return fee.quantize(CENT, rounding=ROUND_HALF_UP)

    def is_clamped(self, amount: Decimal, fee_rate: Decimal) -> bool:
        """True when amount * fee_rate falls outside [min_fee, max_fee]."""
        fee = amount * fee_rate
        return fee < self.config.min_fee or fee > self.config.max_fee
