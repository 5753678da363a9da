#!/usr/bin/env python3
"""
Quote a currency conversion from the command line.

Usage:
  python scripts/quote.py USD EUR 100
  python scripts/quote.py USD EUR 100 --fee-mode express
  python scripts/quote.py USD EUR 841.50 --reverse
  python scripts/quote.py USD EUR 100 --monitoring
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from fxcalc.computation import ExchangeCalculator
from fxcalc.config import get_settings
from fxcalc.errors import ExchangeError
from fxcalc.models import CalculationResult
from fxcalc.providers import StaticRateProvider


def print_calculation(calc: CalculationResult, label: str = "") -> None:
    if label:
        print(f"--- {label} ---")
    print(f"{calc.original_amount} {calc.from_currency} -> {calc.to_currency} @ {calc.exchange_rate}")
    print(f"  Gross:          {calc.gross_converted_amount}")
    print(f"  Fee ({calc.fee_mode.value}, {calc.fee_rate}): {calc.fee_amount}")
    print(f"  Net:            {calc.net_converted_amount}")
    print(f"  Total cost:     {calc.total_cost}")
    print(f"  Effective rate: {calc.effective_rate} (margin {calc.rate_margin})")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Quote a fee-aware currency conversion")
    parser.add_argument("from_currency", help="Source currency code, e.g. USD")
    parser.add_argument("to_currency", help="Target currency code, e.g. EUR")
    parser.add_argument("amount", help="Source amount (target amount with --reverse)")
    parser.add_argument("--fee-mode", "-f", default="standard", help="standard | express | economy")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--reverse", "-r", action="store_true", help="Solve for the source amount")
    group.add_argument("--monitoring", "-m", action="store_true", help="Show +/- rate scenarios")
    args = parser.parse_args()

    calculator = ExchangeCalculator(StaticRateProvider(), get_settings().calculator_config())

    try:
        if args.reverse:
            result = await calculator.calculate_reverse(
                args.from_currency, args.to_currency, args.amount, args.fee_mode
            )
            print(f"Required: {result.required_amount} {result.from_currency} "
                  f"for {result.target_amount} {result.to_currency}")
            print_calculation(result.verification, "verification")
            if result.net_discrepancy:
                print(f"Discrepancy: {result.net_discrepancy} (fee clamped: {result.fee_clamped})")
        elif args.monitoring:
            result = await calculator.calculate_with_monitoring(
                args.from_currency, args.to_currency, args.amount
            )
            print_calculation(result.current_calculation, "current")
            print_calculation(result.optimistic_calculation, "optimistic")
            print_calculation(result.pessimistic_calculation, "pessimistic")
            spread = result.rate_spread
            print(f"Spread: {spread.low} .. {spread.high} (±{spread.spread_percentage}%)")
        else:
            result = await calculator.calculate(
                args.from_currency, args.to_currency, args.amount, args.fee_mode
            )
            print_calculation(result)
    except ExchangeError as e:
        print(f"Error ({e.error}): {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
