"""
Settings Tests
"""

from decimal import Decimal

from fxcalc.config import Settings
from fxcalc.models import FeeMode


class TestSettings:

    def test_defaults_build_reference_policy(self):
        config = Settings().calculator_config()

        assert config.fee_rates[FeeMode.STANDARD] == Decimal("0.010")
        assert config.fee_rates[FeeMode.EXPRESS] == Decimal("0.015")
        assert config.fee_rates[FeeMode.ECONOMY] == Decimal("0.005")
        assert config.min_fee == Decimal("2.99")
        assert config.max_fee == Decimal("50.00")
        assert config.max_amount == Decimal("1000000")

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MIN_FEE", "1.50")
        monkeypatch.setenv("FEE_RATE_EXPRESS", "0.02")
        monkeypatch.setenv("RATE_TABLE", '{"EUR": "0.91", "CHF": "0.89"}')

        settings = Settings()
        config = settings.calculator_config()

        assert config.min_fee == Decimal("1.50")
        assert config.fee_rates[FeeMode.EXPRESS] == Decimal("0.02")
        assert settings.rate_table == {"EUR": Decimal("0.91"), "CHF": Decimal("0.89")}
