"""
fxcalc Configuration Management

Fee policy, limits and the static rate table are configuration values rather
than literals, so policy can change without touching the calculator.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from fxcalc.models import CalculatorConfig, FeeMode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # === Fee Policy ===
    fee_rate_standard: Decimal = Field(
        default=Decimal("0.010"),
        description="Standard fee rate (1%)"
    )
    fee_rate_express: Decimal = Field(
        default=Decimal("0.015"),
        description="Express fee rate (1.5%)"
    )
    fee_rate_economy: Decimal = Field(
        default=Decimal("0.005"),
        description="Economy fee rate (0.5%)"
    )
    min_fee: Decimal = Field(default=Decimal("2.99"), description="Minimum fee per conversion")
    max_fee: Decimal = Field(default=Decimal("50.00"), description="Maximum fee per conversion")

    # === Limits ===
    max_amount: Decimal = Field(
        default=Decimal("1000000"),
        description="Largest accepted source amount"
    )
    rate_variation: Decimal = Field(
        default=Decimal("0.001"),
        description="Rate perturbation for monitoring scenarios (0.1%)"
    )
    calculation_version: str = Field(default="2.0")

    # === Rate Provider ===
    base_currency: str = Field(
        default="USD",
        description="Pivot currency of the static rate table"
    )
    rate_table: dict[str, Decimal] = Field(
        default_factory=lambda: {
            "EUR": Decimal("0.8500"),
            "GBP": Decimal("0.7500"),
            "JPY": Decimal("110.0000"),
            "CNY": Decimal("6.4500"),
            "KRW": Decimal("1180.0000"),
            "MXN": Decimal("17.9900"),
        },
        description="Units of each currency per 1 base currency (JSON in env)"
    )

    # === API Configuration ===
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # === Logging ===
    log_level: str = Field(default="INFO")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def calculator_config(self) -> CalculatorConfig:
        """Build the calculator policy from settings."""
        return CalculatorConfig(
            fee_rates={
                FeeMode.STANDARD: self.fee_rate_standard,
                FeeMode.EXPRESS: self.fee_rate_express,
                FeeMode.ECONOMY: self.fee_rate_economy,
            },
            min_fee=self.min_fee,
            max_fee=self.max_fee,
            max_amount=self.max_amount,
            rate_variation=self.rate_variation,
            calculation_version=self.calculation_version,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
