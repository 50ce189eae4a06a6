"""
Application configuration using Pydantic Settings.
Values are read from ``PROJECTION_*`` environment variables or a local ``.env``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.cashflow import OperatingCostMode, OperatingCostPolicy, SalarySettings
from .models.equity import EquityTable
from .models.pricing import DEFAULT_CATALOG, PricingCatalog
from .services.equity import equity_table_for


class Settings(BaseSettings):
    """Engine defaults and API settings."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Shareholder Projection Engine"
    log_level: str = "INFO"

    # ── Pricing ──────────────────────────────────────────
    extra_minute_rate: float = Field(0.55, description="Charge per extra minute, all plans")

    # ── Cashflow ─────────────────────────────────────────
    founder_annual_salary: float = 70_000.0
    founder_count: int = 2
    operating_cost_mode: OperatingCostMode = OperatingCostMode.FIXED
    operating_cost_amount: float = 5_000.0
    operating_cost_ratio: float = 0.3

    # ── Equity / mix policy ──────────────────────────────
    equity_variant: str = "series_a"  # "series_a" | "reserved_pool"
    strict_mix: bool = False  # reject mixes that do not sum to 100

    model_config = SettingsConfigDict(
        env_prefix="PROJECTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def catalog(self) -> PricingCatalog:
        return DEFAULT_CATALOG.with_extra_minute_rate(self.extra_minute_rate)

    def cost_policy(self) -> OperatingCostPolicy:
        return OperatingCostPolicy(
            mode=self.operating_cost_mode,
            amount=self.operating_cost_amount,
            ratio=self.operating_cost_ratio,
        )

    def salary_settings(self) -> SalarySettings:
        return SalarySettings(founder_annual_salary=self.founder_annual_salary, founder_count=self.founder_count)

    def equity_table(self) -> EquityTable:
        return equity_table_for(self.equity_variant)


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
