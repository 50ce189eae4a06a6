from __future__ import annotations

import pytest

from projection_app.config import Settings
from projection_app.errors import ConfigurationError
from projection_app.models.cashflow import OperatingCostMode
from projection_app.sample_data import build_sample_scenario
from projection_app.services.calculator import ProjectionCalculator


def test_defaults_match_fixed_cost_variant():
    settings = Settings(_env_file=None)

    policy = settings.cost_policy()
    assert policy.mode == OperatingCostMode.FIXED
    assert policy.amount == 5_000
    assert settings.salary_settings().monthly_total() == pytest.approx(70_000 / 12 * 2)
    assert settings.catalog().extra_minute_rate == 0.55
    assert settings.equity_table().name == "series_a"


def test_environment_selects_revenue_ratio_variant(monkeypatch):
    monkeypatch.setenv("PROJECTION_OPERATING_COST_MODE", "revenue_ratio")
    monkeypatch.setenv("PROJECTION_OPERATING_COST_RATIO", "0.4")
    monkeypatch.setenv("PROJECTION_EQUITY_VARIANT", "reserved_pool")
    monkeypatch.setenv("PROJECTION_STRICT_MIX", "true")
    settings = Settings(_env_file=None)

    assert settings.cost_policy().mode == OperatingCostMode.REVENUE_RATIO
    assert settings.cost_policy().cost_for(1_000) == pytest.approx(400)
    assert settings.equity_table().name == "reserved_pool"
    assert ProjectionCalculator.from_settings(settings).strict_mix is True


def test_sample_scenario_follows_settings():
    settings = Settings(_env_file=None, operating_cost_mode="revenue_ratio", operating_cost_ratio=0.2, founder_count=3)
    scenario = build_sample_scenario(settings)

    assert scenario.operating_costs.mode == OperatingCostMode.REVENUE_RATIO
    assert scenario.operating_costs.ratio == 0.2
    assert scenario.salary.founder_count == 3


def test_unknown_equity_variant_fails_on_use():
    settings = Settings(_env_file=None, equity_variant="series_z")

    with pytest.raises(ConfigurationError):
        ProjectionCalculator.from_settings(settings)
