from __future__ import annotations

from datetime import date
from typing import Optional

from .config import Settings
from .models.cashflow import OperatingCostPolicy, SalarySettings
from .models.common import PlanId
from .models.revenue import SubscriptionMix
from .models.scenario import DashboardScenario


DEFAULT_MONTHLY_TARGETS = [4, 8, 12, 18, 25, 35, 45, 60, 75, 95, 120, 150]


def build_sample_scenario(settings: Optional[Settings] = None) -> DashboardScenario:
    cost_policy = settings.cost_policy() if settings else OperatingCostPolicy.fixed(5_000.0)
    salary = settings.salary_settings() if settings else SalarySettings()
    return DashboardScenario(
        name="sample",
        customer_count=0,
        agents_per_customer=1.8,
        extra_minutes_per_agent=300,
        mix=SubscriptionMix(base=30, premium=60, corporate=10),
        selected_plan=PlanId.PREMIUM,
        investment_amount=0.0,
        equity_percent=10.0,
        monthly_targets=list(DEFAULT_MONTHLY_TARGETS),
        operating_costs=cost_policy,
        salary=salary,
    )


def build_investment_scenario() -> DashboardScenario:
    """A 1000-customer, post-investment snapshot using a percentage-of-revenue cost base."""
    scenario = build_sample_scenario()
    return scenario.model_copy(
        update={
            "name": "investment",
            "customer_count": 1000,
            "investment_amount": 1_000_000.0,
            "equity_percent": 10.0,
            "operating_costs": OperatingCostPolicy.revenue_ratio(0.3),
            "start_date": date(2025, 7, 1),
        }
    )
