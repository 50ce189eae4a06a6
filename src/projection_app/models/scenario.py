from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from .cashflow import OperatingCostPolicy, SalarySettings
from .common import PlanId
from .revenue import SubscriptionMix
from .valuation import ValuationSettings


class DashboardScenario(BaseModel):
    name: str = "default"
    customer_count: int = 0
    agents_per_customer: float = 1.8
    extra_minutes_per_agent: float = 300.0
    mix: Optional[SubscriptionMix] = Field(default_factory=SubscriptionMix)
    selected_plan: PlanId = PlanId.PREMIUM
    investment_amount: float = 0.0
    equity_percent: float = 10.0
    monthly_targets: List[int] = Field(..., description="New customers acquired in each of the 12 months")
    operating_costs: OperatingCostPolicy = Field(default_factory=OperatingCostPolicy)
    salary: SalarySettings = Field(default_factory=SalarySettings)
    valuation: ValuationSettings = Field(default_factory=ValuationSettings)
    start_date: Optional[date] = None
