from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from .models.cashflow import OperatingCostPolicy, SalarySettings
from .models.common import PlanId
from .models.equity import CustomerStage, EquityAllocation, LeaverEvent
from .models.pricing import PricingPlan
from .models.results import DashboardResult
from .models.revenue import RevenueMetrics, SubscriptionMix
from .models.scenario import DashboardScenario
from .models.valuation import ValuationResult, ValuationSettings


class PlanEntry(BaseModel):
    plan_id: PlanId
    plan: PricingPlan


class PlanListResponse(BaseModel):
    plans: List[PlanEntry]
    extra_minute_rate: float


class RevenueRequest(BaseModel):
    customer_count: int
    agents_per_customer: float = 1.8
    extra_minutes_per_agent: float = 300.0
    mix: Optional[SubscriptionMix] = None
    plan: PlanId = PlanId.PREMIUM


class ValuationRequest(RevenueRequest):
    investment_amount: float = 0.0
    equity_percent: float = 10.0
    settings: ValuationSettings = Field(default_factory=ValuationSettings)


class ValuationResponse(BaseModel):
    revenue: RevenueMetrics
    valuation: ValuationResult


class TimelineRequest(BaseModel):
    monthly_targets: List[int]
    agents_per_customer: float = 1.8
    extra_minutes_per_agent: float = 300.0
    mix: Optional[SubscriptionMix] = Field(default_factory=SubscriptionMix)
    plan: PlanId = PlanId.PREMIUM
    operating_costs: Optional[OperatingCostPolicy] = Field(default=None, description="Defaults to configured policy")
    salary: Optional[SalarySettings] = None
    start_date: Optional[date] = None


class EquityResponse(BaseModel):
    customer_count: int
    table: str
    allocations: List[EquityAllocation]
    total_percentage: float


class StageResponse(BaseModel):
    customer_count: int
    stage: CustomerStage


class LeaverRequest(BaseModel):
    shares: int
    event: LeaverEvent


class MixRebalanceRequest(BaseModel):
    mix: SubscriptionMix
    plan: PlanId
    percentage: float


class ScenarioRunRequest(BaseModel):
    scenario: Optional[DashboardScenario] = None


class ScenarioRunResponse(BaseModel):
    result: DashboardResult


class ScenarioCompareRequest(BaseModel):
    scenarios: List[DashboardScenario]


class ScenarioCompareResponse(BaseModel):
    scenario_names: List[str]
    valuation: List[float]

