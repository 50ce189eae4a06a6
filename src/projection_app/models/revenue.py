from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field

from .common import PlanId, check_percentage, round_half_up


class SubscriptionMix(BaseModel):
    base: float = Field(30.0, description="Percentage of customers on the Base plan")
    premium: float = Field(60.0, description="Percentage of customers on the Premium plan")
    corporate: float = Field(10.0, description="Percentage of customers on the Corporate plan")

    def percentage_for(self, plan_id: PlanId) -> float:
        return getattr(self, PlanId(plan_id).value)

    def total(self) -> float:
        return self.base + self.premium + self.corporate

    def rebalance(self, plan_id: PlanId, new_percentage: float) -> "SubscriptionMix":
        """Set one segment and spread the remainder over the other two.

        The other segments keep their relative proportions, each rounded on its
        own, so the result may land on 99 or 101. When both other segments are
        empty the remainder is split in half, the first taking the rounded half.
        """
        plan_id = PlanId(plan_id)
        check_percentage(f"{plan_id.value} percentage", new_percentage)
        first, second = [other for other in PlanId if other != plan_id]
        remaining = 100 - new_percentage
        current_total = self.percentage_for(first) + self.percentage_for(second)
        if current_total == 0:
            first_value = round_half_up(remaining / 2)
            second_value = remaining - first_value
        else:
            first_ratio = self.percentage_for(first) / current_total
            first_value = round_half_up(remaining * first_ratio)
            second_value = round_half_up(remaining * (1 - first_ratio))
        values = {plan_id.value: new_percentage, first.value: first_value, second.value: second_value}
        return SubscriptionMix(**values)


class PlanBreakdown(BaseModel):
    customers: int
    agents: float
    revenue: float


class RevenueMetrics(BaseModel):
    base_monthly_revenue: float
    extra_minutes_monthly_revenue: float
    total_monthly_revenue: float
    annual_revenue: float
    revenue_per_customer: float
    revenue_per_agent: float
    total_agents: float
    breakdown: Dict[PlanId, PlanBreakdown] = Field(default_factory=dict)
