from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import MONTHS_PER_YEAR


class OperatingCostMode(str, Enum):
    FIXED = "fixed"
    REVENUE_RATIO = "revenue_ratio"


class OperatingCostPolicy(BaseModel):
    mode: OperatingCostMode = OperatingCostMode.FIXED
    amount: float = Field(5000.0, description="Monthly operating cost excluding salaries (fixed mode)")
    ratio: float = Field(0.0, description="Operating cost as a fraction of monthly revenue (ratio mode)")

    @classmethod
    def fixed(cls, amount: float) -> "OperatingCostPolicy":
        return cls(mode=OperatingCostMode.FIXED, amount=amount)

    @classmethod
    def revenue_ratio(cls, ratio: float) -> "OperatingCostPolicy":
        return cls(mode=OperatingCostMode.REVENUE_RATIO, amount=0.0, ratio=ratio)

    def cost_for(self, revenue: float) -> float:
        if self.mode == OperatingCostMode.REVENUE_RATIO:
            return self.ratio * revenue
        return self.amount


class SalarySettings(BaseModel):
    founder_annual_salary: float = 70_000.0
    founder_count: int = 2

    def monthly_total(self) -> float:
        return self.founder_annual_salary / MONTHS_PER_YEAR * self.founder_count


class CashflowMonth(BaseModel):
    month_index: int
    period_start: Optional[date] = None
    new_customers: int
    cumulative_customers: int
    monthly_revenue: float
    operating_cost: float
    profit_before_salaries: float
    salary_affordable: bool
    salary_paid: float
    profit_after_salaries: float
    cumulative_profit: float


class CashflowTimeline(BaseModel):
    months: List[CashflowMonth]
    first_affordable_month: Optional[int] = None
    total_revenue: float = 0.0
    ending_cumulative_profit: float = 0.0
