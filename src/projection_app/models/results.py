from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from .cashflow import CashflowTimeline
from .equity import CustomerStage, EquityAllocation
from .revenue import RevenueMetrics
from .valuation import ValuationResult


class DashboardSlice(BaseModel):
    name: str
    data: Dict[str, float | int | str | list | dict | None]


class DashboardResult(BaseModel):
    scenario_name: str
    revenue: RevenueMetrics
    valuation: ValuationResult
    timeline: CashflowTimeline
    equity: List[EquityAllocation]
    stage: CustomerStage
    dashboards: List[DashboardSlice]
