from __future__ import annotations

from typing import Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError, UnknownPlanError
from .common import PlanId, check_non_negative, check_positive


EXTRA_MINUTE_RATE = 0.55


class PricingPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    monthly_price_per_agent: float = Field(..., description="Subscription price per agent per month")
    included_minutes: int = 0
    description: str = ""


class PricingCatalog:
    """Immutable set of the three subscription plans plus the shared extra-minute rate."""

    def __init__(self, plans: Mapping[PlanId, PricingPlan], extra_minute_rate: float = EXTRA_MINUTE_RATE) -> None:
        resolved: Dict[PlanId, PricingPlan] = {}
        for key, plan in plans.items():
            plan_id = _coerce_plan_id(key)
            check_positive(f"{plan_id.value} monthly_price_per_agent", plan.monthly_price_per_agent)
            check_non_negative(f"{plan_id.value} included_minutes", plan.included_minutes)
            resolved[plan_id] = plan
        missing = [plan_id.value for plan_id in PlanId if plan_id not in resolved]
        if missing:
            raise ConfigurationError(f"Pricing catalog is missing plans: {', '.join(missing)}")
        check_non_negative("extra_minute_rate", extra_minute_rate)
        self._plans = resolved
        self._extra_minute_rate = float(extra_minute_rate)

    @property
    def extra_minute_rate(self) -> float:
        return self._extra_minute_rate

    def get_plan(self, plan_id: PlanId | str) -> PricingPlan:
        return self._plans[_coerce_plan_id(plan_id)]

    def plans(self) -> List[tuple[PlanId, PricingPlan]]:
        return [(plan_id, self._plans[plan_id]) for plan_id in PlanId]

    def with_extra_minute_rate(self, rate: float) -> "PricingCatalog":
        return PricingCatalog(self._plans, extra_minute_rate=rate)

    def __repr__(self) -> str:
        prices = ", ".join(f"{pid.value}={plan.monthly_price_per_agent}" for pid, plan in self.plans())
        return f"PricingCatalog({prices}, extra_minute_rate={self._extra_minute_rate})"


def _coerce_plan_id(plan_id: PlanId | str) -> PlanId:
    if isinstance(plan_id, PlanId):
        return plan_id
    try:
        return PlanId(plan_id)
    except ValueError:
        raise UnknownPlanError(plan_id) from None


DEFAULT_PLANS: Dict[PlanId, PricingPlan] = {
    PlanId.BASE: PricingPlan(
        name="Base",
        monthly_price_per_agent=114,
        included_minutes=180,
        description="For individuals getting started.",
    ),
    PlanId.PREMIUM: PricingPlan(
        name="Premium",
        monthly_price_per_agent=163,
        included_minutes=180,
        description="For startups and growing teams.",
    ),
    PlanId.CORPORATE: PricingPlan(
        name="Corporate",
        monthly_price_per_agent=327,
        included_minutes=300,
        description="For enterprises and large teams.",
    ),
}

DEFAULT_CATALOG = PricingCatalog(DEFAULT_PLANS)


def get_plan(plan_id: PlanId | str) -> PricingPlan:
    return DEFAULT_CATALOG.get_plan(plan_id)
