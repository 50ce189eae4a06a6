from __future__ import annotations

from pydantic import BaseModel, Field

from .common import TOTAL_AUTHORIZED_SHARES


class ValuationSettings(BaseModel):
    base_multiple: float = Field(5.0, description="Revenue multiple applied at zero customers")
    multiplier_step: float = Field(0.5, description="Additional multiple per 100 customers")
    cap_multiple: float = Field(5.0, description="Ceiling on the additional multiple")
    total_authorized_shares: int = TOTAL_AUTHORIZED_SHARES


class ValuationResult(BaseModel):
    investment_implied_value: float
    growth_premium: float
    additional_multiple: float
    total_multiple: float
    valuation: float
    revenue_multiple: float
    value_per_share: float
