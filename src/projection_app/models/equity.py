from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StakeholderShare(BaseModel):
    name: str
    percentage: Optional[float] = None
    shares: Optional[int] = Field(default=None, description="Absolute share count; percentages are derived when set")


class EquityBracket(BaseModel):
    min_customers: int
    label: str
    holders: List[StakeholderShare]

    def is_computed(self) -> bool:
        return any(holder.shares is not None for holder in self.holders)


class EquityTable(BaseModel):
    name: str
    brackets: List[EquityBracket]


class EquityAllocation(BaseModel):
    name: str
    percentage: float


class ShareStructure(BaseModel):
    holdings: Dict[str, int]
    total_authorized: int
    total_issued: int

    def issued_ratio(self) -> float:
        if not self.total_authorized:
            return 0.0
        return self.total_issued / self.total_authorized


class CustomerStage(BaseModel):
    name: str
    customers: int
    description: str = ""
    share_structure: ShareStructure


class LeaverEvent(str, Enum):
    GOOD = "good"
    INTERMEDIATE = "intermediate"
    BAD = "bad"


class CompensationBasis(str, Enum):
    FULL_MARKET_VALUE = "full_market_value"
    FAIR_VALUE = "fair_value"
    NOMINAL_VALUE = "nominal_value"


class LeaverTerms(BaseModel):
    share_retention_pct: float
    compensation: CompensationBasis


class LeaverOutcome(BaseModel):
    event: LeaverEvent
    original_shares: int
    retained_shares: int
    forfeited_shares: int
    compensation: CompensationBasis
