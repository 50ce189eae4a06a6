from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..errors import ConfigurationError, InvalidArgumentError
from ..models.common import TOTAL_AUTHORIZED_SHARES, check_count, round_half_up
from ..models.equity import (
    CompensationBasis,
    CustomerStage,
    EquityAllocation,
    EquityBracket,
    EquityTable,
    LeaverEvent,
    LeaverOutcome,
    LeaverTerms,
    ShareStructure,
    StakeholderShare,
)


logger = logging.getLogger(__name__)

FOUNDER_SHARES = 5_000_000
SEED_INVESTOR_SHARES = 1_190_476
SERIES_A_INVESTOR_SHARES = 1_000_000
EMPLOYEE_SHARES = 714_286

LEAVER_TERMS: Dict[LeaverEvent, LeaverTerms] = {
    LeaverEvent.GOOD: LeaverTerms(share_retention_pct=100, compensation=CompensationBasis.FULL_MARKET_VALUE),
    LeaverEvent.INTERMEDIATE: LeaverTerms(share_retention_pct=60, compensation=CompensationBasis.FAIR_VALUE),
    LeaverEvent.BAD: LeaverTerms(share_retention_pct=20, compensation=CompensationBasis.NOMINAL_VALUE),
}


def _founding_split(investor_label: str, employee_label: str) -> List[StakeholderShare]:
    return [
        StakeholderShare(name="Founder A", percentage=42),
        StakeholderShare(name="Founder B", percentage=42),
        StakeholderShare(name=investor_label, percentage=10),
        StakeholderShare(name=employee_label, percentage=6),
    ]


def series_a_equity_table() -> EquityTable:
    """Reserved pools, then an issued Series A at 50 customers, then a diluted round at 1000."""
    return EquityTable(
        name="series_a",
        brackets=[
            EquityBracket(
                min_customers=0,
                label="Foundation",
                holders=_founding_split("Investors (Reserved)", "Employees (Reserved)"),
            ),
            EquityBracket(
                min_customers=50,
                label="Series A issued",
                holders=_founding_split("Series A Investors", "Employees"),
            ),
            EquityBracket(
                min_customers=1000,
                label="Investment round",
                holders=[
                    StakeholderShare(name="Founder A", shares=FOUNDER_SHARES),
                    StakeholderShare(name="Founder B", shares=FOUNDER_SHARES),
                    StakeholderShare(name="Seed Investors", shares=SEED_INVESTOR_SHARES),
                    StakeholderShare(name="Series A Investors", shares=SERIES_A_INVESTOR_SHARES),
                    StakeholderShare(name="Employees", shares=EMPLOYEE_SHARES),
                ],
            ),
        ],
    )


def reserved_pool_equity_table() -> EquityTable:
    """Pools stay reserved until the investment stage issues them unchanged."""
    return EquityTable(
        name="reserved_pool",
        brackets=[
            EquityBracket(
                min_customers=0,
                label="Founders only",
                holders=_founding_split("Investors (Reserved)", "Employees (Reserved)"),
            ),
            EquityBracket(
                min_customers=1000,
                label="Investment round",
                holders=_founding_split("Investors", "Employees"),
            ),
        ],
    )


EQUITY_TABLES = {
    "series_a": series_a_equity_table,
    "reserved_pool": reserved_pool_equity_table,
}


def equity_table_for(variant: str) -> EquityTable:
    try:
        return EQUITY_TABLES[variant]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown equity table variant {variant!r}; expected one of {sorted(EQUITY_TABLES)}"
        ) from None


def resolve_distribution(customer_count: int, table: Optional[EquityTable] = None) -> List[EquityAllocation]:
    check_count("customer_count", customer_count)
    table = table or series_a_equity_table()
    bracket = _select_bracket(customer_count, table)
    _validate_bracket(bracket)
    if not bracket.is_computed():
        return [EquityAllocation(name=holder.name, percentage=holder.percentage) for holder in bracket.holders]

    total_shares = sum(holder.shares for holder in bracket.holders)
    allocations = [
        EquityAllocation(name=holder.name, percentage=round_half_up(holder.shares / total_shares * 100))
        for holder in bracket.holders
    ]
    total_pct = sum(item.percentage for item in allocations)
    if total_pct != 100:
        # Rounding drift is kept as-is.
        logger.warning("Equity bracket %r sums to %s%% after rounding", bracket.label, total_pct)
    return allocations


def _select_bracket(customer_count: int, table: EquityTable) -> EquityBracket:
    if not table.brackets:
        raise ConfigurationError(f"Equity table {table.name!r} has no brackets")
    eligible = [bracket for bracket in table.brackets if bracket.min_customers <= customer_count]
    if not eligible:
        lowest = min(bracket.min_customers for bracket in table.brackets)
        raise ConfigurationError(
            f"Equity table {table.name!r} has no bracket for {customer_count} customers (lowest is {lowest})"
        )
    return max(eligible, key=lambda bracket: bracket.min_customers)


def _validate_bracket(bracket: EquityBracket) -> None:
    if not bracket.holders:
        raise ConfigurationError(f"Equity bracket {bracket.label!r} has no holders")
    computed = bracket.is_computed()
    for holder in bracket.holders:
        has_pct = holder.percentage is not None
        has_shares = holder.shares is not None
        if has_pct == has_shares:
            raise ConfigurationError(
                f"Holder {holder.name!r} in bracket {bracket.label!r} needs exactly one of percentage or shares"
            )
        if computed and not has_shares:
            raise ConfigurationError(f"Bracket {bracket.label!r} mixes share counts with fixed percentages")
        if has_shares and holder.shares < 0:
            raise ConfigurationError(f"Holder {holder.name!r} has a negative share count")
    if computed and sum(holder.shares for holder in bracket.holders) <= 0:
        raise ConfigurationError(f"Bracket {bracket.label!r} has no shares outstanding")


def _share_structure(total_issued: int) -> ShareStructure:
    return ShareStructure(
        holdings={
            "Founder A": FOUNDER_SHARES,
            "Founder B": FOUNDER_SHARES,
            "Investors": SEED_INVESTOR_SHARES,
            "Employees": EMPLOYEE_SHARES,
        },
        total_authorized=TOTAL_AUTHORIZED_SHARES,
        total_issued=total_issued,
    )


def customer_stages() -> List[CustomerStage]:
    founders_issued = 2 * FOUNDER_SHARES
    return [
        CustomerStage(
            name="Foundation",
            customers=0,
            description="Founders hold all issued shares; investor and employee pools are reserved.",
            share_structure=_share_structure(founders_issued),
        ),
        CustomerStage(
            name="Growth",
            customers=150,
            description="Founder salaries unlocked after the first customer KPI.",
            share_structure=_share_structure(founders_issued),
        ),
        CustomerStage(
            name="Expansion",
            customers=400,
            description="Product-market fit; reserved preference shares held for strategic investors.",
            share_structure=_share_structure(founders_issued),
        ),
        CustomerStage(
            name="Scale",
            customers=700,
            description="Investment ready.",
            share_structure=_share_structure(founders_issued),
        ),
        CustomerStage(
            name="Investment",
            customers=1000,
            description="All authorized shares issued.",
            share_structure=_share_structure(TOTAL_AUTHORIZED_SHARES),
        ),
    ]


def resolve_stage(customer_count: int) -> CustomerStage:
    check_count("customer_count", customer_count)
    reached = [stage for stage in customer_stages() if stage.customers <= customer_count]
    return reached[-1]


def apply_leaver_event(shares: int, event: LeaverEvent) -> LeaverOutcome:
    check_count("shares", shares)
    try:
        event = LeaverEvent(event)
    except ValueError:
        raise InvalidArgumentError(f"Unknown leaver event: {event!r}") from None
    terms = LEAVER_TERMS[event]
    retained = round_half_up(shares * terms.share_retention_pct / 100)
    return LeaverOutcome(
        event=event,
        original_shares=shares,
        retained_shares=retained,
        forfeited_shares=shares - retained,
        compensation=terms.compensation,
    )

