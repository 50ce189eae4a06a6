from __future__ import annotations

import logging
import math
from datetime import date
from typing import Dict, List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from ..errors import ConfigurationError, InvalidArgumentError
from ..models.cashflow import (
    CashflowMonth,
    CashflowTimeline,
    OperatingCostMode,
    OperatingCostPolicy,
    SalarySettings,
)
from ..models.common import (
    MONTHS_PER_YEAR,
    PlanId,
    check_count,
    check_non_negative,
    check_percentage,
    check_positive,
    round_half_up,
)
from ..models.equity import EquityTable
from ..models.pricing import DEFAULT_CATALOG, PricingCatalog
from ..models.results import DashboardResult, DashboardSlice
from ..models.revenue import PlanBreakdown, RevenueMetrics, SubscriptionMix
from ..models.scenario import DashboardScenario
from ..models.valuation import ValuationResult, ValuationSettings
from .equity import resolve_distribution, resolve_stage, series_a_equity_table


logger = logging.getLogger(__name__)

TIMELINE_MONTHS = 12


def compute_revenue(
    customer_count: int,
    agents_per_customer: float,
    extra_minutes_per_agent: float,
    mix: Optional[SubscriptionMix] = None,
    plan: PlanId | str = PlanId.PREMIUM,
    catalog: PricingCatalog = DEFAULT_CATALOG,
    strict_mix: bool = False,
) -> RevenueMetrics:
    """Blend a customer base across the pricing plans into monthly and annual revenue.

    With a mix, Base and Premium customer counts are rounded half-up and Corporate
    takes the exact remainder, so the three segments always add up to
    ``customer_count``. Without a mix every customer is billed on ``plan``.
    Extra-minute usage is charged once over the blended agent count.
    """
    check_count("customer_count", customer_count)
    check_positive("agents_per_customer", agents_per_customer)
    check_non_negative("extra_minutes_per_agent", extra_minutes_per_agent)

    catalog.get_plan(plan)
    if mix is not None:
        segments = _split_customers(customer_count, mix, strict_mix)
    else:
        segments = {PlanId(plan): customer_count}

    breakdown: Dict[PlanId, PlanBreakdown] = {}
    base_monthly_revenue = 0.0
    for plan_id, customers in segments.items():
        agents = customers * agents_per_customer
        revenue = agents * catalog.get_plan(plan_id).monthly_price_per_agent
        breakdown[plan_id] = PlanBreakdown(customers=customers, agents=agents, revenue=revenue)
        base_monthly_revenue += revenue

    total_agents = customer_count * agents_per_customer
    extra_minutes_revenue = total_agents * extra_minutes_per_agent * catalog.extra_minute_rate
    total_monthly_revenue = base_monthly_revenue + extra_minutes_revenue

    return RevenueMetrics(
        base_monthly_revenue=base_monthly_revenue,
        extra_minutes_monthly_revenue=extra_minutes_revenue,
        total_monthly_revenue=total_monthly_revenue,
        annual_revenue=total_monthly_revenue * MONTHS_PER_YEAR,
        revenue_per_customer=total_monthly_revenue / max(customer_count, 1),
        revenue_per_agent=total_monthly_revenue / max(total_agents, 1),
        total_agents=total_agents,
        breakdown=breakdown,
    )


def _split_customers(customer_count: int, mix: SubscriptionMix, strict_mix: bool) -> Dict[PlanId, int]:
    for plan_id in PlanId:
        check_percentage(f"mix.{plan_id.value}", mix.percentage_for(plan_id))
    total = mix.total()
    if not math.isclose(total, 100.0):
        if strict_mix:
            raise InvalidArgumentError(f"Subscription mix must sum to 100, got {total}")
        logger.warning("Subscription mix sums to %s; corporate segment absorbs the difference", total)

    base_customers = round_half_up(customer_count * (mix.base / 100))
    premium_customers = round_half_up(customer_count * (mix.premium / 100))
    corporate_customers = customer_count - base_customers - premium_customers
    return {
        PlanId.BASE: base_customers,
        PlanId.PREMIUM: premium_customers,
        PlanId.CORPORATE: corporate_customers,
    }


def value_company(
    investment_amount: float,
    equity_percent: float,
    customer_count: int,
    revenue_metrics: RevenueMetrics,
    settings: Optional[ValuationSettings] = None,
) -> ValuationResult:
    settings = settings or ValuationSettings()
    check_non_negative("investment_amount", investment_amount)
    check_percentage("equity_percent", equity_percent)
    check_count("customer_count", customer_count)
    check_positive("total_authorized_shares", settings.total_authorized_shares)

    if investment_amount > 0 and equity_percent > 0:
        investment_implied_value = investment_amount / (equity_percent / 100)
    else:
        investment_implied_value = 0.0

    additional_multiple = min(settings.cap_multiple, (customer_count / 100) * settings.multiplier_step)
    total_multiple = settings.base_multiple + additional_multiple
    growth_premium = revenue_metrics.annual_revenue * total_multiple
    valuation = investment_implied_value + growth_premium

    return ValuationResult(
        investment_implied_value=investment_implied_value,
        growth_premium=growth_premium,
        additional_multiple=additional_multiple,
        total_multiple=total_multiple,
        valuation=valuation,
        revenue_multiple=valuation / max(revenue_metrics.annual_revenue, 1),
        value_per_share=valuation / settings.total_authorized_shares,
    )


def compute_valuation(
    investment_amount: float,
    equity_percent: float,
    customer_count: int,
    revenue_metrics: RevenueMetrics,
    settings: Optional[ValuationSettings] = None,
) -> float:
    return value_company(investment_amount, equity_percent, customer_count, revenue_metrics, settings).valuation


def compute_timeline(
    monthly_targets: Sequence[int],
    agents_per_customer: float,
    extra_minutes_per_agent: float,
    mix: Optional[SubscriptionMix],
    cost_policy: Optional[OperatingCostPolicy] = None,
    salary: Optional[SalarySettings] = None,
    start_date: Optional[date] = None,
    plan: PlanId | str = PlanId.PREMIUM,
    catalog: PricingCatalog = DEFAULT_CATALOG,
    strict_mix: bool = False,
) -> CashflowTimeline:
    """Project twelve months of revenue, costs and founder-salary affordability.

    Each month's revenue is recomputed from scratch on the cumulative customer
    count. Salaries are either paid in full or deferred entirely for the month.
    """
    targets = list(monthly_targets)
    if len(targets) != TIMELINE_MONTHS:
        raise ConfigurationError(f"Expected {TIMELINE_MONTHS} monthly targets, got {len(targets)}")
    for index, target in enumerate(targets):
        check_count(f"monthly_targets[{index}]", target)

    cost_policy = cost_policy or OperatingCostPolicy()
    salary = salary or SalarySettings()
    _check_cost_policy(cost_policy)
    check_non_negative("founder_annual_salary", salary.founder_annual_salary)
    check_count("founder_count", salary.founder_count)
    salary_target = salary.monthly_total()

    months: List[CashflowMonth] = []
    cumulative_customers = 0
    cumulative_profit = 0.0
    for month_index, new_customers in enumerate(targets, start=1):
        cumulative_customers += new_customers
        revenue = compute_revenue(
            cumulative_customers,
            agents_per_customer,
            extra_minutes_per_agent,
            mix=mix,
            plan=plan,
            catalog=catalog,
            strict_mix=strict_mix,
        ).total_monthly_revenue
        operating_cost = cost_policy.cost_for(revenue)
        profit_before_salaries = revenue - operating_cost

        salary_affordable = profit_before_salaries >= salary_target
        salary_paid = salary_target if salary_affordable else 0.0
        profit_after_salaries = profit_before_salaries - salary_paid
        cumulative_profit += profit_after_salaries

        period_start = start_date + relativedelta(months=month_index - 1) if start_date else None
        months.append(
            CashflowMonth(
                month_index=month_index,
                period_start=period_start,
                new_customers=new_customers,
                cumulative_customers=cumulative_customers,
                monthly_revenue=revenue,
                operating_cost=operating_cost,
                profit_before_salaries=profit_before_salaries,
                salary_affordable=salary_affordable,
                salary_paid=salary_paid,
                profit_after_salaries=profit_after_salaries,
                cumulative_profit=cumulative_profit,
            )
        )

    first_month = first_affordable_month(months)
    logger.debug(
        "Timeline projected: %s customers by month %s, salaries affordable from month %s",
        cumulative_customers,
        TIMELINE_MONTHS,
        first_month,
    )
    return CashflowTimeline(
        months=months,
        first_affordable_month=first_month,
        total_revenue=sum(month.monthly_revenue for month in months),
        ending_cumulative_profit=cumulative_profit,
    )


def first_affordable_month(months: Sequence[CashflowMonth] | CashflowTimeline) -> Optional[int]:
    if isinstance(months, CashflowTimeline):
        months = months.months
    return next((month.month_index for month in months if month.salary_affordable), None)


def _check_cost_policy(cost_policy: OperatingCostPolicy) -> None:
    if cost_policy.mode == OperatingCostMode.REVENUE_RATIO:
        check_non_negative("operating cost ratio", cost_policy.ratio)
    else:
        check_non_negative("operating cost amount", cost_policy.amount)


class ProjectionCalculator:
    """Runs a full dashboard scenario against one catalog and equity table."""

    def __init__(
        self,
        catalog: PricingCatalog = DEFAULT_CATALOG,
        equity_table: Optional[EquityTable] = None,
        strict_mix: bool = False,
    ) -> None:
        self.catalog = catalog
        self.equity_table = equity_table or series_a_equity_table()
        self.strict_mix = strict_mix

    @classmethod
    def from_settings(cls, settings) -> "ProjectionCalculator":
        return cls(
            catalog=settings.catalog(),
            equity_table=settings.equity_table(),
            strict_mix=settings.strict_mix,
        )

    def run(self, scenario: DashboardScenario) -> DashboardResult:
        logger.debug("Running scenario %r with %s customers", scenario.name, scenario.customer_count)
        revenue = compute_revenue(
            scenario.customer_count,
            scenario.agents_per_customer,
            scenario.extra_minutes_per_agent,
            mix=scenario.mix,
            plan=scenario.selected_plan,
            catalog=self.catalog,
            strict_mix=self.strict_mix,
        )
        valuation = value_company(
            scenario.investment_amount,
            scenario.equity_percent,
            scenario.customer_count,
            revenue,
            scenario.valuation,
        )
        timeline = compute_timeline(
            scenario.monthly_targets,
            scenario.agents_per_customer,
            scenario.extra_minutes_per_agent,
            scenario.mix,
            cost_policy=scenario.operating_costs,
            salary=scenario.salary,
            start_date=scenario.start_date,
            plan=scenario.selected_plan,
            catalog=self.catalog,
            strict_mix=self.strict_mix,
        )
        equity = resolve_distribution(scenario.customer_count, self.equity_table)
        stage = resolve_stage(scenario.customer_count)
        dashboards = self._build_dashboards(revenue, valuation, timeline, equity)
        return DashboardResult(
            scenario_name=scenario.name,
            revenue=revenue,
            valuation=valuation,
            timeline=timeline,
            equity=equity,
            stage=stage,
            dashboards=dashboards,
        )

    def _build_dashboards(self, revenue, valuation, timeline, equity) -> List[DashboardSlice]:
        revenue_mix = {
            "plans": [plan_id.value for plan_id in revenue.breakdown],
            "customers": [item.customers for item in revenue.breakdown.values()],
            "revenue": [item.revenue for item in revenue.breakdown.values()],
            "extra_minutes": revenue.extra_minutes_monthly_revenue,
        }
        cashflow_trend = {
            "months": [
                m.period_start.isoformat() if m.period_start else m.month_index for m in timeline.months
            ],
            "revenue": [m.monthly_revenue for m in timeline.months],
            "profit_after_salaries": [m.profit_after_salaries for m in timeline.months],
            "cumulative_profit": [m.cumulative_profit for m in timeline.months],
            "first_affordable_month": timeline.first_affordable_month,
        }
        valuation_slice = {
            "valuation": valuation.valuation,
            "investment_implied_value": valuation.investment_implied_value,
            "growth_premium": valuation.growth_premium,
            "revenue_multiple": valuation.revenue_multiple,
            "value_per_share": valuation.value_per_share,
        }
        equity_slice = {
            "names": [item.name for item in equity],
            "percentages": [item.percentage for item in equity],
        }
        return [
            DashboardSlice(name="revenue_mix", data=revenue_mix),
            DashboardSlice(name="cashflow", data=cashflow_trend),
            DashboardSlice(name="valuation", data=valuation_slice),
            DashboardSlice(name="equity", data=equity_slice),
        ]
