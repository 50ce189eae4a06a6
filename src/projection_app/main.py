from __future__ import annotations

import logging
from typing import Dict

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from .config import get_settings
from .errors import ProjectionError, UnknownPlanError
from .models.cashflow import CashflowTimeline
from .models.equity import LeaverOutcome
from .models.pricing import PricingPlan
from .models.revenue import RevenueMetrics, SubscriptionMix
from .sample_data import build_sample_scenario
from .schemas import (
    EquityResponse,
    LeaverRequest,
    MixRebalanceRequest,
    PlanEntry,
    PlanListResponse,
    RevenueRequest,
    ScenarioCompareRequest,
    ScenarioCompareResponse,
    ScenarioRunRequest,
    ScenarioRunResponse,
    StageResponse,
    TimelineRequest,
    ValuationRequest,
    ValuationResponse,
)
from .services.calculator import ProjectionCalculator, compute_revenue, compute_timeline, value_company
from .services.equity import apply_leaver_event, resolve_distribution, resolve_stage
from .utils.logger import setup_logging


settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")

calculator = ProjectionCalculator.from_settings(settings)


@app.exception_handler(ProjectionError)
def projection_error_handler(request: Request, exc: ProjectionError) -> JSONResponse:
    status_code = 404 if isinstance(exc, UnknownPlanError) else 422
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/plans", response_model=PlanListResponse)
def list_plans() -> PlanListResponse:
    catalog = calculator.catalog
    return PlanListResponse(
        plans=[PlanEntry(plan_id=plan_id, plan=plan) for plan_id, plan in catalog.plans()],
        extra_minute_rate=catalog.extra_minute_rate,
    )


@app.get("/plans/{plan_id}", response_model=PricingPlan)
def get_plan(plan_id: str) -> PricingPlan:
    try:
        return calculator.catalog.get_plan(plan_id)
    except UnknownPlanError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/revenue", response_model=RevenueMetrics)
def revenue(payload: RevenueRequest) -> RevenueMetrics:
    return _revenue_for(payload)


@app.post("/valuation", response_model=ValuationResponse)
def valuation(payload: ValuationRequest) -> ValuationResponse:
    metrics = _revenue_for(payload)
    result = value_company(
        payload.investment_amount,
        payload.equity_percent,
        payload.customer_count,
        metrics,
        payload.settings,
    )
    return ValuationResponse(revenue=metrics, valuation=result)


@app.post("/timeline", response_model=CashflowTimeline)
def timeline(payload: TimelineRequest) -> CashflowTimeline:
    return compute_timeline(
        payload.monthly_targets,
        payload.agents_per_customer,
        payload.extra_minutes_per_agent,
        payload.mix,
        cost_policy=payload.operating_costs or settings.cost_policy(),
        salary=payload.salary or settings.salary_settings(),
        start_date=payload.start_date,
        plan=payload.plan,
        catalog=calculator.catalog,
        strict_mix=calculator.strict_mix,
    )


@app.get("/equity", response_model=EquityResponse)
def equity(customers: int = Query(..., description="Customer count milestone")) -> EquityResponse:
    allocations = resolve_distribution(customers, calculator.equity_table)
    return EquityResponse(
        customer_count=customers,
        table=calculator.equity_table.name,
        allocations=allocations,
        total_percentage=sum(item.percentage for item in allocations),
    )


@app.get("/stages", response_model=StageResponse)
def stage(customers: int = Query(..., description="Customer count")) -> StageResponse:
    return StageResponse(customer_count=customers, stage=resolve_stage(customers))


@app.post("/leaver", response_model=LeaverOutcome)
def leaver(payload: LeaverRequest) -> LeaverOutcome:
    return apply_leaver_event(payload.shares, payload.event)


@app.post("/mix/rebalance", response_model=SubscriptionMix)
def rebalance_mix(payload: MixRebalanceRequest) -> SubscriptionMix:
    return payload.mix.rebalance(payload.plan, payload.percentage)


@app.post("/run", response_model=ScenarioRunResponse)
def run_scenario(payload: ScenarioRunRequest | None = None) -> ScenarioRunResponse:
    scenario = payload.scenario if payload and payload.scenario else build_sample_scenario(settings)
    return ScenarioRunResponse(result=calculator.run(scenario))


@app.post("/compare", response_model=ScenarioCompareResponse)
def compare_scenarios(payload: ScenarioCompareRequest) -> ScenarioCompareResponse:
    if not payload.scenarios:
        raise HTTPException(status_code=422, detail="At least one scenario is required")
    results = [calculator.run(scenario) for scenario in payload.scenarios]
    return ScenarioCompareResponse(
        scenario_names=[result.scenario_name for result in results],
        valuation=[result.valuation.valuation for result in results],
    )


@app.get("/health")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}


def _revenue_for(payload: RevenueRequest) -> RevenueMetrics:
    return compute_revenue(
        payload.customer_count,
        payload.agents_per_customer,
        payload.extra_minutes_per_agent,
        mix=payload.mix,
        plan=payload.plan,
        catalog=calculator.catalog,
        strict_mix=calculator.strict_mix,
    )
