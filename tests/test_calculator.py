from __future__ import annotations

from projection_app.sample_data import build_investment_scenario, build_sample_scenario
from projection_app.services.calculator import ProjectionCalculator
from projection_app.services.equity import reserved_pool_equity_table


def test_sample_scenario_generates_results():
    scenario = build_sample_scenario()
    calculator = ProjectionCalculator()
    result = calculator.run(scenario)

    assert len(result.timeline.months) == 12
    assert result.timeline.months[-1].cumulative_customers == sum(scenario.monthly_targets)
    assert result.timeline.first_affordable_month == 4
    assert result.revenue.total_monthly_revenue == 0
    assert result.valuation.valuation == 0
    assert result.stage.name == "Foundation"
    assert [slice_.name for slice_ in result.dashboards] == ["revenue_mix", "cashflow", "valuation", "equity"]


def test_investment_scenario_combines_both_valuation_methods():
    scenario = build_investment_scenario()
    result = ProjectionCalculator().run(scenario)

    assert result.valuation.investment_implied_value == 10_000_000
    assert result.valuation.total_multiple == 10
    assert result.valuation.valuation > 10_000_000
    assert result.stage.name == "Investment"
    assert sum(item.percentage for item in result.equity) == 101
    assert result.timeline.months[0].period_start.isoformat() == "2025-07-01"
    assert result.timeline.months[0].operating_cost == result.timeline.months[0].monthly_revenue * 0.3


def test_calculator_uses_injected_equity_table(sample_scenario):
    scenario = sample_scenario.model_copy(update={"customer_count": 500})
    result = ProjectionCalculator(equity_table=reserved_pool_equity_table()).run(scenario)

    assert [item.name for item in result.equity][2:] == ["Investors (Reserved)", "Employees (Reserved)"]


def test_cashflow_dashboard_labels_months_by_index_without_start_date(sample_scenario):
    result = ProjectionCalculator().run(sample_scenario)
    cashflow = next(slice_ for slice_ in result.dashboards if slice_.name == "cashflow")

    assert cashflow.data["months"] == list(range(1, 13))
    assert cashflow.data["first_affordable_month"] == 4
