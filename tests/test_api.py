from __future__ import annotations

import pytest


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_and_get_plans(client):
    plans = client.get("/plans").json()

    assert [entry["plan_id"] for entry in plans["plans"]] == ["base", "premium", "corporate"]
    assert plans["extra_minute_rate"] == 0.55
    assert client.get("/plans/corporate").json()["monthly_price_per_agent"] == 327
    assert client.get("/plans/gold").status_code == 404


def test_revenue_endpoint(client):
    response = client.post(
        "/revenue",
        json={
            "customer_count": 100,
            "agents_per_customer": 1.8,
            "extra_minutes_per_agent": 0,
            "mix": {"base": 30, "premium": 60, "corporate": 10},
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["breakdown"]["base"]["customers"] == 30
    assert body["base_monthly_revenue"] == pytest.approx(29646)


def test_revenue_endpoint_rejects_negative_customers(client):
    response = client.post("/revenue", json={"customer_count": -3})

    assert response.status_code == 422
    assert "customer_count" in response.json()["detail"]


def test_valuation_endpoint(client):
    response = client.post(
        "/valuation",
        json={"customer_count": 1000, "investment_amount": 1_000_000, "equity_percent": 10},
    )

    assert response.status_code == 200
    valuation = response.json()["valuation"]
    assert valuation["investment_implied_value"] == pytest.approx(10_000_000)
    assert valuation["total_multiple"] == pytest.approx(10)


def test_timeline_endpoint(client, monthly_targets):
    response = client.post("/timeline", json={"monthly_targets": monthly_targets, "start_date": "2025-07-01"})

    assert response.status_code == 200
    body = response.json()
    assert len(body["months"]) == 12
    assert body["months"][-1]["cumulative_customers"] == 647
    assert body["months"][-1]["period_start"] == "2026-06-01"
    assert body["first_affordable_month"] == 4


def test_timeline_endpoint_rejects_wrong_length(client):
    response = client.post("/timeline", json={"monthly_targets": [1, 2, 3]})

    assert response.status_code == 422
    assert "12" in response.json()["detail"]


def test_equity_endpoint(client):
    body = client.get("/equity", params={"customers": 1000}).json()

    assert body["table"] == "series_a"
    assert body["total_percentage"] == 101
    assert len(body["allocations"]) == 5
    assert client.get("/equity", params={"customers": -1}).status_code == 422


def test_stage_and_leaver_endpoints(client):
    assert client.get("/stages", params={"customers": 420}).json()["stage"]["name"] == "Expansion"

    outcome = client.post("/leaver", json={"shares": 5_000_000, "event": "intermediate"}).json()
    assert outcome["retained_shares"] == 3_000_000
    assert outcome["compensation"] == "fair_value"


def test_mix_rebalance_endpoint(client):
    response = client.post(
        "/mix/rebalance",
        json={"mix": {"base": 30, "premium": 60, "corporate": 10}, "plan": "base", "percentage": 50},
    )

    assert response.json() == {"base": 50, "premium": 43, "corporate": 7}
    bad = client.post(
        "/mix/rebalance",
        json={"mix": {"base": 30, "premium": 60, "corporate": 10}, "plan": "base", "percentage": 150},
    )
    assert bad.status_code == 422


def test_run_sample_scenario(client):
    response = client.post("/run")

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["scenario_name"] == "sample"
    assert len(result["timeline"]["months"]) == 12
    assert result["stage"]["name"] == "Foundation"


def test_compare_scenarios(client, monthly_targets):
    scenarios = [
        {"name": "small", "customer_count": 100, "monthly_targets": monthly_targets},
        {"name": "large", "customer_count": 1000, "monthly_targets": monthly_targets},
    ]
    body = client.post("/compare", json={"scenarios": scenarios}).json()

    assert body["scenario_names"] == ["small", "large"]
    assert body["valuation"][0] < body["valuation"][1]
    assert client.post("/compare", json={"scenarios": []}).status_code == 422


@pytest.mark.parametrize(
    "path, body",
    [
        ("/revenue", '{"customer_count": 10, "agents_per_customer": NaN}'),
        ("/revenue", '{"customer_count": 10, "extra_minutes_per_agent": Infinity}'),
        ("/valuation", '{"customer_count": 10, "investment_amount": 1000, "equity_percent": NaN}'),
    ],
)
def test_non_finite_numbers_rejected(client, path, body):
    response = client.post(path, content=body, headers={"content-type": "application/json"})

    assert response.status_code == 422
