from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from projection_app.models.revenue import SubscriptionMix
from projection_app.sample_data import DEFAULT_MONTHLY_TARGETS, build_sample_scenario


@pytest.fixture
def default_mix() -> SubscriptionMix:
    return SubscriptionMix(base=30, premium=60, corporate=10)


@pytest.fixture
def monthly_targets() -> list[int]:
    return list(DEFAULT_MONTHLY_TARGETS)


@pytest.fixture
def sample_scenario():
    return build_sample_scenario()


@pytest.fixture
def client() -> TestClient:
    from projection_app.main import app

    return TestClient(app)
