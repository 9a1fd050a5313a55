"""Shared test fixtures: a fresh policy store per test."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fundli_penalty.api.server import create_app
from fundli_penalty.config.settings import ServiceSettings
from fundli_penalty.engine.calculator import PenaltyCalculator
from fundli_penalty.engine.policy_store import PenaltyPolicyStore


@pytest.fixture
def store() -> PenaltyPolicyStore:
    return PenaltyPolicyStore()


@pytest.fixture
def legacy_calculator(store: PenaltyPolicyStore) -> PenaltyCalculator:
    return PenaltyCalculator(store, day_divisor="legacy")


@pytest.fixture
def calendar_calculator(store: PenaltyPolicyStore) -> PenaltyCalculator:
    return PenaltyCalculator(store, day_divisor="calendar")


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ServiceSettings()))


@pytest.fixture
def calendar_client() -> TestClient:
    return TestClient(create_app(ServiceSettings(day_divisor="calendar")))
