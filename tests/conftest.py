"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from cashflow_decision.api.main import create_app
from cashflow_decision.domain.models import (
    IncomeStream,
    Obligation,
    ObligationKind,
    PlannedItem,
    Profile,
    TieBreak,
)


TODAY = date(2025, 3, 10)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def household_profile() -> Profile:
    """Two earners, rent, a card paid in full, and a line of credit"""
    return Profile(
        today=TODAY,
        starting_balance=1500.0,
        safety_floor=0.0,
        horizon_days=60,
        tie_break=TieBreak.EXPENSES_FIRST,
        income_streams=(
            IncomeStream(
                id="p1",
                label="Person 1",
                cadence_days=14,
                last_occurrence=date(2025, 3, 7),
                amount=2200.0,
                per_pay_outflow=180.0,
            ),
            IncomeStream(
                id="p2",
                label="Person 2",
                cadence_days=14,
                last_occurrence=date(2025, 3, 3),
                amount=1800.0,
            ),
        ),
        obligations=(
            Obligation(id="rent", label="Rent", kind=ObligationKind.FIXED_FULL, due_day=28, balance=2400.0),
            Obligation(id="amex", label="AMEX", kind=ObligationKind.FIXED_FULL, due_day=16, balance=900.0),
            Obligation(
                id="loc",
                label="LOC",
                kind=ObligationKind.REVOLVING_MINIMUM,
                due_day=5,
                balance=3000.0,
                annual_rate_percent=9.5,
                credit_limit=10000.0,
            ),
        ),
        planned_items=(
            PlannedItem(id="trip", label="Trip", date=date(2025, 4, 2), amount=600.0),
        ),
    )


@pytest.fixture
def profile_payload() -> dict:
    """JSON body for the decision and schedule endpoints"""
    return {
        "today": "2025-03-10",
        "starting_balance": 100.0,
        "safety_floor": 0.0,
        "horizon_days": 15,
        "tie_break": "income_first",
        "income_streams": [
            {"id": "pay", "label": "Person 1", "cadence_days": 14, "last_occurrence": "2025-03-02", "amount": 800.0}
        ],
        "obligations": [
            {"id": "amex", "label": "AMEX", "kind": "fixed_full", "due_day": 16, "balance": 500.0}
        ],
        "planned_items": [],
    }
