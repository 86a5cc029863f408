"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "cashflow-decision"}


def test_metrics_endpoint(client: TestClient, profile_payload: dict):
    """Test Prometheus metrics endpoint after a decision"""
    client.post("/v1/decision", json=profile_payload)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "cashflow_decision_total" in response.text
    assert "http_request_duration_seconds" in response.text


def test_decision_income_first_is_safe(client: TestClient, profile_payload: dict):
    """Pay and the card bill on the same day net to 400 when income lands first"""
    response = client.post("/v1/decision", json=profile_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["safe"] is True
    assert data["today"] == "2025-03-10"
    assert [row["balance"] for row in data["ledger"]] == [900.0, 400.0]
    assert data["min_balance"] == 400.0
    assert data["min_date"] == "2025-03-16"

    verdict = data["verdicts"][0]
    assert verdict["anchor"] == {"id": "amex", "label": "AMEX", "date": "2025-03-16"}
    assert verdict["safe"] is True
    assert verdict["funding"] is None
    assert data["next_bill"]["label"] == "AMEX (full)"


def test_decision_expenses_first_recommends_borrowing(client: TestClient, profile_payload: dict):
    payload = dict(profile_payload)
    payload["tie_break"] = "expenses_first"
    payload["obligations"] = profile_payload["obligations"] + [
        {
            "id": "loc",
            "label": "LOC",
            "kind": "revolving_minimum",
            "balance": 0.0,
            "annual_rate_percent": 9.0,
            "credit_limit": 1000.0,
        }
    ]

    response = client.post("/v1/decision", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["safe"] is False
    verdict = data["verdicts"][0]
    assert verdict["breach"]["balance"] == -400.0
    assert verdict["shortfall"] == 400.0

    funding = verdict["funding"]
    assert funding["borrow_amount"] == 400.0
    assert funding["primary"]["label"] == "LOC"
    assert funding["days"] == 1
    assert funding["estimated_interest"] == pytest.approx(round(400 * 0.09 / 365, 2))
    assert funding["unfunded_remainder"] == 0.0


def test_decision_without_capacity_returns_advisory(client: TestClient, profile_payload: dict):
    payload = dict(profile_payload, tie_break="expenses_first")

    response = client.post("/v1/decision", json=payload)

    funding = response.json()["verdicts"][0]["funding"]
    assert funding["borrow_amount"] == 0.0
    assert funding["unfunded_remainder"] == 400.0
    assert "reduce or delay" in funding["advisory"]


def test_decision_with_explicit_anchors(client: TestClient, profile_payload: dict):
    payload = dict(
        profile_payload,
        tie_break="expenses_first",
        anchors=[{"id": "early", "label": "Phone", "date": "2025-03-12"}],
    )

    response = client.post("/v1/decision", json=payload)

    data = response.json()
    assert [v["anchor"]["id"] for v in data["verdicts"]] == ["early"]
    assert data["safe"] is True


def test_decision_amounts_rounded_to_cents(client: TestClient, profile_payload: dict):
    payload = dict(profile_payload, starting_balance=100.0, income_streams=[])
    payload["obligations"] = [
        {
            "id": "loc",
            "label": "LOC",
            "kind": "revolving_minimum",
            "due_day": 16,
            "balance": 1234.56,
            "annual_rate_percent": 19.99,
            "credit_limit": 5000.0,
        }
    ]

    data = client.post("/v1/decision", json=payload).json()

    assert data["ledger"][0]["outflow"] == round(1234.56 * 19.99 / 1200, 2)


def test_decision_returns_scheduling_warnings(client: TestClient, profile_payload: dict):
    payload = dict(profile_payload)
    payload["income_streams"] = [{"id": "pay", "label": "Pay", "cadence_days": 0, "amount": 800.0}]

    response = client.post("/v1/decision", json=payload)

    assert response.status_code == 200
    assert [w["code"] for w in response.json()["warnings"]] == ["non_positive_cadence"]


def test_decision_duplicate_ids_rejected(client: TestClient, profile_payload: dict):
    payload = dict(profile_payload)
    payload["obligations"] = profile_payload["obligations"] * 2

    response = client.post("/v1/decision", json=payload)

    assert response.status_code == 422
    assert "Duplicate obligation id" in response.json()["detail"]


def test_decision_horizon_bounds_validated(client: TestClient, profile_payload: dict):
    response = client.post("/v1/decision", json=dict(profile_payload, horizon_days=5000))
    assert response.status_code == 422

    response = client.post("/v1/decision", json=dict(profile_payload, horizon_days=-1))
    assert response.status_code == 422


def test_decision_negative_balance_rejected(client: TestClient, profile_payload: dict):
    payload = dict(profile_payload)
    payload["obligations"] = [{"id": "amex", "kind": "fixed_full", "due_day": 16, "balance": -5.0}]

    response = client.post("/v1/decision", json=payload)

    assert response.status_code == 422


def test_decision_is_idempotent(client: TestClient, profile_payload: dict):
    first = client.post("/v1/decision", json=profile_payload)
    second = client.post("/v1/decision", json=profile_payload)

    assert first.content == second.content


def test_request_id_echoed(client: TestClient, profile_payload: dict):
    response = client.post("/v1/decision", json=profile_payload, headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"

    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_schedule_endpoint(client: TestClient, profile_payload: dict):
    response = client.post("/v1/schedule", json=dict(profile_payload, tie_break="expenses_first"))

    assert response.status_code == 200
    data = response.json()
    assert [(e["date"], e["kind"]) for e in data["events"]] == [
        ("2025-03-16", "obligation"),
        ("2025-03-16", "income"),
    ]
    assert data["warnings"] == []
