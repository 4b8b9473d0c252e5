from __future__ import annotations

from flask.testing import FlaskClient


def plan_payload(**overrides) -> dict:
    plan = {
        "id": "sip-1",
        "name": "Index fund",
        "start_date": "2023-01-01",
        "monthly_amount": 5000,
        "annual_return_rate": 15,
        "lock_duration_years": 1,
    }
    plan.update(overrides)
    return plan


def test_availability_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/plans/availability",
        json={"plan": plan_payload(), "as_of": "2024-07-01"},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["per_installment"]) == 19
    assert body["per_installment"][0]["date"] == "2023-01-01"
    assert body["per_installment"][0]["lock_end_date"] == "2024-01-01"
    assert abs(body["available"] + body["locked"] - body["total"]) <= 0.01
    assert abs(body["locked"] - 64301.81) <= 0.02


def test_metrics_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/plans/metrics",
        json={
            "plan": plan_payload(
                start_date="2024-01-01",
                monthly_amount=10000,
                annual_return_rate=12,
                lock_duration_years=0,
            ),
            "as_of": "2024-06-01",
        },
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["installments_paid"] == 6
    assert body["expected_value"] == 61520.15
    assert body["available"] == 61520.15
    assert body["locked"] == 0


def test_history_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/plans/history",
        json={
            "plan": plan_payload(state={"kind": "paused", "since": "2023-03-01"}),
            "as_of": "2024-07-01",
        },
    )

    assert resp.status_code == 200
    rows = resp.get_json()
    assert [row["installment_number"] for row in rows] == [1, 2, 3]
    assert rows[-1]["total_invested"] == 15000


def test_portfolio_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/portfolio/summary",
        json={
            "plans": [
                plan_payload(start_date="2024-01-01", annual_return_rate=12, lock_duration_years=0),
                plan_payload(
                    id="sip-2",
                    start_date="2024-01-01",
                    monthly_amount=10000,
                    annual_return_rate=0,
                    state={"kind": "paused", "since": "2024-04-01"},
                ),
                plan_payload(id="sip-3", state={"kind": "completed"}),
            ],
            "withdrawals": [
                {"amount": 2000, "date": "2024-05-10", "plan_id": "sip-1"},
                {"amount": 3000, "date": "2024-06-01", "plan_id": "sip-3"},
            ],
            "as_of": "2024-07-01",
        },
    )

    assert resp.status_code == 200
    assert resp.get_json() == {
        "total_invested": 75000.0,
        "expected_value": 76067.68,
        "total_withdrawn": 5000.0,
        "net_portfolio": 70000.0,
        "gain_loss": 1067.68,
    }


def test_invalid_plan_payload_returns_422(client: FlaskClient):
    resp = client.post(
        "/api/plans/metrics",
        json={"plan": plan_payload(annual_return_rate=150)},
    )

    assert resp.status_code == 422
    assert "detail" in resp.get_json()


def test_validate_endpoint(client: FlaskClient):
    good = client.post(
        "/api/plans/validate",
        json={
            "name": "Bluechip",
            "start_date": "2023-01-01",
            "amount": 5000,
            "annual_return": 12,
            "pause_date": "2023-06-01",
        },
    )
    assert good.status_code == 200
    assert good.get_json()["plan"]["state"] == {"kind": "active"}
    assert good.get_json()["warnings"] == ["pause date is ignored for a SIP that is not paused"]

    bad = client.post(
        "/api/plans/validate",
        json={"name": "", "start_date": "2023-01-01", "amount": 20, "annual_return": 12},
    )
    assert bad.status_code == 400
    assert bad.get_json()["errors"] == ["SIP name is required", "minimum SIP amount is 100"]


def test_validate_endpoint_rejects_non_object_body(client: FlaskClient):
    resp = client.post("/api/plans/validate", json=[1, 2])
    assert resp.status_code == 400
    assert resp.get_json() == {"errors": ["request body must be a JSON object"], "warnings": []}


def test_validate_endpoint_rejects_unhashable_status(client: FlaskClient):
    resp = client.post(
        "/api/plans/validate",
        json={
            "name": "Bluechip",
            "start_date": "2023-01-01",
            "amount": 5000,
            "annual_return": 12,
            "status": ["active"],
        },
    )
    assert resp.status_code == 400
    assert resp.get_json()["errors"] == ["unknown status ['active']"]


def test_validate_endpoint_uses_as_of_query_date(client: FlaskClient):
    row = {"name": "Bluechip", "start_date": "2024-03-01", "amount": 5000, "annual_return": 12}

    early = client.post("/api/plans/validate?as_of=2024-02-01", json=row)
    assert early.status_code == 400
    assert early.get_json()["errors"] == ["start date cannot be in the future"]

    later = client.post("/api/plans/validate?as_of=2024-03-01", json=row)
    assert later.status_code == 200
    assert later.get_json()["plan"]["start_date"] == "2024-03-01"

    garbled = client.post("/api/plans/validate?as_of=yesterday", json=row)
    assert garbled.status_code == 400
    assert garbled.get_json()["errors"] == ["as_of must be an ISO date (YYYY-MM-DD), got 'yesterday'"]


def test_withdrawal_check_endpoint(client: FlaskClient):
    resp = client.post(
        "/api/withdrawals/check",
        json={
            "withdrawal": {"amount": 100000, "date": "2024-06-30", "plan_id": "sip-1"},
            "plans": [plan_payload()],
            "as_of": "2024-07-01",
        },
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["withdrawal"]["plan_id"] == "sip-1"
    assert len(body["warnings"]) == 1

    rejected = client.post(
        "/api/withdrawals/check",
        json={"withdrawal": {"amount": 50, "date": "2024-07-05"}, "as_of": "2024-07-01"},
    )
    assert rejected.status_code == 400
    assert rejected.get_json()["errors"] == ["withdrawal date cannot be in the future"]
