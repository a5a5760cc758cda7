"""Integration tests for API endpoints"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from cashflow90.infrastructure.database.models import AlertEventRow, DailyActualRow, ScenarioRow
from tests.conftest import COMPANY_ID, TODAY


def _seed_actuals(session_factory, count: int = 30, last_closing: float = 100_000.0, net: float = -500.0):
    with session_factory() as db:
        for i in range(count):
            closing = last_closing - net * (count - 1 - i)
            db.add(
                DailyActualRow(
                    company_id=COMPANY_ID,
                    date=TODAY - timedelta(days=count - i),
                    opening_balance=closing - net,
                    cash_in=0.0,
                    cash_out=abs(net),
                    net_cash=net,
                    closing_balance=closing,
                )
            )
        db.commit()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.get(f"/v1/companies/{COMPANY_ID}/alerts")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "cashflow90_resolution_total" in response.text


def test_request_id_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_actuals_endpoint_synthetic_fallback(client: TestClient):
    """Test empty database still yields a chartable series"""
    response = client.get(f"/v1/companies/{COMPANY_ID}/actuals")

    assert response.status_code == 200
    data = response.json()
    assert data["company_id"] == COMPANY_ID
    assert len(data["actuals"]) == 90
    assert data["actuals"][-1]["date"] == (TODAY - timedelta(days=1)).isoformat()


def test_actuals_endpoint_database_rows(client: TestClient, session_factory):
    _seed_actuals(session_factory, count=5)

    response = client.get(f"/v1/companies/{COMPANY_ID}/actuals")

    actuals = response.json()["actuals"]
    assert len(actuals) == 5
    assert actuals[-1]["closing_balance"] == 100_000.0


def test_actuals_endpoint_rejects_bad_days(client: TestClient):
    response = client.get(f"/v1/companies/{COMPANY_ID}/actuals?days=0")
    assert response.status_code == 422


def test_forecast_endpoint_projection(client: TestClient, session_factory):
    """Test the projected forecast over database actuals"""
    _seed_actuals(session_factory)

    response = client.get(f"/v1/companies/{COMPANY_ID}/forecast")

    assert response.status_code == 200
    forecasts = response.json()["forecasts"]
    assert len(forecasts) == 90
    assert forecasts[0]["run_id"] == "generated"
    assert forecasts[0]["base_closing_balance"] == 99_500.0
    assert abs(forecasts[0]["best_closing_balance"] - 99_997.5) < 1e-6
    assert abs(forecasts[0]["worst_closing_balance"] - 99_002.5) < 1e-6


def test_dashboard_endpoint(client: TestClient, session_factory):
    _seed_actuals(session_factory)

    response = client.get(f"/v1/companies/{COMPANY_ID}/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["kpis"]["current_cash"] == 100_000.0
    assert data["kpis"]["runway_base_days"] is None
    assert data["kpis"]["next_30_day_net_cash"] == -15_000.0
    assert len(data["chart"]) == 120
    assert data["chart"][0]["actual"] is not None
    assert data["chart"][-1]["base"] is not None
    assert len(data["alerts"]) == 3
    assert data["working_capital"]["net_working_capital"] == 142_500.0 - 48_200.0


def test_alerts_endpoint(client: TestClient, session_factory):
    with session_factory() as db:
        db.add(
            AlertEventRow(
                company_id=COMPANY_ID,
                alert_type="cash_below_minimum",
                severity="critical",
                message="Worst case drops below zero in 12 days",
                created_at=datetime(2024, 6, 14, tzinfo=timezone.utc),
                details={"days": 12},
            )
        )
        db.commit()

    response = client.get(f"/v1/companies/{COMPANY_ID}/alerts")

    alerts = response.json()["alerts"]
    assert len(alerts) == 1
    assert alerts[0]["severity"] == "critical"
    assert alerts[0]["details"] == {"days": 12}


def test_working_capital_endpoint_synthetic(client: TestClient):
    response = client.get(f"/v1/companies/{COMPANY_ID}/working-capital")

    assert response.status_code == 200
    data = response.json()
    assert data["ar_total"] == 142_500.0
    assert data["ap_total"] == 48_200.0


def test_scenarios_endpoints(client: TestClient, session_factory):
    with session_factory() as db:
        db.add(ScenarioRow(id="s-1", company_id=COMPANY_ID, name="Hire 5", parameters={"burn_increase": 75000}))
        db.commit()

    listed = client.get(f"/v1/companies/{COMPANY_ID}/scenarios").json()
    assert [s["id"] for s in listed["scenarios"]] == ["s-1"]

    forecast = client.get(f"/v1/companies/{COMPANY_ID}/scenarios/s-1/forecast").json()
    assert forecast["scenario_id"] == "s-1"
    assert len(forecast["forecasts"]) == 90


def test_scenario_comparison_endpoint(client: TestClient):
    response = client.get(f"/v1/companies/{COMPANY_ID}/scenarios/sc-1/comparison")

    points = response.json()["points"]
    assert len(points) == 90
    assert points[0]["baseline"] == points[0]["scenario"]
    assert points[-1]["scenario"] < points[-1]["baseline"]


def test_create_scenario_accepted(client: TestClient):
    response = client.post("/v1/scenarios", json={"name": "X", "growth_pct": 10, "payroll_delta": 500})

    assert response.status_code == 202
    assert response.json() == {"accepted": True, "name": "X"}


@patch("cashflow90.infrastructure.clients.simulation.SimulationClient.trigger", new_callable=AsyncMock)
def test_create_scenario_trigger_failure(mock_trigger: AsyncMock, client: TestClient):
    """Test a rejected trigger maps to 502"""
    mock_trigger.return_value = False

    response = client.post("/v1/scenarios", json={"name": "X", "growth_pct": 10, "payroll_delta": 500})

    assert response.status_code == 502
    mock_trigger.assert_awaited_once_with("X", 10.0, 500.0)


def test_create_scenario_validation(client: TestClient):
    response = client.post("/v1/scenarios", json={"name": "", "growth_pct": 10})
    assert response.status_code == 422
