import pytest
from datetime import date
from fastapi.testclient import TestClient

from main import app
from paytrack.api.routes.payroll import GeneratePayslipRequest, default_payment_config, resolve_cycle

# The lifespan (database) is not started without a context manager
client = TestClient(app)

CALCULATE_PAYLOAD = {
    "base_salary": 30000,
    "salary_pay_type": "fixed_monthly",
    "salary_basis": "working_days_only",
    "cycle": {"start_date": "2024-01-01", "end_date": "2024-01-31"},
    "working_days": {"weekly_offs": [0], "hours_per_day": 8},
    "leaves": {"unpaid_leave_taken": 1},
    "deductions": {"professional_tax": 200},
}


def test_root_and_health():
    assert client.get("/").status_code == 200
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_calculate():
    response = client.post("/api/payroll/calculate", json=CALCULATE_PAYLOAD)
    assert response.status_code == 200
    body = response.json()
    assert body["working_days"] == 27
    assert body["actual_days_worked"] == 26
    assert body["deductions"] == 200
    assert body["currency"] == "INR"
    assert body["breakdown"]["period"]["start"] == "2024-01-01"


def test_calculate_rejects_invalid_input():
    payload = {**CALCULATE_PAYLOAD, "salary_pay_type": "weekly"}
    assert client.post("/api/payroll/calculate", json=payload).status_code == 422

    payload = {**CALCULATE_PAYLOAD, "cycle": {"start_date": "2024-02-01", "end_date": "2024-01-01"}}
    assert client.post("/api/payroll/calculate", json=payload).status_code == 422


def test_recent_cycles():
    response = client.get("/api/payroll/cycles", params={"cycle_start_day": 19, "count": 3})
    assert response.status_code == 200
    cycles = response.json()
    assert len(cycles) == 3
    starts = [c["start_date"] for c in cycles]
    assert starts == sorted(starts)
    assert all(c["start_date"].endswith("-19") for c in cycles)


def test_recent_cycles_rejects_bad_start_day():
    response = client.get("/api/payroll/cycles", params={"cycle_start_day": 29})
    assert response.status_code == 422


def test_upcoming_cycles():
    response = client.get("/api/payroll/cycles/upcoming", params={"count": 2})
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_yearly_cycles():
    response = client.get("/api/payroll/cycles/year/2025", params={"cycle_start_day": 19})
    assert response.status_code == 200
    cycles = response.json()
    assert len(cycles) == 12
    assert cycles[0]["start_date"] == "2025-01-19"
    assert cycles[-1] == {"start_date": "2025-12-19", "end_date": "2026-01-18"}


def test_resolve_cycle_explicit_range():
    request = GeneratePayslipRequest(user_id="u1", start_date=date(2024, 1, 5), end_date=date(2024, 2, 4))
    cycle = resolve_cycle(request, cycle_start_day=1)
    assert cycle.start_date == date(2024, 1, 5)
    assert cycle.end_date == date(2024, 2, 4)


def test_resolve_cycle_year_month():
    request = GeneratePayslipRequest(user_id="u1", year=2025, month=12)
    cycle = resolve_cycle(request, cycle_start_day=19)
    assert cycle.end_date == date(2026, 1, 18)


def test_resolve_cycle_defaults_to_current():
    request = GeneratePayslipRequest(user_id="u1")
    cycle = resolve_cycle(request, cycle_start_day=19, today=date(2026, 1, 5))
    assert cycle.start_date == date(2025, 12, 19)


@pytest.mark.parametrize("fields", [
    {"start_date": date(2024, 1, 1)},
    {"year": 2024},
    {"month": 3},
    {"start_date": date(2024, 2, 1), "end_date": date(2024, 1, 1)},
])
def test_resolve_cycle_rejects_incomplete(fields):
    with pytest.raises(ValueError):
        resolve_cycle(GeneratePayslipRequest(user_id="u1", **fields), cycle_start_day=1)


def test_default_payment_config():
    config = default_payment_config()
    assert config.currency == "INR"
    assert config.salary_cycle.cycle_start_day == 1
    assert config.tax_deductions.late_arrival_penalty == 50
