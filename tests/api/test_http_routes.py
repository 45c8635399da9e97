from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.workforce_ops.workforce_ops import create_app
from src.workforce_ops.workforce_ops.auth.token_verifier import JwtTokenVerifier
from src.workforce_ops.workforce_ops.container import wire_container
from src.workforce_ops.workforce_ops.core.enums import OvertimeStatus

from conftest import OFFICE_LAT, OFFICE_LON

SECRET = "test-jwt-secret"


def _auth(uid: str, **claims) -> dict:
    token = jwt.encode({"uid": uid, **claims}, SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(monkeypatch, users, offices, attendance, overrides, sat_off, wd_cache, payroll_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_container(
        verifier=JwtTokenVerifier(SECRET),
        users_repo=users,
        offices_repo=offices,
        attendance_repo=attendance,
        overrides_repo=overrides,
        sat_off_repo=sat_off,
        working_days_cache_repo=wd_cache,
        payroll_repo=payroll_repo,
    )
    app = create_app(container=container)
    return app.test_client()


def test_missing_token_is_401(client):
    resp = client.post("/attendance/check-in", json={"latitude": OFFICE_LAT, "longitude": OFFICE_LON})
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Authorization header required"}


def test_expired_token_is_401(client):
    headers = _auth("emp-1", exp=datetime.now(tz=timezone.utc) - timedelta(hours=1))
    resp = client.get("/payroll/me/history", headers=headers)
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Token has expired"


def test_role_header_is_ignored(client):
    headers = {**_auth("emp-1"), "X-User-Role": "admin"}
    assert client.get("/payroll/2/2025", headers=headers).status_code == 403


def test_check_in_and_out_flow(client):
    body = {"latitude": OFFICE_LAT, "longitude": OFFICE_LON, "accuracy": 12}

    first = client.post("/attendance/check-in", json=body, headers=_auth("emp-1"))
    assert first.status_code == 201
    assert first.get_json()["withinGeofence"] is True

    again = client.post("/attendance/check-in", json=body, headers=_auth("emp-1"))
    assert again.status_code == 409

    out = client.post("/attendance/check-out", json=body, headers=_auth("emp-1"))
    assert out.status_code == 200
    assert out.get_json()["success"] is True
    assert "day" in out.get_json()


def test_check_in_needs_coordinates(client):
    resp = client.post("/attendance/check-in", json={"latitude": "north"}, headers=_auth("emp-1"))
    assert resp.status_code == 400

    resp = client.post("/attendance/check-in", data="not json", headers=_auth("emp-1"))
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "raw",
    [
        '{"latitude": Infinity, "longitude": 77.2}',
        '{"latitude": 28.6, "longitude": -Infinity}',
        '{"latitude": NaN, "longitude": 77.2}',
        '{"latitude": 91, "longitude": 77.2}',
        '{"latitude": 28.6, "longitude": 180.5}',
    ],
)
def test_check_in_rejects_unusable_coordinates(client, attendance, raw):
    resp = client.post("/attendance/check-in", data=raw, content_type="application/json", headers=_auth("emp-1"))
    assert resp.status_code == 400
    assert attendance.records == {}


def test_check_out_without_check_in(client):
    resp = client.post(
        "/attendance/check-out", json={"latitude": OFFICE_LAT, "longitude": OFFICE_LON}, headers=_auth("emp-1")
    )
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "No active attendance record found"


def test_logs_override_and_summary(client, attendance):
    attendance.add("emp-1", datetime(2025, 1, 6, 9), datetime(2025, 1, 6, 18))

    logs = client.get("/attendance/logs/emp-1/2025-01-06", headers=_auth("lead-1"))
    assert logs.status_code == 200
    assert logs.get_json()["logs"][0]["status"] == "Full"

    assert client.get("/attendance/logs/emp-1/2025-01-06", headers=_auth("emp-2")).status_code == 403

    override = client.patch(
        "/attendance/override/emp-1/2025-01-07", json={"dayCredit": 0.5, "reason": "doctor"}, headers=_auth("hr-1")
    )
    assert override.status_code == 200

    summary = client.get("/attendance/emp-1/1/summary?year=2025", headers=_auth("emp-1"))
    data = summary.get_json()
    assert summary.status_code == 200
    assert data["workingDays"] == 25
    assert data["presentDays"] == 1
    assert data["presentCredit"] == 1.5


def test_working_days_are_public(client):
    resp = client.get("/calendar/working-days/1/2025")
    assert resp.status_code == 200
    assert resp.get_json()["totalWorkingDays"] == 25

    assert client.get("/calendar/working-days/2?year=2025").get_json()["totalWorkingDays"] == 24
    assert client.get("/calendar/working-days/13/2025").status_code == 400


def test_holidays_by_year(client):
    data = client.get("/calendar/holidays/2025").get_json()
    assert len(data["holidays"]) == 10
    assert data["holidays"][0] == {"date": "2025-01-01", "day": "Wednesday", "name": "New Year's Day"}


def test_saturday_off_update(client):
    resp = client.put("/calendar/saturday-off/1/2025", json={"dates": ["2025-01-11"]}, headers=_auth("hr-1"))
    assert resp.status_code == 200
    assert resp.get_json()["totalWorkingDays"] == 24
    assert client.get("/calendar/working-days/1/2025").get_json()["satOff"] == ["2025-01-11"]

    bad = client.put("/calendar/saturday-off/1/2025", json={"dates": ["2025-01-12"]}, headers=_auth("hr-1"))
    assert bad.status_code == 400
    assert client.put("/calendar/saturday-off/1/2025", json={"dates": []}, headers=_auth("emp-1")).status_code == 403


def test_overtime_review_over_http(client, attendance):
    client.post("/attendance/check-in", json={"latitude": OFFICE_LAT, "longitude": OFFICE_LON}, headers=_auth("emp-1"))
    rec = attendance.get_open_for_user("emp-1")
    attendance.close_checkout(
        record_id=rec.record_id,
        check_out_time=rec.check_in_time + timedelta(hours=10),
        location=rec.check_in_location,
        within_geofence=True,
        reason=None,
        potential_overtime_hours=1.0,
        overtime_status=OvertimeStatus.PENDING,
    )

    pending = client.get("/overtime/pending", headers=_auth("lead-1")).get_json()["records"]
    assert [r["id"] for r in pending] == [rec.record_id]

    resp = client.put(f"/overtime/review/{rec.record_id}", json={"status": "Approved"}, headers=_auth("lead-1"))
    assert resp.status_code == 200
    assert resp.get_json()["record"]["approvedOvertimeHours"] == 1.0

    again = client.put(f"/overtime/review/{rec.record_id}", json={"status": "Rejected"}, headers=_auth("admin-1"))
    assert again.status_code == 409
    assert client.get("/overtime/pending", headers=_auth("emp-1")).status_code == 403


def test_payroll_generate_pay_and_read(client):
    assert client.post("/payroll/generate", json={"month": 2, "year": 2019}, headers=_auth("admin-1")).status_code == 400

    gen = client.post("/payroll/generate", json={"month": 2, "year": 2025}, headers=_auth("admin-1"))
    assert gen.status_code == 200
    assert len(gen.get_json()["payrolls"]) == 5

    assert client.patch("/payroll/emp-1_2_2025/status", json={"status": "Unpaid"}, headers=_auth("admin-1")).status_code == 400
    paid = client.patch("/payroll/emp-1_2_2025/status", json={"status": "Paid"}, headers=_auth("admin-1"))
    assert paid.get_json()["payroll"]["status"] == "Paid"
    assert client.patch("/payroll/emp-1_2_2025/status", json={"status": "Paid"}, headers=_auth("admin-1")).status_code == 409

    mine = client.get("/payroll/me/2/2025", headers=_auth("emp-1"))
    assert mine.get_json()["payroll"]["id"] == "emp-1_2_2025"
    assert client.get("/payroll/me/3/2025", headers=_auth("emp-1")).status_code == 404
    assert len(client.get("/payroll/me/history", headers=_auth("emp-1")).get_json()["payrolls"]) == 1


def test_salary_update(client):
    ok = client.patch("/users/emp-2/salary", json={"salaryType": "monthly", "salaryAmount": 25000}, headers=_auth("admin-1"))
    assert ok.status_code == 200
    assert ok.get_json()["salaryAmount"] == 25000.0

    bad = client.patch("/users/emp-2/salary", json={"salaryType": "monthly", "salaryAmount": -1}, headers=_auth("admin-1"))
    assert bad.status_code == 400
    assert client.patch("/users/nobody/salary", json={"salaryType": "daily", "salaryAmount": 5}, headers=_auth("admin-1")).status_code == 404

    huge = client.patch(
        "/users/emp-2/salary",
        data='{"salaryType": "monthly", "salaryAmount": Infinity}',
        content_type="application/json",
        headers=_auth("admin-1"),
    )
    assert huge.status_code == 400


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
