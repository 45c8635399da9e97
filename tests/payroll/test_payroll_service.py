from datetime import date, datetime, timedelta

import pytest

from src.workforce_ops.workforce_ops.core.enums import PayrollStatus
from src.workforce_ops.workforce_ops.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidPeriodError,
    NotFoundError,
    ValidationError,
)
from src.workforce_ops.workforce_ops.payroll.service import PayrollService
from src.workforce_ops.workforce_ops.workdays.model import WorkingDays
from src.workforce_ops.workforce_ops.workdays.service import WorkingDayService


class NoWorkingDays:
    def get_working_days(self, year: int, month: int) -> WorkingDays:
        return WorkingDays(year=year, month=month, total_days=28, total_working_days=0)


@pytest.fixture
def service(payroll_repo, attendance, users, sat_off, wd_cache):
    return PayrollService(payroll_repo, attendance, users, WorkingDayService(sat_off, wd_cache))


def _attend(attendance, user_id: str, days: int, start=date(2025, 2, 3)):
    for i in range(days):
        d = start + timedelta(days=i)
        attendance.add(user_id, datetime(d.year, d.month, d.day, 9), datetime(d.year, d.month, d.day, 18))


def test_preview_covers_payable_roles_only(service, attendance, principals):
    _attend(attendance, "emp-1", 12)
    _attend(attendance, "emp-2", 3)

    rows = {p.user_id: p for p in service.preview(principals["admin-1"], month=2, year=2025)}

    assert set(rows) == {"hr-1", "lead-1", "lead-2", "emp-1", "emp-2"}
    assert rows["emp-1"].total_working_days == 24
    assert rows["emp-1"].present_days == 12
    assert rows["emp-1"].salary_paid == 15000.0
    assert rows["emp-2"].salary_paid == 3000.0
    assert rows["hr-1"].salary_paid == 0.0
    assert rows["lead-2"].salary_amount == 0.0


def test_repeated_check_ins_on_one_date_count_once(service, attendance, principals):
    attendance.add("emp-2", datetime(2025, 2, 3, 9), datetime(2025, 2, 3, 12))
    attendance.add("emp-2", datetime(2025, 2, 3, 13), datetime(2025, 2, 3, 18))

    rows = {p.user_id: p for p in service.preview(principals["admin-1"], month="2", year="2025")}
    assert rows["emp-2"].present_days == 1


def test_preview_does_not_persist(service, payroll_repo, principals):
    service.preview(principals["admin-1"], month=2, year=2025)
    assert payroll_repo.by_id == {}


def test_generate_overwrites_and_resets_paid_status(service, payroll_repo, attendance, principals):
    service.generate(principals["admin-1"], month=2, year=2025)
    service.mark_paid(principals["admin-1"], payroll_id="emp-1_2_2025")
    assert payroll_repo.get("emp-1_2_2025").status == PayrollStatus.PAID

    _attend(attendance, "emp-1", 6)
    service.generate(principals["admin-1"], month=2, year=2025)

    rec = payroll_repo.get("emp-1_2_2025")
    assert rec.status == PayrollStatus.UNPAID
    assert rec.paid_at is None
    assert rec.present_days == 6
    assert rec.salary_paid == 7500.0


def test_regenerating_unchanged_month_is_stable(service, payroll_repo, attendance, principals):
    _attend(attendance, "emp-1", 7)
    _attend(attendance, "emp-2", 4)

    first = {p.payroll_id: p.salary_paid for p in service.generate(principals["admin-1"], month=2, year=2025)}
    second = {p.payroll_id: p.salary_paid for p in service.generate(principals["admin-1"], month=2, year=2025)}

    assert first == second
    assert {pid: payroll_repo.get(pid).salary_paid for pid in first} == first


def test_mark_paid_twice_is_a_conflict(service, principals):
    service.generate(principals["admin-1"], month=2, year=2025)
    paid = service.mark_paid(principals["admin-1"], payroll_id="emp-2_2_2025", now=datetime(2025, 3, 1, 10))

    assert paid.status == PayrollStatus.PAID
    assert paid.paid_at == datetime(2025, 3, 1, 10)
    with pytest.raises(ConflictError):
        service.mark_paid(principals["admin-1"], payroll_id="emp-2_2_2025")


def test_mark_paid_unknown_record(service, principals):
    with pytest.raises(NotFoundError):
        service.mark_paid(principals["admin-1"], payroll_id="emp-1_1_2020")


@pytest.mark.parametrize("month, year", [(0, 2025), (13, 2025), (1, 2019), (1, 2031), ("x", 2025)])
def test_invalid_period_is_rejected(service, principals, month, year):
    with pytest.raises(ValidationError):
        service.preview(principals["admin-1"], month=month, year=year)


def test_period_without_working_days(payroll_repo, attendance, users, principals):
    service = PayrollService(payroll_repo, attendance, users, NoWorkingDays())
    with pytest.raises(InvalidPeriodError):
        service.generate(principals["admin-1"], month=2, year=2025)
    assert payroll_repo.by_id == {}


def test_only_admins_manage_payroll(service, principals):
    for uid in ("hr-1", "lead-1", "emp-1"):
        with pytest.raises(AuthorizationError):
            service.generate(principals[uid], month=2, year=2025)


def test_get_mine_and_history(service, principals):
    with pytest.raises(NotFoundError):
        service.get_mine(principals["emp-1"], month=2, year=2025)

    service.generate(principals["admin-1"], month=12, year=2024, now=datetime(2025, 1, 2))
    service.generate(principals["admin-1"], month=1, year=2025, now=datetime(2025, 2, 2))
    service.generate(principals["admin-1"], month=2, year=2025, now=datetime(2025, 3, 2))

    assert service.get_mine(principals["emp-1"], month=1, year=2025).payroll_id == "emp-1_1_2025"

    history = service.history(principals["emp-1"])
    assert [(p.year, p.month) for p in history] == [(2025, 2), (2025, 1), (2024, 12)]
    assert len(service.history(principals["emp-1"], limit=2)) == 2
