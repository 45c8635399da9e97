"""Hours-based day classification and monthly roll-up.

Classification order matters: hours dominate the late-in / early-out flags,
which only promote a day to Half when it falls short of the underwork band.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from ..core.constants import EARLY_OUT_HOUR, FULL_HOURS, HALF_HOURS, LATE_IN_HOUR, UNDERWORK_HOURS
from ..core.enums import DayStatus
from .model import AttendanceOverride, DailyComputation, MonthlyAggregate


def _valid(value) -> Optional[datetime]:
    return value if isinstance(value, datetime) else None


def classify_day(check_in, check_out, *, work_date: str = "") -> DailyComputation:
    check_in = _valid(check_in)
    check_out = _valid(check_out)

    total_hours = 0.0
    if check_in and check_out:
        total_hours = max(0.0, (check_out - check_in).total_seconds() / 3600)

    late_in = check_in is not None and check_in.hour >= LATE_IN_HOUR
    early_out = check_out is not None and check_out.hour < EARLY_OUT_HOUR

    underwork = False
    overtime_hours = 0.0
    if total_hours >= FULL_HOURS:
        status, day_credit = DayStatus.FULL, 1.0
        overtime_hours = total_hours - FULL_HOURS
    elif total_hours >= UNDERWORK_HOURS:
        status, day_credit = DayStatus.UNDERWORK, 1.0
        underwork = True
    elif total_hours >= HALF_HOURS or late_in or early_out:
        status, day_credit = DayStatus.HALF, 0.5
    else:
        status, day_credit = DayStatus.ABSENT, 0.0

    return DailyComputation(
        date=work_date,
        check_in=check_in,
        check_out=check_out,
        total_hours=round(total_hours, 2),
        status=status,
        day_credit=day_credit,
        underwork=underwork,
        overtime_hours=round(overtime_hours, 2),
    )


def apply_override(day: DailyComputation, override: Optional[AttendanceOverride]) -> DailyComputation:
    if override is None:
        return day
    return replace(day, day_credit=float(override.day_credit))


def aggregate_month(days: Iterable[DailyComputation]) -> MonthlyAggregate:
    present_credit = 0.0
    half_days = full_days = zero_days = underwork_alerts = 0
    overtime_hours = 0.0

    for day in days:
        present_credit += day.day_credit
        overtime_hours += day.overtime_hours
        if day.underwork:
            underwork_alerts += 1
        if day.day_credit == 1:
            full_days += 1
        elif day.day_credit == 0.5:
            half_days += 1
        else:
            zero_days += 1

    return MonthlyAggregate(
        present_credit=round(present_credit, 2),
        half_days=half_days,
        full_days=full_days,
        zero_days=zero_days,
        underwork_alerts=underwork_alerts,
        overtime_hours=round(overtime_hours, 2),
    )
