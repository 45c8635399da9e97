from __future__ import annotations

from typing import Iterable

from .holidays import dates_in_month, holidays_for_month, is_sunday
from .model import WorkingDays


def compute_working_days(year: int, month: int, sat_off: Iterable[str] = ()) -> WorkingDays:
    """Count the business days of a month.

    A date is excluded if it is a Sunday, a fixed holiday, or listed in the
    admin-configured Saturday-off dates. Pure: same inputs, same result.
    """

    month_holidays = [h.date for h in holidays_for_month(year, month)]
    holiday_set = set(month_holidays)
    sat_off_list = list(sat_off)
    sat_off_set = set(sat_off_list)
    all_dates = dates_in_month(year, month)

    total_working_days = 0
    for d in all_dates:
        iso = d.isoformat()
        if is_sunday(d) or iso in holiday_set or iso in sat_off_set:
            continue
        total_working_days += 1

    return WorkingDays(
        year=int(year),
        month=int(month),
        total_days=len(all_dates),
        total_working_days=total_working_days,
        holidays=month_holidays,
        sat_off=sat_off_list,
    )
