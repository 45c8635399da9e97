from __future__ import annotations

import calendar
from datetime import date

from .model import Holiday

HOLIDAYS: tuple[Holiday, ...] = (
    Holiday(date="2025-01-01", day="Wednesday", name="New Year's Day"),
    Holiday(date="2025-01-14", day="Tuesday", name="Makar Sankranti"),
    Holiday(date="2025-03-14", day="Friday", name="Dhuleti"),
    Holiday(date="2025-08-15", day="Friday", name="Independence Day"),
    Holiday(date="2025-09-06", day="Saturday", name="Ganesh Chaturthi"),
    Holiday(date="2025-10-02", day="Thursday", name="Gandhi Jayanti & Dussehra"),
    Holiday(date="2025-10-20", day="Monday", name="Diwali"),
    Holiday(date="2025-10-21", day="Tuesday", name="Extended Diwali Holiday"),
    Holiday(date="2025-10-22", day="Wednesday", name="Vikram Samvat New Year"),
    Holiday(date="2025-12-25", day="Thursday", name="Christmas Day"),
)


def holidays_for_year(year: int) -> list[Holiday]:
    prefix = f"{int(year)}-"
    return sorted((h for h in HOLIDAYS if h.date.startswith(prefix)), key=lambda h: h.date)


def holidays_for_month(year: int, month: int) -> list[Holiday]:
    prefix = f"{int(year)}-{int(month):02d}-"
    return sorted((h for h in HOLIDAYS if h.date.startswith(prefix)), key=lambda h: h.date)


def dates_in_month(year: int, month: int) -> list[date]:
    days = calendar.monthrange(year, month)[1]
    return [date(year, month, d) for d in range(1, days + 1)]


def is_sunday(d: date) -> bool:
    return d.weekday() == calendar.SUNDAY


def is_saturday(d: date) -> bool:
    return d.weekday() == calendar.SATURDAY

