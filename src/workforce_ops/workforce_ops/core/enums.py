from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles as stored on the user profile row."""

    ADMIN = "admin"
    SUB_ADMIN = "sub-admin"
    HR = "hr"
    TEAM_LEAD = "team lead"
    EMPLOYEE = "employee"
    CLIENT = "client"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Profiles carry mixed-case labels ("Admin", "Team Lead")."""

        normalized = (value or "").strip().lower().replace("_", " ")
        if normalized == "sub admin":
            normalized = "sub-admin"
        if normalized == "teamlead":
            normalized = "team lead"
        for role in cls:
            if role.value == normalized:
                return role
        return cls.EMPLOYEE


class Permission(str, Enum):
    RECORD_ATTENDANCE = "record_attendance"
    VIEW_ANY_ATTENDANCE = "view_any_attendance"
    OVERRIDE_ATTENDANCE = "override_attendance"
    REVIEW_OVERTIME = "review_overtime"
    MANAGE_PAYROLL = "manage_payroll"
    MANAGE_SALARY = "manage_salary"
    MANAGE_CALENDAR = "manage_calendar"


class DayStatus(str, Enum):
    """Fine-grained, hours-based classification of a working day."""

    ABSENT = "Absent"
    HALF = "Half"
    FULL = "Full"
    UNDERWORK = "Underwork"
    # Not produced by classify_day: days past FULL_HOURS stay FULL with overtime hours.
    OVERWORK = "Overwork"


class PresenceStatus(str, Enum):
    """Coarse daily flag recorded at check-in; payroll counts this one."""

    PRESENT = "Present"
    ABSENT = "Absent"


class OvertimeStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class SalaryType(str, Enum):
    MONTHLY = "monthly"
    DAILY = "daily"


class PayrollStatus(str, Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
