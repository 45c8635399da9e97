from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import current_principal, login_required
from ..common.datetime_utils import now_local
from ..common.http import json_body
from ..common.validators import require_int, require_month_year
from ..core.constants import CALENDAR_MAX_YEAR, CALENDAR_MIN_YEAR
from ..core.enums import Permission
from ..core.exceptions import ValidationError
from ..container import Container
from .holidays import holidays_for_year
from .model import WorkingDays


def _to_dict(w: WorkingDays) -> dict:
    return {
        "month": w.month,
        "year": w.year,
        "totalDays": w.total_days,
        "totalWorkingDays": w.total_working_days,
        "holidays": list(w.holidays),
        "satOff": list(w.sat_off),
    }


def _period(month, year) -> tuple[int, int]:
    return require_month_year(month, year, min_year=CALENDAR_MIN_YEAR, max_year=CALENDAR_MAX_YEAR)


def register(app: Flask, container: Container) -> None:
    # Working-day lookups are public; only the Saturday-off setting is guarded.

    @app.route("/calendar/working-days/<month>/<year>", methods=["GET"], endpoint="working_days")
    def working_days(month: str, year: str):
        m, y = _period(month, year)
        return jsonify({"success": True, **_to_dict(container.working_day_service.get_working_days(y, m))})

    @app.route("/calendar/working-days/<month>", methods=["GET"], endpoint="working_days_current_year")
    def working_days_current_year(month: str):
        m, y = _period(month, request.args.get("year") or now_local().year)
        return jsonify({"success": True, **_to_dict(container.working_day_service.get_working_days(y, m))})

    @app.route("/calendar/saturday-off/<month>/<year>", methods=["PUT"], endpoint="saturday_off")
    @login_required(container.auth_service, Permission.MANAGE_CALENDAR)
    def saturday_off(month: str, year: str):
        m, y = _period(month, year)
        dates = json_body().get("dates")
        if not isinstance(dates, list):
            raise ValidationError("dates must be a list of YYYY-MM-DD strings")
        result = container.working_day_service.set_saturday_off(current_principal(), year=y, month=m, dates=dates)
        return jsonify({"success": True, **_to_dict(result)})

    @app.route("/calendar/holidays/<year>", methods=["GET"], endpoint="holidays")
    def holidays(year: str):
        y = require_int(year, "year")
        return jsonify(
            {
                "success": True,
                "year": y,
                "holidays": [{"date": h.date, "day": h.day, "name": h.name} for h in holidays_for_year(y)],
            }
        )
