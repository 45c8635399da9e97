from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.decorators import current_principal, login_required
from ..common.datetime_utils import now_local
from ..common.http import json_body
from ..common.validators import optional_float, require_coordinate, require_month_year
from ..container import Container
from ..core.constants import CALENDAR_MAX_YEAR, CALENDAR_MIN_YEAR, MAX_LATITUDE, MAX_LONGITUDE


def _coordinates(body: dict) -> dict:
    return {
        "latitude": require_coordinate(body.get("latitude"), "latitude", limit=MAX_LATITUDE),
        "longitude": require_coordinate(body.get("longitude"), "longitude", limit=MAX_LONGITUDE),
        "accuracy": optional_float(body.get("accuracy"), "accuracy"),
        "reason": body.get("reason"),
    }


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    @app.route("/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required(auth)
    def check_in():
        result = container.attendance_service.check_in(current_principal(), **_coordinates(json_body()))
        return jsonify({"success": True, "message": "Check-in successful", **result}), 201

    @app.route("/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required(auth)
    def check_out():
        result = container.attendance_service.check_out(current_principal(), **_coordinates(json_body()))
        return jsonify({"success": True, "message": "Check-out successful", **result})

    @app.route("/attendance/logs/<user_id>/<date_str>", methods=["GET"], endpoint="attendance_logs")
    @login_required(auth)
    def logs(user_id: str, date_str: str):
        items = container.attendance_service.get_daily_logs(current_principal(), user_id=user_id, date_str=date_str)
        return jsonify({"success": True, "logs": items})

    @app.route("/attendance/override/<user_id>/<date_str>", methods=["PATCH"], endpoint="attendance_override")
    @login_required(auth)
    def override(user_id: str, date_str: str):
        body = json_body()
        saved = container.attendance_service.set_override(
            current_principal(),
            user_id=user_id,
            date_str=date_str,
            day_credit=body.get("dayCredit"),
            reason=body.get("reason"),
        )
        return jsonify({"success": True, "message": "Override saved", "dayCredit": saved.day_credit})

    @app.route("/attendance/<user_id>/<month>/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required(auth)
    def summary(user_id: str, month: str):
        m, y = require_month_year(
            month,
            request.args.get("year") or now_local().year,
            min_year=CALENDAR_MIN_YEAR,
            max_year=CALENDAR_MAX_YEAR,
        )
        data = container.attendance_service.monthly_summary(current_principal(), user_id=user_id, month=m, year=y)
        return jsonify({"success": True, **data})
