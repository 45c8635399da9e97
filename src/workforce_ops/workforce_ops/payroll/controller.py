from __future__ import annotations

from flask import Flask, jsonify

from ..auth.decorators import current_principal, login_required
from ..common.http import json_body
from ..core.enums import Permission, PayrollStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .service import payroll_to_dict


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    admin_required = login_required(auth, Permission.MANAGE_PAYROLL)

    @app.route("/payroll/<month>/<year>", methods=["GET"], endpoint="payroll_preview")
    @admin_required
    def preview(month: str, year: str):
        rows = container.payroll_service.preview(current_principal(), month=month, year=year)
        return jsonify({"success": True, "payrolls": [payroll_to_dict(p) for p in rows]})

    @app.route("/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    @admin_required
    def generate():
        body = json_body()
        rows = container.payroll_service.generate(current_principal(), month=body.get("month"), year=body.get("year"))
        return jsonify(
            {
                "success": True,
                "message": f"Payroll generated for {len(rows)} employees",
                "payrolls": [payroll_to_dict(p) for p in rows],
            }
        )

    @app.route("/payroll/<payroll_id>/status", methods=["PATCH"], endpoint="payroll_mark_paid")
    @admin_required
    def mark_paid(payroll_id: str):
        body = json_body()
        if body.get("status") != PayrollStatus.PAID.value:
            raise ValidationError("status must be 'Paid'")
        record = container.payroll_service.mark_paid(current_principal(), payroll_id=payroll_id)
        return jsonify({"success": True, "payroll": payroll_to_dict(record)})

    @app.route("/payroll/me/history", methods=["GET"], endpoint="payroll_my_history")
    @login_required(auth)
    def my_history():
        rows = container.payroll_service.history(current_principal())
        return jsonify({"success": True, "payrolls": [payroll_to_dict(p) for p in rows]})

    @app.route("/payroll/me/<month>/<year>", methods=["GET"], endpoint="payroll_mine")
    @login_required(auth)
    def mine(month: str, year: str):
        record = container.payroll_service.get_mine(current_principal(), month=month, year=year)
        return jsonify({"success": True, "payroll": payroll_to_dict(record)})
