from __future__ import annotations

from flask import Flask, jsonify

from ..auth.decorators import current_principal, login_required
from ..common.http import json_body
from ..core.enums import Permission
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/users/<user_id>/salary", methods=["PATCH"], endpoint="user_salary")
    @login_required(container.auth_service, Permission.MANAGE_SALARY)
    def set_salary(user_id: str):
        body = json_body()
        result = container.user_service.set_salary(
            current_principal(),
            user_id=user_id,
            salary_type=body.get("salaryType"),
            salary_amount=body.get("salaryAmount"),
        )
        return jsonify({"success": True, "message": "Salary updated successfully", **result})
