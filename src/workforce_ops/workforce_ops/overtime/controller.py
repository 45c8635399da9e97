from __future__ import annotations

from flask import Flask, jsonify

from ..auth.decorators import current_principal, login_required
from ..common.http import json_body
from ..core.enums import Permission
from ..container import Container
from .service import overtime_to_dict


def register(app: Flask, container: Container) -> None:
    guard = login_required(container.auth_service, Permission.REVIEW_OVERTIME)

    @app.route("/overtime/pending", methods=["GET"], endpoint="overtime_pending")
    @guard
    def pending():
        records = container.overtime_service.list_pending(current_principal())
        return jsonify({"success": True, "records": [overtime_to_dict(r) for r in records]})

    @app.route("/overtime/review/<int:record_id>", methods=["PUT"], endpoint="overtime_review")
    @guard
    def review(record_id: int):
        body = json_body()
        record = container.overtime_service.review(
            current_principal(),
            record_id=record_id,
            status=body.get("status"),
            comment=body.get("adminComment"),
        )
        return jsonify({"success": True, "record": overtime_to_dict(record)})
