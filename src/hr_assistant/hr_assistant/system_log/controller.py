from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import roles_required
from ..container import Container
from ..core.constants import DEFAULT_LOG_LIMIT
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.system_log_service

    @app.route("/api/system-logs", methods=["GET"], endpoint="list_system_logs")
    @roles_required(Role.ADMIN)
    def list_system_logs():
        try:
            limit = int(request.args.get("limit", DEFAULT_LOG_LIMIT))
        except ValueError:
            raise ValidationError("Limit must be a number.", {"limit": ["Limit must be a number."]})
        return jsonify({"logs": service.list_recent(limit=limit)})

    @app.route("/api/system-logs/<log_id>", methods=["GET"], endpoint="get_system_log")
    @roles_required(Role.ADMIN)
    def get_system_log(log_id: str):
        return jsonify({"log": service.get(log_id)})
