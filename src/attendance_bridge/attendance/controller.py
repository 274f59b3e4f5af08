from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail, ok
from ..common.validators import require_json_object, require_port
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    def api_attendance():
        # ``type`` absent -> today's date window; ``type=`` (empty) -> all records.
        filter_type = request.args.get("type")
        filter_value = request.args.get("value")
        data = container.attendance_service.get_unified_data(filter_type, filter_value)
        return ok(**data.to_dict())

    @app.route("/api/users", methods=["GET"], endpoint="api_users")
    def api_users():
        users = container.attendance_service.list_users()
        return ok(data=[u.to_dict() for u in users])

    @app.route("/api/config", methods=["GET"], endpoint="api_config")
    def api_config():
        return ok(**container.attendance_service.device_config())

    @app.route("/api/config", methods=["POST"], endpoint="api_config_update")
    def api_config_update():
        data = require_json_object(request.get_json(silent=True))
        host = (data.get("ip") or "").strip() or None
        port = require_port(data["port"]) if data.get("port") else None
        if host is None and port is None:
            return fail("Nothing to update: provide ip and/or port", 400)
        return ok(**container.attendance_service.update_device_config(host=host, port=port))
