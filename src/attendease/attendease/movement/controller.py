from __future__ import annotations

from flask import Flask, request

from ..common.http import current_user_id, json_errors, login_required, ok
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/location-ping", methods=["POST"], endpoint="api_location_ping")
    @login_required
    @json_errors
    def location_ping():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Invalid JSON body")

        result = container.movement_monitor.evaluate_ping(
            current_user_id(), data.get("latitude"), data.get("longitude")
        )
        body = {"status": result.status.value}
        if result.distance is not None:
            body["distance"] = result.distance
        return ok(body)
