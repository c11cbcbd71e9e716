from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import business_date, now_utc, parse_iso_date
from ..common.http import current_user_id, json_errors, login_required, ok
from ..core.exceptions import ValidationError
from ..container import Container
from .serializers import session_to_dict, status_to_dict, summary_to_dict, sync_report_to_dict


def register(app: Flask, container: Container) -> None:
    def _date_arg():
        value = request.args.get("date")
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Invalid date, expected YYYY-MM-DD")

    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Invalid JSON body")
        return data

    @app.route("/api/attendance/session", methods=["POST"], endpoint="api_record_session")
    @login_required
    @json_errors
    def record_session():
        data = _json_body()
        result = container.attendance_service.record_session(
            current_user_id(),
            data.get("type"),
            data.get("latitude"),
            data.get("longitude"),
            data.get("deviceInfo"),
        )
        return ok(
            {"session": session_to_dict(result.session), "summary": summary_to_dict(result.summary)},
            201,
        )

    @app.route("/api/attendance/session", methods=["GET"], endpoint="api_day_sessions")
    @login_required
    @json_errors
    def day_sessions():
        sessions = container.attendance_service.get_today_sessions(current_user_id(), _date_arg())
        return ok([session_to_dict(s) for s in sessions])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="api_day_summary")
    @login_required
    @json_errors
    def day_summary():
        work_date = _date_arg() or business_date(now_utc())
        return ok(summary_to_dict(container.attendance_service.get_summary(current_user_id(), work_date)))

    @app.route("/api/attendance/status", methods=["GET"], endpoint="api_day_status")
    @login_required
    @json_errors
    def day_status():
        return ok(status_to_dict(container.attendance_service.get_status(current_user_id())))

    @app.route("/api/attendance/sync", methods=["POST"], endpoint="api_offline_sync")
    @login_required
    @json_errors
    def offline_sync():
        entries = _json_body().get("entries")
        if not isinstance(entries, list):
            raise ValidationError("No entries to sync")
        report = container.attendance_service.sync_offline_entries(current_user_id(), entries)
        return ok(sync_report_to_dict(report))
