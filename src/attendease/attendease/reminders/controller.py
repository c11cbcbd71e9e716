from __future__ import annotations

import hmac

from flask import Flask, request

from ..common.http import fail, json_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/cron/attendance-reminders", methods=["GET"], endpoint="api_cron_reminders")
    @json_errors
    def attendance_reminders():
        secret = app.config.get("CRON_SECRET") or ""
        header = request.headers.get("Authorization", "")
        if not secret or not hmac.compare_digest(header, f"Bearer {secret}"):
            return fail("Unauthorized", "UNAUTHORIZED", 401)

        report = container.reminder_service.run()
        return ok(
            {
                "checked": report.checked,
                "checkInReminders": report.check_in_sent,
                "checkOutReminders": report.check_out_sent,
                "failed": report.failed,
            }
        )
