from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_business
from .model import AttendanceSession, DailySummary, DayStatusView, SyncReport


def _instant(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def session_to_dict(s: AttendanceSession) -> dict:
    return {
        "id": s.session_id,
        "type": s.session_type.value,
        "timestamp": _instant(s.occurred_at),
        "localTime": to_business(s.occurred_at).strftime("%H:%M"),
        "latitude": s.latitude,
        "longitude": s.longitude,
        "address": s.address,
        "deviceInfo": s.device_info,
    }


def summary_to_dict(s: Optional[DailySummary]) -> Optional[dict]:
    if s is None:
        return None
    return {
        "date": s.work_date.isoformat(),
        "firstCheckIn": _instant(s.first_check_in),
        "lastCheckOut": _instant(s.last_check_out),
        "totalWorkMins": s.total_work_mins,
        "totalBreakMins": s.total_break_mins,
        "overtimeMins": s.overtime_mins,
        "sessionCount": s.session_count,
        "status": s.status.value,
    }


def status_to_dict(v: DayStatusView) -> dict:
    return {
        "date": v.work_date.isoformat(),
        "state": v.state.value,
        "lastSession": session_to_dict(v.last_session) if v.last_session else None,
        "summary": summary_to_dict(v.summary),
    }


def sync_report_to_dict(report: SyncReport) -> dict:
    return {
        "synced": report.synced,
        "total": len(report.results),
        "results": [
            {
                "index": r.index,
                "success": r.success,
                "sessionId": r.session_id,
                "error": r.error,
                "code": r.code,
            }
            for r in report.results
        ],
    }
