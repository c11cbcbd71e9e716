from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReminderReport:
    checked: int = 0
    check_in_sent: int = 0
    check_out_sent: int = 0
    failed: int = 0
