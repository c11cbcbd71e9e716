from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Notification:
    """In-app notification shown in the user's notification panel."""

    notification_id: int
    user_id: int
    title: str
    message: str
    link: Optional[str]
    created_at: datetime
    is_read: bool = False
