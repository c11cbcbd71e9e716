from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol


class NotificationRepository(Protocol):
    def create(self, *, user_id: int, title: str, message: str, link: Optional[str], created_at: datetime) -> int:
        raise NotImplementedError

    def exists_since(self, *, user_id: int, title: str, since: datetime) -> bool:
        raise NotImplementedError
