from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from .dispatcher import OutboundDispatcher
from .email import EmailSender
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Fire-and-forget front for in-app notifications and email.

    ``notify`` and ``send_email`` queue work on the dispatcher and return at
    once; ``deliver_emails`` is the blocking variant for code that already runs
    on a worker.
    """

    def __init__(
        self,
        notifications: NotificationRepository,
        email: EmailSender,
        dispatcher: OutboundDispatcher,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._notifications = notifications
        self._email = email
        self._dispatcher = dispatcher
        self._clock = clock

    def notify(self, user_id: int, title: str, message: str, link: Optional[str] = None) -> None:
        self._dispatcher.submit(
            "notification",
            self._notifications.create,
            user_id=int(user_id),
            title=title,
            message=message,
            link=link,
            created_at=self._clock(),
        )

    def send_email(self, to: str, subject: str, html: str) -> None:
        self._dispatcher.submit("email", self._send_one, to, subject, html)

    def deliver_emails(self, recipients: Sequence[str], subject: str, html: str) -> int:
        """Send to each recipient in turn; returns how many succeeded."""
        sent = 0
        for to in recipients:
            if self._send_one(to, subject, html):
                sent += 1
        return sent

    def _send_one(self, to: str, subject: str, html: str) -> bool:
        try:
            ok = self._email.send(to=to, subject=subject, html=html)
        except Exception:
            logger.exception("Email sender raised for %s", to)
            return False
        if not ok:
            logger.warning("Email to %s was not delivered (%s)", to, subject)
        return ok
