from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Protocol

from ..core.constants import EMAIL_TIMEOUT_SECONDS
from .templates import wrap_in_template

logger = logging.getLogger(__name__)


class EmailSender(Protocol):
    def send(self, *, to: str, subject: str, html: str) -> bool:
        """Deliver one message; False on failure (never raises)."""
        raise NotImplementedError


@dataclass(frozen=True)
class SMTPConfig:
    host: str
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = None
    sender: str = "AttendEase <noreply@attendease.local>"
    use_tls: bool = True
    timeout: float = EMAIL_TIMEOUT_SECONDS

    @classmethod
    def from_mapping(cls, smtp_config: dict) -> "SMTPConfig":
        return cls(
            host=str(smtp_config.get("host") or ""),
            port=int(smtp_config.get("port") or 587),
            user=smtp_config.get("user") or None,
            password=smtp_config.get("password") or None,
            sender=str(smtp_config.get("sender") or cls.sender),
            use_tls=bool(smtp_config.get("use_tls", True)),
            timeout=float(smtp_config.get("timeout") or EMAIL_TIMEOUT_SECONDS),
        )


class SMTPEmailSender:
    def __init__(self, config: SMTPConfig, *, app_name: str = "AttendEase"):
        self._config = config
        self._app_name = app_name

    def send(self, *, to: str, subject: str, html: str) -> bool:
        if not self._config.host:
            logger.warning("SMTP host not configured, skipping email to %s", to)
            return False

        msg = EmailMessage()
        msg["From"] = self._config.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(subject)
        msg.add_alternative(wrap_in_template(self._app_name, subject, html), subtype="html")

        try:
            with smtplib.SMTP(self._config.host, self._config.port, timeout=self._config.timeout) as smtp:
                if self._config.use_tls:
                    smtp.starttls()
                if self._config.user:
                    smtp.login(self._config.user, self._config.password or "")
                smtp.send_message(msg)
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("Email send error to %s: %s", to, e)
            return False
