from __future__ import annotations

from dataclasses import dataclass, field
from types import ModuleType
from typing import Any

from .constants import GEOCODER_TIMEOUT_SECONDS, SESSION_LOCK_TIMEOUT_SECONDS


@dataclass(frozen=True)
class ProcessSettings:
    """Typed view over a ``config.<env>`` settings module."""

    secret_key: str
    db_config: dict
    debug: bool = False
    auto_init_db: bool = False
    auto_seed_db: bool = False
    log_level: str = "INFO"
    app_name: str = "AttendEase"
    app_url: str = "http://localhost:5000"
    smtp_config: dict = field(default_factory=dict)
    geocoder_url: str = "https://nominatim.openstreetmap.org/reverse"
    geocoder_user_agent: str = "AttendEase/1.0 (attendance-app)"
    geocoder_timeout: float = GEOCODER_TIMEOUT_SECONDS
    cron_secret: str = ""
    outbound_max_workers: int = 4
    outbound_max_pending: int = 100
    session_lock_timeout: float = SESSION_LOCK_TIMEOUT_SECONDS
    session_lock_backend: str = "memory"
    cooldown_backend: str = "memory"

    @classmethod
    def from_module(cls, module: ModuleType) -> "ProcessSettings":
        def get(name: str, default: Any = None) -> Any:
            return getattr(module, name, default)

        return cls(
            secret_key=str(get("SECRET_KEY")),
            db_config=dict(get("DB_CONFIG", {})),
            debug=bool(get("DEBUG", False)),
            auto_init_db=bool(get("AUTO_INIT_DB", False)),
            auto_seed_db=bool(get("AUTO_SEED_DB", False)),
            log_level=str(get("LOG_LEVEL", "INFO")).upper(),
            app_name=str(get("APP_NAME", cls.app_name)),
            app_url=str(get("APP_URL", cls.app_url)),
            smtp_config=dict(get("SMTP_CONFIG", {})),
            geocoder_url=str(get("GEOCODER_URL", cls.geocoder_url)),
            geocoder_user_agent=str(get("GEOCODER_USER_AGENT", cls.geocoder_user_agent)),
            geocoder_timeout=float(get("GEOCODER_TIMEOUT", GEOCODER_TIMEOUT_SECONDS)),
            cron_secret=str(get("CRON_SECRET", "") or ""),
            outbound_max_workers=int(get("OUTBOUND_MAX_WORKERS", 4)),
            outbound_max_pending=int(get("OUTBOUND_MAX_PENDING", 100)),
            session_lock_timeout=float(get("SESSION_LOCK_TIMEOUT", SESSION_LOCK_TIMEOUT_SECONDS)),
            session_lock_backend=str(get("SESSION_LOCK_BACKEND", "memory")).lower(),
            cooldown_backend=str(get("COOLDOWN_BACKEND", "memory")).lower(),
        )
