"""Settings shared by every environment, read from the process environment."""
import os


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


APP_NAME = os.getenv("APP_NAME", "AttendEase")
APP_URL = os.getenv("APP_URL", "http://localhost:5000")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendease"),
}

SMTP_CONFIG = {
    "host": os.getenv("SMTP_HOST", ""),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "user": os.getenv("SMTP_USER", ""),
    "password": os.getenv("SMTP_PASSWORD", ""),
    "sender": os.getenv("SMTP_FROM", f"{APP_NAME} <noreply@attendease.local>"),
    "use_tls": env_flag("SMTP_USE_TLS", "1"),
    "timeout": float(os.getenv("SMTP_TIMEOUT", "10")),
}

GEOCODER_URL = os.getenv("GEOCODER_URL", "https://nominatim.openstreetmap.org/reverse")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", f"{APP_NAME}/1.0 (attendance-app)")
GEOCODER_TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", "5"))

CRON_SECRET = os.getenv("CRON_SECRET", "")

OUTBOUND_MAX_WORKERS = int(os.getenv("OUTBOUND_MAX_WORKERS", "4"))
OUTBOUND_MAX_PENDING = int(os.getenv("OUTBOUND_MAX_PENDING", "100"))

SESSION_LOCK_TIMEOUT = float(os.getenv("SESSION_LOCK_TIMEOUT", "5"))
# "mysql" shares locks and alert cooldowns across app instances.
SESSION_LOCK_BACKEND = os.getenv("SESSION_LOCK_BACKEND", "memory")
COOLDOWN_BACKEND = os.getenv("COOLDOWN_BACKEND", "memory")
