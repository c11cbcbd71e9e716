"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

BUSINESS_TIMEZONE = "Asia/Kolkata"

DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_SHIFT_END = time(17, 0)
DEFAULT_GRACE_MINUTES = 10
DEFAULT_STANDARD_WORK_MINS = 480
HALF_DAY_THRESHOLD_MINS = 240

DEFAULT_MOVEMENT_ALERT_DISTANCE_M = 500
MOVEMENT_ALERT_COOLDOWN_SECONDS = 3600

ACTION_RATE_LIMIT = 10
PING_RATE_LIMIT = 2
RATE_LIMIT_WINDOW_SECONDS = 60

REMINDER_BUFFER_MINUTES = 15
OFFLINE_CLOCK_SKEW_SECONDS = 300

GEOCODER_TIMEOUT_SECONDS = 5
EMAIL_TIMEOUT_SECONDS = 10
SESSION_LOCK_TIMEOUT_SECONDS = 5
