from config.common import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

SMTP_CONFIG = {"host": ""}
CRON_SECRET = "test-cron-secret"
