import os

from config.common import *  # noqa: F401,F403
from config.common import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = False

SESSION_LOCK_BACKEND = os.getenv("SESSION_LOCK_BACKEND", "mysql")
COOLDOWN_BACKEND = os.getenv("COOLDOWN_BACKEND", "mysql")
