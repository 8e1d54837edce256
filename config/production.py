import os

from .config import db_config, env_flag, schedule_windows

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SCHEDULE_WINDOWS = schedule_windows()
BLOCK_WEEKENDS = env_flag("BLOCK_WEEKENDS", "1")
CLOCK_SOURCE = os.getenv("CLOCK_SOURCE", "database")

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/var/lib/timeclock/uploads")
UPLOAD_BASE_URL = os.getenv("UPLOAD_BASE_URL", "/uploads")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "5"))

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
