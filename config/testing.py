import os

from timeclock.core.constants import DEFAULT_SCHEDULE_WINDOWS

from .config import db_config

SECRET_KEY = "test-secret"

DB_CONFIG = db_config(default_password="")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SCHEDULE_WINDOWS = dict(DEFAULT_SCHEDULE_WINDOWS)
BLOCK_WEEKENDS = True
CLOCK_SOURCE = "local"

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "instance/test-uploads")
UPLOAD_BASE_URL = "/uploads"
MAX_UPLOAD_MB = 1

AUTO_INIT_DB = False
