import os

from .config import db_config, env_flag, schedule_windows

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config(default_password="")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

SCHEDULE_WINDOWS = schedule_windows()
BLOCK_WEEKENDS = env_flag("BLOCK_WEEKENDS", "1")

# 'local' trusts this host's clock, 'database' asks MySQL for NOW()
CLOCK_SOURCE = os.getenv("CLOCK_SOURCE", "local")

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "instance/uploads")
UPLOAD_BASE_URL = os.getenv("UPLOAD_BASE_URL", "/uploads")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "5"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
