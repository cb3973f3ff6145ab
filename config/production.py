import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "scanner_db"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
}

TIMEZONE = os.getenv("TIMEZONE", "UTC")
PRESENT_BEFORE = os.getenv("PRESENT_BEFORE", "08:15")
LATE_BEFORE = os.getenv("LATE_BEFORE", "16:00")
ABSENCE_POLICY = os.getenv("ABSENCE_POLICY", "explicit")

LOOKUP_TIMEOUT_SECONDS = float(os.getenv("LOOKUP_TIMEOUT_SECONDS", "3"))
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "3"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
