import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# 'mysql' or 'memory' (in-process store, demo persons only)
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

# Calendar days and cutoffs are evaluated in this timezone
TIMEZONE = os.getenv("TIMEZONE", "UTC")
PRESENT_BEFORE = os.getenv("PRESENT_BEFORE", "08:15")
LATE_BEFORE = os.getenv("LATE_BEFORE", "16:00")

# 'explicit': absent = scans after LATE_BEFORE only
# 'unrecorded': also counts persons never scanned that day
ABSENCE_POLICY = os.getenv("ABSENCE_POLICY", "explicit")

LOOKUP_TIMEOUT_SECONDS = float(os.getenv("LOOKUP_TIMEOUT_SECONDS", "5"))
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo persons on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
