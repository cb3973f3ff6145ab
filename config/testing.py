SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "scanner_test",
}

TIMEZONE = "UTC"
PRESENT_BEFORE = "08:15"
LATE_BEFORE = "16:00"
ABSENCE_POLICY = "explicit"

LOOKUP_TIMEOUT_SECONDS = 2
STORE_TIMEOUT_SECONDS = 2

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
