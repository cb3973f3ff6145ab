"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_PRESENT_BEFORE = time(8, 15)
DEFAULT_LATE_BEFORE = time(16, 0)
DEFAULT_TIMEZONE = "UTC"

DEFAULT_HISTORY_LIMIT = 10
DEFAULT_RECENT_LIMIT = 20
DEFAULT_TREND_DAYS = 7
MAX_TREND_DAYS = 366
DEFAULT_SEARCH_LIMIT = 50

DEFAULT_LOOKUP_TIMEOUT_SECONDS = 5.0
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0

# Events kept per operator session for polling clients.
EVENT_BUFFER_SIZE = 200

# Worker threads per collaborator pool (identity lookups, attendance store).
COLLABORATOR_WORKERS = 8
