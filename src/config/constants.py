"""
Application constants
"""

# Board defaults
DEFAULT_COLUMNS = (
    {"title": "To Do", "order": 0},
    {"title": "In Progress", "order": 1},
    {"title": "Done", "order": 2},
)

# p0 is the most urgent
PRIORITY_RANK = {"p0": 0, "p1": 1, "p2": 2, "p3": 3, "p4": 4}
UNKNOWN_PRIORITY_RANK = 5
HIGH_PRIORITIES = ("p0", "p1")

# Card staleness (days spent in the current column)
STALE_AGING_DAYS = 3
STALE_DAYS = 7

# Deliverable status summary
STATUS_SUMMARY_LIMIT = 3

# Persistence
SAVE_DEBOUNCE_MS = 300
DOCUMENT_ENDPOINT = "/api/data"
OPEN_URL_ENDPOINT = "/api/open-url"
ALLOWED_URL_SCHEMES = ("http://", "https://")

# Retry configuration
MAX_RETRIES = 3
RETRY_DELAY = 1  # seconds

# Time
MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000
MS_PER_DAY = 86_400_000

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
