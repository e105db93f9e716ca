"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 100
DEFAULT_TIMEZONE = "America/Mexico_City"
MAX_OBSERVATIONS_LENGTH = 200

DEFAULT_INBOX_PAGE_SIZE = 20
MAX_INBOX_PAGE_SIZE = 100

SECONDS_PER_DAY = 86400

MAX_HISTORY_LIMIT = 500

DEFAULT_ACTIVITY_RANGE = "24h"
DEFAULT_ACTIVITY_PAGE_SIZE = 20
MAX_ACTIVITY_PAGE_SIZE = 100
