"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SECONDS_PER_HOUR = 3600
DEFAULT_ROLE_COLOR = "#3B82F6"
MYSQL_DUPLICATE_KEY_ERRNO = 1062
DATE_FORMAT = "%Y-%m-%d"
