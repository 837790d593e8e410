"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WRITER_SESSION_DAYS = 30
DEFAULT_ADMIN_SESSION_HOURS = 24

DASHBOARD_ACHIEVEMENT_LIMIT = 10
DASHBOARD_AVAILABLE_LIMIT = 10
LEADERBOARD_LIMIT = 10

DEFAULT_MAX_CONCURRENT_TASKS = 5
DEFAULT_RATING = {
    "quality": 5.0,
    "punctuality": 5.0,
    "communication": 5.0,
    "reliability": 5.0,
    "count": 1,
}

PHONE_DIGITS = 10
PLACEHOLDER_PHONE_PREFIX = "00000"

ID_LENGTH = 9
