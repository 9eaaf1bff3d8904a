"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DISPLAY_ROW_LIMIT = 500
DEFAULT_WEEK_START = 0  # Monday, as in date.weekday()
DEFAULT_POOL_SIZE = 5
DEFAULT_POOL_NAME = "ops_dashboards"
DEFAULT_INCIDENT_STATUS_FILTER = "Open"
