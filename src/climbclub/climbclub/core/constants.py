"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FIRST_SEQUENCE = 1
TOP_ATTENDEES_LIMIT = 9

HISTORY_FILTERS = ("all", "registered", "attended", "missed")
