"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DAILY_TARGET_MINUTES = 480
DEFAULT_MAX_SHIFT_MINUTES = 600
DEFAULT_INTERJOURNEY_REST_MINUTES = 660
DEFAULT_MIN_BREAK_MINUTES = 60
DEFAULT_BREAK_TOLERANCE_MINUTES = 0
DEFAULT_MAX_PUNCHES = 10
DEFAULT_MIN_PUNCH_SPACING_MINUTES = 1
DEFAULT_RH_PERIOD_START_DAY = 1

RH_PERIOD_MIN_DAY = 1
RH_PERIOD_MAX_DAY = 28

MIN_JUSTIFICATION_LENGTH = 10
MAX_JUSTIFICATION_LENGTH = 500
MAX_ADJUSTMENT_MINUTES = 240

MAX_PENDING_CYCLES = 20
