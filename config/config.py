import os


def _int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


class Config:
    """Values shared by every environment. Per-environment modules override them."""

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Defaults for rules created through the API when a field is omitted
    DEFAULT_RULES = {
        "daily_target_minutes": _int("DEFAULT_DAILY_TARGET_MINUTES", 480),
        "max_shift_minutes": _int("DEFAULT_MAX_SHIFT_MINUTES", 600),
        "min_interjourney_rest_minutes": _int("DEFAULT_INTERJOURNEY_REST_MINUTES", 660),
        "min_break_minutes": _int("DEFAULT_MIN_BREAK_MINUTES", 60),
        "break_tolerance_minutes": _int("DEFAULT_BREAK_TOLERANCE_MINUTES", 0),
        "max_punches": _int("DEFAULT_MAX_PUNCHES", 10),
        "min_punch_spacing_minutes": _int("DEFAULT_MIN_PUNCH_SPACING_MINUTES", 1),
        "rh_period_start_day": _int("DEFAULT_RH_PERIOD_START_DAY", 1),
    }

    # Accept a client-supplied "now" on punch endpoints (offline devices)
    TRUST_CLIENT_CLOCK = bool(int(os.getenv("TRUST_CLIENT_CLOCK", "0")))
