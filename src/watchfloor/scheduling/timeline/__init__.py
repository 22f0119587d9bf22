from .clock import (
    MINUTES_PER_DAY,
    format_minutes,
    is_overnight,
    minutes_of,
    normalize_to_shift,
    time_to_minutes,
    within_window,
)

__all__ = [
    "MINUTES_PER_DAY",
    "format_minutes",
    "is_overnight",
    "minutes_of",
    "normalize_to_shift",
    "time_to_minutes",
    "within_window",
]
