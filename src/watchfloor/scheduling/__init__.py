"""Scheduling utilities (clock arithmetic, rotation, daily windows)."""

from .rotation import is_group_on_duty, rotation_reference_date
from .timeline import (
    MINUTES_PER_DAY,
    format_minutes,
    is_overnight,
    minutes_of,
    normalize_to_shift,
    time_to_minutes,
    within_window,
)
from .windows import WindowRule, WindowSelection, plan_for_date, select_window

__all__ = [
    "MINUTES_PER_DAY",
    "format_minutes",
    "is_overnight",
    "minutes_of",
    "normalize_to_shift",
    "time_to_minutes",
    "within_window",
    "is_group_on_duty",
    "rotation_reference_date",
    "WindowRule",
    "WindowSelection",
    "plan_for_date",
    "select_window",
]
