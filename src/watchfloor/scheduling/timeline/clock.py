"""Minute-of-day arithmetic for shift windows that may wrap past midnight."""

from __future__ import annotations

import datetime as dt

MINUTES_PER_DAY = 1440

__all__ = [
    "MINUTES_PER_DAY",
    "time_to_minutes",
    "minutes_of",
    "format_minutes",
    "is_overnight",
    "within_window",
    "normalize_to_shift",
]


def time_to_minutes(value: str | dt.time | None) -> int:
    """Convert ``"HH:MM"`` (seconds ignored) into a minute of the day.

    Empty, missing or malformed values resolve to ``0`` instead of raising, so optional
    time fields never abort a resolution pass. Out-of-range fields (``"25:00"``,
    ``"10:75"``) are malformed too, so ``"24:00"`` also lands on midnight.
    """
    if value is None:
        return 0
    if isinstance(value, dt.time):
        return value.hour * 60 + value.minute
    parts = value.strip().split(":")
    if len(parts) < 2:
        return 0
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return 0
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return 0
    return hours * 60 + minutes


def minutes_of(now: dt.datetime | dt.time) -> int:
    return now.hour * 60 + now.minute


def format_minutes(value: int) -> str:
    value %= MINUTES_PER_DAY
    return f"{value // 60:02d}:{value % 60:02d}"


def is_overnight(start: int, end: int) -> bool:
    return start > end


def within_window(current: int, start: int, end: int) -> bool:
    """Return ``True`` when ``current`` falls inside ``[start, end)``.

    Overnight windows (``start > end``) contain the evening part ``[start, 1440)`` and the
    post-midnight tail ``[0, end)``. A zero-length window contains nothing.
    """
    if is_overnight(start, end):
        return current >= start or current < end
    return start <= current < end


def normalize_to_shift(
    period_start: int, period_end: int, shift_start: int, shift_end: int
) -> tuple[int, int]:
    """Place a sub-period on a linear timeline anchored at ``shift_start``.

    Minutes that belong to the post-midnight part of an overnight shift are pushed by
    one day so that ``shift_start <= start' <= end'`` can be compared linearly.
    """
    wraps = is_overnight(shift_start, shift_end)
    start = period_start
    end = period_end
    if wraps and start < shift_start:
        start += MINUTES_PER_DAY
    if wraps and end < shift_start:
        end += MINUTES_PER_DAY
    if end < start:
        end += MINUTES_PER_DAY
    return start, end
