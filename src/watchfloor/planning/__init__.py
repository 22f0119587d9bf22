"""Planning helpers built on top of the daily window selector."""

from .weekend import WeekendSlot, next_weekend, schedule_for_day, weekend_schedule

__all__ = ["WeekendSlot", "next_weekend", "schedule_for_day", "weekend_schedule"]
