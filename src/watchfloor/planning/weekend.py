"""Weekend coverage planner (automatic rotation plus manual allocations)."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from watchfloor.resolution.focus import EntrySource
from watchfloor.roster.contract import Focus, RosterSnapshot
from watchfloor.scheduling.windows import plan_for_date

__all__ = ["WeekendSlot", "next_weekend", "schedule_for_day", "weekend_schedule"]

_SATURDAY = 5


@dataclass(frozen=True, slots=True)
class WeekendSlot:
    date: dt.date
    operator_id: str
    name: str
    start: str | None
    end: str | None
    focus: Focus
    source: EntrySource
    observation: str | None = None
    leader: str | None = None
    allocation_id: str | None = None


def next_weekend(today: dt.date) -> tuple[dt.date, dt.date]:
    """Return the first Saturday strictly after ``today`` and the Sunday that follows it.

    The pair is always one contiguous weekend: on a Saturday both days are a week ahead,
    so the Sunday is never tomorrow.
    """
    days_ahead = (_SATURDAY - today.weekday()) % 7 or 7
    saturday = today + dt.timedelta(days=days_ahead)
    return saturday, saturday + dt.timedelta(days=1)


def schedule_for_day(snapshot: RosterSnapshot, on_date: dt.date) -> list[WeekendSlot]:
    """List who covers ``on_date``: template-driven operators first, then manual allocations.

    An operator holding a manual allocation that day is listed only through the allocation.
    Allocations of inactive or unknown operators are left out.
    """
    manual = snapshot.allocations_on(on_date)
    manual_ids = {allocation.operator_id for allocation in manual}
    slots: list[WeekendSlot] = []
    for operator in snapshot.active_operators():
        if operator.id in manual_ids:
            continue
        plan = plan_for_date(operator, on_date, snapshot.config)
        if not plan.scheduled:
            continue
        slots.append(
            WeekendSlot(
                date=on_date,
                operator_id=operator.id,
                name=operator.name,
                start=plan.start,
                end=plan.end,
                focus=operator.default_focus,
                source=EntrySource.AUTOMATIC,
            )
        )
    for allocation in manual:
        operator = snapshot.operator(allocation.operator_id)
        if operator is None or not operator.active:
            continue
        slots.append(
            WeekendSlot(
                date=on_date,
                operator_id=allocation.operator_id,
                name=operator.name,
                start=allocation.start,
                end=allocation.end,
                focus=allocation.focus,
                source=EntrySource.MANUAL,
                observation=allocation.observation,
                leader=allocation.leader,
                allocation_id=allocation.id,
            )
        )
    return slots


def weekend_schedule(snapshot: RosterSnapshot, today: dt.date) -> list[WeekendSlot]:
    saturday, sunday = next_weekend(today)
    return schedule_for_day(snapshot, saturday) + schedule_for_day(snapshot, sunday)
