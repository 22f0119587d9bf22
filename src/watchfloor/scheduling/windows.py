"""Daily window selection for the automatic (template-driven) schedule."""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from watchfloor.roster.contract import Operator, RotationConfig, ShiftKind, Weekday
from watchfloor.scheduling.rotation import is_group_on_duty, rotation_reference_date
from watchfloor.scheduling.timeline import minutes_of, time_to_minutes, within_window

__all__ = ["WindowRule", "WindowSelection", "plan_for_date", "select_window"]


class WindowRule(str, Enum):
    ROTATION = "rotation"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
    WEEKDAY = "weekday"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class WindowSelection:
    """Outcome of the daily window selection for one operator.

    Attributes
    ----------
    scheduled:
        The operator's template assigns a window to ``reference_date``.
    on_shift:
        ``scheduled`` and the evaluated instant falls inside the window.
    start / end:
        Display bounds of the applicable window (``HH:MM`` strings as stored).
    rule:
        Which template rule produced the window.
    reference_date:
        Calendar day the shift started on (yesterday in an overnight tail).
    """

    scheduled: bool
    on_shift: bool = False
    start: str | None = None
    end: str | None = None
    rule: WindowRule = WindowRule.NONE
    reference_date: dt.date | None = None


def _rotation_plan(operator: Operator, on_date: dt.date, config: RotationConfig) -> WindowSelection:
    if operator.rotation_group is None:
        return WindowSelection(scheduled=False, reference_date=on_date)
    return WindowSelection(
        scheduled=is_group_on_duty(operator.rotation_group, on_date, config),
        start=operator.start,
        end=operator.end,
        rule=WindowRule.ROTATION,
        reference_date=on_date,
    )


def _fixed_plan(operator: Operator, on_date: dt.date, config: RotationConfig) -> WindowSelection:
    weekday = Weekday.from_date(on_date)
    if weekday is Weekday.SAT and operator.saturday_start and operator.saturday_end:
        bounds = (operator.saturday_start, operator.saturday_end, WindowRule.SATURDAY)
    elif weekday is Weekday.SUN and operator.sunday_start and operator.sunday_end:
        bounds = (operator.sunday_start, operator.sunday_end, WindowRule.SUNDAY)
    elif weekday in operator.weekdays:
        bounds = (operator.start, operator.end, WindowRule.WEEKDAY)
    else:
        return WindowSelection(scheduled=False, reference_date=on_date)
    start, end, rule = bounds
    return WindowSelection(
        scheduled=True, start=start, end=end, rule=rule, reference_date=on_date
    )


def _rotation_anchor(operator: Operator, now: dt.datetime) -> dt.date:
    return rotation_reference_date(
        now, time_to_minutes(operator.start), time_to_minutes(operator.end)
    )


def _calendar_anchor(operator: Operator, now: dt.datetime) -> dt.date:
    return now.date()


PlanFn = Callable[[Operator, dt.date, RotationConfig], WindowSelection]
AnchorFn = Callable[[Operator, dt.datetime], dt.date]

# Shift kind -> (reference-date rule, window plan for that date)
_KIND_TABLE: dict[ShiftKind, tuple[AnchorFn, PlanFn]] = {
    ShiftKind.TWELVE_BY_36_DAY: (_rotation_anchor, _rotation_plan),
    ShiftKind.TWELVE_BY_36_NIGHT: (_rotation_anchor, _rotation_plan),
    ShiftKind.SIX_BY_18: (_calendar_anchor, _fixed_plan),
}


def plan_for_date(
    operator: Operator, on_date: dt.date, config: RotationConfig | None = None
) -> WindowSelection:
    """Return the window the operator's template assigns to the shift starting on ``on_date``."""
    _, plan = _KIND_TABLE[operator.shift_kind]
    return plan(operator, on_date, config or RotationConfig())


def select_window(
    operator: Operator, now: dt.datetime, config: RotationConfig | None = None
) -> WindowSelection:
    """Resolve the operator's automatic on-shift state at ``now``.

    12x36 operators use their primary window gated by the rotation parity of the day the
    shift started on. 6x18 operators use the Saturday window, the Sunday window, or the
    primary window on listed weekdays, in that order.
    """
    anchor, plan = _KIND_TABLE[operator.shift_kind]
    selection = plan(operator, anchor(operator, now), config or RotationConfig())
    if not selection.scheduled:
        return selection
    inside = within_window(
        minutes_of(now), time_to_minutes(selection.start), time_to_minutes(selection.end)
    )
    return replace(selection, on_shift=inside)
