"""Manual override and focus resolution for a single operator."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar

from watchfloor.roster.contract import (
    Focus,
    FocusPeriod,
    ManualAllocation,
    Operator,
    OperatorStatus,
    RosterSnapshot,
)
from watchfloor.scheduling import (
    is_overnight,
    minutes_of,
    select_window,
    time_to_minutes,
    within_window,
)

__all__ = [
    "FallbackFocus",
    "DEFAULT_FALLBACK_FOCUS",
    "ResolverOptions",
    "EntrySource",
    "ShiftEntry",
    "find_active_allocation",
    "first_matching_period",
    "focus_matches",
    "resolve_operator",
]


class FallbackFocus(str, Enum):
    """Focus used by an on-shift operator when no standing period matches."""

    SUPPORT = "support"
    OPERATOR_DEFAULT = "operator"


DEFAULT_FALLBACK_FOCUS = FallbackFocus.SUPPORT


@dataclass(frozen=True, slots=True)
class ResolverOptions:
    fallback: FallbackFocus = DEFAULT_FALLBACK_FOCUS


class EntrySource(str, Enum):
    MANUAL = "manual"
    AUTOMATIC = "automatic"


@dataclass(frozen=True, slots=True)
class ShiftEntry:
    """Resolved on-shift state of one operator at one instant."""

    operator_id: str
    name: str
    focus: Focus
    observation: str | None
    display_start: str | None
    display_end: str | None
    source: EntrySource
    color: str | None = None
    leader: str | None = None
    allocation_id: str | None = None
    status: OperatorStatus = OperatorStatus.OFF_SHIFT


class _Timed(Protocol):
    start: str | None
    end: str | None


T = TypeVar("T", bound=_Timed)


def _contains(item: _Timed, current: int) -> bool:
    return within_window(current, time_to_minutes(item.start), time_to_minutes(item.end))


def first_matching_period(periods: Iterable[T], current: int) -> T | None:
    """Return the first period, in stored order, whose window contains ``current``.

    Overlapping periods are not disambiguated: the earliest stored match wins.
    """
    return next((period for period in periods if _contains(period, current)), None)


def find_active_allocation(
    allocations: Sequence[ManualAllocation], now: dt.datetime
) -> ManualAllocation | None:
    """Pick the manual allocation covering ``now``, if any.

    Allocations dated today are checked first and win outright. An allocation dated
    yesterday only applies when it runs overnight and ``now`` is in its post-midnight tail.
    """
    current = minutes_of(now)
    today = now.date()
    yesterday = today - dt.timedelta(days=1)
    for allocation in allocations:
        if allocation.date == today and _contains(allocation, current):
            return allocation
    for allocation in allocations:
        if allocation.date != yesterday:
            continue
        start = time_to_minutes(allocation.start)
        end = time_to_minutes(allocation.end)
        if is_overnight(start, end) and current < end:
            return allocation
    return None


def focus_matches(resolved: Focus | str, target: Focus | str) -> bool:
    """Return whether an entry with focus ``resolved`` belongs in the ``target`` group.

    ``Focus.BOTH`` counts towards both monitored systems but never towards support.
    """
    try:
        resolved = Focus(resolved)
        target = Focus(target)
    except ValueError:
        return False
    if resolved is target:
        return True
    return resolved is Focus.BOTH and target in (Focus.IRIS, Focus.SITUATOR)


def _manual_entry(
    operator: Operator,
    allocation: ManualAllocation,
    current: int,
    status: OperatorStatus,
) -> ShiftEntry:
    focus = allocation.focus
    observation = allocation.observation
    period = first_matching_period(allocation.periods, current)
    if period is not None:
        focus = period.focus
        observation = period.observation
    return ShiftEntry(
        operator_id=operator.id,
        name=operator.name,
        focus=focus,
        observation=observation,
        display_start=allocation.start,
        display_end=allocation.end,
        source=EntrySource.MANUAL,
        color=operator.color,
        leader=allocation.leader,
        allocation_id=allocation.id,
        status=status,
    )


def _fallback_focus(operator: Operator, options: ResolverOptions) -> Focus:
    if options.fallback is FallbackFocus.OPERATOR_DEFAULT:
        return operator.default_focus
    return Focus.SUPPORT


def _automatic_entry(
    operator: Operator,
    periods: Sequence[FocusPeriod],
    snapshot: RosterSnapshot,
    now: dt.datetime,
    options: ResolverOptions,
) -> ShiftEntry | None:
    selection = select_window(operator, now, snapshot.config)
    if not selection.on_shift:
        return None
    focus = _fallback_focus(operator, options)
    observation = None
    period = first_matching_period(periods, minutes_of(now))
    if period is not None:
        focus = period.focus
        observation = period.observation
    return ShiftEntry(
        operator_id=operator.id,
        name=operator.name,
        focus=focus,
        observation=observation,
        display_start=selection.start,
        display_end=selection.end,
        source=EntrySource.AUTOMATIC,
        color=operator.color,
        status=snapshot.status_of(operator.id),
    )


def resolve_operator(
    operator: Operator,
    snapshot: RosterSnapshot,
    now: dt.datetime,
    options: ResolverOptions | None = None,
) -> ShiftEntry | None:
    """Resolve what ``operator`` is doing at ``now``; ``None`` when off shift.

    An active manual allocation supersedes the operator's template entirely: the automatic
    window selection is not evaluated for that instant.
    """
    if not operator.active:
        return None
    options = options or ResolverOptions()
    allocation = find_active_allocation(snapshot.allocations_for(operator.id), now)
    if allocation is not None:
        return _manual_entry(
            operator, allocation, minutes_of(now), snapshot.status_of(operator.id)
        )
    return _automatic_entry(
        operator, snapshot.periods_for(operator.id), snapshot, now, options
    )
