"""Write-side consistency checks for roster snapshots.

The resolver never re-validates what it reads; these checks report the data-entry
problems that make its output misleading so they can be fixed at the source.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from watchfloor.roster.contract import (
    FocusPeriod,
    ManualAllocation,
    ManualFocusPeriod,
    Operator,
    RosterSnapshot,
)
from watchfloor.scheduling import MINUTES_PER_DAY, normalize_to_shift, time_to_minutes

__all__ = ["RosterIssue", "TIME_PATTERN", "check_roster", "has_errors"]

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class RosterIssue:
    severity: Severity
    subject: str
    message: str

    def __str__(self) -> str:
        return f"{self.subject}: {self.message}"


def _bad_times(subject: str, **fields: str | None) -> list[RosterIssue]:
    issues: list[RosterIssue] = []
    for name, value in fields.items():
        if value is not None and not TIME_PATTERN.match(value):
            issues.append(RosterIssue("error", subject, f"{name}={value!r} is not HH:MM"))
    return issues


def _span(start: str | None, end: str | None) -> tuple[int, int] | None:
    if not start or not end:
        return None
    begin = time_to_minutes(start)
    finish = time_to_minutes(end)
    if finish < begin:
        finish += MINUTES_PER_DAY
    return begin, finish


def _inside(
    period_start: str | None,
    period_end: str | None,
    window_start: str | None,
    window_end: str | None,
) -> bool:
    window = _span(window_start, window_end)
    if window is None or not period_start or not period_end:
        return True
    start, end = normalize_to_shift(
        time_to_minutes(period_start),
        time_to_minutes(period_end),
        time_to_minutes(window_start),
        time_to_minutes(window_end),
    )
    return window[0] <= start and end <= window[1]


def _check_operator(operator: Operator) -> list[RosterIssue]:
    subject = f"Operator {operator.id}"
    issues = _bad_times(
        subject,
        start=operator.start,
        end=operator.end,
        saturday_start=operator.saturday_start,
        saturday_end=operator.saturday_end,
        sunday_start=operator.sunday_start,
        sunday_end=operator.sunday_end,
    )
    if operator.start and operator.end and operator.start == operator.end:
        issues.append(RosterIssue("error", subject, "primary window has zero length"))
    if operator.is_rotating:
        if operator.rotation_group is None:
            issues.append(
                RosterIssue(
                    "warning", subject, "12x36 operator without rotation group is never scheduled"
                )
            )
        if not operator.start or not operator.end:
            issues.append(RosterIssue("warning", subject, "12x36 operator has no primary window"))
        return issues
    weekend = [
        ("saturday", operator.saturday_start, operator.saturday_end),
        ("sunday", operator.sunday_start, operator.sunday_end),
    ]
    complete_weekend = False
    for label, start, end in weekend:
        if bool(start) != bool(end):
            issues.append(RosterIssue("warning", subject, f"{label} window needs both bounds"))
        complete_weekend = complete_weekend or bool(start and end)
    if not operator.weekdays and not complete_weekend:
        issues.append(
            RosterIssue("warning", subject, "6x18 operator has no weekdays or weekend windows")
        )
    if operator.weekdays and (not operator.start or not operator.end):
        issues.append(RosterIssue("warning", subject, "weekday window is not defined"))
    return issues


def _overlaps(
    periods: Sequence[FocusPeriod | ManualFocusPeriod],
    window_start: str | None,
    window_end: str | None,
) -> list[tuple[str | None, str | None]]:
    anchor_start = time_to_minutes(window_start)
    anchor_end = time_to_minutes(window_end)
    placed = []
    for period in periods:
        if not period.start or not period.end:
            continue
        start, end = normalize_to_shift(
            time_to_minutes(period.start), time_to_minutes(period.end), anchor_start, anchor_end
        )
        placed.append((start, end, period.id))
    placed.sort(key=lambda item: (item[0], item[1]))
    clashes = []
    for (_, first_end, first_id), (second_start, _, second_id) in zip(placed, placed[1:]):
        if second_start < first_end:
            clashes.append((first_id, second_id))
    return clashes


def _check_periods(
    subject: str,
    periods: Sequence[FocusPeriod | ManualFocusPeriod],
    window_start: str | None,
    window_end: str | None,
) -> list[RosterIssue]:
    issues: list[RosterIssue] = []
    for index, period in enumerate(periods):
        label = f"{subject} period {period.id or index + 1}"
        issues.extend(_bad_times(label, start=period.start, end=period.end))
        if period.start and period.end and period.start == period.end:
            issues.append(RosterIssue("error", label, "period has zero length"))
        elif not _inside(period.start, period.end, window_start, window_end):
            issues.append(
                RosterIssue(
                    "warning",
                    label,
                    f"{period.start}-{period.end} lies outside the "
                    f"{window_start}-{window_end} window",
                )
            )
    for first, second in _overlaps(periods, window_start, window_end):
        issues.append(
            RosterIssue(
                "warning",
                subject,
                f"periods {first} and {second} overlap; the first stored period wins",
            )
        )
    return issues


def _check_allocation(
    allocation: ManualAllocation, known: set[str]
) -> list[RosterIssue]:
    subject = f"Allocation {allocation.id or allocation.operator_id}@{allocation.date.isoformat()}"
    issues = _bad_times(subject, start=allocation.start, end=allocation.end)
    if allocation.operator_id not in known:
        issues.append(
            RosterIssue("error", subject, f"unknown operator '{allocation.operator_id}'")
        )
    if not allocation.start or not allocation.end:
        issues.append(RosterIssue("error", subject, "allocation window is incomplete"))
    elif allocation.start == allocation.end:
        issues.append(RosterIssue("error", subject, "allocation window has zero length"))
    issues.extend(_check_periods(subject, allocation.periods, allocation.start, allocation.end))
    return issues


def check_roster(snapshot: RosterSnapshot) -> list[RosterIssue]:
    """Return every consistency issue found in ``snapshot`` (empty when clean)."""
    known = {operator.id for operator in snapshot.operators}
    issues: list[RosterIssue] = []
    for operator in snapshot.operators:
        issues.extend(_check_operator(operator))
        issues.extend(
            _check_periods(
                f"Operator {operator.id}",
                snapshot.periods_for(operator.id),
                operator.start,
                operator.end,
            )
        )
    for period in snapshot.focus_periods:
        if period.operator_id not in known:
            issues.append(
                RosterIssue(
                    "error",
                    f"Period {period.id or '?'}",
                    f"unknown operator '{period.operator_id}'",
                )
            )
    for allocation in snapshot.manual_allocations:
        issues.extend(_check_allocation(allocation, known))
    for record in snapshot.statuses:
        if record.operator_id not in known:
            issues.append(
                RosterIssue(
                    "error",
                    f"Status {record.operator_id}",
                    f"unknown operator '{record.operator_id}'",
                )
            )
    return issues


def has_errors(issues: Iterable[RosterIssue]) -> bool:
    return any(issue.severity == "error" for issue in issues)
