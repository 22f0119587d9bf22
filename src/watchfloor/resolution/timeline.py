"""Timeline segments for rendering an operator's focus periods inside the shift."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from watchfloor.roster.contract import Focus, FocusPeriod, Operator
from watchfloor.scheduling import MINUTES_PER_DAY, normalize_to_shift, time_to_minutes

__all__ = ["TimelineSegment", "shift_duration", "timeline_segments"]


@dataclass(frozen=True, slots=True)
class TimelineSegment:
    period_id: str | None
    focus: Focus
    start: str | None
    end: str | None
    observation: str | None
    offset: float  # fraction of the shift before the segment starts
    width: float  # fraction of the shift covered by the segment


def shift_duration(start: str | None, end: str | None) -> int:
    """Length of a window in minutes, wrapping past midnight; ``0`` when undefined."""
    if not start or not end:
        return 0
    begin = time_to_minutes(start)
    finish = time_to_minutes(end)
    if finish < begin:
        finish += MINUTES_PER_DAY
    return finish - begin


def timeline_segments(operator: Operator, periods: Iterable[FocusPeriod]) -> list[TimelineSegment]:
    duration = shift_duration(operator.start, operator.end)
    if duration <= 0:
        return []
    shift_start = time_to_minutes(operator.start)
    shift_end = time_to_minutes(operator.end)
    placed: list[tuple[int, int, FocusPeriod]] = []
    for period in periods:
        start, end = normalize_to_shift(
            time_to_minutes(period.start), time_to_minutes(period.end), shift_start, shift_end
        )
        placed.append((start, end, period))
    placed.sort(key=lambda item: item[0])
    return [
        TimelineSegment(
            period_id=period.id,
            focus=period.focus,
            start=period.start,
            end=period.end,
            observation=period.observation,
            offset=(start - shift_start) / duration,
            width=(end - start) / duration,
        )
        for start, end, period in placed
    ]
