"""Roster-wide aggregation of resolved shift entries."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from watchfloor.roster.contract import Focus, RosterSnapshot
from watchfloor.resolution.focus import (
    ResolverOptions,
    ShiftEntry,
    focus_matches,
    resolve_operator,
)
from watchfloor.resolution.leader import ShiftPeriod, resolve_leader, shift_period

__all__ = ["BOARD_GROUPS", "BoardState", "group_entries", "resolve_entries", "resolve_board"]

BOARD_GROUPS: tuple[Focus, ...] = (Focus.IRIS, Focus.SITUATOR, Focus.SUPPORT)


@dataclass(frozen=True, slots=True)
class BoardState:
    """Output of one resolution pass over the whole roster."""

    generated_at: dt.datetime
    roster: str
    entries: tuple[ShiftEntry, ...]
    leader: str
    period: ShiftPeriod
    manager: str | None = None
    groups: Mapping[Focus, tuple[ShiftEntry, ...]] = field(default_factory=dict)

    def group(self, focus: Focus | str) -> tuple[ShiftEntry, ...]:
        return self.groups.get(Focus(focus), ())

    @property
    def on_shift_ids(self) -> list[str]:
        return [entry.operator_id for entry in self.entries]


def group_entries(entries: Iterable[ShiftEntry]) -> dict[Focus, tuple[ShiftEntry, ...]]:
    """Partition entries into the IRIS, Situator and support display groups."""
    entries = list(entries)
    return {
        target: tuple(entry for entry in entries if focus_matches(entry.focus, target))
        for target in BOARD_GROUPS
    }


def resolve_entries(
    now: dt.datetime,
    snapshot: RosterSnapshot,
    options: ResolverOptions | None = None,
) -> list[ShiftEntry]:
    entries: list[ShiftEntry] = []
    for operator in snapshot.active_operators():
        entry = resolve_operator(operator, snapshot, now, options)
        if entry is not None:
            entries.append(entry)
    return entries


def resolve_board(
    now: dt.datetime,
    snapshot: RosterSnapshot,
    options: ResolverOptions | None = None,
) -> BoardState:
    """Resolve every active operator plus the acting leader at ``now``.

    The pass is a pure function of its arguments; callers re-invoke it on every tick.
    """
    entries = tuple(resolve_entries(now, snapshot, options))
    return BoardState(
        generated_at=now,
        roster=snapshot.name,
        entries=entries,
        leader=resolve_leader(now, snapshot.config),
        period=shift_period(now),
        manager=snapshot.config.leaders.manager,
        groups=group_entries(entries),
    )
