"""Shift resolution: per-operator focus, acting leader and roster-wide board."""

from .board import BOARD_GROUPS, BoardState, group_entries, resolve_board, resolve_entries
from .focus import (
    DEFAULT_FALLBACK_FOCUS,
    EntrySource,
    FallbackFocus,
    ResolverOptions,
    ShiftEntry,
    find_active_allocation,
    first_matching_period,
    focus_matches,
    resolve_operator,
)
from .leader import leader_reference_date, resolve_leader, shift_period
from .timeline import TimelineSegment, shift_duration, timeline_segments

__all__ = [
    "BOARD_GROUPS",
    "BoardState",
    "group_entries",
    "resolve_board",
    "resolve_entries",
    "DEFAULT_FALLBACK_FOCUS",
    "EntrySource",
    "FallbackFocus",
    "ResolverOptions",
    "ShiftEntry",
    "find_active_allocation",
    "first_matching_period",
    "focus_matches",
    "resolve_operator",
    "leader_reference_date",
    "resolve_leader",
    "shift_period",
    "TimelineSegment",
    "shift_duration",
    "timeline_segments",
]
