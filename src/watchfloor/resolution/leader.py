"""Acting shift-leader resolution."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from watchfloor.roster.contract import RotationConfig, RotationGroup
from watchfloor.scheduling import is_group_on_duty

__all__ = [
    "DAY_START_HOUR",
    "NIGHT_START_HOUR",
    "PLACEHOLDER_DAY_A",
    "PLACEHOLDER_DAY_B",
    "PLACEHOLDER_NIGHT",
    "ShiftPeriod",
    "shift_period",
    "leader_reference_date",
    "resolve_leader",
]

DAY_START_HOUR = 7
NIGHT_START_HOUR = 19

PLACEHOLDER_DAY_A = "Leader A"
PLACEHOLDER_DAY_B = "Leader B"
PLACEHOLDER_NIGHT = "Night Leader"

ShiftPeriod = Literal["day", "night"]


def shift_period(now: dt.datetime) -> ShiftPeriod:
    if DAY_START_HOUR <= now.hour < NIGHT_START_HOUR:
        return "day"
    return "night"


def leader_reference_date(now: dt.datetime) -> dt.date:
    """Before the day turn starts, the night shift still belongs to the previous day."""
    if now.hour < DAY_START_HOUR:
        return now.date() - dt.timedelta(days=1)
    return now.date()


def resolve_leader(now: dt.datetime, config: RotationConfig | None = None) -> str:
    """Return the name of the leader on duty at ``now``.

    The night turn uses ``night_a``/``night_b`` when configured and falls back to the single
    ``night`` name; unset names resolve to human-readable placeholders.
    """
    config = config or RotationConfig()
    leaders = config.leaders
    group_a = is_group_on_duty(RotationGroup.A, leader_reference_date(now), config)
    if shift_period(now) == "night":
        split = leaders.night_a if group_a else leaders.night_b
        return split or leaders.night or PLACEHOLDER_NIGHT
    if group_a:
        return leaders.day_a or PLACEHOLDER_DAY_A
    return leaders.day_b or PLACEHOLDER_DAY_B
