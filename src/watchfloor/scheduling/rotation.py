"""Even/odd day-of-month rotation for 12x36 operator groups."""

from __future__ import annotations

import datetime as dt

from watchfloor.roster.contract import RotationConfig, RotationGroup
from watchfloor.scheduling.timeline import is_overnight, minutes_of, within_window

__all__ = ["is_group_on_duty", "rotation_reference_date"]


def is_group_on_duty(
    group: RotationGroup | str | None,
    on_date: dt.date,
    config: RotationConfig | None = None,
) -> bool:
    """Return whether ``group`` works the shift that starts on ``on_date``.

    Group A works the days whose parity matches ``config.parity_rule``; group B takes the
    complementary days, so exactly one group is on duty for any date. A missing group is
    never on duty.
    """
    if group is None:
        return False
    group = RotationGroup(group)
    config = config or RotationConfig()
    is_even = on_date.day % 2 == 0
    group_a_on_duty = is_even == config.group_a_works_even
    return group_a_on_duty if group is RotationGroup.A else not group_a_on_duty


def rotation_reference_date(now: dt.datetime, start: int, end: int) -> dt.date:
    """Date on which the shift containing ``now`` started.

    In the post-midnight tail of an overnight window the shift belongs to yesterday.
    """
    current = minutes_of(now)
    today = now.date()
    if is_overnight(start, end) and within_window(current, start, end) and current < end:
        return today - dt.timedelta(days=1)
    return today
