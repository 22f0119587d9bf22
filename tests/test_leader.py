import datetime as dt

import pytest

from watchfloor.resolution import leader_reference_date, resolve_leader, shift_period
from watchfloor.resolution.leader import (
    PLACEHOLDER_DAY_A,
    PLACEHOLDER_DAY_B,
    PLACEHOLDER_NIGHT,
)
from watchfloor.roster.contract import LeaderNames, RotationConfig

LEADERS = LeaderNames(day_a="Angelica", day_b="Alan", night="Santana")


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(0, "night"), (6, "night"), (7, "day"), (18, "day"), (19, "night"), (23, "night")],
)
def test_shift_period_boundaries(hour, expected):
    assert shift_period(dt.datetime(2025, 3, 10, hour, 30)) == expected


def test_reference_date_before_day_turn_is_yesterday():
    assert leader_reference_date(dt.datetime(2025, 3, 11, 6, 59)) == dt.date(2025, 3, 10)
    assert leader_reference_date(dt.datetime(2025, 3, 11, 7, 0)) == dt.date(2025, 3, 11)
    assert leader_reference_date(dt.datetime(2025, 3, 11, 23, 0)) == dt.date(2025, 3, 11)


def test_day_leader_follows_rotation_parity():
    config = RotationConfig(parity_rule="even", leaders=LEADERS)
    assert resolve_leader(dt.datetime(2025, 3, 10, 10, 0), config) == "Angelica"
    assert resolve_leader(dt.datetime(2025, 3, 11, 10, 0), config) == "Alan"


def test_odd_rule_swaps_day_leaders():
    config = RotationConfig(parity_rule="odd", leaders=LEADERS)
    assert resolve_leader(dt.datetime(2025, 3, 10, 10, 0), config) == "Alan"


def test_single_night_leader():
    config = RotationConfig(leaders=LEADERS)
    assert resolve_leader(dt.datetime(2025, 3, 10, 22, 0), config) == "Santana"
    assert resolve_leader(dt.datetime(2025, 3, 11, 3, 0), config) == "Santana"


def test_split_night_leaders_use_previous_day_after_midnight():
    leaders = LeaderNames(night_a="Santana", night_b="Rocha", night="Fallback")
    config = RotationConfig(parity_rule="even", leaders=leaders)
    # 03:00 on the 11th belongs to the night that started on the 10th (group A)
    assert resolve_leader(dt.datetime(2025, 3, 11, 3, 0), config) == "Santana"
    assert resolve_leader(dt.datetime(2025, 3, 11, 20, 0), config) == "Rocha"


def test_split_night_falls_back_to_single_name():
    leaders = LeaderNames(night_a="Santana", night="Fallback")
    config = RotationConfig(parity_rule="even", leaders=leaders)
    assert resolve_leader(dt.datetime(2025, 3, 11, 20, 0), config) == "Fallback"


def test_placeholders_when_names_missing():
    assert resolve_leader(dt.datetime(2025, 3, 10, 10, 0)) == PLACEHOLDER_DAY_A
    assert resolve_leader(dt.datetime(2025, 3, 11, 10, 0)) == PLACEHOLDER_DAY_B
    assert resolve_leader(dt.datetime(2025, 3, 11, 2, 0), None) == PLACEHOLDER_NIGHT
