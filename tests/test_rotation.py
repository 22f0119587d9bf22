import datetime as dt

import pytest
from hypothesis import given, settings, strategies as st

from watchfloor.roster.contract import RotationConfig, RotationGroup
from watchfloor.scheduling import is_group_on_duty, rotation_reference_date


def test_group_a_on_even_days_with_even_rule():
    config = RotationConfig(parity_rule="even")
    assert is_group_on_duty("A", dt.date(2025, 3, 10), config)
    assert not is_group_on_duty("A", dt.date(2025, 3, 11), config)


def test_group_a_on_odd_days_with_odd_rule():
    config = RotationConfig(parity_rule="odd")
    assert not is_group_on_duty(RotationGroup.A, dt.date(2025, 3, 10), config)
    assert is_group_on_duty(RotationGroup.A, dt.date(2025, 3, 11), config)


@pytest.mark.parametrize("rule", ["even", " EVEN ", "Even", "pares"])
def test_parity_rule_comparison_is_tolerant(rule):
    assert RotationConfig(parity_rule=rule).group_a_works_even


@pytest.mark.parametrize("rule", ["odd", "impares", "whatever"])
def test_anything_but_even_means_odd(rule):
    assert not RotationConfig(parity_rule=rule).group_a_works_even


@settings(max_examples=200, deadline=None)
@given(
    day=st.dates(min_value=dt.date(2000, 1, 1), max_value=dt.date(2100, 12, 31)),
    rule=st.sampled_from(["even", "odd"]),
)
def test_exactly_one_group_on_duty_every_day(day, rule):
    config = RotationConfig(parity_rule=rule)
    assert is_group_on_duty("A", day, config) != is_group_on_duty("B", day, config)


def test_missing_config_defaults_to_even_days():
    assert is_group_on_duty("A", dt.date(2025, 3, 10))
    assert is_group_on_duty("B", dt.date(2025, 3, 11), None)


def test_missing_group_is_never_on_duty():
    assert not is_group_on_duty(None, dt.date(2025, 3, 10))
    assert not is_group_on_duty(None, dt.date(2025, 3, 11))


def test_month_boundary_uses_day_of_month_parity():
    config = RotationConfig(parity_rule="even")
    # 31 and 1 are both odd, so group B works two days in a row
    assert is_group_on_duty("B", dt.date(2025, 1, 31), config)
    assert is_group_on_duty("B", dt.date(2025, 2, 1), config)


def test_reference_date_is_yesterday_in_overnight_tail():
    now = dt.datetime(2025, 3, 11, 5, 30)
    assert rotation_reference_date(now, 22 * 60, 6 * 60) == dt.date(2025, 3, 10)


def test_reference_date_is_today_before_midnight_and_for_day_shifts():
    assert rotation_reference_date(dt.datetime(2025, 3, 11, 23, 0), 22 * 60, 6 * 60) == dt.date(
        2025, 3, 11
    )
    assert rotation_reference_date(dt.datetime(2025, 3, 11, 9, 0), 22 * 60, 6 * 60) == dt.date(
        2025, 3, 11
    )
    assert rotation_reference_date(dt.datetime(2025, 3, 11, 5, 0), 7 * 60, 19 * 60) == dt.date(
        2025, 3, 11
    )
