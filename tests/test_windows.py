import datetime as dt

from watchfloor.roster.contract import Operator, RotationConfig
from watchfloor.scheduling import WindowRule, plan_for_date, select_window

EVEN = RotationConfig(parity_rule="even")


def _rotating(kind: str, group: str | None, start: str, end: str) -> Operator:
    return Operator(
        id="op", name="Op", shift_kind=kind, rotation_group=group, start=start, end=end
    )


def _fixed(**kwargs) -> Operator:
    base = {"id": "op", "name": "Op", "shift_kind": "6x18", "start": "08:00", "end": "14:00"}
    base.update(kwargs)
    return Operator(**base)


def test_day_rotation_on_duty_day():
    operator = _rotating("12x36_day", "A", "07:00", "19:00")
    selection = select_window(operator, dt.datetime(2025, 3, 10, 9, 0), EVEN)
    assert selection.scheduled and selection.on_shift
    assert (selection.start, selection.end) == ("07:00", "19:00")
    assert selection.rule is WindowRule.ROTATION


def test_day_rotation_outside_window_is_scheduled_but_off_shift():
    operator = _rotating("12x36_day", "A", "07:00", "19:00")
    selection = select_window(operator, dt.datetime(2025, 3, 10, 19, 0), EVEN)
    assert selection.scheduled
    assert not selection.on_shift


def test_day_rotation_off_duty_day():
    operator = _rotating("12x36_day", "A", "07:00", "19:00")
    selection = select_window(operator, dt.datetime(2025, 3, 11, 9, 0), EVEN)
    assert not selection.scheduled
    assert not selection.on_shift


def test_night_shift_tail_uses_yesterdays_parity():
    # 2025-03-10 is even, so group A started its night on the 10th
    operator = _rotating("12x36_night", "A", "19:00", "07:00")
    selection = select_window(operator, dt.datetime(2025, 3, 11, 5, 30), EVEN)
    assert selection.on_shift
    assert selection.reference_date == dt.date(2025, 3, 10)


def test_night_shift_tail_off_when_yesterday_was_off():
    operator = _rotating("12x36_night", "B", "19:00", "07:00")
    assert not select_window(operator, dt.datetime(2025, 3, 11, 5, 30), EVEN).on_shift


def test_night_shift_evening_part_uses_todays_parity():
    operator = _rotating("12x36_night", "B", "19:00", "07:00")
    selection = select_window(operator, dt.datetime(2025, 3, 11, 22, 0), EVEN)
    assert selection.on_shift
    assert selection.reference_date == dt.date(2025, 3, 11)


def test_rotation_without_group_is_never_scheduled():
    operator = _rotating("12x36_day", None, "07:00", "19:00")
    for day in (10, 11):
        assert not select_window(operator, dt.datetime(2025, 3, day, 9, 0), EVEN).on_shift


def test_fixed_weekday_window():
    operator = _fixed(weekdays="mon,wed,fri")
    monday = select_window(operator, dt.datetime(2025, 3, 10, 9, 0))
    tuesday = select_window(operator, dt.datetime(2025, 3, 11, 9, 0))
    assert monday.on_shift and monday.rule is WindowRule.WEEKDAY
    assert not tuesday.scheduled


def test_fixed_saturday_window_takes_precedence():
    operator = _fixed(
        weekdays="mon,tue,wed,thu,fri,sat", saturday_start="09:00", saturday_end="13:00"
    )
    selection = select_window(operator, dt.datetime(2025, 3, 8, 13, 30))
    assert selection.rule is WindowRule.SATURDAY
    assert (selection.start, selection.end) == ("09:00", "13:00")
    assert not selection.on_shift


def test_fixed_sunday_window():
    operator = _fixed(sunday_start="10:00", sunday_end="16:00")
    selection = select_window(operator, dt.datetime(2025, 3, 9, 15, 59))
    assert selection.on_shift
    assert selection.rule is WindowRule.SUNDAY


def test_incomplete_weekend_window_falls_through_to_weekdays():
    operator = _fixed(weekdays=["sat"], saturday_start="09:00")
    selection = select_window(operator, dt.datetime(2025, 3, 8, 10, 0))
    assert selection.rule is WindowRule.WEEKDAY
    assert selection.on_shift


def test_fixed_weekend_without_window_is_off():
    operator = _fixed(weekdays="mon,tue,wed,thu,fri")
    assert not select_window(operator, dt.datetime(2025, 3, 9, 10, 0)).scheduled


def test_fixed_overnight_window_only_counts_todays_weekday():
    operator = _fixed(start="22:00", end="06:00", weekdays="mon")
    assert select_window(operator, dt.datetime(2025, 3, 10, 23, 0)).on_shift
    # Tuesday 02:00 is the tail of Monday's window but Tuesday is not listed
    assert not select_window(operator, dt.datetime(2025, 3, 11, 2, 0)).on_shift
    # Monday 02:00 is before the window opens yet inside the wrapped range
    assert select_window(operator, dt.datetime(2025, 3, 10, 2, 0)).on_shift


def test_plan_for_date_reports_template_without_instant():
    day = _rotating("12x36_day", "B", "07:00", "19:00")
    plan = plan_for_date(day, dt.date(2025, 3, 9), EVEN)
    assert plan.scheduled
    assert not plan.on_shift
    assert (plan.start, plan.end) == ("07:00", "19:00")
    assert not plan_for_date(day, dt.date(2025, 3, 8), EVEN).scheduled
