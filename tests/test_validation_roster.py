import datetime as dt

from watchfloor.roster.contract import (
    FocusPeriod,
    ManualAllocation,
    ManualFocusPeriod,
    Operator,
    RosterSnapshot,
    StatusRecord,
)
from watchfloor.validation import check_roster, has_errors


def _rotating(op_id: str, group: str, start: str, end: str) -> Operator:
    return Operator(
        id=op_id,
        name=op_id.upper(),
        shift_kind="12x36_day",
        rotation_group=group,
        start=start,
        end=end,
    )


def _messages(issues):
    return [f"{issue.severity}:{issue.message}" for issue in issues]


def test_example_roster_is_clean(central):
    assert check_roster(central) == []


def test_bad_times_and_zero_windows_are_errors():
    snapshot = RosterSnapshot(
        operators=[
            _rotating("a", "A", "7h", "19:00"),
            _rotating("b", "B", "08:00", "08:00"),
        ]
    )
    issues = check_roster(snapshot)
    assert has_errors(issues)
    assert "error:start='7h' is not HH:MM" in _messages(issues)
    assert "error:primary window has zero length" in _messages(issues)


def test_rotation_and_fixed_template_warnings():
    snapshot = RosterSnapshot(
        operators=[
            Operator(id="a", name="A", shift_kind="12x36_night"),
            Operator(id="b", name="B", shift_kind="6x18", saturday_start="08:00"),
            Operator(id="c", name="C", shift_kind="6x18", weekdays="mon"),
        ]
    )
    issues = check_roster(snapshot)
    assert not has_errors(issues)
    messages = _messages(issues)
    assert "warning:12x36 operator without rotation group is never scheduled" in messages
    assert "warning:12x36 operator has no primary window" in messages
    assert "warning:saturday window needs both bounds" in messages
    assert "warning:6x18 operator has no weekdays or weekend windows" in messages
    assert "warning:weekday window is not defined" in messages


def test_period_outside_window_and_overlaps_warn():
    operator = Operator(
        id="a", name="A", shift_kind="12x36_night", rotation_group="A", start="19:00", end="07:00"
    )
    snapshot = RosterSnapshot(
        operators=[operator],
        focus_periods=[
            FocusPeriod(id="p1", operator_id="a", start="23:00", end="03:00", focus="iris"),
            FocusPeriod(id="p2", operator_id="a", start="02:00", end="04:00", focus="situator"),
            FocusPeriod(id="p3", operator_id="a", start="08:00", end="10:00", focus="iris"),
        ],
    )
    issues = check_roster(snapshot)
    assert not has_errors(issues)
    text = " ".join(str(issue) for issue in issues)
    assert "periods p1 and p2 overlap" in text
    assert "08:00-10:00 lies outside the 19:00-07:00 window" in text
    assert "23:00-03:00 lies outside" not in text


def test_dangling_references_and_incomplete_allocations_are_errors():
    snapshot = RosterSnapshot(
        operators=[
            Operator(id="a", name="A", shift_kind="6x18", weekdays="mon", start="08:00", end="14:00")
        ],
        focus_periods=[
            FocusPeriod(id="p9", operator_id="ghost", start="08:00", end="09:00", focus="iris")
        ],
        manual_allocations=[
            ManualAllocation(
                id="m1", operator_id="ghost", date=dt.date(2025, 3, 8), start="08:00", end="12:00"
            ),
            ManualAllocation(id="m2", operator_id="a", date=dt.date(2025, 3, 8), start="08:00"),
            ManualAllocation(
                id="m3",
                operator_id="a",
                date=dt.date(2025, 3, 9),
                start="20:00",
                end="04:00",
                periods=[ManualFocusPeriod(id="s1", start="05:00", end="06:00", focus="iris")],
            ),
        ],
    )
    issues = check_roster(snapshot)
    messages = _messages(issues)
    assert "error:unknown operator 'ghost'" in messages
    assert "error:allocation window is incomplete" in messages
    assert any(
        issue.severity == "warning" and issue.subject.endswith("period s1") for issue in issues
    )
    assert sum(1 for issue in issues if "unknown operator" in issue.message) == 2


def test_status_for_unknown_operator_is_an_error(central):
    snapshot = central.model_copy(
        update={"statuses": [*central.statuses, StatusRecord(operator_id="ghost", status="Pausa")]}
    )
    issues = check_roster(snapshot)
    assert [str(issue) for issue in issues] == ["Status ghost: unknown operator 'ghost'"]
