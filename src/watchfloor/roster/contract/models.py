"""Pydantic models describing a monitoring-center roster snapshot."""

from __future__ import annotations

import datetime as dt
import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "ShiftKind",
    "RotationGroup",
    "Weekday",
    "Focus",
    "OperatorStatus",
    "StatusRecord",
    "Operator",
    "FocusPeriod",
    "ManualFocusPeriod",
    "ManualAllocation",
    "LeaderNames",
    "RotationConfig",
    "RosterSnapshot",
    "normalise_token",
]


def normalise_token(value: str) -> str:
    """Lower-case ``value`` and drop every whitespace character."""
    return "".join(value.split()).lower()


class ShiftKind(str, Enum):
    TWELVE_BY_36_DAY = "12x36_day"
    TWELVE_BY_36_NIGHT = "12x36_night"
    SIX_BY_18 = "6x18"

    @classmethod
    def _missing_(cls, value: object) -> ShiftKind | None:
        if isinstance(value, str):
            key = _SHIFT_KIND_ALIASES.get(normalise_token(value))
            if key is not None:
                return cls(key)
        return None

    @property
    def is_rotating(self) -> bool:
        return self is not ShiftKind.SIX_BY_18


_SHIFT_KIND_ALIASES: dict[str, str] = {
    "12x36_day": "12x36_day",
    "12x36_diurno": "12x36_day",
    "12x36day": "12x36_day",
    "12x36_night": "12x36_night",
    "12x36_noturno": "12x36_night",
    "12x36night": "12x36_night",
    "6x18": "6x18",
}


class RotationGroup(str, Enum):
    A = "A"
    B = "B"

    @classmethod
    def _missing_(cls, value: object) -> RotationGroup | None:
        if isinstance(value, str):
            stripped = normalise_token(value).upper()
            if stripped in {"A", "B"}:
                return cls(stripped)
        return None


class Weekday(str, Enum):
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

    @classmethod
    def _missing_(cls, value: object) -> Weekday | None:
        if isinstance(value, str):
            key = _WEEKDAY_ALIASES.get(normalise_token(value))
            if key is not None:
                return cls(key)
        return None

    @classmethod
    def from_date(cls, value: dt.date) -> Weekday:
        return _WEEKDAY_ORDER[value.weekday()]


_WEEKDAY_ORDER: tuple[Weekday, ...] = tuple(Weekday)

_WEEKDAY_ALIASES: dict[str, str] = {
    "monday": "mon",
    "seg": "mon",
    "segunda": "mon",
    "tuesday": "tue",
    "ter": "tue",
    "terca": "tue",
    "terça": "tue",
    "wednesday": "wed",
    "qua": "wed",
    "quarta": "wed",
    "thursday": "thu",
    "qui": "thu",
    "quinta": "thu",
    "friday": "fri",
    "sex": "fri",
    "sexta": "fri",
    "saturday": "sat",
    "sab": "sat",
    "sáb": "sat",
    "sabado": "sat",
    "sábado": "sat",
    "sunday": "sun",
    "dom": "sun",
    "domingo": "sun",
}
_WEEKDAY_ALIASES.update({day.value: day.value for day in Weekday})


class Focus(str, Enum):
    """Closed set of focus values an operator can be assigned to.

    ``IRIS`` and ``SITUATOR`` are the two monitored systems, ``SUPPORT`` is the
    catch-all role and ``BOTH`` is a meta-value meaning "watching both systems".
    """

    IRIS = "iris"
    SITUATOR = "situator"
    SUPPORT = "support"
    BOTH = "both"

    @classmethod
    def _missing_(cls, value: object) -> Focus | None:
        if isinstance(value, str):
            key = _FOCUS_ALIASES.get(normalise_token(value))
            if key is not None:
                return cls(key)
        return None

    @property
    def label(self) -> str:
        return _FOCUS_LABELS[self]


_FOCUS_ALIASES: dict[str, str] = {
    "iris": "iris",
    "situator": "situator",
    "support": "support",
    "apoio": "support",
    "apoio/supervisão": "support",
    "apoio/supervisao": "support",
    "supervisão": "support",
    "supervisao": "support",
    "both": "both",
    "ambos": "both",
}

_FOCUS_LABELS: dict[Focus, str] = {
    Focus.IRIS: "IRIS",
    Focus.SITUATOR: "Situator",
    Focus.SUPPORT: "Support",
    Focus.BOTH: "IRIS + Situator",
}


class OperatorStatus(str, Enum):
    """Live status an operator reports from the floor, independent of the schedule."""

    ON_DUTY = "on_duty"
    PAUSED = "paused"
    OFF_SHIFT = "off_shift"

    @classmethod
    def _missing_(cls, value: object) -> OperatorStatus | None:
        if isinstance(value, str):
            key = _STATUS_ALIASES.get(normalise_token(value))
            if key is not None:
                return cls(key)
        return None

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_ALIASES: dict[str, str] = {
    "on_duty": "on_duty",
    "onduty": "on_duty",
    "emoperação": "on_duty",
    "emoperacao": "on_duty",
    "paused": "paused",
    "pause": "paused",
    "pausa": "paused",
    "off_shift": "off_shift",
    "offshift": "off_shift",
    "foradeturno": "off_shift",
}

_STATUS_LABELS: dict[OperatorStatus, str] = {
    OperatorStatus.ON_DUTY: "On duty",
    OperatorStatus.PAUSED: "Paused",
    OperatorStatus.OFF_SHIFT: "Off shift",
}


def _blank_to_none(value: object) -> object:
    if value is None:
        return None
    if isinstance(value, float) and value != value:  # NaN from CSV rows
        return None
    if isinstance(value, dt.time):
        return value.strftime("%H:%M")
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _coerce_focus(value: object) -> object:
    value = _blank_to_none(value)
    return Focus(value) if isinstance(value, str) else value


_WEEKDAY_SPLIT = re.compile(r"[,|;\s]+")


class Operator(BaseModel):
    """Operator identity plus the recurring shift template.

    Attributes
    ----------
    id:
        Stable identifier referenced by focus periods and manual allocations.
    shift_kind:
        Recurring template (12x36 day/night rotation or fixed 6x18).
    rotation_group:
        Rotation cohort for 12x36 operators. Without a group the operator is never scheduled.
    start / end:
        Primary window as ``HH:MM`` strings. For 6x18 operators this is the weekday window.
    saturday_start / saturday_end / sunday_start / sunday_end:
        Optional 6x18 weekend windows; both bounds must be set for the window to apply.
    weekdays:
        Days on which the 6x18 primary window applies. Accepts ``"mon,tue"`` style strings.
    default_focus:
        Operator's configured focus (see ``FallbackFocus`` for when it is used).
    color:
        Presentation only.
    """

    id: str
    name: str
    active: bool = True
    shift_kind: ShiftKind
    rotation_group: RotationGroup | None = None
    start: str | None = None
    end: str | None = None
    saturday_start: str | None = None
    saturday_end: str | None = None
    sunday_start: str | None = None
    sunday_end: str | None = None
    weekdays: tuple[Weekday, ...] = ()
    default_focus: Focus = Focus.SUPPORT
    color: str | None = None

    @field_validator(
        "start",
        "end",
        "saturday_start",
        "saturday_end",
        "sunday_start",
        "sunday_end",
        "color",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("active", mode="before")
    @classmethod
    def _active_default(cls, value: object) -> object:
        value = _blank_to_none(value)
        return True if value is None else value

    @field_validator("shift_kind", mode="before")
    @classmethod
    def _parse_shift_kind(cls, value: object) -> object:
        return ShiftKind(value) if isinstance(value, str) else value

    @field_validator("rotation_group", mode="before")
    @classmethod
    def _parse_group(cls, value: object) -> object:
        value = _blank_to_none(value)
        return RotationGroup(value) if isinstance(value, str) else value

    @field_validator("default_focus", mode="before")
    @classmethod
    def _focus_default(cls, value: object) -> object:
        value = _blank_to_none(value)
        if value is None:
            return Focus.SUPPORT
        return Focus(value) if isinstance(value, str) else value

    @field_validator("weekdays", mode="before")
    @classmethod
    def _split_weekdays(cls, value: object) -> object:
        value = _blank_to_none(value)
        if value is None:
            return ()
        if isinstance(value, str):
            value = [part for part in _WEEKDAY_SPLIT.split(value) if part]
        return tuple(Weekday(item) if isinstance(item, str) else item for item in value)

    @property
    def is_rotating(self) -> bool:
        return self.shift_kind.is_rotating


class FocusPeriod(BaseModel):
    """Standing sub-interval of an operator's shift with its own focus."""

    id: str | None = None
    operator_id: str
    start: str | None = None
    end: str | None = None
    focus: Focus
    observation: str | None = None

    @field_validator("id", "start", "end", "observation", mode="before")
    @classmethod
    def _optional_text(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("focus", mode="before")
    @classmethod
    def _parse_focus(cls, value: object) -> object:
        return _coerce_focus(value)


class ManualFocusPeriod(BaseModel):
    """Focus sub-period scoped to a single manual allocation."""

    id: str | None = None
    allocation_id: str | None = None
    start: str | None = None
    end: str | None = None
    focus: Focus
    observation: str | None = None

    @field_validator("id", "allocation_id", "start", "end", "observation", mode="before")
    @classmethod
    def _optional_text(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("focus", mode="before")
    @classmethod
    def _parse_focus(cls, value: object) -> object:
        return _coerce_focus(value)


class ManualAllocation(BaseModel):
    """Ad-hoc shift for a calendar date that supersedes the automatic schedule.

    ``date`` is the day the shift starts on; an ``end`` earlier than ``start``
    means the allocation runs past midnight into the following day.
    """

    id: str | None = None
    operator_id: str
    date: dt.date
    start: str | None = None
    end: str | None = None
    focus: Focus = Focus.SUPPORT
    leader: str | None = None
    observation: str | None = None
    periods: list[ManualFocusPeriod] = Field(default_factory=list)

    @field_validator("id", "start", "end", "leader", "observation", mode="before")
    @classmethod
    def _optional_text(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("focus", mode="before")
    @classmethod
    def _parse_focus(cls, value: object) -> object:
        value = _coerce_focus(value)
        return Focus.SUPPORT if value is None else value


class StatusRecord(BaseModel):
    """Last live status reported for one operator."""

    operator_id: str
    status: OperatorStatus = OperatorStatus.OFF_SHIFT
    updated_at: dt.datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: object) -> object:
        value = _blank_to_none(value)
        if value is None:
            return OperatorStatus.OFF_SHIFT
        return OperatorStatus(value) if isinstance(value, str) else value

    @field_validator("updated_at", mode="before")
    @classmethod
    def _optional_timestamp(cls, value: object) -> object:
        return _blank_to_none(value)


class LeaderNames(BaseModel):
    """Configured shift-leader names. ``manager`` is shown on the board but never resolved."""

    day_a: str | None = None
    day_b: str | None = None
    night: str | None = None
    night_a: str | None = None
    night_b: str | None = None
    manager: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _optional_text(cls, value: object) -> object:
        return _blank_to_none(value)


class RotationConfig(BaseModel):
    """Singleton rotation configuration.

    Attributes
    ----------
    parity_rule:
        ``"even"`` when rotation group A works on even days of the month, ``"odd"`` otherwise.
        Comparison is case- and whitespace-insensitive; the legacy ``"pares"``/``"impares"``
        values are understood too. Group B always takes the complementary parity.
    leaders:
        Leader names used by :func:`watchfloor.resolution.leader.resolve_leader`.
    """

    parity_rule: str = "even"
    leaders: LeaderNames = Field(default_factory=LeaderNames)

    @field_validator("parity_rule", mode="before")
    @classmethod
    def _parity_default(cls, value: object) -> object:
        value = _blank_to_none(value)
        return "even" if value is None else value

    @field_validator("leaders", mode="before")
    @classmethod
    def _leaders_default(cls, value: object) -> object:
        return LeaderNames() if value is None else value

    @property
    def group_a_works_even(self) -> bool:
        return normalise_token(self.parity_rule) in {"even", "pares", "par"}


class RosterSnapshot(BaseModel):
    """Immutable input of one resolution pass."""

    name: str = "roster"
    operators: list[Operator] = Field(default_factory=list)
    focus_periods: list[FocusPeriod] = Field(default_factory=list)
    manual_allocations: list[ManualAllocation] = Field(default_factory=list)
    statuses: list[StatusRecord] = Field(default_factory=list)
    config: RotationConfig = Field(default_factory=RotationConfig)

    @field_validator("config", mode="before")
    @classmethod
    def _config_default(cls, value: object) -> object:
        return RotationConfig() if value is None else value

    def active_operators(self) -> list[Operator]:
        return [op for op in self.operators if op.active]

    def operator(self, operator_id: str) -> Operator | None:
        return next((op for op in self.operators if op.id == operator_id), None)

    def periods_for(self, operator_id: str) -> list[FocusPeriod]:
        return [period for period in self.focus_periods if period.operator_id == operator_id]

    def allocations_for(self, operator_id: str) -> list[ManualAllocation]:
        return [item for item in self.manual_allocations if item.operator_id == operator_id]

    def allocations_on(self, on_date: dt.date) -> list[ManualAllocation]:
        return [item for item in self.manual_allocations if item.date == on_date]

    def status_of(self, operator_id: str) -> OperatorStatus:
        """First stored status row for the operator; off shift when none exists."""
        record = next((item for item in self.statuses if item.operator_id == operator_id), None)
        return record.status if record is not None else OperatorStatus.OFF_SHIFT
