"""Roster contract models (Pydantic schemas, validators)."""

from .models import (
    Focus,
    FocusPeriod,
    LeaderNames,
    ManualAllocation,
    ManualFocusPeriod,
    Operator,
    OperatorStatus,
    RosterSnapshot,
    RotationConfig,
    RotationGroup,
    ShiftKind,
    StatusRecord,
    Weekday,
    normalise_token,
)

__all__ = [
    "Focus",
    "FocusPeriod",
    "LeaderNames",
    "ManualAllocation",
    "ManualFocusPeriod",
    "Operator",
    "OperatorStatus",
    "RosterSnapshot",
    "RotationConfig",
    "RotationGroup",
    "ShiftKind",
    "StatusRecord",
    "Weekday",
    "normalise_token",
]
