"""Tabular exports of resolved boards and weekend plans."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from watchfloor.planning.weekend import WeekendSlot
from watchfloor.resolution.board import BOARD_GROUPS, BoardState
from watchfloor.resolution.focus import focus_matches

__all__ = [
    "BOARD_COLUMNS",
    "WEEKEND_COLUMNS",
    "board_dataframe",
    "weekend_dataframe",
]

BOARD_COLUMNS = [
    "generated_at",
    "operator_id",
    "name",
    "focus",
    "groups",
    "observation",
    "display_start",
    "display_end",
    "source",
    "status",
    "leader",
]

WEEKEND_COLUMNS = [
    "date",
    "operator_id",
    "name",
    "start",
    "end",
    "focus",
    "source",
    "observation",
    "leader",
]


def board_dataframe(state: BoardState) -> pd.DataFrame:
    """Return one row per on-shift operator.

    ``groups`` lists the display groups the entry is shown in (``"iris|situator"`` for an
    operator watching both systems).
    """
    if not state.entries:
        return pd.DataFrame(columns=BOARD_COLUMNS)
    rows = []
    for entry in state.entries:
        groups = [target.value for target in BOARD_GROUPS if focus_matches(entry.focus, target)]
        rows.append(
            {
                "generated_at": state.generated_at.isoformat(timespec="seconds"),
                "operator_id": entry.operator_id,
                "name": entry.name,
                "focus": entry.focus.value,
                "groups": "|".join(groups),
                "observation": entry.observation,
                "display_start": entry.display_start,
                "display_end": entry.display_end,
                "source": entry.source.value,
                "status": entry.status.value,
                "leader": entry.leader,
            }
        )
    return pd.DataFrame(rows).reindex(columns=BOARD_COLUMNS)


def weekend_dataframe(slots: Sequence[WeekendSlot]) -> pd.DataFrame:
    if not slots:
        return pd.DataFrame(columns=WEEKEND_COLUMNS)
    rows = [
        {
            "date": slot.date.isoformat(),
            "operator_id": slot.operator_id,
            "name": slot.name,
            "start": slot.start,
            "end": slot.end,
            "focus": slot.focus.value,
            "source": slot.source.value,
            "observation": slot.observation,
            "leader": slot.leader,
        }
        for slot in slots
    ]
    return pd.DataFrame(rows).reindex(columns=WEEKEND_COLUMNS)
