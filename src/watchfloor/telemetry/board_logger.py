"""Structured telemetry for resolved boards."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from watchfloor.resolution.board import BOARD_GROUPS, BoardState
from watchfloor.resolution.focus import EntrySource

from .jsonl import append_jsonl


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def board_record(state: BoardState) -> dict[str, Any]:
    """Summarise a board as a JSON-serialisable mapping (without bookkeeping fields)."""
    return {
        "roster": state.roster,
        "resolved_for": state.generated_at.isoformat(timespec="seconds"),
        "period": state.period,
        "leader": state.leader,
        "on_shift": len(state.entries),
        "groups": {
            focus.value: [entry.operator_id for entry in state.group(focus)]
            for focus in BOARD_GROUPS
        },
        "manual": [
            entry.operator_id for entry in state.entries if entry.source is EntrySource.MANUAL
        ],
        "status": {entry.operator_id: entry.status.value for entry in state.entries},
    }


@dataclass(slots=True)
class BoardTelemetryLogger:
    """Append one ``record_type: "board"`` line per resolved board.

    Parameters
    ----------
    log_path:
        JSONL path where board records are appended.
    context:
        Extra metadata copied into every record (source command, roster path).
    only_changes:
        Skip boards whose summary matches the previously written one. The live board
        resolves every second, so this keeps the log to actual roster transitions.
    """

    log_path: Path
    context: Mapping[str, Any] | None = None
    only_changes: bool = True
    schema_version: str = "1.0"
    session_id: str = field(default_factory=lambda: uuid4().hex, init=False)
    _last: dict[str, Any] | None = field(default=None, init=False)
    _written: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.log_path = Path(self.log_path)

    @property
    def written(self) -> int:
        return self._written

    def record(self, state: BoardState) -> bool:
        """Write ``state`` unless it repeats the last record; return whether a line was written."""
        summary = board_record(state)
        comparable = {key: value for key, value in summary.items() if key != "resolved_for"}
        if self.only_changes and comparable == self._last:
            return False
        record = {
            "record_type": "board",
            "schema_version": self.schema_version,
            "session_id": self.session_id,
            "timestamp": _iso_now(),
            **summary,
            "context": dict(self.context or {}),
        }
        append_jsonl(self.log_path, record)
        self._last = comparable
        self._written += 1
        return True


__all__ = ["BoardTelemetryLogger", "board_record"]
