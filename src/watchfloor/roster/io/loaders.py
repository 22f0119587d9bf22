"""Roster loading utilities (YAML metadata + CSV tables)."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pandas as pd
import yaml
from pydantic import TypeAdapter

from watchfloor.core.errors import RosterReferenceError, WatchfloorValueError
from watchfloor.roster.contract.models import (
    FocusPeriod,
    ManualAllocation,
    ManualFocusPeriod,
    Operator,
    RosterSnapshot,
    RotationConfig,
    StatusRecord,
)

__all__ = ["load_roster", "read_csv", "TABLES"]

TABLES = (
    "operators",
    "focus_periods",
    "manual_allocations",
    "manual_periods",
    "operator_status",
)


def read_csv(path: Path) -> pd.DataFrame:
    """Load a roster CSV keeping every column as text (ids and ``HH:MM`` stay untouched)."""
    return pd.read_csv(path, dtype=str, encoding="utf-8")


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    # Blank cells are dropped so model defaults apply.
    return [
        {str(key): value for key, value in row.items() if not _is_missing(value)}
        for row in frame.to_dict("records")
    ]


def _table(
    name: str, meta: Mapping[str, Any], data_section: Mapping[str, Any], root: Path
) -> list[dict[str, Any]]:
    if name in data_section:
        candidate = Path(str(data_section[name]))
        if not candidate.is_absolute():
            candidate = root / candidate
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        return _records(read_csv(candidate))
    inline = meta.get(name)
    if inline is None:
        return []
    if not isinstance(inline, list):
        raise WatchfloorValueError(f"Roster section '{name}' must be a list of rows")
    return [dict(row) for row in inline]


def _attach_manual_periods(
    allocations: list[ManualAllocation], periods: list[ManualFocusPeriod]
) -> list[ManualAllocation]:
    if not periods:
        return allocations
    by_id: dict[str, list[ManualFocusPeriod]] = {}
    for allocation in allocations:
        if allocation.id is not None:
            by_id[allocation.id] = list(allocation.periods)
    for period in periods:
        if period.allocation_id is None or period.allocation_id not in by_id:
            raise RosterReferenceError(
                f"Manual period {period.id or '?'} references unknown allocation "
                f"'{period.allocation_id}'"
            )
        by_id[period.allocation_id].append(period)
    return [
        allocation.model_copy(update={"periods": by_id[allocation.id]})
        if allocation.id is not None
        else allocation
        for allocation in allocations
    ]


def _ensure_unique_operators(operators: list[Operator]) -> None:
    seen: set[str] = set()
    for operator in operators:
        if operator.id in seen:
            raise WatchfloorValueError(f"Duplicate operator id '{operator.id}'")
        seen.add(operator.id)


def load_roster(yaml_path: str | Path) -> RosterSnapshot:
    """Load a roster snapshot from ``roster.yaml`` and the CSVs it references.

    Parameters
    ----------
    yaml_path:
        Path to the roster YAML. Its ``data`` section maps table names (``operators``,
        ``focus_periods``, ``manual_allocations``, ``manual_periods``, ``operator_status``)
        to CSV paths relative to the YAML; a table may instead be given inline as a
        top-level list.

    Returns
    -------
    RosterSnapshot
        Validated snapshot. Manual sub-periods are attached to their allocation in stored
        order. A missing ``config`` section yields the default rotation configuration.

    Raises
    ------
    FileNotFoundError
        When a referenced CSV does not exist.
    WatchfloorValueError
        When the YAML is malformed, operator ids repeat, or a manual period references an
        unknown allocation (:class:`RosterReferenceError`).
    """
    base_path = Path(yaml_path).resolve()
    with base_path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle) or {}
    if not isinstance(meta, Mapping):
        raise WatchfloorValueError(f"Roster file {base_path} must contain a mapping")
    root = base_path.parent
    data_section = meta.get("data") or {}
    if not isinstance(data_section, Mapping):
        raise WatchfloorValueError("Roster 'data' section must be a mapping of table paths")

    operators = TypeAdapter(list[Operator]).validate_python(
        _table("operators", meta, data_section, root)
    )
    _ensure_unique_operators(operators)
    focus_periods = TypeAdapter(list[FocusPeriod]).validate_python(
        _table("focus_periods", meta, data_section, root)
    )
    allocations = TypeAdapter(list[ManualAllocation]).validate_python(
        _table("manual_allocations", meta, data_section, root)
    )
    manual_periods = TypeAdapter(list[ManualFocusPeriod]).validate_python(
        _table("manual_periods", meta, data_section, root)
    )
    allocations = _attach_manual_periods(allocations, manual_periods)
    statuses = TypeAdapter(list[StatusRecord]).validate_python(
        _table("operator_status", meta, data_section, root)
    )
    config = TypeAdapter(RotationConfig).validate_python(meta.get("config") or {})

    return RosterSnapshot(
        name=str(meta.get("name") or base_path.stem),
        operators=operators,
        focus_periods=focus_periods,
        manual_allocations=allocations,
        statuses=statuses,
        config=config,
    )
