from __future__ import annotations

from pathlib import Path

import pandas as pd

from tests.cli import CliRunner, cli_text, squash
from watchfloor.cli.main import app
from watchfloor.telemetry import read_jsonl

runner = CliRunner()


def test_validate_example_roster(central_path: Path):
    result = runner.invoke(app, ["validate", str(central_path)])
    assert result.exit_code == 0, cli_text(result)
    text = cli_text(result)
    assert "Central Patrimonium" in text
    assert "No issues found." in text


def test_validate_exits_non_zero_on_errors(tmp_path: Path):
    path = tmp_path / "roster.yaml"
    path.write_text(
        'operators:\n  - {id: a, name: A, shift_kind: 6x18, weekdays: mon, start: "8am", end: "14:00"}\n',
        encoding="utf-8",
    )
    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 1
    assert "is not HH:MM" in squash(cli_text(result))


def test_missing_roster_file(tmp_path: Path):
    result = runner.invoke(app, ["board", str(tmp_path / "nope.yaml")])
    assert result.exit_code == 1
    assert "Roster file not found" in cli_text(result)


def test_board_at_fixed_instant(central_path: Path):
    result = runner.invoke(
        app, ["board", str(central_path), "--at", "2025-03-08T22:30", "--no-notes"]
    )
    assert result.exit_code == 0, cli_text(result)
    text = cli_text(result)
    assert "Carla Dias" in text
    assert "Elisa Prado" in text
    assert "Santana" in text
    assert "Alarm peak" not in text


def test_board_rejects_bad_timestamp(central_path: Path):
    result = runner.invoke(app, ["board", str(central_path), "--at", "yesterday"])
    assert result.exit_code != 0


def test_board_appends_telemetry(central_path: Path, tmp_path: Path):
    log = tmp_path / "board.jsonl"
    result = runner.invoke(
        app,
        ["board", str(central_path), "--at", "2025-03-10T10:00", "--telemetry-log", str(log)],
    )
    assert result.exit_code == 0, cli_text(result)
    (record,) = list(read_jsonl(log))
    assert record["record_type"] == "board"
    assert record["groups"]["situator"] == ["op-elisa"]
    assert record["context"]["command"] == "board"


def test_leader_command(central_path: Path):
    result = runner.invoke(app, ["leader", str(central_path), "--at", "2025-03-11T03:00"])
    assert result.exit_code == 0, cli_text(result)
    assert "Night shift leader at 2025-03-11 03:00: Santana" in squash(cli_text(result))


def test_weekend_command_writes_csv(central_path: Path, tmp_path: Path):
    out = tmp_path / "weekend.csv"
    result = runner.invoke(
        app, ["weekend", str(central_path), "--today", "2025-03-05", "--out", str(out)]
    )
    assert result.exit_code == 0, cli_text(result)
    assert "Weekend 08/03 - 09/03" in cli_text(result)
    df = pd.read_csv(out)
    assert len(df) == 6
    assert set(df["source"]) == {"automatic", "manual"}


def test_timeline_command(central_path: Path):
    result = runner.invoke(app, ["timeline", str(central_path), "op-ana", "--width", "24"])
    assert result.exit_code == 0, cli_text(result)
    text = cli_text(result)
    assert "07:00-10:00" in text
    assert "IRIS + Situator" in text


def test_timeline_unknown_operator(central_path: Path):
    result = runner.invoke(app, ["timeline", str(central_path), "op-zzz"])
    assert result.exit_code == 1
    assert "Unknown operator" in cli_text(result)


def test_export_command(central_path: Path, tmp_path: Path):
    out = tmp_path / "nested" / "board.csv"
    result = runner.invoke(
        app,
        [
            "export",
            str(central_path),
            "--out",
            str(out),
            "--at",
            "2025-03-10T10:00",
            "--fallback",
            "operator",
        ],
    )
    assert result.exit_code == 0, cli_text(result)
    assert "2 on-shift entries written" in squash(cli_text(result))
    df = pd.read_csv(out)
    assert dict(zip(df["operator_id"], df["focus"])) == {"op-ana": "iris", "op-elisa": "situator"}


def test_export_rejects_unknown_fallback(central_path: Path, tmp_path: Path):
    result = runner.invoke(
        app,
        ["export", str(central_path), "--out", str(tmp_path / "b.csv"), "--fallback", "radar"],
    )
    assert result.exit_code != 0


def test_watch_runs_for_a_bounded_duration(central_path: Path, tmp_path: Path):
    log = tmp_path / "watch.jsonl"
    result = runner.invoke(
        app,
        [
            "watch",
            str(central_path),
            "--refresh",
            "0.1",
            "--duration",
            "0.3",
            "--telemetry-log",
            str(log),
        ],
    )
    assert result.exit_code == 0, cli_text(result)
    records = list(read_jsonl(log))
    assert records and records[0]["context"]["command"] == "watch"
