from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import click
import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from watchfloor.cli.watch_dashboard import LiveBoard, WatchConfig, render_board
from watchfloor.core.errors import WatchfloorValueError
from watchfloor.evaluation import board_dataframe, weekend_dataframe
from watchfloor.planning import next_weekend, weekend_schedule
from watchfloor.resolution import (
    FallbackFocus,
    ResolverOptions,
    resolve_board,
    resolve_leader,
    shift_period,
    timeline_segments,
)
from watchfloor.roster.contract import RosterSnapshot
from watchfloor.roster.io import load_roster
from watchfloor.telemetry import BoardTelemetryLogger
from watchfloor.validation import check_roster, has_errors

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
FALLBACK_MODE = click.Choice([mode.value for mode in FallbackFocus], case_sensitive=False)

_AT_HELP = "Resolve at this ISO timestamp (e.g. 2025-03-10T05:30) instead of the wall clock."


def _load(roster: Path) -> RosterSnapshot:
    try:
        return load_roster(roster)
    except FileNotFoundError as exc:
        console.print(f"[red]Roster file not found:[/red] {exc}")
        raise typer.Exit(1)
    except (yaml.YAMLError, ValidationError, WatchfloorValueError) as exc:
        console.print(f"[red]Invalid roster:[/red] {exc}")
        raise typer.Exit(1)


def _parse_at(value: str | None) -> datetime:
    if value is None:
        return datetime.now()
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"'{value}' is not an ISO timestamp") from exc


def _parse_day(value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"'{value}' is not an ISO date") from exc


def _options(fallback: str) -> ResolverOptions:
    return ResolverOptions(fallback=FallbackFocus(fallback.lower()))


@app.command()
def validate(roster: Path):
    """Validate a roster bundle and report consistency issues."""
    snapshot = _load(roster)
    t = Table(title=f"Roster: {snapshot.name}")
    t.add_column("Entities")
    t.add_column("Count", justify="right")
    t.add_row("Operators", str(len(snapshot.operators)))
    t.add_row("Active operators", str(len(snapshot.active_operators())))
    t.add_row("Focus periods", str(len(snapshot.focus_periods)))
    t.add_row("Manual allocations", str(len(snapshot.manual_allocations)))
    t.add_row(
        "Manual sub-periods",
        str(sum(len(item.periods) for item in snapshot.manual_allocations)),
    )
    t.add_row("Status rows", str(len(snapshot.statuses)))
    t.add_row("Parity rule", snapshot.config.parity_rule)
    console.print(t)

    issues = check_roster(snapshot)
    if not issues:
        console.print("[green]No issues found.[/green]")
        return
    issue_table = Table(title="Issues")
    issue_table.add_column("Severity")
    issue_table.add_column("Subject")
    issue_table.add_column("Message")
    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        issue_table.add_row(f"[{colour}]{issue.severity}[/{colour}]", issue.subject, issue.message)
    console.print(issue_table)
    if has_errors(issues):
        raise typer.Exit(1)


@app.command()
def board(
    roster: Path,
    at: str | None = typer.Option(None, "--at", help=_AT_HELP),
    fallback: str = typer.Option(
        FallbackFocus.SUPPORT.value,
        "--fallback",
        click_type=FALLBACK_MODE,
        help="Focus for on-shift operators outside any period: support|operator.",
    ),
    notes: bool = typer.Option(True, "--notes/--no-notes", help="Show observations."),
    telemetry_log: Path | None = typer.Option(
        None, "--telemetry-log", help="Append the resolved board to this JSONL file."
    ),
):
    """Resolve who is on shift and print the board once."""
    snapshot = _load(roster)
    state = resolve_board(_parse_at(at), snapshot, _options(fallback))
    console.print(render_board(state, show_observations=notes))
    if telemetry_log is not None:
        logger = BoardTelemetryLogger(
            telemetry_log, context={"command": "board", "roster_path": str(roster)}
        )
        logger.record(state)
        console.print(f"[dim]Board appended to {telemetry_log}[/dim]")


@app.command()
def leader(
    roster: Path,
    at: str | None = typer.Option(None, "--at", help=_AT_HELP),
):
    """Print the acting shift leader."""
    snapshot = _load(roster)
    now = _parse_at(at)
    name = resolve_leader(now, snapshot.config)
    period = "Day" if shift_period(now) == "day" else "Night"
    console.print(f"{period} shift leader at {now:%Y-%m-%d %H:%M}: [bold]{name}[/bold]")


@app.command()
def weekend(
    roster: Path,
    today: str | None = typer.Option(None, "--today", help="Reference date (ISO)."),
    out: Path | None = typer.Option(None, "--out", help="Write the plan to CSV."),
):
    """Show coverage for the next weekend (rotation plus manual allocations)."""
    snapshot = _load(roster)
    reference = _parse_day(today)
    saturday, sunday = next_weekend(reference)
    slots = weekend_schedule(snapshot, reference)
    t = Table(title=f"Weekend {saturday:%d/%m} - {sunday:%d/%m}")
    t.add_column("Date")
    t.add_column("Operator")
    t.add_column("Window", justify="center")
    t.add_column("Focus")
    t.add_column("Source")
    t.add_column("Note", style="dim")
    for slot in slots:
        t.add_row(
            f"{slot.date:%a %d/%m}",
            slot.name,
            f"{slot.start or '?'}-{slot.end or '?'}",
            slot.focus.label,
            slot.source.value,
            slot.observation or "",
        )
    console.print(t)
    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        weekend_dataframe(slots).to_csv(out, index=False)
        console.print(f"Weekend plan written to {out}")


@app.command()
def timeline(
    roster: Path,
    operator_id: str,
    width: int = typer.Option(48, "--width", min=12, help="Bar width in characters."),
):
    """Render an operator's focus periods across the primary shift window."""
    snapshot = _load(roster)
    operator = snapshot.operator(operator_id)
    if operator is None:
        console.print(f"[red]Unknown operator:[/red] {operator_id}")
        raise typer.Exit(1)
    segments = timeline_segments(operator, snapshot.periods_for(operator.id))
    if not segments:
        console.print(
            f"[yellow]{operator.name}: no timeline (window {operator.start}-{operator.end}, "
            f"{len(snapshot.periods_for(operator.id))} periods)[/yellow]"
        )
        return
    t = Table(title=f"{operator.name} {operator.start}-{operator.end}")
    t.add_column("Period")
    t.add_column("Focus")
    t.add_column("Timeline")
    t.add_column("Note", style="dim")
    for segment in segments:
        lead = int(round(segment.offset * width))
        span = max(1, int(round(segment.width * width)))
        bar = "." * lead + "#" * span
        t.add_row(
            f"{segment.start}-{segment.end}",
            segment.focus.label,
            bar[:width].ljust(width, "."),
            segment.observation or "",
        )
    console.print(t)


@app.command()
def export(
    roster: Path,
    out: Path = typer.Option(..., "--out", help="Output CSV path"),
    at: str | None = typer.Option(None, "--at", help=_AT_HELP),
    fallback: str = typer.Option(
        FallbackFocus.SUPPORT.value, "--fallback", click_type=FALLBACK_MODE
    ),
):
    """Write the resolved board as CSV (one row per on-shift operator)."""
    snapshot = _load(roster)
    state = resolve_board(_parse_at(at), snapshot, _options(fallback))
    out.parent.mkdir(parents=True, exist_ok=True)
    board_dataframe(state).to_csv(out, index=False)
    console.print(f"{len(state.entries)} on-shift entries written to {out}")


@app.command()
def watch(
    roster: Path,
    refresh: float = typer.Option(1.0, "--refresh", min=0.1, help="Seconds between redraws."),
    reload: float = typer.Option(60.0, "--reload", min=1.0, help="Seconds between roster reloads."),
    fallback: str = typer.Option(
        FallbackFocus.SUPPORT.value, "--fallback", click_type=FALLBACK_MODE
    ),
    notes: bool = typer.Option(True, "--notes/--no-notes"),
    telemetry_log: Path | None = typer.Option(
        None, "--telemetry-log", help="Append board transitions to this JSONL file."
    ),
    duration: float | None = typer.Option(
        None, "--duration", help="Stop after this many seconds (default: until Ctrl+C)."
    ),
):
    """Run the live board, re-resolving on every refresh."""
    _load(roster)
    telemetry = None
    if telemetry_log is not None:
        telemetry = BoardTelemetryLogger(
            telemetry_log, context={"command": "watch", "roster_path": str(roster)}
        )
    live = LiveBoard(
        roster,
        config=WatchConfig(
            refresh_interval=refresh, reload_interval=reload, show_observations=notes
        ),
        options=_options(fallback),
        console=console,
        telemetry=telemetry,
    )
    try:
        with live:
            live.wait(duration)
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


if __name__ == "__main__":
    app()
