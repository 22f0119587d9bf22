from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.console import Console, Group
from rich.live import Live
from rich.table import Table

from watchfloor.core.errors import WatchfloorValueError
from watchfloor.resolution import (
    BOARD_GROUPS,
    BoardState,
    EntrySource,
    ResolverOptions,
    resolve_board,
)
from watchfloor.roster.contract import Focus, OperatorStatus, RosterSnapshot
from watchfloor.roster.io import load_roster
from watchfloor.telemetry import BoardTelemetryLogger

GROUP_STYLES: dict[Focus, str] = {
    Focus.IRIS: "dark_orange",
    Focus.SITUATOR: "deep_sky_blue1",
    Focus.SUPPORT: "green3",
}

STATUS_STYLES: dict[OperatorStatus, str] = {
    OperatorStatus.ON_DUTY: "green",
    OperatorStatus.PAUSED: "yellow",
    OperatorStatus.OFF_SHIFT: "red",
}


@dataclass(slots=True)
class WatchConfig:
    """Configuration for the live board."""

    refresh_interval: float = 1.0  # seconds between re-resolutions
    reload_interval: float = 60.0  # seconds between roster re-reads
    show_observations: bool = True


def _window(start: str | None, end: str | None) -> str:
    if not start and not end:
        return "-"
    return f"{start or '?'}-{end or '?'}"


def _group_table(state: BoardState, focus: Focus, show_observations: bool) -> Table:
    style = GROUP_STYLES.get(focus, "white")
    table = Table(title=f"[bold {style}]{focus.label}[/]", expand=True, show_lines=False)
    table.add_column("Operator", style=f"bold {style}")
    table.add_column("Window", justify="center", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    if show_observations:
        table.add_column("Note", style="dim")
    entries = state.group(focus)
    if not entries:
        table.add_row("[dim]nobody[/dim]", "", "", *([""] if show_observations else []))
    for entry in entries:
        name = entry.name
        if entry.source is EntrySource.MANUAL:
            name = f"{name} [magenta](manual)[/magenta]"
        if entry.focus is Focus.BOTH:
            name = f"{name} [cyan]*[/cyan]"
        status_style = STATUS_STYLES.get(entry.status, "white")
        row = [
            name,
            _window(entry.display_start, entry.display_end),
            f"[{status_style}]\u25cf {entry.status.label}[/{status_style}]",
        ]
        if show_observations:
            row.append(entry.observation or "")
        table.add_row(*row)
    return table


def render_board(
    state: BoardState,
    *,
    show_observations: bool = True,
    notice: str | None = None,
) -> Group:
    """Build the rich renderable for a resolved board (header plus one table per group)."""
    header = Table.grid(expand=True)
    header.add_column()
    header.add_column(justify="right")
    header.add_row(
        f"[bold]{state.roster}[/bold]",
        f"[bold]{state.generated_at:%d/%m/%Y %H:%M:%S}[/bold]",
    )
    header.add_row(
        "Live shift board",
        f"Leader: [bold]{state.leader}[/bold]",
    )
    header.add_row(
        f"Manager: {state.manager}" if state.manager else "",
        f"Shift: {'Day' if state.period == 'day' else 'Night'} | On shift: {len(state.entries)}",
    )

    columns = Table.grid(expand=True, padding=(0, 1))
    for _ in BOARD_GROUPS:
        columns.add_column(ratio=1)
    columns.add_row(*(_group_table(state, focus, show_observations) for focus in BOARD_GROUPS))

    parts: list = [header, columns]
    if notice:
        parts.append(f"[yellow]{notice}[/yellow]")
    return Group(*parts)


@dataclass
class LiveBoard:
    """Re-resolve the roster on a timer and render it with ``rich.live``.

    The roster files are re-read every ``reload_interval`` seconds; a failed reload keeps
    the previous snapshot and shows the error under the board.
    """

    roster_path: Path
    config: WatchConfig = field(default_factory=WatchConfig)
    options: ResolverOptions = field(default_factory=ResolverOptions)
    console: Console = field(default_factory=Console)
    clock: Callable[[], datetime] = datetime.now
    telemetry: BoardTelemetryLogger | None = None

    def __post_init__(self) -> None:
        self._snapshot: RosterSnapshot = load_roster(self.roster_path)
        self._loaded_at: datetime = self.clock()
        self._state: BoardState | None = None
        self._notice: str | None = None
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._live: Live | None = None

    @property
    def state(self) -> BoardState | None:
        return self._state

    @property
    def notice(self) -> str | None:
        return self._notice

    def __enter__(self) -> LiveBoard:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start(self) -> None:
        if self._live is not None:
            return
        self._stop.clear()
        self.tick()
        refresh = max(1, int(1 / max(self.config.refresh_interval, 0.1)))
        self._live = Live(self._render(), refresh_per_second=refresh, console=self.console)
        self._live.__enter__()
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=1)
            self._thread = None
        if self._live:
            self._live.__exit__(None, None, None)
            self._live = None

    def wait(self, timeout: float | None = None) -> bool:
        """Block until :meth:`stop` is called or ``timeout`` elapses."""
        return self._stop.wait(timeout)

    def _loop(self) -> None:
        while not self._stop.is_set():
            self._stop.wait(self.config.refresh_interval)
            if self._stop.is_set():
                break
            self.tick()
            if self._live:
                self._live.update(self._render())

    def _maybe_reload(self, now: datetime) -> None:
        if (now - self._loaded_at).total_seconds() < self.config.reload_interval:
            return
        self._loaded_at = now
        try:
            snapshot = load_roster(self.roster_path)
        except (OSError, yaml.YAMLError, ValidationError, WatchfloorValueError) as exc:
            self._notice = f"Roster reload failed at {now:%H:%M:%S}: {exc}"
            return
        self._snapshot = snapshot
        self._notice = None

    def tick(self) -> BoardState:
        """Resolve the board for the current clock value (one refresh step)."""
        now = self.clock()
        with self._lock:
            self._maybe_reload(now)
            state = resolve_board(now, self._snapshot, self.options)
            self._state = state
        if self.telemetry is not None:
            self.telemetry.record(state)
        return state

    def _render(self) -> Group:
        if self._state is None:
            return Group("[dim]Resolving roster...[/dim]")
        return render_board(
            self._state,
            show_observations=self.config.show_observations,
            notice=self._notice,
        )
