"""Shift resolution and live status board for a monitoring center."""

from watchfloor.resolution import ResolverOptions, resolve_board, resolve_leader, resolve_operator
from watchfloor.roster.io import load_roster

__version__ = "0.3.0"

__all__ = [
    "ResolverOptions",
    "load_roster",
    "resolve_board",
    "resolve_leader",
    "resolve_operator",
    "__version__",
]
