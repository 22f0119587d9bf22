"""Roster I/O helpers."""

from .loaders import TABLES, load_roster, read_csv

__all__ = ["TABLES", "load_roster", "read_csv"]
