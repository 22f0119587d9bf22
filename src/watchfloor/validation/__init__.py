"""Roster consistency checks."""

from .roster import TIME_PATTERN, RosterIssue, check_roster, has_errors

__all__ = ["TIME_PATTERN", "RosterIssue", "check_roster", "has_errors"]
