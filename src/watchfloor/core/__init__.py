"""Core utilities shared across watchfloor modules."""

from .errors import RosterReferenceError, WatchfloorValueError

__all__ = ["WatchfloorValueError", "RosterReferenceError"]
