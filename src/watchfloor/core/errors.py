"""Common watchfloor-specific exceptions."""


class WatchfloorValueError(ValueError):
    """Raised when watchfloor detects invalid user-provided roster data."""


class RosterReferenceError(WatchfloorValueError):
    """Raised when a manual sub-period references an allocation that does not exist."""


__all__ = ["WatchfloorValueError", "RosterReferenceError"]
