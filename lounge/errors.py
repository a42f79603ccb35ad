"""Exceptions raised by the lounge optimizer."""


class LoungeError(Exception):
    """Base class for every optimizer failure."""


class InvalidInputError(LoungeError, ValueError):
    """Caller supplied an out-of-range week, level, point or time value."""


class InvariantError(LoungeError, AssertionError):
    """Internal consistency failure (downgrade, conflicting memo write)."""


class OptimizationAborted(LoungeError):
    """The caller's abort callback asked the search to stop."""
