"""
Exceptions raised by the Euchre engine
"""


class InvalidAction(ValueError):
    """An action was rejected; the game state is unchanged."""


class InvariantViolation(AssertionError):
    """Internal consistency check failed (programming error)."""
