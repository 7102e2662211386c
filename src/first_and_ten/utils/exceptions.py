"""Custom exceptions for the First & 10 simulation engine."""


class FirstAndTenError(Exception):
    """Base exception for the simulation engine."""
    pass


class RosterSpecError(FirstAndTenError):
    """Raised when a command-line roster tier spec cannot be parsed."""
    pass


class GameStateError(FirstAndTenError):
    """Raised when the game state machine is driven into an illegal state."""
    pass
