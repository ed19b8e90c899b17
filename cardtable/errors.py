"""Error taxonomy for game sessions.

Each error also derives from the closest builtin exception so callers can
catch either the specific class or the generic one.
"""


class GameError(Exception):
    """Base class for all game errors."""


class InvalidConfigurationError(GameError, ValueError):
    """Session configuration is outside the variant's bounds."""


class InvalidStateError(GameError, RuntimeError):
    """Operation is not allowed in the current lifecycle phase."""


class InvalidMoveError(GameError, ValueError):
    """A player attempted an action the rules do not allow."""


class DeckExhaustedError(GameError, IndexError):
    """Not enough cards remain in the deck."""


class SnapshotNotFoundError(GameError, KeyError):
    """No snapshot stored under the requested session id."""
