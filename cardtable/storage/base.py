"""Snapshot store interface."""

from abc import ABC, abstractmethod

from cardtable.models.game_state import GameType
from cardtable.models.snapshot import GameSnapshot


class SnapshotStore(ABC):
    """Key-value store of game snapshots, keyed by game id.

    Saving under an existing key replaces the earlier snapshot.
    """

    @abstractmethod
    def save(self, snapshot: GameSnapshot) -> None:
        """Store a snapshot under its game id."""

    @abstractmethod
    def load(self, session_id: str) -> GameSnapshot:
        """Load the snapshot of a session.

        Raises:
            SnapshotNotFoundError: If nothing is stored under `session_id`.
        """

    @abstractmethod
    def list(self, game_type: GameType | None = None) -> list[str]:
        """Stored session ids, optionally only those of one variant."""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove a stored snapshot.

        Raises:
            SnapshotNotFoundError: If nothing is stored under `session_id`.
        """
