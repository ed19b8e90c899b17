"""In-process snapshot store."""

from cardtable.errors import SnapshotNotFoundError
from cardtable.models.game_state import GameType
from cardtable.models.snapshot import GameSnapshot

from .base import SnapshotStore


class MemorySnapshotStore(SnapshotStore):
    """Keeps deep copies of snapshots in a dict."""

    def __init__(self) -> None:
        self._snapshots: dict[str, GameSnapshot] = {}

    def save(self, snapshot: GameSnapshot) -> None:
        self._snapshots[snapshot.game_id] = snapshot.model_copy(deep=True)

    def load(self, session_id: str) -> GameSnapshot:
        try:
            return self._snapshots[session_id].model_copy(deep=True)
        except KeyError:
            raise SnapshotNotFoundError(session_id) from None

    def list(self, game_type: GameType | None = None) -> list[str]:
        return [
            key for key, snap in self._snapshots.items()
            if game_type is None or snap.game_type == game_type
        ]

    def delete(self, session_id: str) -> None:
        if self._snapshots.pop(session_id, None) is None:
            raise SnapshotNotFoundError(session_id)
