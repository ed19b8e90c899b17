"""Snapshot store backed by a directory of JSON documents."""

import logging
import re
from pathlib import Path

from cardtable.errors import SnapshotNotFoundError
from cardtable.models.game_state import GameType
from cardtable.models.snapshot import GameSnapshot

from .base import SnapshotStore

logger = logging.getLogger(__name__)

# Session ids become file names
_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class FileSnapshotStore(SnapshotStore):
    """One pretty-printed `<game_id>.json` file per session."""

    suffix = ".json"

    def __init__(self, directory: Path | str):
        """Initialize store.

        Args:
            directory: Where snapshot files live (created if missing)
        """
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, session_id: str) -> Path:
        if not _SAFE_ID.match(session_id):
            raise ValueError(f"Invalid session id: {session_id!r}")
        return self.directory / f"{session_id}{self.suffix}"

    def save(self, snapshot: GameSnapshot) -> None:
        path = self._path(snapshot.game_id)
        path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(f"Saved snapshot {snapshot.snapshot_id} to {path}")

    def load(self, session_id: str) -> GameSnapshot:
        path = self._path(session_id)
        if not path.exists():
            raise SnapshotNotFoundError(session_id)
        return GameSnapshot.model_validate_json(path.read_text(encoding="utf-8"))

    def list(self, game_type: GameType | None = None) -> list[str]:
        ids = sorted(p.stem for p in self.directory.glob(f"*{self.suffix}"))
        if game_type is None:
            return ids
        return [i for i in ids if self.load(i).game_type == game_type]

    def delete(self, session_id: str) -> None:
        path = self._path(session_id)
        if not path.exists():
            raise SnapshotNotFoundError(session_id)
        path.unlink()
        logger.debug(f"Deleted snapshot {session_id}")
