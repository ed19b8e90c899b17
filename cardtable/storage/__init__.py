"""Snapshot persistence."""

from .base import SnapshotStore
from .file import FileSnapshotStore
from .memory import MemorySnapshotStore

__all__ = [
    "FileSnapshotStore",
    "MemorySnapshotStore",
    "SnapshotStore",
]
