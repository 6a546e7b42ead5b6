"""Snapshot storage, caching and scheduled refresh."""

from .cache import MAX_READ_LIMIT, SnapshotCache
from .scheduler import SnapshotScheduler
from .store import MemorySnapshotStore, PostgresSnapshotStore, SnapshotStore

__all__ = [
    "MAX_READ_LIMIT",
    "MemorySnapshotStore",
    "PostgresSnapshotStore",
    "SnapshotCache",
    "SnapshotScheduler",
    "SnapshotStore",
]
