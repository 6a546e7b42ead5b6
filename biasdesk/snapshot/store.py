"""Snapshot stores: an append-only log whose newest entry is served."""

import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from psycopg import Error

from ..db import get_connection
from ..db.snapshots import SnapshotManager
from ..errors import SnapshotStoreError
from ..models import Snapshot


class SnapshotStore(ABC):
    """Append-only snapshot log."""

    @abstractmethod
    def append(self, payload: Dict[str, Any]) -> Snapshot:
        """Store a new snapshot and return it with its id and creation time."""

    @abstractmethod
    def latest(self) -> Optional[Snapshot]:
        """The most recently created snapshot, or None if there is none."""


class MemorySnapshotStore(SnapshotStore):
    """Process-local snapshot log."""

    def __init__(self) -> None:
        self._snapshots: List[Snapshot] = []
        self._lock = threading.Lock()

    def append(self, payload: Dict[str, Any]) -> Snapshot:
        with self._lock:
            snapshot = Snapshot(
                id=len(self._snapshots) + 1,
                created_at=datetime.now(timezone.utc),
                payload=payload,
            )
            self._snapshots.append(snapshot)
        return snapshot

    def latest(self) -> Optional[Snapshot]:
        with self._lock:
            if not self._snapshots:
                return None
            return max(self._snapshots, key=lambda s: (s.created_at, s.id))

    def __len__(self) -> int:
        return len(self._snapshots)


class PostgresSnapshotStore(SnapshotStore):
    """Snapshots in the `bias_matched_snapshots` table."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        self.db_config = db_config
        self.manager = SnapshotManager()

    def append(self, payload: Dict[str, Any]) -> Snapshot:
        try:
            with get_connection(self.db_config) as conn:
                row = self.manager.insert_snapshot(conn, payload)
        except Error as e:
            raise SnapshotStoreError(f"Failed to store snapshot: {e}") from e
        return Snapshot(**row)

    def latest(self) -> Optional[Snapshot]:
        try:
            with get_connection(self.db_config) as conn:
                row = self.manager.get_latest_snapshot(conn)
        except Error as e:
            raise SnapshotStoreError(f"Failed to read snapshot: {e}") from e
        return Snapshot(**row) if row else None
