"""Snapshot rows in the database."""

from typing import Any, Dict, Optional

from psycopg import Connection
from psycopg.types.json import Jsonb


class SnapshotManager:
    """Append and read matched-story snapshots."""

    def insert_snapshot(self, conn: Connection, payload: Dict[str, Any]) -> Dict:
        """
        Append a snapshot row.

        Returns:
            The inserted row (id, payload, created_at)
        """
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO bias_matched_snapshots (payload)
                VALUES (%s)
                RETURNING id, payload, created_at
                """,
                (Jsonb(payload),),
            )
            row = cur.fetchone()

        conn.commit()
        return row

    def get_latest_snapshot(self, conn: Connection) -> Optional[Dict]:
        """Most recently created snapshot row."""
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT id, payload, created_at
                FROM bias_matched_snapshots
                ORDER BY created_at DESC, id DESC
                LIMIT 1
                """
            )
            return cur.fetchone()
