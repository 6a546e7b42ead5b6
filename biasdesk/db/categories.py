"""Special categories stored in the database."""

from typing import Any, Dict, List

from psycopg import Connection

from ..matching import CategoryProvider
from .connection import get_connection


class CategoryManager:
    """Read source categories."""

    def get_special_category_names(self, conn: Connection) -> List[str]:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT name FROM source_categories
                WHERE is_special = TRUE
                ORDER BY name
                """
            )
            rows = cur.fetchall()
        return [(row["name"] or "").strip() for row in rows if (row["name"] or "").strip()]


class PostgresCategoryProvider(CategoryProvider):
    """Special category names from the `source_categories` table."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        self.db_config = db_config
        self.manager = CategoryManager()

    def list_special_category_names(self) -> List[str]:
        with get_connection(self.db_config) as conn:
            return self.manager.get_special_category_names(conn)
