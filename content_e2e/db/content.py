"""Read-only lookups against the service's question table.

These back the database-verification scenarios: the suite only ever SELECTs,
keyed by `content_id` or `content_row_id`. The table name comes from
configuration and is validated there as a plain identifier, so it is safe to
interpolate; every value goes through a positional bind.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy.engine import URL

from content_e2e.db.query import query_database


class ContentRepository:
    """Thin query helper bound to one table and one database URL."""

    def __init__(self, table: str = "questions", url: Optional[Union[str, URL]] = None) -> None:
        self.table = table
        self.url = url

    def _query(self, sql: str, values: List[Any]) -> List[Dict[str, Any]]:
        return query_database(sql, values, url=self.url)

    def fetch_content_row(self, content_id: str) -> Optional[Dict[str, Any]]:
        rows = self._query(f"SELECT * FROM {self.table} WHERE content_id = $1 LIMIT 1", [content_id])
        return rows[0] if rows else None

    def fetch_content_row_by_row_id(self, content_row_id: str) -> Optional[Dict[str, Any]]:
        rows = self._query(
            f"SELECT * FROM {self.table} WHERE content_row_id = $1 LIMIT 1", [content_row_id]
        )
        return rows[0] if rows else None

    def fetch_content_versions(self, content_id: str) -> List[Dict[str, Any]]:
        return self._query(
            f"SELECT * FROM {self.table} WHERE content_id = $1 ORDER BY content_row_id", [content_id]
        )

    def fetch_timestamps(self, content_id: str) -> Optional[Dict[str, Any]]:
        rows = self._query(
            f"SELECT created_at, updated_at FROM {self.table} WHERE content_id = $1 LIMIT 1",
            [content_id],
        )
        return rows[0] if rows else None

    def verify_content_fields(self, content_id: str, expected: Mapping[str, Any]) -> Dict[str, Any]:
        row = self.fetch_content_row(content_id)
        assert row is not None, f"Content {content_id} should exist in database"
        mismatches = {
            field: (want, row.get(field))
            for field, want in expected.items()
            if row.get(field) != want
        }
        assert not mismatches, f"Database row for {content_id} differs: " + ", ".join(
            f"{k}: expected {w!r}, got {g!r}" for k, (w, g) in mismatches.items()
        )
        return row


__all__ = ["ContentRepository"]
