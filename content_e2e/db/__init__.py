"""Database access for the suite.

Exposes the `queryDatabase` task implementation and the read-only content
lookups used by database-verification scenarios. There are no ORM models; the
schema belongs to the service under test.
"""

from content_e2e.db.base import create_task_engine
from content_e2e.db.content import ContentRepository
from content_e2e.db.query import bind_positional, query_database

__all__ = [
    "create_task_engine",
    "ContentRepository",
    "bind_positional",
    "query_database",
]
