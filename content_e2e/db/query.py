"""`queryDatabase` task: run one parameterized SQL statement.

Statements use PostgreSQL-style positional placeholders (``$1``, ``$2`` ...).
They are rewritten to named binds so the same SQL runs through SQLAlchemy on
any dialect. One connection is opened per call and always closed; failures are
re-raised as `DatabaseQueryError` with the driver message appended.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from content_e2e.db.base import create_task_engine
from content_e2e.errors import DatabaseQueryError

logger = logging.getLogger(__name__)

# A $N placeholder or a single-quoted literal
_TOKEN = re.compile(r"'(?:[^']|'')*'|\$(\d+)")


def bind_positional(query: str, values: Optional[Sequence[Any]] = None) -> tuple[str, Dict[str, Any]]:
    """Rewrite ``$N`` placeholders to ``(:pN)`` and build the bind mapping.

    The parentheses keep PostgreSQL casts such as ``$1::text`` valid after the
    rewrite. Placeholders inside quoted literals are left alone and colons in
    them are escaped, so `text()` does not read `:word` as a bind.
    """

    def repl(m: re.Match[str]) -> str:
        if m.group(1) is None:
            return m.group(0).replace(":", r"\:")
        return f"(:p{int(m.group(1))})"

    rewritten = _TOKEN.sub(repl, query)
    params = {f"p{i}": v for i, v in enumerate(values or [], start=1)}
    return rewritten, params


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig).strip() or type(orig).__name__
    return str(exc).strip() or type(exc).__name__


def query_database(
    query: str,
    values: Optional[Sequence[Any]] = None,
    *,
    url: Optional[Union[str, URL]] = None,
) -> List[Dict[str, Any]]:
    """Execute `query` with positional `values` and return rows as dicts.

    Statements that return no rows (DML/DDL) yield an empty list. The engine
    is disposed in all cases, so no connection outlives the call.
    """
    sql, params = bind_positional(query, values)
    engine = None
    try:
        engine = create_task_engine(url)
        with engine.begin() as conn:
            result = conn.execute(text(sql), params)
            if not result.returns_rows:
                return []
            return [dict(row._mapping) for row in result]
    except SQLAlchemyError as exc:
        message = _driver_message(exc)
        logger.error("queryDatabase failed: %s", message)
        raise DatabaseQueryError(message) from exc
    finally:
        if engine is not None:
            engine.dispose()


__all__ = ["bind_positional", "query_database"]
