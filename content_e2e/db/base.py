"""SQLAlchemy engine construction for harness tasks.

Every task call gets its own engine backed by `NullPool`, so a connection is
opened on checkout and really closed on checkin. Nothing is cached at module
level: each query is independent of the ones before it.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)


def default_url() -> URL:
    from content_e2e.config import load_config

    return load_config().database.url()


def create_task_engine(url: Optional[Union[str, URL]] = None) -> Engine:
    """Return a fresh, unpooled Engine for one task invocation."""
    resolved = url if url is not None else default_url()
    return create_engine(resolved, poolclass=NullPool, future=True)
