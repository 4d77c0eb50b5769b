"""Task dispatch between scenario code and harness-side I/O.

Scenario steps never touch the database driver or the env file directly; they
call a named task with a single argument object, as a browser-side test would
call into its runner. Two tasks are registered by default:

- ``queryDatabase``: ``{"query": str, "values": list}`` -> list of row dicts
- ``updateEnvFile``: ``{"key": str, "value": Any}`` -> None
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from content_e2e.config import E2EConfig
from content_e2e.db.query import query_database
from content_e2e.env_file import update_env_file
from content_e2e.errors import UnknownTaskError

logger = logging.getLogger(__name__)

TaskFn = Callable[[Any], Any]


class TaskRegistry:
    def __init__(self) -> None:
        self._tasks: Dict[str, TaskFn] = {}

    def register(self, name: str, fn: TaskFn) -> None:
        if name in self._tasks:
            logger.warning("Task %s re-registered; previous handler replaced", name)
        self._tasks[name] = fn

    def register_many(self, tasks: Mapping[str, TaskFn]) -> None:
        for name, fn in tasks.items():
            self.register(name, fn)

    def names(self) -> list[str]:
        return sorted(self._tasks)

    def run(self, name: str, arg: Any = None) -> Any:
        try:
            fn = self._tasks[name]
        except KeyError:
            raise UnknownTaskError(name) from None
        return fn(arg)


def build_default_registry(config: E2EConfig, *, db_url: Optional[Any] = None) -> TaskRegistry:
    """Registry wired to the configured database and env file."""
    url = db_url if db_url is not None else config.database.url()
    env_path = config.runner.env_file

    def _query(arg: Mapping[str, Any]) -> Any:
        return query_database(arg["query"], list(arg.get("values") or []), url=url)

    def _update_env(arg: Mapping[str, Any]) -> None:
        update_env_file(arg["key"], arg.get("value"), env_path)
        return None

    registry = TaskRegistry()
    registry.register_many({"queryDatabase": _query, "updateEnvFile": _update_env})
    return registry


__all__ = ["TaskRegistry", "build_default_registry"]
