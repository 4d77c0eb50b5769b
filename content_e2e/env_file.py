"""JSON env file used to carry state (e.g. an access token) between runs.

The file mirrors the credentials and database settings the suite needs. It is
mutated one key at a time by `update_env_file`, which never raises: runner
tasks must resolve to ``None`` even when the write fails, so failures are only
logged.

A missing file is treated like an empty one. Writes are atomic per process
(temp file + ``os.replace``) but there is no cross-process lock, so parallel
workers sharing one file can lose updates.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = Path("e2e.env.json")

# Keys reconstructed from the process environment when the file is unusable
DEFAULT_KEYS = (
    "USERNAME",
    "PASSWORD",
    "PRODUCT_ID",
    "DEVICE_ID",
    "ACCESS_TOKEN",
    "DB_USER",
    "DB_PASSWORD",
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
)

PathLike = Union[str, "os.PathLike[str]"]


def resolve_env_path(path: Optional[PathLike] = None) -> Path:
    if path:
        return Path(path)
    return Path(os.environ.get("E2E_ENV_FILE") or DEFAULT_ENV_FILE)


def default_env_values() -> Dict[str, str]:
    return {key: os.environ.get(key, "") for key in DEFAULT_KEYS}


def _load(path: Path) -> Optional[Dict[str, Any]]:
    """Return the parsed object, or None when the file is missing, empty or corrupt."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    if not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def read_env_file(path: Optional[PathLike] = None) -> Dict[str, Any]:
    target = resolve_env_path(path)
    try:
        return _load(target) or {}
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read env file %s: %s", target, e)
        return {}


def _write_atomic(path: Path, data: Dict[str, Any]) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    directory = path.parent if str(path.parent) else Path(".")
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(directory))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


def update_env_file(key: str, value: Any, path: Optional[PathLike] = None) -> None:
    """Persist one key/value pair into the env file.

    Empty or unparsable content is replaced by a default object built from the
    process environment before the key is merged. Always returns None.
    """
    target = resolve_env_path(path)
    try:
        current = _load(target)
        if current is None:
            logger.warning("Env file %s is empty or invalid; rebuilding defaults", target)
            current = default_env_values()
        current[key] = value
        _write_atomic(target, current)
        logger.info("Updated %s in %s", key, target)
    except (OSError, UnicodeDecodeError, TypeError, ValueError) as e:
        logger.error("Failed to update env file %s: %s", target, e)
    return None


__all__ = [
    "DEFAULT_ENV_FILE",
    "DEFAULT_KEYS",
    "default_env_values",
    "read_env_file",
    "resolve_env_path",
    "update_env_file",
]
