"""Static JSON payload templates and override merging.

Fixtures live under `fixtures/<type>/<name>.json` (PUT payloads under
`fixtures/<type>/put/`). Callers always receive a deep copy so scenario-level
edits never leak into the next scenario.
"""

from __future__ import annotations

import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from content_e2e.errors import FixtureNotFoundError


DEFAULT_FIXTURES_DIR = Path("fixtures")


class _Omit:
    """Override value that removes the key instead of setting it."""

    _instance: Optional["_Omit"] = None

    def __new__(cls) -> "_Omit":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OMIT"


OMIT = _Omit()


@lru_cache(maxsize=256)
def _read(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def fixture_file(name: str, fixtures_dir: Optional[Path] = None) -> Path:
    root = Path(fixtures_dir) if fixtures_dir is not None else DEFAULT_FIXTURES_DIR
    rel = name if name.endswith(".json") else f"{name}.json"
    return root / rel


def load_fixture(name: str, fixtures_dir: Optional[Path] = None) -> Any:
    path = fixture_file(name, fixtures_dir)
    if not path.is_file():
        raise FixtureNotFoundError(str(path))
    return copy.deepcopy(_read(str(path.resolve())))


def fixture_entry(name: str, entry: str, fixtures_dir: Optional[Path] = None) -> Any:
    """Return one named payload from a multi-payload fixture (e.g. positivePayloads)."""
    data = load_fixture(name, fixtures_dir)
    if not isinstance(data, dict) or entry not in data:
        raise FixtureNotFoundError(f"{fixture_file(name, fixtures_dir)}#{entry}")
    return data[entry]


def merge_payload(payload: Mapping[str, Any], overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    body = dict(payload)
    for key, value in (overrides or {}).items():
        if value is OMIT:
            body.pop(key, None)
        else:
            body[key] = value
    return body


def without(payload: Mapping[str, Any], *keys: str) -> Dict[str, Any]:
    return merge_payload(payload, {k: OMIT for k in keys})


__all__ = [
    "DEFAULT_FIXTURES_DIR",
    "OMIT",
    "fixture_entry",
    "fixture_file",
    "load_fixture",
    "merge_payload",
    "without",
]
