"""Helpers shared by the behave step modules.

Step text carries values as JSON literals (`"abc"`, `-1`, `[]`, `null`) and
may reference values captured earlier in the scenario as `{alias}`. Payload
fields are addressed with dotted paths, so PUT bodies can reach into
`content_details`.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

import httpx


_VAR_RE = re.compile(r"\{([A-Za-z0-9_\-]+)\}")


def interpolate(value: str, variables: Optional[Mapping[str, Any]] = None) -> str:
    """Replace `{name}` with captured values; unknown names are left untouched."""
    vars_map = variables or {}

    def repl(m: re.Match) -> str:
        key = m.group(1)
        return str(vars_map[key]) if key in vars_map else m.group(0)

    return _VAR_RE.sub(repl, value)


def unquote(value: str) -> str:
    v = value.strip()
    if len(v) >= 2 and v[0] == v[-1] and v[0] in {'"', "'"}:
        return v[1:-1]
    return v


def parse_value(raw: str, variables: Optional[Mapping[str, Any]] = None) -> Any:
    """Decode a step literal as JSON, falling back to the bare string."""
    text = interpolate(raw.strip(), variables)
    try:
        return json.loads(text)
    except ValueError:
        return unquote(text)


def _split(path: str) -> List[Any]:
    parts: List[Any] = []
    for token in path.split("."):
        if token.isdigit():
            parts.append(int(token))
        else:
            parts.append(token)
    return parts


def get_path(data: Any, path: str) -> Any:
    """Read `a.b.0.c` from nested dicts/lists; raises AssertionError when absent."""
    cur = data
    for part in _split(path):
        if isinstance(part, int) and isinstance(cur, list):
            if part >= len(cur):
                raise AssertionError(f"path not found: {path}")
            cur = cur[part]
        elif isinstance(cur, dict) and part in cur:
            cur = cur[part]
        elif isinstance(cur, dict) and str(part) in cur:
            cur = cur[str(part)]
        else:
            raise AssertionError(f"path not found: {path}")
    return cur


def set_path(data: MutableMapping[str, Any], path: str, value: Any) -> None:
    parts = _split(path)
    cur: Any = data
    for part in parts[:-1]:
        if isinstance(cur, list):
            cur = cur[part]
            continue
        key = str(part)
        if not isinstance(cur.get(key), (dict, list)):
            cur[key] = {}
        cur = cur[key]
    last = parts[-1]
    if isinstance(cur, list) and isinstance(last, int):
        cur[last] = value
    else:
        cur[str(last)] = value


def remove_path(data: MutableMapping[str, Any], path: str) -> None:
    parts = _split(path)
    cur: Any = data
    for part in parts[:-1]:
        try:
            cur = cur[part] if isinstance(cur, list) else cur[str(part)]
        except (KeyError, IndexError, TypeError):
            return
    last = parts[-1]
    if isinstance(cur, list) and isinstance(last, int):
        if last < len(cur):
            del cur[last]
    elif isinstance(cur, dict):
        cur.pop(str(last), None)


def snapshot(resp: httpx.Response) -> Dict[str, Any]:
    """Plain-dict view of a response, kept on `context.last_response`."""
    try:
        body_json = resp.json()
    except ValueError:
        body_json = None
    return {
        "status": resp.status_code,
        "headers": dict(resp.headers),
        "json": body_json,
        "text": resp.text,
        "path": resp.request.url.raw_path.decode("ascii", "replace"),
        "method": resp.request.method,
        "elapsed_ms": resp.elapsed.total_seconds() * 1000.0,
    }


def header(headers: Mapping[str, Any], name: str) -> Optional[str]:
    want = name.lower()
    for key, value in (headers or {}).items():
        if str(key).lower() == want:
            return str(value)
    return None


__all__ = [
    "get_path",
    "header",
    "interpolate",
    "parse_value",
    "remove_path",
    "set_path",
    "snapshot",
    "unquote",
]
