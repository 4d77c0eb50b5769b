"""Response-shape checks shared by scenarios and harness tests.

JSON Schema documents live beside this module in `schemas/`. Validation errors
surface as AssertionError with the failing path, so behave reports them as
ordinary step failures.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

from jsonschema import Draft202012Validator, FormatChecker


SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"
CONTENT_ID_RE = re.compile(r"^Q\d+$")
CONTENT_ROW_ID_RE = re.compile(r"^(Q\d+)_([a-z]{2})_(\d+)$")


@dataclass(frozen=True)
class ContentRowId:
    content_id: str
    language: str
    version: int


@lru_cache(maxsize=None)
def load_schema(name: str) -> Dict[str, Any]:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate(instance: Any, schema_name: str) -> None:
    validator = Draft202012Validator(load_schema(schema_name), format_checker=FormatChecker())
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    if errors:
        first = errors[0]
        where = "/".join(str(p) for p in first.path) or "<root>"
        raise AssertionError(f"{schema_name} validation failed at {where}: {first.message}")


def validate_content_reference(body: Any) -> None:
    validate(body, "ContentReference")


def validate_error_body(body: Any) -> None:
    validate(body, "ErrorMessage")


def validate_login_success(body: Any) -> None:
    validate(body, "LoginSuccess")


def validate_content_item(item: Any) -> None:
    validate(item, "ContentItem")


def parse_content_row_id(row_id: str) -> ContentRowId:
    m = CONTENT_ROW_ID_RE.match(str(row_id or ""))
    if not m:
        raise ValueError(f"Not a content_row_id: {row_id!r}")
    return ContentRowId(content_id=m.group(1), language=m.group(2), version=int(m.group(3)))


def is_json_response(headers: Mapping[str, str]) -> bool:
    for key, value in headers.items():
        if str(key).lower() == "content-type":
            return "application/json" in str(value).lower()
    return False


def assert_status_in(actual: int, expected: Iterable[int]) -> None:
    allowed = sorted(set(int(c) for c in expected))
    assert actual in allowed, f"Expected status in {allowed}, got {actual}"


__all__ = [
    "CONTENT_ID_RE",
    "CONTENT_ROW_ID_RE",
    "ContentRowId",
    "SCHEMAS_DIR",
    "assert_status_in",
    "is_json_response",
    "load_schema",
    "parse_content_row_id",
    "validate",
    "validate_content_item",
    "validate_content_reference",
    "validate_error_body",
    "validate_login_success",
]
