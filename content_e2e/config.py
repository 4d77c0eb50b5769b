"""Configuration for the end-to-end suite.

Settings are resolved with the following rules:
- Primary source: `e2e_config.json` at the project root (base URL, feature list).
- Overrides: the JSON env file (default `e2e.env.json`), then environment variables.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator
from sqlalchemy.engine import URL

from content_e2e.env_file import read_env_file, resolve_env_path


ROOT_E2E_CONFIG = Path("e2e_config.json")
DEFAULT_FEATURES = ["tests/integration/features"]
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")
logger = logging.getLogger(__name__)


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class DatabaseConfig(BaseModel):
    user: str = "postgres"
    password: Optional[str] = None
    host: str = "localhost"
    port: int = Field(default=5432, gt=0, lt=65536)
    name: str = "postgres"
    # Table holding one row per question language/version
    table: str = "questions"

    @field_validator("table")
    @classmethod
    def table_must_be_identifier(cls, v: str) -> str:
        if not _IDENTIFIER.match(v or ""):
            raise ValueError("database.table must be a plain SQL identifier (optionally schema-qualified)")
        return v

    def url(self) -> URL:
        return URL.create(
            "postgresql+psycopg2",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.name,
        )

    def masked(self) -> str:
        """DSN safe for logs: password replaced by ***."""
        return self.url().render_as_string(hide_password=True)


class AuthConfig(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    product_id: Optional[str] = None
    device_id: Optional[str] = None
    access_token: Optional[str] = None


class RunnerConfig(BaseModel):
    base_url: str = "http://localhost:3000"
    features: List[str] = Field(default_factory=lambda: list(DEFAULT_FEATURES))
    fixtures_dir: str = "fixtures"
    env_file: str = "e2e.env.json"
    request_timeout: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        v = (v or "").strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("runner.base_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("features")
    @classmethod
    def features_must_be_non_empty(cls, v: List[str]) -> List[str]:
        cleaned = [str(p).strip() for p in v if str(p).strip()]
        if not cleaned:
            raise ValueError("runner.features must list at least one feature path")
        return cleaned


class E2EConfig(BaseModel):
    database: DatabaseConfig
    auth: AuthConfig
    runner: RunnerConfig


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config(env_file: Optional[str] = None, base_file: Optional[Path] = None) -> E2EConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) JSON env file (`E2E_ENV_FILE`, or `runner.env_file` from the base config)
    3) e2e_config.json at project root (primary base)
    4) Safe defaults for local runs
    """

    base = _read_json_file(base_file or ROOT_E2E_CONFIG)

    def _base(path: str, default: Any = None) -> Any:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return cur if cur is not None else default

    env_path = resolve_env_path(env_file or _env("E2E_ENV_FILE") or _base("runner.env_file"))
    env_json = read_env_file(env_path)

    def _pick(key: str, base_path: str, default: Any = None) -> Any:
        value = _env(key)
        if value not in (None, ""):
            return value
        value = env_json.get(key)
        if value not in (None, ""):
            return value
        return _base(base_path, default)

    def _opt_str(value: Any) -> Optional[str]:
        return None if value is None else str(value)

    try:
        database = DatabaseConfig(
            user=str(_pick("DB_USER", "database.user", "postgres")),
            password=_opt_str(_pick("DB_PASSWORD", "database.password")),
            host=str(_pick("DB_HOST", "database.host", "localhost")),
            port=int(str(_pick("DB_PORT", "database.port", 5432)).strip()),
            name=str(_pick("DB_NAME", "database.name", "postgres")),
            table=str(_pick("CONTENT_TABLE", "database.table", "questions")),
        )
        auth = AuthConfig(
            username=_opt_str(_pick("USERNAME", "auth.username")),
            password=_opt_str(_pick("PASSWORD", "auth.password")),
            product_id=_opt_str(_pick("PRODUCT_ID", "auth.product_id")),
            device_id=_opt_str(_pick("DEVICE_ID", "auth.device_id")),
            access_token=_opt_str(_pick("ACCESS_TOKEN", "auth.access_token")),
        )
        features_env = _env("E2E_FEATURES")
        features = (
            [p.strip() for p in features_env.split(",") if p.strip()]
            if features_env
            else list(_base("runner.features", DEFAULT_FEATURES))
        )
        runner = RunnerConfig(
            base_url=str(_env("BASE_URL") or _base("runner.base_url", "http://localhost:3000")),
            features=features,
            fixtures_dir=str(_env("E2E_FIXTURES_DIR") or _base("runner.fixtures_dir", "fixtures")),
            env_file=str(env_path),
            request_timeout=float(str(_env("E2E_REQUEST_TIMEOUT") or _base("runner.request_timeout", 30.0))),
        )
        return E2EConfig(database=database, auth=auth, runner=runner)
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid end-to-end configuration: %s", e)
        raise


__all__ = [
    "E2EConfig",
    "DatabaseConfig",
    "AuthConfig",
    "RunnerConfig",
    "load_config",
]
