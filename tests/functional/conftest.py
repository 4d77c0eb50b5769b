"""Shared fixtures for harness tests.

These tests never reach the live API or PostgreSQL: database tasks run against
a file-backed SQLite database under `tmp_path`, and HTTP goes through an
`httpx.MockTransport`.
"""

from __future__ import annotations

import pathlib

import pytest
from sqlalchemy import create_engine, text

from content_e2e.config import AuthConfig, DatabaseConfig, E2EConfig, RunnerConfig
from content_e2e.env_file import DEFAULT_KEYS

ROOT = pathlib.Path(__file__).resolve().parents[2]
FIXTURES_DIR = ROOT / "fixtures"

_ENV_KEYS = DEFAULT_KEYS + (
    "BASE_URL",
    "CONTENT_TABLE",
    "E2E_ENV_FILE",
    "E2E_FEATURES",
    "E2E_LOG_LEVEL",
    "E2E_FIXTURES_DIR",
    "E2E_REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep the developer's shell settings out of every test."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """SQLite database with a `questions` table shaped like the service's."""
    url = f"sqlite:///{tmp_path / 'content.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE questions ("
                " content_id TEXT NOT NULL,"
                " content_row_id TEXT PRIMARY KEY,"
                " question_type TEXT NOT NULL,"
                " created_at TEXT NOT NULL,"
                " updated_at TEXT NOT NULL)"
            )
        )
        conn.execute(
            text(
                "INSERT INTO questions VALUES"
                " ('Q100', 'Q100_en_1', 'Blank', '2024-01-01T00:00:00', '2024-01-01T00:00:00'),"
                " ('Q100', 'Q100_en_2', 'Blank', '2024-01-01T00:00:00', '2024-01-02T00:00:00'),"
                " ('Q200', 'Q200_en_1', 'MCQ-SingleSelect', '2024-02-01T00:00:00', '2024-02-01T00:00:00')"
            )
        )
    engine.dispose()
    return url


@pytest.fixture
def env_path(tmp_path) -> pathlib.Path:
    return tmp_path / "e2e.env.json"


@pytest.fixture
def e2e_config(env_path) -> E2EConfig:
    return E2EConfig(
        database=DatabaseConfig(),
        auth=AuthConfig(username="author@example.com", password="s3cret", product_id="p1", device_id="d1"),
        runner=RunnerConfig(
            base_url="http://content.test",
            fixtures_dir=str(FIXTURES_DIR),
            env_file=str(env_path),
        ),
    )
