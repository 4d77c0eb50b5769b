"""Suite-wide logging via `logging.config.dictConfig`.

One stdout handler on the root logger serves the harness modules and the
step files alike. Library loggers that would duplicate the client's own
`[HTTP]` line (httpx, httpcore) or dump every statement (sqlalchemy.engine)
are held at WARNING. `E2E_LOG_LEVEL` raises or lowers the harness level.
"""
from __future__ import annotations
import logging
import os
from logging.config import dictConfig
from typing import Any, Dict, Optional

QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            name: {"level": "WARNING", "handlers": ["console"], "propagate": False}
            for name in QUIET_LOGGERS
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging once per process.

    Returns early when the root logger already has handlers, since behave's
    log capture and pytest's caplog install their own.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    resolved = (level or os.environ.get("E2E_LOG_LEVEL") or "INFO").upper()
    dictConfig(build_logging_config(resolved))
