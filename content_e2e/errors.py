"""Harness error types.

Only failures the harness itself owns live here. Assertion failures about the
service under test stay plain ``AssertionError`` so behave and pytest report
them as test failures rather than harness crashes.
"""

from __future__ import annotations


class E2EHarnessError(Exception):
    """Base class for harness-level failures."""


class DatabaseQueryError(E2EHarnessError):
    """Raised when a SQL statement issued by a task fails."""

    PREFIX = "Database query failed: "

    def __init__(self, original_message: str) -> None:
        self.original_message = original_message
        super().__init__(f"{self.PREFIX}{original_message}")


class UnknownTaskError(E2EHarnessError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown task: {name}")


class FixtureNotFoundError(E2EHarnessError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Fixture not found: {path}")


class UnknownQuestionTypeError(E2EHarnessError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown question type: {name}")


__all__ = [
    "E2EHarnessError",
    "DatabaseQueryError",
    "UnknownTaskError",
    "FixtureNotFoundError",
    "UnknownQuestionTypeError",
]
