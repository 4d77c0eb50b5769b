"""Catalog of question types exposed by the content-authoring API."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List

from content_e2e.errors import UnknownQuestionTypeError


API_PREFIX = "/api/content/v1"


@dataclass(frozen=True)
class QuestionType:
    key: str
    label: str
    # URL segment under /questions/
    slug: str
    # Value the service persists in the question_type column
    stored_type: str
    fixture_dir: str


QUESTION_TYPES: List[QuestionType] = [
    QuestionType("blank", "Blank", "fill-in-the-blanks", "Blank", "blank"),
    QuestionType("mcq", "MCQ", "multiple-choice", "MCQ-SingleSelect", "mcq"),
    QuestionType("matching", "Matching", "matching", "Matching", "matching"),
    QuestionType("classification", "Classification", "classification", "Classification", "classification"),
    QuestionType("block_counting", "Block Counting", "block-counting", "BlockCounting", "blockcounting"),
    QuestionType("counting", "Counting", "counting", "Counting", "counting"),
    QuestionType("dropdown", "Dropdown", "dropdown", "Dropdown", "dropdown"),
    QuestionType("hottext", "Hottext", "hottext", "Hottext", "hottext"),
    QuestionType("selection_grid", "Selection Grid", "selection-grid", "Selection-grid", "selectiongrid"),
    QuestionType("operations_grid", "Operations Grid", "operations-grid", "Operations-Grid", "operationsgrid"),
    QuestionType("tracing", "Tracing", "tracing", "Tracing", "tracing"),
    QuestionType("sequencing", "Sequencing", "sequencing", "Sequencing", "sequencing"),
    QuestionType("interactive", "Interactive", "interactive", "Interactive", "interactive"),
]


def _norm(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", str(name).lower())


_LOOKUP: Dict[str, QuestionType] = {}
for _qt in QUESTION_TYPES:
    for _alias in (_qt.key, _qt.label, _qt.slug, _qt.stored_type, _qt.fixture_dir):
        _LOOKUP.setdefault(_norm(_alias), _qt)


def resolve(name: str) -> QuestionType:
    """Look a type up by key, label, slug or stored value, ignoring case and separators."""
    qt = _LOOKUP.get(_norm(name))
    if qt is None:
        raise UnknownQuestionTypeError(name)
    return qt


def create_path(qt: QuestionType) -> str:
    return f"{API_PREFIX}/questions/{qt.slug}"


def update_path(qt: QuestionType, content_id: str) -> str:
    return f"{API_PREFIX}/questions/{qt.slug}/{content_id}"


def items_path(content_id: str) -> str:
    return f"{API_PREFIX}/items/{content_id}"


def question_path(content_id: str) -> str:
    return f"{API_PREFIX}/questions/{content_id}"


__all__ = [
    "API_PREFIX",
    "QuestionType",
    "QUESTION_TYPES",
    "resolve",
    "create_path",
    "update_path",
    "items_path",
    "question_path",
]
