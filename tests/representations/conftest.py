"""Shared page fixtures for representation tests."""

from __future__ import annotations

import pytest

COLORS = [
    ("12", "blue"),
    ("17", "red"),
    ("9", "orange"),
    ("3", "green"),
    ("1497", "yellow"),
    ("2", "pink"),
    ("8", "teal"),
]

PERSON = {"firstName": "John", "lastName": "Doe", "age": None, "city": "unknown"}


@pytest.fixture
def page_resources() -> dict[str, dict[str, str]]:
    return {entity_id: {"name": name} for entity_id, name in COLORS}


@pytest.fixture
def person() -> dict[str, object]:
    return dict(PERSON)
