"""Test configuration for the MongoDB adapter."""

from __future__ import annotations

from typing import Any

import pytest
from mongomock_motor import AsyncMongoMockClient


@pytest.fixture
def mock_client() -> Any:
    return AsyncMongoMockClient(default_database_name="test_db")


@pytest.fixture
def cats(mock_client: Any) -> Any:
    return mock_client["test_db"]["cats"]
