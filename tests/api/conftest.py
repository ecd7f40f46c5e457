"""Fixtures wiring a ResourceService to an in-memory Mongo collection."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from mongomock_motor import AsyncMongoMockClient

from docrest_api import ControllerOptions, ResourceService
from docrest_persistence_mongo import (
    MotorDocumentStore,
    OneToOneConverter,
    translate_store_error,
)

CATS = [
    {"name": "Tom", "age": 3, "color": "grey"},
    {"name": "Tim", "age": 5, "color": "black"},
    {"name": "Kit", "age": 1, "color": "white"},
    {"name": "Tigger", "age": 7, "color": "orange"},
]


@pytest.fixture
def cats() -> Any:
    return AsyncMongoMockClient(default_database_name="test_db")["test_db"]["cats"]


@pytest.fixture
def make_service(cats: Any) -> Callable[..., ResourceService]:
    def factory(**kwargs: Any) -> ResourceService:
        kwargs.setdefault("error_translator", translate_store_error)
        options = kwargs.pop("options", None) or ControllerOptions(resource_type="cats")
        return ResourceService(
            MotorDocumentStore(cats),
            OneToOneConverter(),
            "cat",
            options=options,
            **kwargs,
        )

    return factory


@pytest.fixture
def service(make_service: Callable[..., ResourceService]) -> ResourceService:
    return make_service()


@pytest.fixture
def seed(cats: Any) -> Callable[[], Any]:
    async def insert() -> list[str]:
        result = await cats.insert_many([dict(cat) for cat in CATS])
        return [str(i) for i in result.inserted_ids]

    return insert
