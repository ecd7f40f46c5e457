"""Tests for OneToOneConverter."""

from __future__ import annotations

from docrest_core.ports import EntityConverter
from docrest_persistence_mongo.converter import OneToOneConverter


def test_satisfies_port() -> None:
    assert isinstance(OneToOneConverter(), EntityConverter)


def test_identity_mappings() -> None:
    converter = OneToOneConverter()
    entity = {"_id": "1", "name": "Tom"}
    dto = converter.to_dto(entity)
    assert dto == entity
    assert dto is not entity
    assert converter.from_creator({"name": "Tom"}) == {"name": "Tom"}
    assert converter.from_dto_fields(["name"]) == ["name"]
    assert converter.from_dto_fields(None) is None


def test_updater_carries_id() -> None:
    converter = OneToOneConverter()
    assert converter.from_updater("42", {"age": 3}) == {"age": 3, "_id": "42"}


def test_queries_are_translated() -> None:
    converter = OneToOneConverter()
    assert converter.from_searchable({"name": {"$end": "m"}}) == {
        "name": {"$regex": "m$"}
    }
    assert converter.from_searchable(None) == {}
    assert converter.from_dto_sort(["-age"]) == {"age": -1}
    assert converter.from_dto_sort(None) is None
