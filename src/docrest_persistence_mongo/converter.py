"""OneToOneConverter: exposes stored documents as they are."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .translator import MongoFilterTranslator


class OneToOneConverter:
    """Entity converter whose DTO shape is the stored document itself.

    Filters, projections and sorts are translated with
    :class:`MongoFilterTranslator`.
    """

    def __init__(self, translator: MongoFilterTranslator | None = None) -> None:
        self._translator = translator or MongoFilterTranslator()

    def to_dto(self, entity: Mapping[str, Any]) -> dict[str, Any]:
        return dict(entity)

    def from_searchable(self, filters: Mapping[str, Any] | None) -> dict[str, Any]:
        return self._translator.to_query(filters)

    def from_dto_fields(self, fields: list[str] | None) -> list[str] | None:
        return fields

    def from_dto_sort(self, sort: list[str] | None) -> dict[str, int] | None:
        return self._translator.to_sort(sort)

    def from_creator(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return dict(data)

    def from_updater(self, entity_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        return {**data, "_id": entity_id}
