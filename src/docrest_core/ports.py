"""Ports the resource layer requires from its collaborators."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

Document = dict[str, Any]
FilterTree = dict[str, Any]
SortSpec = dict[str, int]


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    modified_count: int


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int


@runtime_checkable
class DocumentStore(Protocol):
    """
    Asynchronous document store queried with already translated descriptors.

    ``query``, ``projection`` and ``sort`` are produced by an
    :class:`EntityConverter`; the store executes them verbatim.
    """

    async def find(
        self,
        query: Mapping[str, Any],
        projection: list[str] | None = None,
        *,
        limit: int | None = None,
        skip: int = 0,
        sort: SortSpec | None = None,
    ) -> list[Document]: ...

    async def find_by_id(
        self, entity_id: str, projection: list[str] | None = None
    ) -> Document | None: ...

    async def count(self, query: Mapping[str, Any]) -> int: ...

    async def insert(self, data: Mapping[str, Any]) -> Document: ...

    async def update_by_id(
        self, entity_id: str, patch: Mapping[str, Any]
    ) -> UpdateResult: ...

    async def delete_by_id(self, entity_id: str) -> DeleteResult: ...


@runtime_checkable
class EntityConverter(Protocol):
    """Stateless mapping between stored entities and their DTO shapes."""

    def to_dto(self, entity: Mapping[str, Any]) -> Document: ...

    def from_searchable(self, filters: FilterTree | None) -> dict[str, Any]: ...

    def from_dto_fields(self, fields: list[str] | None) -> list[str] | None: ...

    def from_dto_sort(self, sort: list[str] | None) -> SortSpec | None: ...

    def from_creator(self, data: Mapping[str, Any]) -> Document: ...

    def from_updater(self, entity_id: str, data: Mapping[str, Any]) -> Document: ...
