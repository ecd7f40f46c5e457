"""MotorDocumentStore: the document store port over a Motor collection."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from bson import ObjectId

from docrest_core.ports import DeleteResult, UpdateResult

from .exceptions import MongoConnectionError
from .translator import to_mongo_projection

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection

_log = logging.getLogger(__name__)

IdCodec = Callable[[str], Any]


def object_id_or_str(entity_id: str) -> Any:
    """ObjectId for 24-hex-digit ids, the raw string otherwise."""
    if len(entity_id) == 24 and ObjectId.is_valid(entity_id):
        return ObjectId(entity_id)
    return entity_id


def strict_object_id(entity_id: str) -> ObjectId:
    """Always an ObjectId; raises ``bson.errors.InvalidId`` on malformed ids."""
    return ObjectId(entity_id)


def raw_id(entity_id: str) -> str:
    return entity_id


def open_collection(
    url: str, database: str, collection: str, **kwargs: Any
) -> AsyncIOMotorCollection[Any]:
    """Create a Motor client and return one of its collections."""
    try:
        from motor.motor_asyncio import AsyncIOMotorClient
    except ImportError as e:
        raise MongoConnectionError(
            "motor is required; install with docrest[mongo]"
        ) from e
    client: Any = AsyncIOMotorClient(url, **kwargs)
    return client[database][collection]


class MotorDocumentStore:
    """Execute translated queries against one collection.

    Returned documents have their ``_id`` rendered as a string when it is an
    ``ObjectId``; incoming ids go through ``id_codec`` before hitting the
    driver.
    """

    def __init__(
        self,
        collection: Any,
        *,
        id_codec: IdCodec = object_id_or_str,
    ) -> None:
        if collection is None:
            raise MongoConnectionError("A collection is required")
        self._collection = collection
        self._id_codec = id_codec

    @property
    def collection(self) -> Any:
        return self._collection

    @staticmethod
    def _out(document: Mapping[str, Any]) -> dict[str, Any]:
        doc = dict(document)
        if isinstance(doc.get("_id"), ObjectId):
            doc["_id"] = str(doc["_id"])
        return doc

    async def find(
        self,
        query: Mapping[str, Any],
        projection: list[str] | None = None,
        *,
        limit: int | None = None,
        skip: int = 0,
        sort: Mapping[str, int] | None = None,
    ) -> list[dict[str, Any]]:
        _log.debug(
            "find %s query=%s limit=%s skip=%s sort=%s",
            self._collection.name,
            query,
            limit,
            skip,
            sort,
        )
        cursor = self._collection.find(
            dict(query),
            to_mongo_projection(projection),
            skip=skip,
            limit=limit or 0,
            sort=list(sort.items()) if sort else None,
        )
        return [self._out(doc) async for doc in cursor]

    async def find_by_id(
        self, entity_id: str, projection: list[str] | None = None
    ) -> dict[str, Any] | None:
        doc = await self._collection.find_one(
            {"_id": self._id_codec(entity_id)}, to_mongo_projection(projection)
        )
        return None if doc is None else self._out(doc)

    async def count(self, query: Mapping[str, Any]) -> int:
        return int(await self._collection.count_documents(dict(query)))

    async def insert(self, data: Mapping[str, Any]) -> dict[str, Any]:
        doc = dict(data)
        if doc.get("_id") is None:
            doc.pop("_id", None)
        result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self._out(doc)

    async def update_by_id(
        self, entity_id: str, patch: Mapping[str, Any]
    ) -> UpdateResult:
        selector = {"_id": self._id_codec(entity_id)}
        fields = {k: v for k, v in patch.items() if k != "_id"}
        if not fields:
            matched = await self._collection.count_documents(selector)
            return UpdateResult(matched_count=int(matched), modified_count=0)
        result = await self._collection.update_one(selector, {"$set": fields})
        return UpdateResult(
            matched_count=result.matched_count, modified_count=result.modified_count
        )

    async def delete_by_id(self, entity_id: str) -> DeleteResult:
        result = await self._collection.delete_one({"_id": self._id_codec(entity_id)})
        return DeleteResult(deleted_count=result.deleted_count)
