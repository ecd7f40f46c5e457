"""MongoDB adapter: filter translation, Motor document store, error mapping."""

from __future__ import annotations

from .converter import OneToOneConverter
from .errors import KNOWN_ERROR_CODES, humanize, translate_store_error
from .exceptions import MongoConnectionError, MongoPersistenceError
from .store import (
    MotorDocumentStore,
    object_id_or_str,
    open_collection,
    raw_id,
    strict_object_id,
)
from .translator import (
    MongoFilterTranslator,
    regex_escape,
    to_mongo_filter_query,
    to_mongo_operator,
    to_mongo_projection,
    to_mongo_sort,
    translate_field,
)

__all__ = [
    "KNOWN_ERROR_CODES",
    "MongoConnectionError",
    "MongoFilterTranslator",
    "MongoPersistenceError",
    "MotorDocumentStore",
    "OneToOneConverter",
    "humanize",
    "object_id_or_str",
    "open_collection",
    "raw_id",
    "regex_escape",
    "strict_object_id",
    "to_mongo_filter_query",
    "to_mongo_operator",
    "to_mongo_projection",
    "to_mongo_sort",
    "translate_field",
    "translate_store_error",
]
