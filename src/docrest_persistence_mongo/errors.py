"""Translate driver errors into the docrest problem taxonomy."""

from __future__ import annotations

import json
import logging
import re

from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError, OperationFailure

from docrest_core.exceptions import (
    ConflictError,
    DocumentShapeError,
    ProblemError,
)

_log = logging.getLogger(__name__)

DUPLICATE_KEY = 11000
DOCUMENT_VALIDATION_FAILURE = 121

# Server error codes reported to clients as a 400 titled after the code name.
KNOWN_ERROR_CODES: dict[int, str] = {
    2: "BadValue",
    9: "FailedToParse",
    14: "TypeMismatch",
    28: "PathNotViable",
    52: "DollarPrefixedFieldName",
    55: "InvalidDBRef",
    56: "EmptyFieldName",
    57: "DottedFieldName",
    66: "ImmutableField",
    DOCUMENT_VALIDATION_FAILURE: "DocumentValidationFailure",
    DUPLICATE_KEY: "DuplicateKey",
    17280: "KeyTooLong",
}

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def humanize(name: str) -> str:
    """``"DocumentValidationFailure"`` -> ``"Document Validation Failure"``."""
    return _CAMEL_BOUNDARY.sub(r" \1", name).strip()


def _duplicate_detail(error: DuplicateKeyError, entity_name: str) -> str:
    key_value = (error.details or {}).get("keyValue") or {"": "?"}
    keys = "), (".join(
        f"{key}: {json.dumps(value, default=str)}" for key, value in key_value.items()
    )
    return f'A document with the keys ({keys}) already exist for entity "{entity_name}"'


def translate_store_error(error: BaseException, entity_name: str) -> ProblemError:
    """Map a store exception to the ``ProblemError`` sent to the client."""
    if isinstance(error, ProblemError):
        return error
    if isinstance(error, DuplicateKeyError):
        return ConflictError(_duplicate_detail(error, entity_name))
    if isinstance(error, OperationFailure):
        if error.code == DOCUMENT_VALIDATION_FAILURE:
            return DocumentShapeError(
                "The document does not meet Mongodb schema validation"
            )
        name = KNOWN_ERROR_CODES.get(error.code or 0)
        if name is not None:
            message = (error.details or {}).get("errmsg") or str(error)
            return DocumentShapeError(message, title=humanize(name))
    if isinstance(error, InvalidId):
        return DocumentShapeError(str(error), title="Cast Error")
    _log.warning("Unexpected store error for %s", entity_name, exc_info=error)
    return ProblemError(str(error), title=humanize(type(error).__name__), status=500)
