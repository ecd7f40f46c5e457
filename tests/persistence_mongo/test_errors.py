"""Tests for driver error translation."""

from __future__ import annotations

import logging

import pytest
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError, OperationFailure

from docrest_core.exceptions import (
    ConflictError,
    DocumentShapeError,
    EntityNotFoundError,
    ProblemError,
)
from docrest_persistence_mongo.errors import humanize, translate_store_error


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("DocumentValidationFailure", "Document Validation Failure"),
        ("BadValue", "Bad Value"),
        ("ValueError", "Value Error"),
    ],
)
def test_humanize(name: str, expected: str) -> None:
    assert humanize(name) == expected


def test_problem_errors_pass_through() -> None:
    error = EntityNotFoundError("cat", "1")
    assert translate_store_error(error, "cat") is error


def test_duplicate_key() -> None:
    error = DuplicateKeyError(
        "E11000 duplicate key", 11000, {"keyValue": {"name": "Tom", "age": 3}}
    )
    problem = translate_store_error(error, "cat")
    assert isinstance(problem, ConflictError)
    assert problem.status == 409
    assert problem.title == "Duplicate document"
    assert problem.detail == (
        'A document with the keys (name: "Tom"), (age: 3) already exist for '
        'entity "cat"'
    )


def test_duplicate_key_without_details() -> None:
    problem = translate_store_error(DuplicateKeyError("dup", 11000), "cat")
    assert problem.detail == (
        'A document with the keys (: "?") already exist for entity "cat"'
    )


def test_schema_validation_failure() -> None:
    problem = translate_store_error(
        OperationFailure("Document failed validation", 121, {}), "cat"
    )
    assert isinstance(problem, DocumentShapeError)
    assert problem.status == 400
    assert problem.detail == "The document does not meet Mongodb schema validation"


def test_known_error_code() -> None:
    error = OperationFailure(
        "immutable", 66, {"errmsg": "Performing an update on the path '_id'"}
    )
    problem = translate_store_error(error, "cat")
    assert problem.status == 400
    assert problem.title == "Immutable Field"
    assert problem.detail == "Performing an update on the path '_id'"


def test_invalid_id() -> None:
    problem = translate_store_error(InvalidId("not an ObjectId"), "cat")
    assert problem.status == 400
    assert problem.title == "Cast Error"


@pytest.mark.parametrize(
    ("error", "title"),
    [
        (OperationFailure("weird", 424242), "Operation Failure"),
        (ValueError("boom"), "Value Error"),
    ],
)
def test_unknown_errors_are_internal(
    caplog: pytest.LogCaptureFixture, error: Exception, title: str
) -> None:
    with caplog.at_level(logging.WARNING, logger="docrest_persistence_mongo.errors"):
        problem = translate_store_error(error, "cat")
    assert type(problem) is ProblemError
    assert problem.status == 500
    assert problem.title == title
    assert "Unexpected store error for cat" in caplog.text
