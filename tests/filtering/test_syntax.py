"""Tests for query string filter syntaxes."""

from __future__ import annotations

import pytest

from docrest_filtering.exceptions import FilterParseError
from docrest_filtering.syntax import (
    DeepObjectSyntax,
    JsonFilterSyntax,
    decode_deep_object,
    parse_scalar,
)


def test_decode_field_operators() -> None:
    pairs = [
        ("filters[age][$gt]", "3"),
        ("filters[age][$lt]", "10"),
        ("filters[name][$eq]", "Tom"),
        ("sort", "name"),
    ]
    assert decode_deep_object(pairs, "filters") == {
        "age": {"$gt": "3", "$lt": "10"},
        "name": {"$eq": "Tom"},
    }


def test_decode_returns_none_without_key() -> None:
    assert decode_deep_object([("sort", "name")], "filters") is None


def test_decode_lists() -> None:
    pairs = [
        ("filters[name][$in][]", "Tom"),
        ("filters[name][$in][]", "Tim"),
        ("filters[age][$nin]", "1"),
        ("filters[age][$nin]", "2"),
        ("filters[color][$in][]", "red"),
    ]
    assert decode_deep_object(pairs, "filters") == {
        "name": {"$in": ["Tom", "Tim"]},
        "age": {"$nin": ["1", "2"]},
        "color": {"$in": ["red"]},
    }


def test_decode_indexed_logical_branches() -> None:
    pairs = [
        ("filters[$or][1][name][$eq]", "Tim"),
        ("filters[$or][0][name][$eq]", "Tom"),
    ]
    assert decode_deep_object(pairs, "filters") == {
        "$or": [{"name": {"$eq": "Tom"}}, {"name": {"$eq": "Tim"}}]
    }


def test_decode_rejects_malformed_names() -> None:
    with pytest.raises(FilterParseError):
        decode_deep_object([("filters[name", "x")], "filters")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        ("FALSE", False),
        ("null", None),
        ("12", 12),
        ("1.5", 1.5),
        ("inf", "inf"),
        ("Tom", "Tom"),
    ],
)
def test_parse_scalar(raw: str, expected: object) -> None:
    assert parse_scalar(raw) == expected


def test_deep_object_coercion_is_optional() -> None:
    pairs = [("filters[age][$gt]", "3"), ("filters[dead][$eq]", "false")]
    assert DeepObjectSyntax().extract(pairs) == {
        "age": {"$gt": "3"},
        "dead": {"$eq": "false"},
    }
    assert DeepObjectSyntax(coerce_values=True).extract(pairs) == {
        "age": {"$gt": 3},
        "dead": {"$eq": False},
    }


def test_json_syntax() -> None:
    syntax = JsonFilterSyntax()
    pairs = [("filters", '{"age": {"$gt": 3}}')]
    assert syntax.extract(pairs) == {"age": {"$gt": 3}}
    assert syntax.extract([]) is None
    assert syntax.parse_filter({"a": {"$eq": 1}}) == {"a": {"$eq": 1}}


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "3"])
def test_json_syntax_rejects_non_objects(raw: str) -> None:
    with pytest.raises(FilterParseError) as exc:
        JsonFilterSyntax().parse_filter(raw)
    assert exc.value.status == 400
