"""Tests for the operator vocabulary."""

from __future__ import annotations

import pytest

from docrest_core.operators import (
    ALL_OPERATORS,
    ListOperator,
    LogicalOperator,
    ValueOperator,
    describe_operators,
    is_logical,
    parse_operator,
)


def test_wire_tokens_are_stable() -> None:
    assert [op.value for op in ValueOperator] == [
        "$eq",
        "$neq",
        "$gt",
        "$gte",
        "$lt",
        "$lte",
        "$start",
        "$end",
        "$regex",
        "$null",
        "$def",
    ]
    assert [op.value for op in ListOperator] == ["$in", "$nin"]
    assert [op.value for op in LogicalOperator] == ["$or", "$and"]


def test_all_operators_order() -> None:
    assert len(ALL_OPERATORS) == 15
    assert ALL_OPERATORS[0] is ValueOperator.EQUALS
    assert ALL_OPERATORS[-1] is LogicalOperator.AND


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("$eq", ValueOperator.EQUALS),
        ("$nin", ListOperator.NOT_IN),
        ("$or", LogicalOperator.OR),
        (ValueOperator.REGEX, ValueOperator.REGEX),
        ("$ne", None),
        ("eq", None),
        (3, None),
        (None, None),
    ],
)
def test_parse_operator(token: object, expected: object) -> None:
    assert parse_operator(token) is expected


def test_is_logical() -> None:
    assert is_logical("$and")
    assert not is_logical("$in")
    assert not is_logical("name")


def test_describe_operators_groups_by_kind() -> None:
    text = describe_operators([ValueOperator.EQUALS, LogicalOperator.OR])
    assert "**Values operators**" in text
    assert "- `$eq`: Equals to" in text
    assert "**Logical operators**" in text
    assert "List operators" not in text
