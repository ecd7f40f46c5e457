"""Translate validated filter trees, sorts and projections to MongoDB."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from bson.regex import Regex

from docrest_core.operators import (
    ListOperator,
    LogicalOperator,
    ValueOperator,
    parse_operator,
)

MONGO_REGEX = "$regex"
MONGO_NE = "$ne"
MONGO_NIN = ListOperator.NOT_IN.value
MONGO_ALL = "$all"


def regex_escape(value: str) -> str:
    """Escape a literal string for use inside a regex pattern."""
    return re.escape(value)


def _as_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_mongo_operator(operator: str, value: Any) -> tuple[str, Any]:
    """Map one filter operator and its value to the Mongo equivalent."""
    op = parse_operator(operator)
    if op is ValueOperator.START_WITH:
        return MONGO_REGEX, f"^{regex_escape(_as_text(value))}"
    if op is ValueOperator.END_WITH:
        return MONGO_REGEX, f"{regex_escape(_as_text(value))}$"
    if op is ValueOperator.REGEX:
        return MONGO_REGEX, (value if isinstance(value, str) else _as_text(value))
    if op is ValueOperator.IS_NULL:
        return ValueOperator.EQUALS.value, None
    if op is ValueOperator.IS_DEFINED:
        return MONGO_NE, None
    if op is ValueOperator.NOT_EQUALS:
        return MONGO_NE, value
    return (operator if op is None else op.value), value


def _merge(
    pairs: list[tuple[str, Any]], operator: str, into: str, combine: Any
) -> list[tuple[str, Any]]:
    matching = [value for op, value in pairs if op == operator]
    if len(matching) <= 1:
        return pairs
    return [p for p in pairs if p[0] != operator] + [(into, combine(matching))]


def _flatten(values: list[Any]) -> list[Any]:
    out: list[Any] = []
    for value in values:
        if isinstance(value, list):
            out.extend(value)
        else:
            out.append(value)
    return out


def translate_field(conditions: Any) -> Any:
    """Translate the ``{operator: value}`` object of one field.

    Several regex clauses become one ``$all`` of patterns, several ``$ne``
    clauses become a ``$nin``, then several ``$nin`` clauses are concatenated.
    Merged clauses are appended after the others.
    """
    if not isinstance(conditions, Mapping):
        return conditions
    pairs = [to_mongo_operator(op, value) for op, value in conditions.items()]
    pairs = _merge(
        pairs, MONGO_REGEX, MONGO_ALL, lambda patterns: [Regex(p) for p in patterns]
    )
    pairs = _merge(pairs, MONGO_NE, MONGO_NIN, list)
    pairs = _merge(pairs, MONGO_NIN, MONGO_NIN, _flatten)
    return dict(pairs)


def _translate_branch(item: Any) -> Any:
    if not isinstance(item, Mapping):
        return item
    return {field: translate_field(value) for field, value in item.items()}


def to_mongo_filter_query(tree: Mapping[str, Any] | None) -> dict[str, Any]:
    """Translate a validated filter tree into a Mongo query document."""
    if tree is None:
        return {}
    query: dict[str, Any] = {}
    for key, value in tree.items():
        if isinstance(parse_operator(key), LogicalOperator) and isinstance(value, list):
            query[key] = [_translate_branch(item) for item in value]
        else:
            query[key] = translate_field(value)
    return query


def to_mongo_sort(tokens: list[str]) -> dict[str, int]:
    """``["name", "-age"]`` -> ``{"name": 1, "age": -1}`` (insertion ordered)."""
    sort: dict[str, int] = {}
    for token in tokens:
        if token.startswith("-"):
            sort[token[1:]] = -1
        else:
            sort[token] = 1
    return sort


def to_mongo_projection(fields: list[str] | None) -> dict[str, int] | None:
    """``{field: 1, ...}``; None or empty means no projection."""
    if not fields:
        return None
    return dict.fromkeys(fields, 1)


class MongoFilterTranslator:
    """Bundles the translation functions for injection."""

    def to_query(self, tree: Mapping[str, Any] | None) -> dict[str, Any]:
        return to_mongo_filter_query(tree)

    def to_sort(self, tokens: list[str] | None) -> dict[str, int] | None:
        if tokens is None:
            return None
        return to_mongo_sort(tokens)

    def to_projection(self, fields: list[str] | None) -> dict[str, int] | None:
        return to_mongo_projection(fields)
