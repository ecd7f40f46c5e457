"""Filter operator vocabulary.

Wire tokens are stable: clients send them verbatim in ``filters`` query
parameters, so members must never be renamed.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class ValueOperator(str, Enum):
    """Operators comparing a field with a single primitive value."""

    EQUALS = "$eq"
    NOT_EQUALS = "$neq"
    GREATER_THAN = "$gt"
    GREATER_OR_EQUALS = "$gte"
    LOWER_THAN = "$lt"
    LOWER_OR_EQUALS = "$lte"
    START_WITH = "$start"
    END_WITH = "$end"
    REGEX = "$regex"
    IS_NULL = "$null"
    IS_DEFINED = "$def"


class ListOperator(str, Enum):
    """Operators comparing a field with a list of values."""

    IN = "$in"
    NOT_IN = "$nin"


class LogicalOperator(str, Enum):
    """Root-level combinators over sub-filters."""

    OR = "$or"
    AND = "$and"


Operator = Union[ValueOperator, ListOperator, LogicalOperator]

ALL_OPERATORS: tuple[Operator, ...] = (
    *ValueOperator,
    *ListOperator,
    *LogicalOperator,
)

_BY_TOKEN: dict[str, Operator] = {op.value: op for op in ALL_OPERATORS}


def parse_operator(token: object) -> Operator | None:
    """Return the operator for a wire token, or None if unknown."""
    if isinstance(token, Enum):
        token = token.value
    if not isinstance(token, str):
        return None
    return _BY_TOKEN.get(token)


def is_logical(token: object) -> bool:
    return isinstance(parse_operator(token), LogicalOperator)


OPERATOR_DESCRIPTIONS: dict[Operator, str] = {
    ValueOperator.EQUALS: "Equals to",
    ValueOperator.NOT_EQUALS: "Not equals to",
    ValueOperator.GREATER_THAN: "Greater than",
    ValueOperator.GREATER_OR_EQUALS: "Greater than or equals to",
    ValueOperator.LOWER_THAN: "Lower than",
    ValueOperator.LOWER_OR_EQUALS: "Lower than or equals to",
    ValueOperator.START_WITH: "Starts with (string only)",
    ValueOperator.END_WITH: "Ends with (string only)",
    ValueOperator.REGEX: "Matches the regular expression",
    ValueOperator.IS_NULL: "Is null (the value is ignored)",
    ValueOperator.IS_DEFINED: "Is defined, not null (the value is ignored)",
    ListOperator.IN: "Is one of the values",
    ListOperator.NOT_IN: "Is none of the values",
    LogicalOperator.OR: "Must validate at least one expression",
    LogicalOperator.AND: "Must validate all expressions",
}


def describe_operators(operators: tuple[Operator, ...] | list[Operator]) -> str:
    """Build a markdown summary of the allowed operators, grouped by kind."""
    sections: list[str] = []
    for heading, kind in (
        ("Values operators", ValueOperator),
        ("List operators", ListOperator),
        ("Logical operators", LogicalOperator),
    ):
        lines = [
            f"- `{op.value}`: {OPERATOR_DESCRIPTIONS[op]}"
            for op in operators
            if isinstance(op, kind)
        ]
        if lines:
            sections.append(f"**{heading}**\n\n" + "\n".join(lines))
    return "\n\n".join(sections)
