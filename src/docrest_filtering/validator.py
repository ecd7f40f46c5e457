"""FilterValidator: sanitize a user-submitted filter tree.

A filter tree maps field paths to ``{operator: value}`` objects, and logical
operators (``$and``/``$or``) to lists of such trees. Logical operators are
only meaningful at the root: each element of a logical list is re-validated
as a root tree from which the logical operators have been removed.

Offending entries are handled according to an :class:`InvalidFilterAction`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from docrest_core.exceptions import FilterValidationError
from docrest_core.operators import (
    ALL_OPERATORS,
    ListOperator,
    LogicalOperator,
    Operator,
    parse_operator,
)

from .exceptions import (
    FieldNotAllowedError,
    InvalidOperatorValueError,
    OperatorNotAllowedError,
)

ESCAPE_PREFIX = "\\"


class InvalidFilterAction(str, Enum):
    """What to do with a disallowed or malformed filter entry."""

    THROW = "throw"
    REMOVE = "remove"
    DO_NOTHING = "do_nothing"


class FilterPosition(Enum):
    """Where a key sits in the filter tree."""

    ROOT = "root"
    OPERATOR = "operator"
    LOGICAL_ELEMENT = "logical_element"
    NESTED = "nested"


class _Removed:
    pass


_REMOVED = _Removed()


def is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _normalize_operators(operators: Iterable[Operator | str]) -> frozenset[Operator]:
    out: set[Operator] = set()
    for token in operators:
        op = parse_operator(token)
        if op is None:
            raise ValueError(f"Unknown filter operator: {token!r}")
        out.add(op)
    return frozenset(out)


class FilterValidator:
    """Recursive validator over a filter tree.

    Args:
        allowed_operators: Operators clients may use.
        allowed_fields: Dotted field paths clients may filter on; ``None``
            disables the field check.
        action: Policy for offending entries.
        escape_invalid_logical: Rename a disallowed root logical operator to
            ``"\\$or"`` (a literal field name for the store) instead of
            applying ``action``. Its value is kept unvisited.
    """

    def __init__(
        self,
        allowed_operators: Iterable[Operator | str] = ALL_OPERATORS,
        allowed_fields: Iterable[str] | None = None,
        action: InvalidFilterAction = InvalidFilterAction.THROW,
        *,
        escape_invalid_logical: bool = False,
    ) -> None:
        self.allowed_operators = _normalize_operators(allowed_operators)
        self.allowed_fields = (
            None if allowed_fields is None else frozenset(allowed_fields)
        )
        self.action = InvalidFilterAction(action)
        self.escape_invalid_logical = escape_invalid_logical
        plain = [
            op for op in self.allowed_operators if not isinstance(op, LogicalOperator)
        ]
        # Validator applied to each element of a logical operator list.
        self.branch_validator: FilterValidator = (
            self
            if len(plain) == len(self.allowed_operators)
            and not escape_invalid_logical
            else FilterValidator(plain, self.allowed_fields, self.action)
        )

    def validate(self, tree: Mapping[str, Any] | None) -> dict[str, Any] | None:
        """Return a sanitized copy of ``tree``; the input is never mutated."""
        if tree is None:
            return None
        if not isinstance(tree, Mapping):
            return self._root_shape_error(tree)
        return self._visit(tree, FilterPosition.ROOT)

    # ── Walk ─────────────────────────────────────────────────────────

    def _visit(
        self, node: Mapping[str, Any], position: FilterPosition
    ) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, value in node.items():
            checked = self._check(key, value, position)
            if checked is _REMOVED:
                continue
            new_key, new_value, descend = checked
            if descend:
                new_value = self._descend(new_key, new_value, position)
            out[new_key] = new_value
        return out

    def _descend(self, key: str, value: Any, position: FilterPosition) -> Any:
        if isinstance(value, Mapping):
            child = (
                FilterPosition.OPERATOR
                if position is FilterPosition.ROOT
                else FilterPosition.NESTED
            )
            return self._visit(value, child)
        if isinstance(value, list):
            item_position = (
                FilterPosition.LOGICAL_ELEMENT
                if position is FilterPosition.ROOT
                and isinstance(parse_operator(key), LogicalOperator)
                else FilterPosition.NESTED
            )
            return [
                self._visit(item, item_position) if isinstance(item, Mapping) else item
                for item in value
            ]
        return value

    def _check(self, key: str, value: Any, position: FilterPosition) -> Any:
        if position is FilterPosition.ROOT:
            return self._check_root(key, value)
        if position is FilterPosition.OPERATOR:
            return self._check_operator(key, value)
        if position is FilterPosition.LOGICAL_ELEMENT:
            return self._check_logical_element(key, value)
        return key, value, True

    # ── Checks ───────────────────────────────────────────────────────

    def _check_root(self, key: str, value: Any) -> Any:
        op = parse_operator(key)
        if isinstance(op, LogicalOperator):
            if op in self.allowed_operators:
                return key, value, True
            if self.escape_invalid_logical:
                return ESCAPE_PREFIX + key, value, False
            return self._invalid(key, value, OperatorNotAllowedError(key, logical=True))
        if self.allowed_fields is not None and key not in self.allowed_fields:
            return self._invalid(key, value, FieldNotAllowedError(key))
        return key, value, True

    def _check_operator(self, key: str, value: Any) -> Any:
        op = parse_operator(key)
        if (
            op is None
            or isinstance(op, LogicalOperator)
            or op not in self.allowed_operators
        ):
            return self._invalid(key, value, OperatorNotAllowedError(key))
        if isinstance(op, ListOperator):
            if is_primitive(value):
                return key, [value], True
            if not isinstance(value, list):
                return self._invalid(
                    key, value, InvalidOperatorValueError(key, "an array", value)
                )
        elif not is_primitive(value):
            return self._invalid(
                key, value, InvalidOperatorValueError(key, "a primitive", value)
            )
        return key, value, True

    def _check_logical_element(self, key: str, value: Any) -> Any:
        branch = self.branch_validator.validate({key: value}) or {}
        if not branch:
            return _REMOVED
        ((new_key, new_value),) = branch.items()
        return new_key, new_value, False

    def _invalid(self, key: str, value: Any, error: FilterValidationError) -> Any:
        if self.action is InvalidFilterAction.THROW:
            raise error
        if self.action is InvalidFilterAction.REMOVE:
            return _REMOVED
        return key, value, True

    def _root_shape_error(self, tree: Any) -> Any:
        if self.action is InvalidFilterAction.THROW:
            raise FilterValidationError("The filters MUST be an object")
        if self.action is InvalidFilterAction.REMOVE:
            return {}
        return tree


def validate_filters(
    tree: Mapping[str, Any] | None,
    allowed_operators: Iterable[Operator | str] = ALL_OPERATORS,
    allowed_fields: Iterable[str] | None = None,
    action: InvalidFilterAction = InvalidFilterAction.THROW,
    *,
    escape_invalid_logical: bool = False,
) -> dict[str, Any] | None:
    """One-shot form of :meth:`FilterValidator.validate`."""
    return FilterValidator(
        allowed_operators,
        allowed_fields,
        action,
        escape_invalid_logical=escape_invalid_logical,
    ).validate(tree)
