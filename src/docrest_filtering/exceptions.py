"""Filtering package exceptions."""

from __future__ import annotations

from docrest_core.exceptions import FilterValidationError


class FilterParseError(FilterValidationError):
    """Raised when the raw ``filters`` parameter cannot be decoded."""


class FieldNotAllowedError(FilterValidationError):
    """Raised when a field is not in the allow-list."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f'The field "{field}" is not allowed')


class OperatorNotAllowedError(FilterValidationError):
    """Raised when an operator is unknown, disallowed or misplaced."""

    def __init__(self, operator: str, *, logical: bool = False) -> None:
        self.operator = operator
        kind = "logical operator" if logical else "operator"
        super().__init__(f'The {kind} "{operator}" is not allowed')


class InvalidOperatorValueError(FilterValidationError):
    """Raised when an operator value has the wrong shape."""

    def __init__(self, operator: str, expected: str, value: object) -> None:
        self.operator = operator
        self.expected = expected
        super().__init__(
            f'The value of operator "{operator}" must be {expected} '
            f'(provided type: "{type_name(value)}")'
        )


def type_name(value: object) -> str:
    """JSON type name of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"
