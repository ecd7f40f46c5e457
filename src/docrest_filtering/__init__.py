"""API query parsing: filter validation, field allow-lists, paging parameters."""

from __future__ import annotations

from .exceptions import (
    FieldNotAllowedError,
    FilterParseError,
    InvalidOperatorValueError,
    OperatorNotAllowedError,
)
from .query_params import ListQuery, QueryParamsParser, parse_comma_list
from .syntax import (
    DeepObjectSyntax,
    FilterSyntax,
    JsonFilterSyntax,
    decode_deep_object,
    parse_scalar,
)
from .validator import (
    FilterPosition,
    FilterValidator,
    InvalidFilterAction,
    validate_filters,
)
from .whitelist import FieldWhitelist, dot_keys, flat_keys

__all__ = [
    "DeepObjectSyntax",
    "FieldNotAllowedError",
    "FieldWhitelist",
    "FilterParseError",
    "FilterPosition",
    "FilterSyntax",
    "FilterValidator",
    "InvalidFilterAction",
    "InvalidOperatorValueError",
    "JsonFilterSyntax",
    "ListQuery",
    "OperatorNotAllowedError",
    "QueryParamsParser",
    "decode_deep_object",
    "dot_keys",
    "flat_keys",
    "parse_comma_list",
    "parse_scalar",
    "validate_filters",
]
