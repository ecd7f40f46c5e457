"""QueryParamsParser: list endpoint query string -> ListQuery."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from docrest_core.pagination import PageRequest

from .syntax import DeepObjectSyntax, FilterSyntax, decode_deep_object

_COMMA = re.compile(r",\s*")


def parse_comma_list(raw: Any) -> list[str] | None:
    """``"name, -age,"`` -> ``["name", "-age"]``; non-strings yield None."""
    if not isinstance(raw, str):
        return None
    return [item.strip() for item in _COMMA.split(raw.strip()) if item.strip()]


class ListQuery(NamedTuple):
    """Parsed list request."""

    filters: dict[str, Any] | None
    fields: list[str] | None
    sort: list[str] | None
    page: PageRequest


def _pairs(query_params: Any) -> list[tuple[str, str]]:
    if hasattr(query_params, "multi_items"):
        return list(query_params.multi_items())
    if isinstance(query_params, Mapping):
        return [(str(k), v) for k, v in query_params.items()]
    return list(query_params)


def _last(pairs: Iterable[tuple[str, str]], name: str) -> str | None:
    found = None
    for key, value in pairs:
        if key == name:
            found = value
    return found


class QueryParamsParser:
    """Parse ``filters``, ``fields``, ``sort`` and ``page[...]`` parameters."""

    def __init__(
        self,
        *,
        default_page_size: int = 10,
        max_page_size: int | None = 200,
        syntax: FilterSyntax | None = None,
        filters_key: str = "filters",
        fields_key: str = "fields",
        sort_key: str = "sort",
        page_key: str = "page",
    ) -> None:
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self._syntax = syntax or DeepObjectSyntax()
        self._filters_key = filters_key
        self._fields_key = fields_key
        self._sort_key = sort_key
        self._page_key = page_key

    def parse(self, query_params: Any) -> ListQuery:
        """Accepts a Starlette ``QueryParams``, a mapping or ``(name, value)`` pairs."""
        pairs = _pairs(query_params)
        return ListQuery(
            filters=self._syntax.extract(pairs, self._filters_key),
            fields=self.parse_fields(pairs),
            sort=parse_comma_list(_last(pairs, self._sort_key)),
            page=self.parse_page(pairs),
        )

    def parse_fields(self, query_params: Any) -> list[str] | None:
        return parse_comma_list(_last(_pairs(query_params), self._fields_key))

    def parse_page(self, query_params: Any) -> PageRequest:
        page = decode_deep_object(_pairs(query_params), self._page_key) or {}
        return PageRequest.clamped(
            page.get("size"),
            page.get("number"),
            default_size=self.default_page_size,
            max_size=self.max_page_size,
        )
