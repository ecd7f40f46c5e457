"""Representation: a pluggable document format for a resource."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from docrest_core.pagination import PageRequest

Json = dict[str, Any]

RenderOne = Callable[[str, str, str, Json], Json]
"""``(id, resource_type, self_url, dto) -> document``"""

RenderPage = Callable[[str, str, int, PageRequest, Mapping[str, Json]], Json]
"""``(resource_type, self_url, total_count, page, {id: dto}) -> document``"""

ParseCreate = Callable[[Any, str], Json]
"""``(body, resource_type) -> creator dto``"""

ParseUpdate = Callable[[Any, str, str], Json]
"""``(body, resource_type, id) -> updater dto``"""

SchemaHook = Callable[[Json, str], Json]
"""``(dto_json_schema, resource_type) -> document json schema``"""


class Capability(str, Enum):
    RENDER_ONE = "render_one"
    RENDER_PAGE = "render_page"
    PARSE_CREATE = "parse_create"
    PARSE_UPDATE = "parse_update"


@dataclass(frozen=True)
class Representation:
    """A content type plus the operations it supports.

    Representations without parsers accept request bodies only through
    another registered representation.
    """

    content_type: str
    render_one: RenderOne | None = None
    render_page: RenderPage | None = None
    parse_create: ParseCreate | None = None
    parse_update: ParseUpdate | None = None
    one_schema: SchemaHook | None = None
    page_schema: SchemaHook | None = None
    create_schema: SchemaHook | None = None
    update_schema: SchemaHook | None = None

    def supports(self, capability: Capability) -> bool:
        return getattr(self, capability.value) is not None


def without_none(data: Mapping[str, Any]) -> Json:
    """Drop keys whose value is None."""
    return {k: v for k, v in data.items() if v is not None}
