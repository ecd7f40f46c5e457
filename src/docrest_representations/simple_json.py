"""Plain JSON representation: bare DTOs, no envelope."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from docrest_core.pagination import PageRequest

from .base import Json, Representation

CONTENT_TYPE = "application/json"


def render_one(entity_id: str, resource_type: str, self_url: str, dto: Json) -> Json:
    return dto


def render_page(
    resource_type: str,
    self_url: str,
    count: int,
    page: PageRequest,
    resources: Mapping[str, Json],
) -> Json:
    return {
        "items": dict(resources),
        "page": page.current,
        "limit": page.size,
        "total": count,
    }


def parse_create(body: Any, resource_type: str) -> Json:
    return body  # type: ignore[no-any-return]


def parse_update(body: Any, resource_type: str, entity_id: str) -> Json:
    return body  # type: ignore[no-any-return]


def _page_schema(dto_schema: Json, resource_type: str) -> Json:
    return {
        "type": "object",
        "properties": {
            "items": {"type": "object", "additionalProperties": dto_schema},
            "page": {"type": "integer"},
            "limit": {"type": "integer"},
            "total": {"type": "integer"},
        },
        "required": ["items", "page", "limit", "total"],
    }


def _same_schema(dto_schema: Json, resource_type: str) -> Json:
    return dto_schema


SIMPLE_JSON = Representation(
    content_type=CONTENT_TYPE,
    render_one=render_one,
    render_page=render_page,
    parse_create=parse_create,
    parse_update=parse_update,
    one_schema=_same_schema,
    page_schema=_page_schema,
    create_schema=_same_schema,
    update_schema=_same_schema,
)
