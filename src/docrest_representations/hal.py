"""HAL representation (``application/hal+json``)."""

from __future__ import annotations

from collections.abc import Mapping

from docrest_core.pagination import PageRequest

from .base import Json, Representation, without_none
from .pagination import compute_links

CONTENT_TYPE = "application/hal+json"


def _href(url: str | None) -> Json | None:
    return None if url is None else {"href": url}


def render_one(entity_id: str, resource_type: str, self_url: str, dto: Json) -> Json:
    return {"_links": {"self": {"href": self_url}}, "type": resource_type, **dto}


def render_page(
    resource_type: str,
    self_url: str,
    count: int,
    page: PageRequest,
    resources: Mapping[str, Json],
) -> Json:
    links = compute_links(count, page, self_url)
    return {
        "_links": without_none(
            {
                "self": _href(links.self_link),
                "next": _href(links.next),
                "prev": _href(links.previous),
                "first": _href(links.first),
                "last": _href(links.last),
            }
        ),
        "_embedded": {resource_type: list(resources.values())},
        "type": resource_type,
        "count": len(resources),
        "total": count,
    }


_LINK = {"type": "object", "properties": {"href": {"type": "string"}}}


def _one_schema(dto_schema: Json, resource_type: str) -> Json:
    return {
        "allOf": [
            {
                "type": "object",
                "properties": {
                    "_links": {"type": "object", "properties": {"self": _LINK}},
                    "type": {"type": "string", "default": resource_type},
                },
            },
            dto_schema,
        ]
    }


def _page_schema(dto_schema: Json, resource_type: str) -> Json:
    return {
        "type": "object",
        "properties": {
            "_links": {
                "type": "object",
                "properties": {
                    name: _LINK for name in ("self", "next", "prev", "first", "last")
                },
                "required": ["self", "first", "last"],
            },
            "_embedded": {
                "type": "object",
                "properties": {
                    resource_type: {"type": "array", "items": dto_schema}
                },
            },
            "type": {"type": "string", "default": resource_type},
            "count": {"type": "integer"},
            "total": {"type": "integer"},
        },
    }


HAL = Representation(
    content_type=CONTENT_TYPE,
    render_one=render_one,
    render_page=render_page,
    one_schema=_one_schema,
    page_schema=_page_schema,
)
