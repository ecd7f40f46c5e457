"""JSON:API representation (``application/vnd.api+json``)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from docrest_core.exceptions import InvalidBodyError
from docrest_core.pagination import PageRequest

from .base import Json, Representation, without_none
from .pagination import compute_links
from .urls import RelativeUrl

CONTENT_TYPE = "application/vnd.api+json"


def _resource(entity_id: str, resource_type: str, dto: Json) -> Json:
    return {"id": entity_id, "type": resource_type, "attributes": dto}


def render_one(entity_id: str, resource_type: str, self_url: str, dto: Json) -> Json:
    return {
        "data": _resource(entity_id, resource_type, dto),
        "links": {"self": str(RelativeUrl.from_string(self_url))},
    }


def render_page(
    resource_type: str,
    self_url: str,
    count: int,
    page: PageRequest,
    resources: Mapping[str, Json],
) -> Json:
    links = compute_links(count, page, self_url)
    return {
        "data": [
            _resource(entity_id, resource_type, dto)
            for entity_id, dto in resources.items()
        ],
        "links": without_none(
            {
                "self": links.self_link,
                "first": links.first,
                "last": links.last,
                "next": links.next,
                "prev": links.previous,
            }
        ),
        "meta": {
            "totalCount": count,
            "page": {
                "size": page.size,
                "count": links.total_pages,
                "current": page.current,
            },
        },
    }


def _data(body: Any, resource_type: str) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise InvalidBodyError("The body MUST defined and of type object")
    data = body.get("data")
    if not isinstance(data, dict):
        raise InvalidBodyError(
            'The body MUST have a property named "data" of type object'
        )
    if data.get("type") != resource_type:
        raise InvalidBodyError(
            "The body MUST have a property named 'data.type' with the value "
            f"'{resource_type}'"
        )
    if not isinstance(data.get("attributes"), dict):
        raise InvalidBodyError(
            'The body MUST have a property named "data.attributes" of type object'
        )
    return data


def parse_create(body: Any, resource_type: str) -> Json:
    attributes: Json = _data(body, resource_type)["attributes"]
    return attributes


def parse_update(body: Any, resource_type: str, entity_id: str) -> Json:
    data = _data(body, resource_type)
    if not isinstance(data.get("id"), str):
        raise InvalidBodyError(
            'The body MUST have a property named "data.id" of type string'
        )
    if data["id"] != entity_id:
        raise InvalidBodyError(
            'The Id provided in the property named "data.id" must be the same '
            "as the id in the URL path parameter"
        )
    attributes: Json = data["attributes"]
    return attributes


# ── JSON Schema hooks ────────────────────────────────────────────────


def _resource_schema(dto_schema: Json, resource_type: str, id_required: bool) -> Json:
    return {
        "type": "object",
        "properties": {
            "type": {"type": "string", "default": resource_type},
            "id": {"type": "string"},
            "attributes": dto_schema,
        },
        "required": (
            ["type", "id", "attributes"] if id_required else ["type", "attributes"]
        ),
    }


def _one_schema(dto_schema: Json, resource_type: str) -> Json:
    return {
        "type": "object",
        "properties": {
            "data": _resource_schema(dto_schema, resource_type, True),
            "links": {
                "type": "object",
                "properties": {"self": {"type": "string"}},
                "required": ["self"],
            },
            "meta": {"type": "object"},
        },
        "required": ["data", "links"],
    }


def _page_schema(dto_schema: Json, resource_type: str) -> Json:
    return {
        "type": "object",
        "properties": {
            "data": {
                "type": "array",
                "items": _resource_schema(dto_schema, resource_type, True),
            },
            "links": {
                "type": "object",
                "properties": {
                    name: {"type": "string"}
                    for name in ("self", "next", "prev", "last", "first")
                },
                "required": ["self", "last", "first"],
            },
            "meta": {
                "type": "object",
                "properties": {
                    "totalCount": {"type": "integer"},
                    "page": {
                        "type": "object",
                        "properties": {
                            "count": {"type": "integer"},
                            "size": {"type": "integer"},
                            "current": {"type": "integer"},
                        },
                    },
                },
            },
        },
    }


def _create_schema(dto_schema: Json, resource_type: str) -> Json:
    return {
        "type": "object",
        "properties": {"data": _resource_schema(dto_schema, resource_type, False)},
        "required": ["data"],
    }


def _update_schema(dto_schema: Json, resource_type: str) -> Json:
    return {
        "type": "object",
        "properties": {"data": _resource_schema(dto_schema, resource_type, True)},
        "required": ["data"],
    }


JSON_API = Representation(
    content_type=CONTENT_TYPE,
    render_one=render_one,
    render_page=render_page,
    parse_create=parse_create,
    parse_update=parse_update,
    one_schema=_one_schema,
    page_schema=_page_schema,
    create_schema=_create_schema,
    update_schema=_update_schema,
)
