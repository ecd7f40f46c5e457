"""JSON-LD / Hydra representation (``application/ld+json``)."""

from __future__ import annotations

from collections.abc import Mapping

from docrest_core.pagination import PageRequest

from .base import Json, Representation, without_none
from .pagination import compute_links

CONTENT_TYPE = "application/ld+json"
HYDRA_CONTEXT = "http://www.w3.org/ns/hydra/context.jsonld"


def _entity(entity_id: str, resource_type: str, dto: Json) -> Json:
    return {"@id": entity_id, "@type": resource_type, **dto}


def json_ld(context: str) -> Representation:
    """Build a JSON-LD representation whose terms live in vocabulary ``context``."""

    def render_one(
        entity_id: str, resource_type: str, self_url: str, dto: Json
    ) -> Json:
        return {
            "@context": {"@vocab": context},
            **_entity(entity_id, resource_type, dto),
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
            "@context": {"hydra": HYDRA_CONTEXT, "@vocab": context},
            "@id": links.first,
            "@type": "hydra:Collection",
            "hydra:totalItems": count,
            "hydra:member": [
                _entity(entity_id, resource_type, dto)
                for entity_id, dto in resources.items()
            ],
            "hydra:view": without_none(
                {
                    "@id": links.self_link,
                    "@type": "hydra:PartialCollectionView",
                    "hydra:first": links.first,
                    "hydra:previous": links.previous,
                    "hydra:next": links.next,
                    "hydra:last": links.last,
                }
            ),
        }

    def entity_schema(dto_schema: Json, resource_type: str) -> Json:
        return {
            "allOf": [
                {
                    "type": "object",
                    "properties": {
                        "@id": {"type": "string"},
                        "@type": {"type": "string", "default": resource_type},
                    },
                },
                dto_schema,
            ]
        }

    def one_schema(dto_schema: Json, resource_type: str) -> Json:
        return {
            "allOf": [
                {
                    "type": "object",
                    "properties": {
                        "@context": {
                            "type": "object",
                            "properties": {
                                "@vocab": {"type": "string", "default": context}
                            },
                        }
                    },
                },
                entity_schema(dto_schema, resource_type),
            ]
        }

    def page_schema(dto_schema: Json, resource_type: str) -> Json:
        view_links = ("hydra:first", "hydra:previous", "hydra:next", "hydra:last")
        return {
            "type": "object",
            "properties": {
                "@context": {
                    "type": "object",
                    "properties": {
                        "@vocab": {"type": "string", "default": context},
                        "hydra": {"type": "string", "default": HYDRA_CONTEXT},
                    },
                },
                "@id": {"type": "string"},
                "@type": {"type": "string", "default": "hydra:Collection"},
                "hydra:totalItems": {"type": "integer"},
                "hydra:member": {
                    "type": "array",
                    "items": entity_schema(dto_schema, resource_type),
                },
                "hydra:view": {
                    "type": "object",
                    "properties": {
                        "@id": {"type": "string"},
                        "@type": {
                            "type": "string",
                            "default": "hydra:PartialCollectionView",
                        },
                        **{name: {"type": "string"} for name in view_links},
                    },
                    "required": ["@id", "@type", "hydra:first", "hydra:last"],
                },
            },
        }

    return Representation(
        content_type=CONTENT_TYPE,
        render_one=render_one,
        render_page=render_page,
        one_schema=one_schema,
        page_schema=page_schema,
    )
