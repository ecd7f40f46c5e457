"""Expose a ResourceService as FastAPI routes."""

from __future__ import annotations

import json
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter
from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from docrest_core.exceptions import InvalidBodyError, ProblemError
from docrest_core.operators import describe_operators
from docrest_representations import Capability

from ...config import Operation
from ...service import RenderedResponse
from .errors import problem_response

if TYPE_CHECKING:
    from pydantic import BaseModel

    from ...service import ResourceService

_TRUE = frozenset({"", "1", "true"})


def _url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


async def _json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise InvalidBodyError("The body MUST be a valid JSON document") from e


def to_response(rendered: RenderedResponse) -> Response:
    if rendered.body is None:
        return Response(status_code=rendered.status, headers=rendered.headers)
    return JSONResponse(
        rendered.body,
        status_code=rendered.status,
        media_type=rendered.content_type,
        headers=rendered.headers,
    )


def problem_route_class(type_base_url: str) -> type[APIRoute]:
    """Route class rendering :class:`ProblemError` under ``type_base_url``."""

    class ProblemRoute(APIRoute):
        def get_route_handler(
            self,
        ) -> Callable[[Request], Coroutine[Any, Any, Response]]:
            handler = super().get_route_handler()

            async def handle(request: Request) -> Response:
                try:
                    return await handler(request)
                except ProblemError as e:
                    return problem_response(e, type_base_url)

            return handle

    return ProblemRoute


def _content(
    service: ResourceService,
    capability: Capability,
    hook: str,
    dto_schema: dict[str, Any] | None,
) -> dict[str, Any]:
    content: dict[str, Any] = {}
    for representation in service.registry:
        if not representation.supports(capability):
            continue
        schema_hook = getattr(representation, hook)
        schema = (
            schema_hook(dto_schema, service.resource_type)
            if schema_hook is not None and dto_schema is not None
            else {"type": "object"}
        )
        content[representation.content_type] = {"schema": schema}
    return content


def create_resource_router(
    service: ResourceService,
    *,
    prefix: str | None = None,
    dto_model: type[BaseModel] | None = None,
    tags: list[str] | None = None,
) -> APIRouter:
    """Register the enabled CRUD routes of ``service``.

    ``GET ""``, ``GET /{id}``, ``POST ""``, ``PATCH /{id}`` and
    ``DELETE /{id}`` under ``prefix`` (default ``/<resource type>``).
    ``dto_model`` documents the bodies in the OpenAPI schema. Problems raised
    by these routes use the service's ``problem_type_base_url``.
    """
    router = APIRouter(
        prefix=prefix or f"/{service.resource_type}",
        tags=list(tags or [service.resource_type]),
        route_class=problem_route_class(service.options.problem_type_base_url),
    )
    dto_schema = dto_model.model_json_schema() if dto_model is not None else None

    def content(capability: Capability, hook: str) -> dict[str, Any]:
        return _content(service, capability, hook, dto_schema)

    if service.is_enabled(Operation.LIST):

        @router.get(
            "",
            summary=f"List {service.resource_type}",
            description=(
                "Filter with `filters[<field>][<operator>]=<value>`.\n\n"
                + describe_operators(service.options.operators)
            ),
            responses={
                200: {"content": content(Capability.RENDER_PAGE, "page_schema")}
            },
        )
        async def get_list(request: Request) -> Response:
            return to_response(
                await service.get_list(
                    request.query_params, _url(request), request.headers.get("accept")
                )
            )

    if service.is_enabled(Operation.GET):

        @router.get(
            "/{entity_id}",
            summary=f"Get one {service.resource_type}",
            responses={200: {"content": content(Capability.RENDER_ONE, "one_schema")}},
        )
        async def get_one(entity_id: str, request: Request) -> Response:
            return to_response(
                await service.get_one(
                    entity_id,
                    _url(request),
                    request.query_params,
                    request.headers.get("accept"),
                )
            )

    if service.is_enabled(Operation.CREATE):

        @router.post(
            "",
            status_code=201,
            summary=f"Create one {service.resource_type}",
            responses={
                201: {"content": content(Capability.RENDER_ONE, "one_schema")},
                204: {"description": "Created, no content returned"},
            },
            openapi_extra={
                "requestBody": {
                    "required": True,
                    "content": content(Capability.PARSE_CREATE, "create_schema"),
                }
            },
        )
        async def create_one(request: Request) -> Response:
            return to_response(
                await service.create_one(
                    await _json_body(request),
                    _url(request),
                    request.headers.get("content-type"),
                    request.headers.get("accept"),
                )
            )

    if service.is_enabled(Operation.UPDATE):

        @router.patch(
            "/{entity_id}",
            summary=f"Update one {service.resource_type}",
            responses={
                200: {"content": content(Capability.RENDER_ONE, "one_schema")},
                204: {"description": "Updated, no content returned"},
            },
            openapi_extra={
                "requestBody": {
                    "required": True,
                    "content": content(Capability.PARSE_UPDATE, "update_schema"),
                }
            },
        )
        async def update_one(entity_id: str, request: Request) -> Response:
            no_content = request.query_params.get("no-content")
            return to_response(
                await service.update_one(
                    entity_id,
                    await _json_body(request),
                    _url(request),
                    request.query_params,
                    request.headers.get("content-type"),
                    request.headers.get("accept"),
                    no_content=no_content is not None and no_content.lower() in _TRUE,
                )
            )

    if service.is_enabled(Operation.DELETE):

        @router.delete(
            "/{entity_id}",
            status_code=204,
            summary=f"Delete one {service.resource_type}",
        )
        async def delete_one(entity_id: str) -> Response:
            return to_response(await service.delete_one(entity_id))

    return router
