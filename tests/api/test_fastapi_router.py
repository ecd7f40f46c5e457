"""Tests for the FastAPI router and problem handler."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from docrest_api import ControllerOptions, DisableOptions, ResourceService
from docrest_api.contrib.fastapi import (
    PROBLEM_CONTENT_TYPE,
    create_resource_router,
    install_problem_handler,
)
from docrest_core.exceptions import ConflictError
from docrest_representations import SIMPLE_JSON

JSON_API_TYPE = "application/vnd.api+json"


class CatDto(BaseModel):
    name: str
    age: int


def _app(service: ResourceService, **kwargs: Any) -> FastAPI:
    app = FastAPI()
    install_problem_handler(app)
    app.include_router(create_resource_router(service, **kwargs))
    return app


@pytest.fixture
def client(service: ResourceService) -> TestClient:
    return TestClient(_app(service, dto_model=CatDto))


def _create(client: TestClient, **attributes: Any) -> Any:
    return client.post(
        "/cats",
        json={"data": {"type": "cats", "attributes": attributes}},
        headers={"Content-Type": JSON_API_TYPE},
    )


def test_crud_round(client: TestClient) -> None:
    created = _create(client, name="Tom", age=3)
    assert created.status_code == 201
    assert created.headers["content-type"].startswith(JSON_API_TYPE)
    entity_id = created.json()["data"]["id"]
    assert created.headers["location"] == f"/cats/{entity_id}"

    fetched = client.get(f"/cats/{entity_id}", params={"fields": "name"})
    assert fetched.status_code == 200
    assert fetched.json()["data"]["attributes"] == {"_id": entity_id, "name": "Tom"}

    updated = client.patch(
        f"/cats/{entity_id}",
        json={"data": {"type": "cats", "id": entity_id, "attributes": {"age": 4}}},
        headers={"Content-Type": JSON_API_TYPE},
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["attributes"]["age"] == 4

    deleted = client.delete(f"/cats/{entity_id}")
    assert deleted.status_code == 204
    assert client.get(f"/cats/{entity_id}").status_code == 404


def test_list_with_filters(client: TestClient) -> None:
    for name in ("Tom", "Tim", "Kit"):
        assert _create(client, name=name, age=1).status_code == 201
    response = client.get(
        "/cats?filters[name][$in][]=Tom&filters[name][$in][]=Kit&sort=name",
        headers={"Accept": "application/hal+json"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/hal+json")
    body = response.json()
    assert [cat["name"] for cat in body["_embedded"]["cats"]] == ["Kit", "Tom"]
    assert body["total"] == 2


def test_update_no_content_flag(client: TestClient) -> None:
    entity_id = _create(client, name="Tom", age=3).json()["data"]["id"]
    response = client.patch(
        f"/cats/{entity_id}?no-content",
        json={"data": {"type": "cats", "id": entity_id, "attributes": {"age": 5}}},
        headers={"Content-Type": JSON_API_TYPE},
    )
    assert response.status_code == 204
    assert response.content == b""


class TestProblems:
    def test_not_found(self, client: TestClient) -> None:
        response = client.get("/cats/nobody")
        assert response.status_code == 404
        assert response.headers["content-type"].startswith(PROBLEM_CONTENT_TYPE)
        assert response.json() == {
            "type": "https://httpstatuses.com/404",
            "title": "Entity not found",
            "status": 404,
            "detail": 'Unable to find an entity cat with id "nobody"',
        }

    def test_invalid_filter(self, client: TestClient) -> None:
        response = client.get("/cats?filters[name][$like]=T")
        assert response.status_code == 400
        assert response.json()["detail"] == 'The operator "$like" is not allowed'

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/cats", content=b"{nope", headers={"Content-Type": JSON_API_TYPE}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "The body MUST be a valid JSON document"

    def test_invalid_envelope(self, client: TestClient) -> None:
        response = client.post(
            "/cats", json={"name": "Tom"}, headers={"Content-Type": JSON_API_TYPE}
        )
        assert response.status_code == 400
        assert response.json()["title"] == "Invalid body"

    def test_unknown_accept(self, client: TestClient) -> None:
        response = client.get("/cats", headers={"Accept": "text/csv"})
        assert response.status_code == 500
        assert response.json()["title"] == "Unknown Accept header"

    def test_problem_type_uses_resource_base_url(
        self, make_service: Callable[..., ResourceService]
    ) -> None:
        options = ControllerOptions(
            resource_type="cats", problem_type_base_url="https://errors.example/"
        )
        app = FastAPI()
        app.include_router(create_resource_router(make_service(options=options)))
        response = TestClient(app).get("/cats/nobody")
        assert response.status_code == 404
        assert response.headers["content-type"].startswith(PROBLEM_CONTENT_TYPE)
        assert response.json()["type"] == "https://errors.example/404"

    def test_app_handler_renders_problems_outside_resource_routes(self) -> None:
        app = FastAPI()
        install_problem_handler(app, type_base_url="https://errors.example/")

        @app.get("/boom")
        async def boom() -> None:
            raise ConflictError("Already there")

        response = TestClient(app).get("/boom")
        assert response.status_code == 409
        assert response.headers["content-type"].startswith(PROBLEM_CONTENT_TYPE)
        assert response.json() == {
            "type": "https://errors.example/409",
            "title": "Duplicate document",
            "status": 409,
            "detail": "Already there",
        }

    def test_plain_json_body_must_be_object(
        self, make_service: Callable[..., ResourceService]
    ) -> None:
        client = TestClient(_app(make_service(representations=[SIMPLE_JSON])))
        response = client.post(
            "/cats", json=[1, 2], headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["title"] == "Invalid body"


def test_disabled_operations_are_not_routed(
    make_service: Callable[..., ResourceService],
) -> None:
    service = make_service(
        options=ControllerOptions(
            resource_type="cats", disable=DisableOptions(delete=True, create=True)
        )
    )
    client = TestClient(_app(service))
    assert client.delete("/cats/abc").status_code == 405
    assert client.post("/cats", json={}).status_code == 405
    assert client.get("/cats").status_code == 200


def test_custom_prefix(make_service: Callable[..., ResourceService]) -> None:
    client = TestClient(_app(make_service(), prefix="/api/felines"))
    assert client.get("/api/felines").status_code == 200
    assert client.get("/cats").status_code == 404


def test_openapi_documents_representations(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()
    list_op = schema["paths"]["/cats"]["get"]
    content = list_op["responses"]["200"]["content"]
    assert {JSON_API_TYPE, "application/hal+json"} <= set(content)
    assert "**Values operators**" in list_op["description"]
    create = schema["paths"]["/cats"]["post"]["requestBody"]["content"]
    assert set(create) == {JSON_API_TYPE}
