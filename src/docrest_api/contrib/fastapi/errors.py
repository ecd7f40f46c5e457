"""Problem-details responses for FastAPI applications."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from starlette.requests import Request
from starlette.responses import JSONResponse

from docrest_core.exceptions import DEFAULT_PROBLEM_TYPE_BASE_URL, ProblemError

if TYPE_CHECKING:
    from fastapi import FastAPI

PROBLEM_CONTENT_TYPE = "application/problem+json"


def problem_response(
    error: ProblemError, type_base_url: str = DEFAULT_PROBLEM_TYPE_BASE_URL
) -> JSONResponse:
    return JSONResponse(
        error.to_dict(type_base_url),
        status_code=error.status,
        media_type=PROBLEM_CONTENT_TYPE,
    )


def install_problem_handler(
    app: FastAPI, type_base_url: str = DEFAULT_PROBLEM_TYPE_BASE_URL
) -> None:
    """Render every :class:`ProblemError` as ``application/problem+json``.

    Example:
        ```python
        app = FastAPI()
        install_problem_handler(app)
        app.include_router(create_resource_router(service))
        ```
    """

    async def handle(request: Request, exc: Exception) -> JSONResponse:
        return problem_response(cast(ProblemError, exc), type_base_url)

    app.add_exception_handler(ProblemError, handle)
