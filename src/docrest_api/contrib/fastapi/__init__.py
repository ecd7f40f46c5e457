"""FastAPI integration for docrest resources."""

from .errors import PROBLEM_CONTENT_TYPE, install_problem_handler, problem_response
from .router import create_resource_router, to_response

__all__: list[str] = [
    "PROBLEM_CONTENT_TYPE",
    "create_resource_router",
    "install_problem_handler",
    "problem_response",
    "to_response",
]
