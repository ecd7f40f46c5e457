"""CRUD resource service: options, orchestration and framework glue."""

from __future__ import annotations

from .config import (
    ControllerOptions,
    DisableOptions,
    Operation,
    OperatorValidatorOptions,
    PageSizeOptions,
)
from .service import (
    RenderedResponse,
    ResourceService,
    default_error_translator,
)

__all__ = [
    "ControllerOptions",
    "DisableOptions",
    "Operation",
    "OperatorValidatorOptions",
    "PageSizeOptions",
    "RenderedResponse",
    "ResourceService",
    "default_error_translator",
]
