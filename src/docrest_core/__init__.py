"""docrest core: operator vocabulary, error taxonomy, paging and store ports."""

from __future__ import annotations

from .exceptions import (
    DEFAULT_PROBLEM_TYPE_BASE_URL,
    ConfigurationError,
    ConflictError,
    ContentNegotiationError,
    DocrestError,
    DocumentShapeError,
    EntityNotFoundError,
    FilterValidationError,
    InvalidBodyError,
    NotFoundError,
    OperationDisabledError,
    ProblemError,
    RepresentationNotFoundError,
    ValidationError,
)
from .operators import (
    ALL_OPERATORS,
    OPERATOR_DESCRIPTIONS,
    ListOperator,
    LogicalOperator,
    Operator,
    ValueOperator,
    describe_operators,
    is_logical,
    parse_operator,
)
from .pagination import PageRequest, bound
from .ports import (
    DeleteResult,
    Document,
    DocumentStore,
    EntityConverter,
    FilterTree,
    SortSpec,
    UpdateResult,
)

__all__ = [
    "ALL_OPERATORS",
    "ConfigurationError",
    "ConflictError",
    "ContentNegotiationError",
    "DEFAULT_PROBLEM_TYPE_BASE_URL",
    "DeleteResult",
    "DocrestError",
    "Document",
    "DocumentShapeError",
    "DocumentStore",
    "EntityConverter",
    "EntityNotFoundError",
    "FilterTree",
    "FilterValidationError",
    "InvalidBodyError",
    "ListOperator",
    "LogicalOperator",
    "NotFoundError",
    "OPERATOR_DESCRIPTIONS",
    "Operator",
    "OperationDisabledError",
    "PageRequest",
    "ProblemError",
    "RepresentationNotFoundError",
    "SortSpec",
    "UpdateResult",
    "ValidationError",
    "ValueOperator",
    "bound",
    "describe_operators",
    "is_logical",
    "parse_operator",
]
