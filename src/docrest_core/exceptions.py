"""Error taxonomy for docrest.

Every error raised to the HTTP boundary is a ``ProblemError``: it carries an
HTTP status, a short title and a human-readable detail, and renders itself as
an RFC 7807 problem document through ``to_dict()``.
"""

from __future__ import annotations

from typing import Any

DEFAULT_PROBLEM_TYPE_BASE_URL = "https://httpstatuses.com/"


class DocrestError(Exception):
    """Root exception for the entire docrest toolkit."""


class ProblemError(DocrestError):
    """An error that maps onto an HTTP problem response."""

    status: int = 500
    title: str = "Internal Server Error"

    def __init__(
        self,
        detail: str,
        *,
        title: str | None = None,
        status: int | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        if title is not None:
            self.title = title
        if status is not None:
            self.status = status
        self.detail = detail
        self.extra = dict(extra or {})
        super().__init__(f"{self.title}: {detail}")

    def to_dict(
        self, type_base_url: str = DEFAULT_PROBLEM_TYPE_BASE_URL
    ) -> dict[str, Any]:
        """Return the RFC 7807 representation of this error."""
        return {
            "type": f"{type_base_url}{self.status}",
            "title": self.title,
            "status": self.status,
            "detail": self.detail,
            **self.extra,
        }


# ── Client errors ────────────────────────────────────────────────────


class ValidationError(ProblemError):
    """Raised when client input is rejected."""

    status = 400
    title = "Bad Request"


class FilterValidationError(ValidationError):
    """Raised when a filter tree uses a disallowed field, operator or value."""

    title = "Invalid search criteria"


class InvalidBodyError(ValidationError):
    """Raised when a create/update body does not match the expected envelope."""

    title = "Invalid body"


class DocumentShapeError(ValidationError):
    """Raised when the store rejects a write because of the document shape."""

    title = "Document validation failure"


class NotFoundError(ProblemError):
    """Raised when a resource is not found."""

    status = 404
    title = "Not Found"


class EntityNotFoundError(NotFoundError):
    """Raised when a specific entity cannot be found by ID."""

    title = "Entity not found"

    def __init__(self, entity_type: str, entity_id: object, action: str = "") -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        suffix = f" to {action}" if action else ""
        super().__init__(
            f'Unable to find an entity {entity_type} with id "{entity_id}"{suffix}'
        )


class OperationDisabledError(ProblemError):
    """Raised when a disabled CRUD operation is invoked."""

    status = 405
    title = "Method Not Allowed"


class ConflictError(ProblemError):
    """Raised when the store reports a uniqueness violation."""

    status = 409
    title = "Duplicate document"


# ── Server errors ────────────────────────────────────────────────────


class ConfigurationError(ProblemError):
    """Raised when the server setup cannot satisfy a request.

    Distinct from ``ValidationError``: the client did nothing wrong.
    """

    status = 500
    title = "Configuration error"


class RepresentationNotFoundError(ConfigurationError):
    """Raised when no representation provides a renderer or parser."""


class ContentNegotiationError(ConfigurationError):
    """Raised when a requested content type is not registered."""

    title = "Unknown Accept header"
