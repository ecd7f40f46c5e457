"""MongoDB persistence exceptions."""

from __future__ import annotations

from docrest_core.exceptions import DocrestError


class MongoPersistenceError(DocrestError):
    """Base for MongoDB persistence errors."""


class MongoConnectionError(MongoPersistenceError):
    """Raised when the Motor driver is unavailable or the collection unbound."""
