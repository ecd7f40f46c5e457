"""RepresentationRegistry: content negotiation over representations."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, NamedTuple

from docrest_core.exceptions import (
    ConfigurationError,
    ContentNegotiationError,
    RepresentationNotFoundError,
)

from .base import Capability, Representation

_log = logging.getLogger(__name__)

WILDCARDS = frozenset({"*/*", "*"})


class MediaRange(NamedTuple):
    media_type: str
    quality: float
    position: int


def parse_media_ranges(header: str) -> list[MediaRange]:
    """Parse an Accept header, best match first (ties keep header order)."""
    ranges: list[MediaRange] = []
    for position, item in enumerate(header.split(",")):
        media_type, *params = (part.strip() for part in item.split(";"))
        if not media_type:
            continue
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            ranges.append(MediaRange(media_type.lower(), quality, position))
    return sorted(ranges, key=lambda r: (-r.quality, r.position))


class RepresentationRegistry:
    """Ordered, immutable set of representations; the first is the default."""

    def __init__(self, representations: Iterable[Representation]) -> None:
        items = tuple(representations)
        seen: set[str] = set()
        for representation in items:
            key = representation.content_type.lower()
            if key in seen:
                raise ConfigurationError(
                    f'The content type "{representation.content_type}" '
                    "is registered twice",
                    title="Duplicate representation",
                )
            seen.add(key)
        self._items = items

    def __iter__(self) -> Any:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def content_types(self, capability: Capability | None = None) -> list[str]:
        return [
            r.content_type
            for r in self._items
            if capability is None or r.supports(capability)
        ]

    def negotiate(self, capability: Capability, header: Any = None) -> Representation:
        """Pick the representation serving ``header`` for ``capability``.

        A missing, non-string or wildcard header selects the first capable
        representation.
        """
        candidates = [r for r in self._items if r.supports(capability)]
        if not candidates:
            _log.error("No representation supports %s", capability.value)
            raise ConfigurationError("No output format provided", title="No output")
        if not isinstance(header, str) or not header.strip():
            return candidates[0]
        for media_range in parse_media_ranges(header):
            if media_range.media_type in WILDCARDS:
                return candidates[0]
            for representation in candidates:
                if representation.content_type.lower() == media_range.media_type:
                    return representation
        _log.debug("Unable to negotiate %r for %s", header, capability.value)
        raise ContentNegotiationError(
            f'The provided Accept header ("{header}") is not in the list of '
            "possible response"
        )

    def renderer(self, capability: Capability, content_type: str) -> Any:
        """Return the render function of the representation for ``content_type``."""
        representation = self._find(content_type)
        func = (
            None
            if representation is None
            else getattr(representation, capability.value)
        )
        if func is None:
            raise RepresentationNotFoundError(
                "Unable to find a renderer to display the result",
                title="No content renderer found",
            )
        return func

    def parser(self, capability: Capability, content_type: str) -> Any:
        representation = self._find(content_type)
        func = (
            None
            if representation is None
            else getattr(representation, capability.value)
        )
        if func is None:
            raise RepresentationNotFoundError(
                "Unable to find a parser to read the request",
                title="No content parser found",
            )
        return func

    def _find(self, content_type: str) -> Representation | None:
        wanted = content_type.split(";", 1)[0].strip().lower()
        for representation in self._items:
            if representation.content_type.lower() == wanted:
                return representation
        return None
