"""Page descriptor and clamping helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def bound(
    minimum: int | None, value: Any, maximum: int | None, fallback: int
) -> int:
    """Clamp ``value`` into ``[minimum, maximum]``.

    ``None`` or a non-numeric value is replaced by ``fallback`` first; either
    bound may be ``None`` to leave that side open.
    """
    try:
        final = fallback if value is None else int(value)
    except (TypeError, ValueError):
        final = fallback
    if minimum is not None:
        final = max(minimum, final)
    if maximum is not None:
        final = min(maximum, final)
    return final


@dataclass(frozen=True)
class PageRequest:
    """1-based page request, already clamped by the caller."""

    size: int
    current: int = 1

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"page size must be >= 1, got {self.size}")
        if self.current < 1:
            raise ValueError(f"page number must be >= 1, got {self.current}")

    @property
    def offset(self) -> int:
        return (self.current - 1) * self.size

    @classmethod
    def clamped(
        cls,
        size: Any,
        number: Any,
        *,
        default_size: int = 10,
        max_size: int | None = 200,
    ) -> PageRequest:
        """Build a request from raw user input, applying the paging bounds."""
        return cls(
            size=bound(1, size, max_size, default_size),
            current=bound(1, number, None, 1),
        )
