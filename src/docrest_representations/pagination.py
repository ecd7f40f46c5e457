"""Pagination links for a page of results."""

from __future__ import annotations

import math
from dataclasses import dataclass

from docrest_core.pagination import PageRequest

from .urls import RelativeUrl

PAGE_SIZE_PARAM = "page[size]"
PAGE_NUMBER_PARAM = "page[number]"


@dataclass(frozen=True)
class PaginationLinks:
    total_pages: int
    self_link: str
    first: str
    last: str
    next: str | None = None
    previous: str | None = None


def total_pages(count: int, size: int) -> int:
    return math.ceil(count / size)


def compute_links(
    count: int, page: PageRequest, self_url: str | RelativeUrl
) -> PaginationLinks:
    """Navigation links for ``page`` out of ``count`` items.

    Other query parameters of ``self_url`` are preserved. ``next`` and
    ``previous`` are None at the edges. ``page`` is used as given.
    """
    pages = total_pages(count, page.size)
    url = (
        RelativeUrl.from_string(self_url)
        .set_param(PAGE_SIZE_PARAM, page.size)
        .set_param(PAGE_NUMBER_PARAM, page.current)
    )

    def at(number: int) -> str:
        return str(url.set_param(PAGE_NUMBER_PARAM, number))

    return PaginationLinks(
        total_pages=pages,
        self_link=str(url),
        first=at(1),
        last=at(pages),
        next=at(page.current + 1) if page.current < pages else None,
        previous=at(page.current - 1) if page.current > 1 else None,
    )
