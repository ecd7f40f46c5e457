"""Document formats for resources: JSON:API, HAL, JSON-LD/Hydra, plain JSON."""

from __future__ import annotations

from .base import Capability, Json, Representation
from .hal import HAL
from .json_api import JSON_API
from .json_ld import json_ld
from .pagination import PaginationLinks, compute_links, total_pages
from .registry import RepresentationRegistry, parse_media_ranges
from .simple_json import SIMPLE_JSON
from .urls import RelativeUrl

DEFAULT_REPRESENTATIONS = (JSON_API, HAL)

__all__ = [
    "Capability",
    "DEFAULT_REPRESENTATIONS",
    "HAL",
    "JSON_API",
    "Json",
    "PaginationLinks",
    "RelativeUrl",
    "Representation",
    "RepresentationRegistry",
    "SIMPLE_JSON",
    "compute_links",
    "json_ld",
    "parse_media_ranges",
    "total_pages",
]
