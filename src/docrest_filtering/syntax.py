"""FilterSyntax: how a filter tree is carried in the query string."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from .exceptions import FilterParseError

QueryPairs = Iterable[tuple[str, str]]

_SEGMENT = re.compile(r"\[([^\[\]]*)\]")


def _split_segments(name: str, key: str) -> list[str] | None:
    """``filters[a][$eq]`` -> ``["a", "$eq"]``; None if ``name`` is not under key."""
    if not name.startswith(key + "["):
        return None
    rest = name[len(key) :]
    segments = _SEGMENT.findall(rest)
    if "".join(f"[{s}]" for s in segments) != rest:
        raise FilterParseError(f"Malformed query parameter name: {name!r}")
    return segments


def _assign(root: dict[str, Any], segments: list[str], value: Any) -> None:
    force_list = segments[-1] == ""
    if force_list:
        segments = segments[:-1]
    if not segments:
        raise FilterParseError("Empty filter parameter name")
    node = root
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    last = segments[-1]
    if last not in node:
        node[last] = [value] if force_list else value
    elif isinstance(node[last], list):
        node[last].append(value)
    else:
        node[last] = [node[last], value]


def _indexed_to_lists(node: Any) -> Any:
    if isinstance(node, list):
        return [_indexed_to_lists(item) for item in node]
    if not isinstance(node, dict):
        return node
    converted = {k: _indexed_to_lists(v) for k, v in node.items()}
    if converted and all(k.isdigit() for k in converted):
        return [converted[k] for k in sorted(converted, key=int)]
    return converted


def decode_deep_object(pairs: QueryPairs, key: str) -> dict[str, Any] | None:
    """Rebuild the object carried by ``key[a][b]=v`` query pairs.

    Repeated names and ``[]`` suffixes build lists; objects keyed only by
    decimal indexes become lists ordered by index. Returns None when no pair
    is under ``key``.
    """
    root: dict[str, Any] = {}
    found = False
    for name, value in pairs:
        segments = _split_segments(name, key)
        if segments is None:
            continue
        found = True
        _assign(root, segments, value)
    if not found:
        return None
    decoded = _indexed_to_lists(root)
    if not isinstance(decoded, dict):
        raise FilterParseError(f'The "{key}" parameter MUST be an object')
    return decoded


def parse_scalar(s: str) -> Any:
    """Parse a query string value: booleans, null and numbers; else the string."""
    lowered = s.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    try:
        return int(s)
    except ValueError:
        pass
    try:
        number = float(s)
    except ValueError:
        return s
    return number if math.isfinite(number) else s


def _coerce(node: Any) -> Any:
    if isinstance(node, dict):
        return {k: _coerce(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_coerce(v) for v in node]
    if isinstance(node, str):
        return parse_scalar(node)
    return node


class FilterSyntax:
    """Base for filter syntax parsers."""

    def extract(self, pairs: QueryPairs, key: str = "filters") -> dict[str, Any] | None:
        """Return the filter tree found in the query pairs, or None."""
        raise NotImplementedError


class DeepObjectSyntax(FilterSyntax):
    """``filters[field][$op]=value`` (OpenAPI ``deepObject`` style).

    Values stay strings unless ``coerce_values`` is set.
    """

    def __init__(self, *, coerce_values: bool = False) -> None:
        self.coerce_values = coerce_values

    def extract(self, pairs: QueryPairs, key: str = "filters") -> dict[str, Any] | None:
        tree = decode_deep_object(pairs, key)
        if tree is not None and self.coerce_values:
            return _coerce(tree)
        return tree


class JsonFilterSyntax(FilterSyntax):
    """``filters={"field": {"$op": value}}``."""

    def extract(self, pairs: QueryPairs, key: str = "filters") -> dict[str, Any] | None:
        raw = None
        for name, value in pairs:
            if name == key:
                raw = value
        return self.parse_filter(raw)

    def parse_filter(self, raw: Any) -> dict[str, Any] | None:
        if raw is None or raw == "":
            return None
        if isinstance(raw, Mapping):
            return dict(raw)
        if not isinstance(raw, str):
            raise FilterParseError('The "filters" parameter MUST be an object')
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise FilterParseError(f"Invalid JSON filter: {e}") from e
        if not isinstance(data, dict):
            raise FilterParseError('The "filters" parameter MUST be an object')
        return data
