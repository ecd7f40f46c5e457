"""FieldWhitelist: per-resource filterable/sortable/projectable fields."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, get_origin

from pydantic import BaseModel

from .exceptions import FieldNotAllowedError
from .validator import InvalidFilterAction


def dot_keys(model: type[BaseModel]) -> list[str]:
    """Dotted leaf paths of a pydantic model, nested models expanded.

    Only fields annotated with a model class are expanded; ``Optional[Model]``
    and ``list[Model]`` are leaves.
    """
    keys: list[str] = []
    for name, info in model.model_fields.items():
        public = info.alias or name
        annotation = info.annotation
        if (
            get_origin(annotation) is None
            and isinstance(annotation, type)
            and issubclass(annotation, BaseModel)
        ):
            keys.extend(f"{public}.{child}" for child in dot_keys(annotation))
        else:
            keys.append(public)
    return keys


def flat_keys(data: Mapping[str, Any], with_parent: bool = False) -> list[str]:
    """Dotted paths of an example document; lists and primitives are leaves."""
    keys: list[str] = []
    for key, value in data.items():
        if not isinstance(value, Mapping):
            keys.append(key)
            continue
        children = [f"{key}.{child}" for child in flat_keys(value, with_parent)]
        if with_parent:
            keys.append(key)
        keys.extend(children)
    return keys


def _frozen(fields: Iterable[str] | None) -> frozenset[str] | None:
    return None if fields is None else frozenset(fields)


class FieldWhitelist:
    """Per-resource allowed fields. ``None`` for a set means unrestricted."""

    def __init__(
        self,
        *,
        filterable_fields: Iterable[str] | None = None,
        sortable_fields: Iterable[str] | None = None,
        projectable_fields: Iterable[str] | None = None,
    ) -> None:
        self.filterable_fields = _frozen(filterable_fields)
        self.sortable_fields = _frozen(sortable_fields)
        self.projectable_fields = _frozen(projectable_fields)

    @classmethod
    def from_model(cls, model: type[BaseModel]) -> FieldWhitelist:
        keys = dot_keys(model)
        return cls(
            filterable_fields=keys, sortable_fields=keys, projectable_fields=keys
        )

    @classmethod
    def unrestricted(cls) -> FieldWhitelist:
        return cls()

    def allow_filter(self, field: str) -> None:
        if self.filterable_fields is not None and field not in self.filterable_fields:
            raise FieldNotAllowedError(field)

    def allow_sort(self, field: str) -> None:
        if self.sortable_fields is not None and field not in self.sortable_fields:
            raise FieldNotAllowedError(field, f'The field "{field}" is not sortable')

    def allow_project(self, field: str) -> None:
        if (
            self.projectable_fields is not None
            and field not in self.projectable_fields
        ):
            raise FieldNotAllowedError(
                field, f'The field "{field}" is not projectable'
            )

    def filter_sort(
        self,
        tokens: list[str] | None,
        action: InvalidFilterAction = InvalidFilterAction.THROW,
    ) -> list[str] | None:
        """Apply the sort allow-list to ``["name", "-age"]`` style tokens."""
        if tokens is None:
            return None
        return [
            token
            for token in tokens
            if _allowed(self.allow_sort, token.removeprefix("-"), action)
        ]

    def filter_projection(
        self,
        fields: list[str] | None,
        action: InvalidFilterAction = InvalidFilterAction.THROW,
    ) -> list[str] | None:
        if fields is None:
            return None
        return [
            field for field in fields if _allowed(self.allow_project, field, action)
        ]


def _allowed(check: Any, field: str, action: InvalidFilterAction) -> bool:
    try:
        check(field)
    except FieldNotAllowedError:
        if action is InvalidFilterAction.THROW:
            raise
        return action is InvalidFilterAction.DO_NOTHING
    return True
