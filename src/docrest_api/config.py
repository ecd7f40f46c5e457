"""ControllerOptions: per-resource configuration, fixed at startup."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from docrest_core.exceptions import DEFAULT_PROBLEM_TYPE_BASE_URL
from docrest_core.operators import ALL_OPERATORS, Operator, parse_operator
from docrest_filtering.validator import InvalidFilterAction


class Operation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


READ_OPERATIONS = frozenset({Operation.LIST, Operation.GET})


class DisableOptions(BaseModel):
    """Switch off single operations, or every read or write operation."""

    model_config = ConfigDict(frozen=True)

    list: bool = False
    get: bool = False
    create: bool = False
    update: bool = False
    delete: bool = False
    read: bool = False
    write: bool = False

    def is_disabled(self, operation: Operation) -> bool:
        if getattr(self, operation.value):
            return True
        return self.read if operation in READ_OPERATIONS else self.write


class PageSizeOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    default: int = Field(default=10, ge=1)
    max: int | None = Field(default=200, ge=1, description="None for no upper bound")

    @model_validator(mode="after")
    def check_default_within_max(self) -> PageSizeOptions:
        if self.max is not None and self.default > self.max:
            raise ValueError("page_size.default must not exceed page_size.max")
        return self


class OperatorValidatorOptions(BaseModel):
    """How invalid filter entries are handled."""

    model_config = ConfigDict(frozen=True)

    escape_invalid_logical_operator: bool = False
    throw_on_invalid_operator: bool = True

    @property
    def action(self) -> InvalidFilterAction:
        if self.throw_on_invalid_operator:
            return InvalidFilterAction.THROW
        return InvalidFilterAction.REMOVE


class ControllerOptions(BaseModel):
    """Configuration of one CRUD resource."""

    model_config = ConfigDict(frozen=True)

    resource_type: str | None = Field(
        default=None, description="Name used in documents; defaults to the store name"
    )
    disable: DisableOptions = Field(default_factory=DisableOptions)
    page_size: PageSizeOptions = Field(default_factory=PageSizeOptions)
    operators: tuple[Operator, ...] = ALL_OPERATORS
    operator_validator: OperatorValidatorOptions = Field(
        default_factory=OperatorValidatorOptions
    )
    problem_type_base_url: str = DEFAULT_PROBLEM_TYPE_BASE_URL
    id_field: str = "_id"

    @field_validator("operators", mode="before")
    @classmethod
    def parse_operators(cls, value: Any) -> tuple[Operator, ...]:
        operators = []
        for token in value:
            op = parse_operator(token)
            if op is None:
                raise ValueError(f"Unknown filter operator: {token!r}")
            operators.append(op)
        return tuple(operators)

    def is_disabled(self, operation: Operation) -> bool:
        return self.disable.is_disabled(operation)
