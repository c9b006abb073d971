"""Shared pydantic base for domain models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, model_validator
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Frozen model that reads camelCase JSON and accepts snake_case kwargs.

    Unknown keys are ignored so documents written by newer tooling still
    load; models that must reject them override ``extra``.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Range(DomainModel):
    """Inclusive numeric range. Integers stay integers."""

    min: int | float
    max: int | float

    @model_validator(mode="after")
    def check_order(self) -> Range:
        if self.min > self.max:
            raise ValueError("min must be less than or equal to max")
        return self


def _as_pairs(value: object) -> object:
    if isinstance(value, Mapping):
        return tuple(sorted(value.items(), key=lambda item: str(item[0])))
    return value


# String-to-string sidecar map. Reads a JSON object, stores sorted
# (key, value) pairs so frozen models stay immutable, dumps an object again.
StringMap = Annotated[
    tuple[tuple[str, str], ...],
    BeforeValidator(_as_pairs),
    PlainSerializer(lambda pairs: dict(pairs), return_type=dict[str, str]),
]


__all__ = ["DomainModel", "Range", "StringMap"]
