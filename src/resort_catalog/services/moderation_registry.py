"""Declarations of moderated fields and their value kinds.

Each entity adapter owns a `FieldRegistry` listing the fields an untrusted
owner may edit only through moderation. The registry is the single place
that knows what shape a submitted value must have; the transition engine
treats values as opaque once they pass `FieldSpec.coerce`.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from resort_catalog.core.exceptions import UnsupportedFieldError, ValidationError
from resort_catalog.models.moderation import EntityType


class FieldKind(str, enum.Enum):
    """Kinds of values a moderated field can hold."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ID_SET = "id_set"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one moderated field.

    Attributes:
        name: Field name used in payloads and in `moderated_field.field_name`.
        kind: Shape of the value.
        label: Human readable name used in logs.
        attribute: Entity attribute holding the public value (defaults to `name`).
        target: Model referenced by an id-set field.
        minimum: Inclusive lower bound for number fields.
        maximum: Inclusive upper bound for number fields.
        integer: Number fields refuse fractional values when set.
        validator: Extra check applied after the kind check; raises `ValueError`.
    """

    name: str
    kind: FieldKind
    label: str
    attribute: str | None = None
    target: type | None = None
    minimum: float | None = None
    maximum: float | None = None
    integer: bool = False
    validator: Callable[[Any], Any] | None = None

    @property
    def attr(self) -> str:
        """Entity attribute backing this field."""
        return self.attribute or self.name

    def coerce(self, value: Any) -> Any:
        """Validate `value` against the declared kind and return its stored form.

        Raises:
            ValidationError: If the value does not match the field kind.
        """
        try:
            coerced = _COERCERS[self.kind](self, value)
            if self.validator is not None:
                coerced = self.validator(coerced)
        except ValueError as exc:
            raise ValidationError(f"Invalid value for '{self.name}': {exc}", field=self.name) from exc
        return coerced


def _coerce_text(spec: FieldSpec, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("expected a string")
    return value


def _coerce_number(spec: FieldSpec, value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError("expected a number")
    if spec.integer:
        if isinstance(value, float) and not value.is_integer():
            raise ValueError("expected a whole number")
        value = int(value)
    if spec.minimum is not None and value < spec.minimum:
        raise ValueError(f"must be at least {spec.minimum:g}")
    if spec.maximum is not None and value > spec.maximum:
        raise ValueError(f"must be at most {spec.maximum:g}")
    return value


def _coerce_boolean(spec: FieldSpec, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError("expected a boolean")
    return value


def _coerce_id_set(spec: FieldSpec, value: Any) -> list[int]:
    if not isinstance(value, list | tuple):
        raise ValueError("expected a list of ids")
    ids: list[int] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValueError(f"id {item!r} is not an integer")
        if item not in ids:
            ids.append(item)
    return ids


def _coerce_structured(spec: FieldSpec, value: Any) -> dict[str, Any] | list[Any]:
    if not isinstance(value, dict | list):
        raise ValueError("expected an object or a list")
    return value


_COERCERS: dict[FieldKind, Callable[[FieldSpec, Any], Any]] = {
    FieldKind.TEXT: _coerce_text,
    FieldKind.NUMBER: _coerce_number,
    FieldKind.BOOLEAN: _coerce_boolean,
    FieldKind.ID_SET: _coerce_id_set,
    FieldKind.STRUCTURED: _coerce_structured,
}


class FieldRegistry:
    """Ordered set of moderated fields declared for one entity type."""

    def __init__(self, entity_type: EntityType, fields: Iterable[FieldSpec]) -> None:
        self.entity_type = entity_type
        self._fields: dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.name in self._fields:
                raise ValueError(f"Duplicate moderated field '{spec.name}'")
            self._fields[spec.name] = spec

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def names(self) -> list[str]:
        """Declared field names in declaration order."""
        return list(self._fields)

    def get(self, name: str) -> FieldSpec:
        """Return the field declaration for `name`.

        Raises:
            UnsupportedFieldError: If the field is not declared.
        """
        try:
            return self._fields[name]
        except KeyError:
            raise UnsupportedFieldError(self.entity_type.value, name) from None
