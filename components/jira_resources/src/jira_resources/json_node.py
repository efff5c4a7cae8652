"""Typed, fail-closed access to a parsed JSON tree.

Resource classes never index raw dicts directly; they walk a ``JsonNode``
and ask for the type they want at the end of the path::

    node.path("epicData", "canEditEpics").as_boolean()

Any missing step yields a NULL node, whose terminals return the coercion
defaults from ``jira_resources.field``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date, datetime
from enum import Enum
from typing import Any, TypeVar

from jira_resources import field

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


class JsonKind(str, Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def _kind_of(value: Any) -> JsonKind:
    #bool first, it is an int subclass
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    return JsonKind.NULL


class JsonNode:
    """A single value of a parsed JSON document."""

    __slots__ = ("_value", "_kind")

    def __init__(self, value: Any = None) -> None:
        self._kind = _kind_of(value)
        self._value = value if self._kind is not JsonKind.NULL else None

    def __repr__(self) -> str:
        return f"<JsonNode {self._kind.value}>"

    @property
    def kind(self) -> JsonKind:
        return self._kind

    @property
    def value(self) -> Any:
        """The underlying parsed value."""
        return self._value

    @property
    def is_null(self) -> bool:
        return self._kind is JsonKind.NULL

    @property
    def is_object(self) -> bool:
        return self._kind is JsonKind.OBJECT

    @property
    def is_array(self) -> bool:
        return self._kind is JsonKind.ARRAY

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def contains(self, key: str) -> bool:
        return self.is_object and key in self._value

    def get(self, key: str) -> JsonNode:
        if not self.is_object:
            return JsonNode()
        return JsonNode(self._value.get(key))

    def path(self, *keys: str) -> JsonNode:
        node = self
        for key in keys:
            node = node.get(key)
            if node.is_null:
                break
        return node

    def items(self) -> Iterator[tuple[str, JsonNode]]:
        """Yield the entries of an object node; nothing for any other kind."""
        if not self.is_object:
            return
        for key, value in self._value.items():
            yield str(key), JsonNode(value)

    def elements(self) -> Iterator[JsonNode]:
        """Yield the elements of an array node; nothing for any other kind."""
        if not self.is_array:
            return
        for value in self._value:
            yield JsonNode(value)

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------

    def as_string(self) -> str | None:
        return field.as_string(self._value)

    def as_boolean(self) -> bool:
        return field.as_boolean(self._value)

    def as_integer(self, default: int | None = 0) -> int | None:
        return field.as_integer(self._value, default)

    def as_datetime(self, *, required: bool = False) -> datetime | None:
        return field.as_datetime(self._value, required=required)

    def as_date(self) -> date | None:
        return field.as_date(self._value)

    def as_string_list(self) -> list[str]:
        return field.as_string_list(self._value)

    def as_map(
        self,
        key_type: Callable[[Any], K | None] = field.as_string,
        value_type: Callable[[Any], V | None] = field.as_string,
    ) -> dict[K, V]:
        return field.as_map(key_type, value_type, self._value)

    def as_field_schema(self) -> field.FieldSchema | None:
        return field.as_field_schema(self._value)

    def as_object(self) -> dict[str, Any] | None:
        """Return a shallow copy of an object node, or None for any other kind."""
        return dict(self._value) if self.is_object else None

    # ------------------------------------------------------------------
    # Embedded resources
    # ------------------------------------------------------------------

    def resource(self, variant: type[R]) -> R | None:
        """Materialize an embedded object as ``variant``; None when absent or not an object."""
        if not self.is_object:
            return None
        return variant.from_json(self)

    def resources(self, variant: type[R]) -> list[R]:
        """Materialize each object element of an array, skipping anything else."""
        return [element.resource(variant) for element in self.elements() if element.is_object]
