"""Resource base type and the JSON-to-resource materializer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from jira_resources.json_node import JsonNode

__all__ = ["Resource", "as_resource", "materialize_many", "materialize_one"]

R = TypeVar("R")


@dataclass
class Resource:
    """Anything the server identifies by an id and a ``self`` link.

    Concrete resources subclass this and implement ``from_json``. A resource
    constructed with no arguments has no identity and serves as a
    placeholder or builder.
    """

    id: str | None = None
    self_url: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> Resource:
        """Build an instance from an object node. Subclasses must override."""
        raise NotImplementedError

    @staticmethod
    def _identity(node: JsonNode) -> dict[str, str | None]:
        #shared by every subclass's from_json
        return {"id": node.get("id").as_string(), "self_url": node.get("self").as_string()}


def materialize_one(variant: type[R], value: Any) -> R:
    """Materialize ``value`` as ``variant``.

    A value that is not a JSON object yields a default-constructed instance.
    """
    node = value if isinstance(value, JsonNode) else JsonNode(value)
    if not node.is_object:
        return variant()
    return variant.from_json(node)


def materialize_many(variant: type[R], value: Any) -> list[R]:
    """Materialize every object in a JSON array, in order.

    Non-array input yields an empty list. Elements that are not objects are
    dropped without leaving a gap.
    """
    node = value if isinstance(value, JsonNode) else JsonNode(value)
    return node.resources(variant)


def as_resource(variant: type[R], value: Any) -> R | None:
    """Materialize an optional embedded reference; None unless ``value`` is an object."""
    node = value if isinstance(value, JsonNode) else JsonNode(value)
    return node.resource(variant)
