"""Saved JQL filters."""

from __future__ import annotations

from dataclasses import dataclass

from jira_resources.json_node import JsonNode
from jira_resources.resource import Resource


@dataclass
class Filter(Resource):
    """A saved JQL filter."""

    name: str | None = None
    jql: str | None = None
    favourite: bool = False

    @classmethod
    def from_json(cls, node: JsonNode) -> Filter:
        """Build a Filter from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            jql=node.get("jql").as_string(),
            favourite=node.get("favourite").as_boolean(),
        )
