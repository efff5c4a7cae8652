"""Issue link types and remote (web) links."""

from __future__ import annotations

from dataclasses import dataclass

from jira_resources.json_node import JsonNode
from jira_resources.resource import Resource


@dataclass
class LinkType(Resource):
    """A kind of link between issues, with its inward and outward wording."""

    name: str | None = None
    inward: str | None = None
    outward: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> LinkType:
        """Build a LinkType from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            inward=node.get("inward").as_string(),
            outward=node.get("outward").as_string(),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class RemoteLink(Resource):
    """A link from an issue to an external URL; url and title live under ``object``."""

    remote_url: str | None = None
    title: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> RemoteLink:
        """Build a RemoteLink from its JSON object."""
        return cls(
            **cls._identity(node),
            remote_url=node.path("object", "url").as_string(),
            title=node.path("object", "title").as_string(),
        )
