"""Issue statuses and the categories they are grouped into."""

from __future__ import annotations

from dataclasses import dataclass

from jira_resources.json_node import JsonNode
from jira_resources.resource import Resource


@dataclass
class StatusCategory(Resource):
    """The category (To Do, In Progress, Done) a status belongs to."""

    key: str | None = None
    color_name: str | None = None
    name: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> StatusCategory:
        """Build a StatusCategory from its JSON object."""
        return cls(
            **cls._identity(node),
            key=node.get("key").as_string(),
            color_name=node.get("colorName").as_string(),
            name=node.get("name").as_string(),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class Status(Resource):
    """A workflow status."""

    description: str | None = None
    icon_url: str | None = None
    name: str | None = None
    status_category: StatusCategory | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> Status:
        """Build a Status from its JSON object."""
        return cls(
            **cls._identity(node),
            description=node.get("description").as_string(),
            icon_url=node.get("iconUrl").as_string(),
            name=node.get("name").as_string(),
            status_category=node.get("statusCategory").resource(StatusCategory),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""
