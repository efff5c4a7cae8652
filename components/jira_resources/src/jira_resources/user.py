"""Jira user."""

from __future__ import annotations

from dataclasses import dataclass, field

from jira_resources.json_node import JsonNode
from jira_resources.resource import Resource


@dataclass
class User(Resource):
    """A Jira account as embedded in issues, projects and history records."""

    name: str | None = None
    display_name: str | None = None
    email: str | None = None
    account_id: str | None = None
    active: bool = False
    time_zone: str | None = None
    avatar_urls: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, node: JsonNode) -> User:
        """Build a User from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            display_name=node.get("displayName").as_string(),
            email=node.get("emailAddress").as_string(),
            account_id=node.get("accountId").as_string(),
            active=node.get("active").as_boolean(),
            time_zone=node.get("timeZone").as_string(),
            avatar_urls=node.get("avatarUrls").as_map(),
        )

    def __str__(self) -> str:
        """Return display name, falling back to user name."""
        return self.display_name or self.name or ""
