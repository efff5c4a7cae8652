"""Jira project and the resources a project embeds."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from jira_resources.issue import IssueType
from jira_resources.json_node import JsonNode
from jira_resources.resource import Resource
from jira_resources.user import User


@dataclass
class ProjectCategory(Resource):
    """The category a project is filed under."""

    name: str | None = None
    description: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> ProjectCategory:
        """Build a ProjectCategory from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            description=node.get("description").as_string(),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class Component(Resource):
    """A project component."""

    name: str | None = None
    description: str | None = None
    is_assignee_type_valid: bool = False

    @classmethod
    def from_json(cls, node: JsonNode) -> Component:
        """Build a Component from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            description=node.get("description").as_string(),
            is_assignee_type_valid=node.get("isAssigneeTypeValid").as_boolean(),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class Version(Resource):
    """A project version (fix version or affects version)."""

    name: str | None = None
    description: str | None = None
    archived: bool = False
    released: bool = False
    release_date: date | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> Version:
        """Build a Version from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            description=node.get("description").as_string(),
            archived=node.get("archived").as_boolean(),
            released=node.get("released").as_boolean(),
            release_date=node.get("releaseDate").as_date(),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class Project(Resource):
    """A Jira project.

    ``lead`` and ``category`` are None when the payload does not embed them.
    ``issue_types`` is read from ``issueTypes``, falling back to the legacy
    ``issuetypes`` key some endpoints still send.
    """

    key: str | None = None
    name: str | None = None
    description: str | None = None
    email: str | None = None
    assignee_type: str | None = None
    lead: User | None = None
    category: ProjectCategory | None = None
    avatar_urls: dict[str, str] = field(default_factory=dict)
    roles: dict[str, str] = field(default_factory=dict)
    components: list[Component] = field(default_factory=list)
    issue_types: list[IssueType] = field(default_factory=list)
    versions: list[Version] = field(default_factory=list)

    @classmethod
    def from_json(cls, node: JsonNode) -> Project:
        """Build a Project from its JSON object."""
        issue_types = node.get("issueTypes") if node.contains("issueTypes") else node.get("issuetypes")
        return cls(
            **cls._identity(node),
            key=node.get("key").as_string(),
            name=node.get("name").as_string(),
            description=node.get("description").as_string(),
            email=node.get("email").as_string(),
            assignee_type=node.get("assigneeType").as_string(),
            lead=node.get("lead").resource(User),
            category=node.get("projectCategory").resource(ProjectCategory),
            avatar_urls=node.get("avatarUrls").as_map(),
            roles=node.get("roles").as_map(),
            components=node.get("components").resources(Component),
            issue_types=issue_types.resources(IssueType),
            versions=node.get("versions").resources(Version),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""
