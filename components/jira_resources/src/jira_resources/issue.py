"""Issue contract - issues, their classifiers and search result pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from jira_resources.json_node import JsonNode
from jira_resources.resource import Resource
from jira_resources.status import Status
from jira_resources.user import User

if TYPE_CHECKING:
    from jira_resources.project import Project


@dataclass
class IssueType(Resource):
    """An issue type.

    ``fields`` holds the create-metadata field map when the type was fetched
    through createmeta, otherwise None. ``statuses`` is only populated by the
    project statuses endpoint.
    """

    description: str | None = None
    icon_url: str | None = None
    name: str | None = None
    subtask: bool = False
    fields: dict[str, Any] | None = None
    statuses: list[Status] = field(default_factory=list)

    @classmethod
    def from_json(cls, node: JsonNode) -> IssueType:
        """Build an IssueType from its JSON object."""
        return cls(
            **cls._identity(node),
            description=node.get("description").as_string(),
            icon_url=node.get("iconUrl").as_string(),
            name=node.get("name").as_string(),
            subtask=node.get("subtask").as_boolean(),
            fields=node.get("fields").as_object(),
            statuses=node.get("statuses").resources(Status),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class Priority(Resource):
    """An issue priority."""

    name: str | None = None
    description: str | None = None
    icon_url: str | None = None
    status_color: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> Priority:
        """Build a Priority from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            description=node.get("description").as_string(),
            icon_url=node.get("iconUrl").as_string(),
            status_color=node.get("statusColor").as_string(),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class Resolution(Resource):
    """An issue resolution."""

    description: str | None = None
    name: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> Resolution:
        """Build a Resolution from its JSON object."""
        return cls(
            **cls._identity(node),
            description=node.get("description").as_string(),
            name=node.get("name").as_string(),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class Votes(Resource):
    """The vote count of an issue."""

    votes: int = 0
    has_voted: bool = False

    @classmethod
    def from_json(cls, node: JsonNode) -> Votes:
        """Build Votes from its JSON object."""
        return cls(
            **cls._identity(node),
            votes=node.get("votes").as_integer(),
            has_voted=node.get("hasVoted").as_boolean(),
        )

    def __str__(self) -> str:
        """Return vote count."""
        return str(self.votes)


# ------------------------------------------------------------------
# Issue
# ------------------------------------------------------------------

@dataclass
class Issue(Resource):
    """A Jira issue as returned by the issue and search endpoints.

    Only the system fields are materialized. Everything under ``fields`` is
    optional on the wire, so every attribute may be left at its default.
    """

    key: str | None = None
    summary: str | None = None
    description: str | None = None
    issue_type: IssueType | None = None
    status: Status | None = None
    priority: Priority | None = None
    resolution: Resolution | None = None
    project: Project | None = None
    assignee: User | None = None
    reporter: User | None = None
    votes: Votes | None = None
    labels: list[str] = field(default_factory=list)
    created: datetime | None = None
    updated: datetime | None = None
    resolution_date: datetime | None = None
    due_date: date | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> Issue:
        """Build an Issue from its JSON object."""
        #imported here, project.py depends on this module
        from jira_resources.project import Project

        fields = node.get("fields")
        return cls(
            **cls._identity(node),
            key=node.get("key").as_string(),
            summary=fields.get("summary").as_string(),
            description=_description_text(fields.get("description")),
            issue_type=fields.get("issuetype").resource(IssueType),
            status=fields.get("status").resource(Status),
            priority=fields.get("priority").resource(Priority),
            resolution=fields.get("resolution").resource(Resolution),
            project=fields.get("project").resource(Project),
            assignee=fields.get("assignee").resource(User),
            reporter=fields.get("reporter").resource(User),
            votes=fields.get("votes").resource(Votes),
            labels=fields.get("labels").as_string_list(),
            created=fields.get("created").as_datetime(),
            updated=fields.get("updated").as_datetime(),
            resolution_date=fields.get("resolutiondate").as_datetime(),
            due_date=fields.get("duedate").as_date(),
        )

    def __repr__(self) -> str:
        return f"<Issue key={self.key!r} summary={self.summary!r} status={self.status}>"

    def __str__(self) -> str:
        """Return key."""
        return self.key or ""


@dataclass
class SearchResult:
    """One page of an issue search."""

    start_at: int = 0
    max_results: int = 0
    total: int = 0
    issues: list[Issue] = field(default_factory=list)

    @classmethod
    def from_json(cls, node: JsonNode) -> SearchResult:
        """Build a SearchResult from its JSON object."""
        return cls(
            start_at=node.get("startAt").as_integer(),
            max_results=node.get("maxResults").as_integer(),
            total=node.get("total").as_integer(),
            issues=node.get("issues").resources(Issue),
        )


# ---------------------------------------------------------------------------
# Descriptions arrive as plain text (API v2) or Atlassian Document Format (v3)
# ---------------------------------------------------------------------------

def _description_text(node: JsonNode) -> str | None:
    if node.is_object:
        return _extract_adf_text(node.value)
    return node.as_string()


def _extract_adf_text(node: Any) -> str:
    """Recursively extract plain text from an ADF document node."""
    if not isinstance(node, dict):
        return ""
    if node.get("type") == "text":
        text = node.get("text", "")
        return text if isinstance(text, str) else ""
    children = node.get("content")
    if not isinstance(children, list):
        return ""
    parts = [_extract_adf_text(child) for child in children]
    return "\n".join(filter(None, parts))
