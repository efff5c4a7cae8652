"""GreenHopper (agile board) resources: rapid views, sprints and their issues."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from jira_resources.json_node import JsonNode
from jira_resources.resource import Resource

#GreenHopper renders sprint dates in the server locale, e.g. 21/Jan/13 3:45 PM
GREENHOPPER_DATETIME_FORMAT = "%d/%b/%y %I:%M %p"


def _greenhopper_datetime(node: JsonNode) -> datetime | None:
    text = node.as_string()
    if not text or text == "None":
        return None
    try:
        return datetime.strptime(text, GREENHOPPER_DATETIME_FORMAT)
    except ValueError:
        return node.as_datetime()


@dataclass
class RapidView(Resource):
    """A GreenHopper rapid view (agile board)."""

    name: str | None = None
    can_edit: bool = False
    sprint_support_enabled: bool = False

    @classmethod
    def from_json(cls, node: JsonNode) -> RapidView:
        """Build a RapidView from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            can_edit=node.get("canEdit").as_boolean(),
            sprint_support_enabled=node.get("sprintSupportEnabled").as_boolean(),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""


@dataclass
class RapidViewProject(Resource):
    """A project shown on a rapid view."""

    key: str | None = None
    name: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> RapidViewProject:
        """Build a RapidViewProject from its JSON object."""
        return cls(
            **cls._identity(node),
            key=node.get("key").as_string(),
            name=node.get("name").as_string(),
        )


@dataclass
class RapidViewVersion(Resource):
    """A project version as the backlog view lists it."""

    name: str | None = None
    sequence: int = 0
    released: bool = False

    @classmethod
    def from_json(cls, node: JsonNode) -> RapidViewVersion:
        """Build a RapidViewVersion from its JSON object."""
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            sequence=node.get("sequence").as_integer(),
            released=node.get("released").as_boolean(),
        )


@dataclass
class Marker(Resource):
    """A backlog marker."""

    name: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> Marker:
        """Build a Marker from its JSON object."""
        return cls(**cls._identity(node), name=node.get("name").as_string())


@dataclass
class Epic(Resource):
    """An epic as the backlog view renders it."""

    key: str | None = None
    summary: str | None = None
    label: str | None = None
    color: str | None = None
    type_id: str | None = None
    type_name: str | None = None
    type_url: str | None = None
    done: bool = False

    @classmethod
    def from_json(cls, node: JsonNode) -> Epic:
        """Build an Epic from its JSON object."""
        return cls(
            **cls._identity(node),
            key=node.get("key").as_string(),
            summary=node.get("summary").as_string(),
            label=node.get("epicLabel").as_string(),
            color=node.get("epicColor").as_string(),
            type_id=node.get("typeId").as_string(),
            type_name=node.get("typeName").as_string(),
            type_url=node.get("typeUrl").as_string(),
            done=node.get("done").as_boolean(),
        )


@dataclass
class SprintIssue(Resource):
    """An issue as the backlog view renders it (a flattened subset of the issue)."""

    key: str | None = None
    summary: str | None = None
    hidden: bool = False
    done: bool = False
    type_id: str | None = None
    type_name: str | None = None
    type_url: str | None = None
    priority_name: str | None = None
    priority_url: str | None = None
    status_id: str | None = None
    status_name: str | None = None
    status_url: str | None = None
    assignee: str | None = None
    assignee_name: str | None = None
    avatar_url: str | None = None
    color: str | None = None
    epic: str | None = None
    project_id: str | None = None
    fix_versions: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, node: JsonNode) -> SprintIssue:
        """Build a SprintIssue from its JSON object."""
        return cls(
            **cls._identity(node),
            key=node.get("key").as_string(),
            summary=node.get("summary").as_string(),
            hidden=node.get("hidden").as_boolean(),
            done=node.get("done").as_boolean(),
            type_id=node.get("typeId").as_string(),
            type_name=node.get("typeName").as_string(),
            type_url=node.get("typeUrl").as_string(),
            priority_name=node.get("priorityName").as_string(),
            priority_url=node.get("priorityUrl").as_string(),
            status_id=node.get("statusId").as_string(),
            status_name=node.get("statusName").as_string(),
            status_url=node.get("statusUrl").as_string(),
            assignee=node.get("assignee").as_string(),
            assignee_name=node.get("assigneeName").as_string(),
            avatar_url=node.get("avatarUrl").as_string(),
            color=node.get("color").as_string(),
            epic=node.get("epic").as_string(),
            project_id=node.get("projectId").as_string(),
            fix_versions=node.get("fixVersions").as_string_list(),
        )

    def __str__(self) -> str:
        """Return key."""
        return self.key or ""


@dataclass
class Sprint(Resource):
    """A sprint of a rapid view.

    ``issues_ids`` is the server's membership list; ``issues`` is filled in
    by the backlog partitioner and is empty on a freshly materialized sprint.
    """

    name: str | None = None
    state: str | None = None
    closed: bool = False
    start_date: datetime | None = None
    end_date: datetime | None = None
    complete_date: datetime | None = None
    issues_ids: frozenset[str] = frozenset()
    issues: list[SprintIssue] = field(default_factory=list)

    @classmethod
    def from_json(cls, node: JsonNode) -> Sprint:
        """Build a Sprint from its JSON object."""
        state = node.get("state").as_string()
        return cls(
            **cls._identity(node),
            name=node.get("name").as_string(),
            state=state,
            closed=node.get("closed").as_boolean() or state == "CLOSED",
            start_date=_greenhopper_datetime(node.get("startDate")),
            end_date=_greenhopper_datetime(node.get("endDate")),
            complete_date=_greenhopper_datetime(node.get("completeDate")),
            issues_ids=frozenset(node.get("issuesIds").as_string_list()),
        )

    def __str__(self) -> str:
        """Return name."""
        return self.name or ""
