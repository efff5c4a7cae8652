"""Backlog of a rapid view, and the partitioning of its issues into sprints."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from jira_resources.board import Epic, Marker, RapidViewProject, RapidViewVersion, Sprint, SprintIssue
from jira_resources.json_node import JsonNode


class BacklogState(str, Enum):
    """Whether backlog issues have been computed, and if so whether any were left over."""

    NOT_COMPUTED = "not_computed"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True)
class BacklogPartition:
    """Sprints with their issues filled in, plus the issues no sprint claimed."""

    sprints: list[Sprint]
    backlog_issues: list[SprintIssue] | None


def partition_backlog(issues: Sequence[SprintIssue], sprints: Sequence[Sprint]) -> BacklogPartition:
    """Assign each issue to the sprints that claim it, and the rest to the backlog.

    An issue is appended to every sprint whose ``issues_ids`` contains its id,
    so the same issue can appear in more than one sprint. Issues claimed by
    no sprint are collected into ``backlog_issues``, which stays None unless
    at least one such issue exists.

    Args:
        issues:  All issues of the backlog view, in server order.
        sprints: The view's sprints, in server order.

    Returns:
        New Sprint values with ``issues`` filled in (the inputs are not
        modified) and the unclaimed issues.
    """
    claimed: list[list[SprintIssue]] = [[] for _ in sprints]
    backlog_issues: list[SprintIssue] | None = None

    for issue in issues:
        added_to_sprint = False
        for bucket, sprint in zip(claimed, sprints):
            if issue.id in sprint.issues_ids:
                bucket.append(issue)
                added_to_sprint = True
        if not added_to_sprint:
            if backlog_issues is None:
                backlog_issues = []
            backlog_issues.append(issue)

    filled = [replace(sprint, issues=bucket) for sprint, bucket in zip(sprints, claimed)]
    return BacklogPartition(sprints=filled, backlog_issues=backlog_issues)


@dataclass
class Backlog:
    """GreenHopper backlog data for one rapid view.

    ``epics`` is None when the payload carries no ``epicData`` (epics
    disabled on the server), and ``versions_per_project`` is None unless
    ``versionData.versionsPerProject`` is present; both are distinct from an
    empty collection.
    """

    issues: list[SprintIssue] = field(default_factory=list)
    backlog_issues: list[SprintIssue] | None = None
    sprints: list[Sprint] = field(default_factory=list)
    projects: list[RapidViewProject] = field(default_factory=list)
    markers: list[Marker] = field(default_factory=list)
    epics: list[Epic] | None = None
    versions_per_project: dict[str, list[RapidViewVersion]] | None = None
    rank_custom_field_id: int = 0
    can_edit_epics: bool = False
    can_manage_sprints: bool = False
    max_issues_exceeded: bool = False
    query_result_limit: int = 0
    partitioned: bool = False

    @classmethod
    def from_json(cls, node: JsonNode) -> Backlog:
        """Build a Backlog from its JSON object."""
        issues = node.get("issues").resources(SprintIssue)
        partition = partition_backlog(issues, node.get("sprints").resources(Sprint))

        epic_data = node.get("epicData")
        epics = epic_data.get("epics").resources(Epic) if epic_data.is_object else None

        return cls(
            issues=issues,
            backlog_issues=partition.backlog_issues,
            sprints=partition.sprints,
            projects=node.get("projects").resources(RapidViewProject),
            markers=node.get("markers").resources(Marker),
            epics=epics,
            versions_per_project=_versions_per_project(node.path("versionData", "versionsPerProject")),
            rank_custom_field_id=node.get("rankCustomFieldId").as_integer(),
            can_edit_epics=epic_data.get("canEditEpics").as_boolean(),
            can_manage_sprints=node.get("canManageSprints").as_boolean(),
            max_issues_exceeded=node.get("maxIssuesExceeded").as_boolean(),
            query_result_limit=node.get("queryResultLimit").as_integer(),
            partitioned=True,
        )

    @property
    def state(self) -> BacklogState:
        """Return whether the backlog was partitioned and whether anything was left over."""
        if not self.partitioned:
            return BacklogState.NOT_COMPUTED
        if self.backlog_issues is None:
            return BacklogState.EMPTY
        return BacklogState.POPULATED


def _versions_per_project(node: JsonNode) -> dict[str, list[RapidViewVersion]] | None:
    if not node.is_object:
        return None
    return {
        project_key: versions.resources(RapidViewVersion)
        for project_key, versions in node.items()
        if versions.is_array
    }
