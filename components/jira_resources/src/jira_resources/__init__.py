"""Typed, materialized views of Jira REST resources."""

from jira_resources.backlog import Backlog, BacklogPartition, BacklogState, partition_backlog
from jira_resources.board import Epic, Marker, RapidView, RapidViewProject, RapidViewVersion, Sprint, SprintIssue
from jira_resources.client import (
    MalformedPayloadError,
    ResourceNotFoundError,
    TrackerClient,
    TrackerError,
    Transport,
    TransportError,
)
from jira_resources.field import FieldSchema
from jira_resources.filter import Filter
from jira_resources.history import IssueHistory, IssueHistoryItem, filter_change_log
from jira_resources.issue import Issue, IssueType, Priority, Resolution, SearchResult, Votes
from jira_resources.jira_field import JiraField
from jira_resources.json_node import JsonKind, JsonNode
from jira_resources.link import LinkType, RemoteLink
from jira_resources.project import Component, Project, ProjectCategory, Version
from jira_resources.resource import Resource, as_resource, materialize_many, materialize_one
from jira_resources.status import Status, StatusCategory
from jira_resources.user import User

__all__ = [
    "Backlog",
    "BacklogPartition",
    "BacklogState",
    "Component",
    "Epic",
    "FieldSchema",
    "Filter",
    "Issue",
    "IssueHistory",
    "IssueHistoryItem",
    "IssueType",
    "JiraField",
    "JsonKind",
    "JsonNode",
    "LinkType",
    "MalformedPayloadError",
    "Marker",
    "Priority",
    "Project",
    "ProjectCategory",
    "RapidView",
    "RapidViewProject",
    "RapidViewVersion",
    "RemoteLink",
    "Resolution",
    "Resource",
    "ResourceNotFoundError",
    "SearchResult",
    "Sprint",
    "SprintIssue",
    "Status",
    "StatusCategory",
    "TrackerClient",
    "TrackerError",
    "Transport",
    "TransportError",
    "User",
    "Version",
    "Votes",
    "as_resource",
    "filter_change_log",
    "materialize_many",
    "materialize_one",
    "partition_backlog",
]
