"""Issue change history (changelog) records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field as dataclass_field, replace
from datetime import datetime

from jira_resources.json_node import JsonNode
from jira_resources.resource import Resource
from jira_resources.user import User


@dataclass(frozen=True)
class IssueHistoryItem:
    """A single field change inside a history record."""

    field: str | None = None
    field_type: str | None = None
    from_value: str | None = None
    from_string: str | None = None
    to_value: str | None = None
    to_string: str | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> IssueHistoryItem:
        """Build an IssueHistoryItem from its JSON object."""
        return cls(
            field=node.get("field").as_string(),
            field_type=node.get("fieldtype").as_string(),
            from_value=node.get("from").as_string(),
            from_string=node.get("fromString").as_string(),
            to_value=node.get("to").as_string(),
            to_string=node.get("toString").as_string(),
        )


@dataclass
class IssueHistory(Resource):
    """Who changed what, and when.

    ``created`` is required: a history record whose timestamp is present but
    unparseable fails materialization. ``changes`` is a tuple; derived
    records are built with ``with_changes`` rather than by editing one.
    """

    user: User = dataclass_field(default_factory=User)
    created: datetime | None = None
    changes: tuple[IssueHistoryItem, ...] = ()

    @classmethod
    def from_json(cls, node: JsonNode) -> IssueHistory:
        """Build an IssueHistory from its JSON object."""
        author = node.get("author")
        return cls(
            **cls._identity(node),
            user=User.from_json(author) if author.is_object else User(),
            created=node.get("created").as_datetime(required=True),
            changes=tuple(node.get("items").resources(IssueHistoryItem)),
        )

    def with_changes(self, changes: Iterable[IssueHistoryItem]) -> IssueHistory:
        """Return a record with the same identity, user and timestamp but only ``changes``."""
        return replace(self, changes=tuple(changes))


def filter_change_log(histories: Iterable[IssueHistory], fields: str | Iterable[str]) -> list[IssueHistory]:
    """Keep only the changes to the named fields.

    Args:
        histories: Records as returned by the changelog retrieval.
        fields:    Field names, either an iterable or a comma separated string
                   such as 'status,resolution'.

    Returns:
        Derived records holding the matching changes, in input order. Records
        with no matching change are omitted. The inputs are left untouched.
    """
    if isinstance(fields, str):
        wanted = {name.strip() for name in fields.split(",") if name.strip()}
    else:
        wanted = set(fields)

    result: list[IssueHistory] = []
    for record in histories:
        matching = [item for item in record.changes if item.field in wanted]
        if matching:
            result.append(record.with_changes(matching))
    return result
