"""Field definitions (system and custom) as listed by the field endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field

from jira_resources.field import FieldSchema
from jira_resources.json_node import JsonNode


@dataclass
class JiraField:
    """A field definition. Unlike resources it has no ``self`` link."""

    id: str | None = None
    key: str | None = None
    name: str | None = None
    custom: bool = False
    orderable: bool = False
    navigable: bool = False
    searchable: bool = False
    clause_names: list[str] = field(default_factory=list)
    schema: FieldSchema | None = None

    @classmethod
    def from_json(cls, node: JsonNode) -> JiraField:
        """Build a JiraField from its JSON object."""
        return cls(
            id=node.get("id").as_string(),
            key=node.get("key").as_string(),
            name=node.get("name").as_string(),
            custom=node.get("custom").as_boolean(),
            orderable=node.get("orderable").as_boolean(),
            navigable=node.get("navigable").as_boolean(),
            searchable=node.get("searchable").as_boolean(),
            clause_names=node.get("clauseNames").as_string_list(),
            schema=node.get("schema").as_field_schema(),
        )
