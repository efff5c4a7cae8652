"""Unit tests for the field coercion helpers and JsonNode path access."""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from jira_resources import Votes, materialize_one
from jira_resources.client import MalformedPayloadError
from jira_resources.field import (
    FieldSchema,
    as_boolean,
    as_date,
    as_datetime,
    as_field_schema,
    as_integer,
    as_map,
    as_string,
    as_string_list,
)
from jira_resources.json_node import JsonKind, JsonNode

#--------------------------- scalars --------------------------

def test_as_string_keeps_none_and_renders_scalars():
    assert as_string(None) is None
    assert as_string("abc") == "abc"
    assert as_string(10001) == "10001"
    # JSON spelling for booleans
    assert as_string(True) == "true"


def test_as_string_renders_containers_as_json():
    assert as_string({"a": 1}) == '{"a":1}'
    assert as_string([1, 2]) == "[1,2]"


def test_as_boolean_only_accepts_real_booleans():
    assert as_boolean(True) is True
    assert as_boolean(False) is False
    assert as_boolean(None) is False
    assert as_boolean("true") is False
    assert as_boolean(1) is False


def test_as_integer_truncates_and_defaults():
    assert as_integer(7) == 7
    assert as_integer(7.9) == 7
    assert as_integer("42") == 42
    assert as_integer(None) == 0
    assert as_integer("seven") == 0
    assert as_integer({"votes": 1}) == 0
    # booleans are not numbers here
    assert as_integer(True) == 0
    assert as_integer(None, default=None) is None


def test_as_integer_non_finite_numbers_default():
    # json.loads decodes 1e400 to inf and accepts NaN
    payload = json.loads('{"big": 1e400, "small": -1e400, "nan": NaN}')

    assert as_integer(payload["big"]) == 0
    assert as_integer(payload["small"]) == 0
    assert as_integer(payload["nan"], default=None) is None


def test_non_finite_number_does_not_break_materialization():
    votes = materialize_one(Votes, json.loads('{"votes": 1e400, "id": "1"}'))

    assert votes.votes == 0
    assert votes.id == "1"


def test_as_datetime_parses_jira_timestamp():
    parsed = as_datetime("2013-01-29T17:27:04.000+0200")

    assert parsed == datetime(2013, 1, 29, 17, 27, 4, tzinfo=timezone(timedelta(hours=2)))
    assert parsed.tzinfo is not None


def test_as_datetime_without_milliseconds():
    parsed = as_datetime("2024-05-01T09:30:00+0000", required=True)

    assert parsed == datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def test_as_datetime_accepts_iso_with_z_suffix():
    assert as_datetime("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)


def test_as_datetime_absent_or_malformed_is_none_when_optional():
    assert as_datetime(None) is None
    assert as_datetime(12345) is None
    assert as_datetime("yesterday") is None


def test_as_datetime_malformed_raises_when_required():
    with pytest.raises(MalformedPayloadError):
        as_datetime("yesterday", required=True)


def test_as_datetime_absent_is_none_even_when_required():
    assert as_datetime(None, required=True) is None


def test_as_date():
    assert as_date("2024-12-31") == date(2024, 12, 31)
    assert as_date("31/12/2024") is None
    assert as_date(None) is None

#--------------------------- collections --------------------------

def test_as_string_list_skips_non_coercible_elements():
    assert as_string_list(["a", None, 3, {"x": 1}, ["y"], "b"]) == ["a", "3", "b"]


def test_as_string_list_non_list_is_empty():
    assert as_string_list("a,b") == []
    assert as_string_list(None) == []


def test_as_map_coerces_entries_and_drops_nulls():
    result = as_map(as_string, as_string, {"48x48": "https://x/a.png", "16x16": None, "24x24": 24})

    assert result == {"48x48": "https://x/a.png", "24x24": "24"}


def test_as_map_non_map_is_empty():
    assert as_map(as_string, as_string, ["a"]) == {}


def test_as_field_schema():
    schema = as_field_schema(
        {"type": "array", "items": "string", "custom": "com.atlassian:labels", "customId": 10100}
    )

    assert schema == FieldSchema(type="array", items="string", custom="com.atlassian:labels", custom_id=10100)
    assert as_field_schema({"type": "string", "system": "summary"}).custom_id is None
    assert as_field_schema("string") is None

#--------------------------- JsonNode --------------------------

def test_json_node_kinds():
    assert JsonNode(None).kind is JsonKind.NULL
    assert JsonNode(True).kind is JsonKind.BOOL
    assert JsonNode(1.5).kind is JsonKind.NUMBER
    assert JsonNode("x").kind is JsonKind.STRING
    assert JsonNode([]).kind is JsonKind.ARRAY
    assert JsonNode({}).kind is JsonKind.OBJECT


def test_json_node_path_fails_closed_at_missing_step():
    node = JsonNode({"a": {"b": {"c": "deep"}}, "s": "scalar"})

    assert node.path("a", "b", "c").as_string() == "deep"
    assert node.path("a", "missing", "c").is_null
    # stepping into a scalar is a miss, not an error
    assert node.path("s", "b").as_string() is None
    assert node.path("a", "b").as_boolean() is False


def test_json_node_contains_distinguishes_null_value_from_missing_key():
    node = JsonNode({"present": None})

    assert node.contains("present") is True
    assert node.contains("absent") is False
    assert JsonNode([1]).contains("present") is False


def test_json_node_items_and_elements_ignore_wrong_kinds():
    assert list(JsonNode([1, 2]).items()) == []
    assert list(JsonNode({"a": 1}).elements()) == []
    assert [n.as_integer() for n in JsonNode([1, 2]).elements()] == [1, 2]
