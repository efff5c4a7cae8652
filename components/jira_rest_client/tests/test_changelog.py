"""Unit tests for change log pagination and backlog retrieval."""

import json
from unittest.mock import MagicMock

import pytest

from jira_resources import BacklogState, MalformedPayloadError, TransportError
from jira_rest_client.jira_impl import JiraClient, JiraError


@pytest.fixture
def transport():
    return MagicMock()


@pytest.fixture
def jira_client(transport):
    return JiraClient("https://test.atlassian.net", transport=transport)


def changelog_page(start, count, total):
    histories = [
        {
            "id": str(n),
            "author": {"name": "jdoe"},
            "created": "2024-05-01T09:30:00.000+0000",
            "items": [{"field": "status", "fromString": "Open", "toString": "Done"}],
        }
        for n in range(start, start + count)
    ]
    return json.dumps({"key": "ABC-1", "changelog": {"startAt": start, "total": total, "histories": histories}})

#--------------------------- get_full_changelog --------------------------

def test_changelog_follows_pages_until_total(jira_client, transport):
    # Setup: server hands out pages of 2, 2 and 1 for a total of 5
    transport.get.side_effect = [changelog_page(0, 2, 5), changelog_page(2, 2, 5), changelog_page(4, 1, 5)]

    # Act
    histories = jira_client.get_full_changelog("ABC-1")

    # Assert: three calls, each starting where the previous one ended
    assert transport.get.call_count == 3
    assert [c.args[1]["startAt"] for c in transport.get.call_args_list] == [0, 2, 4]
    assert [c.args[0] for c in transport.get.call_args_list] == ["/rest/api/latest/issue/ABC-1"] * 3
    assert [h.id for h in histories] == ["0", "1", "2", "3", "4"]


def test_changelog_requests_expanded_changelog(jira_client, transport):
    transport.get.return_value = changelog_page(0, 1, 1)

    jira_client.get_full_changelog("ABC-1")

    transport.get.assert_called_once_with("/rest/api/latest/issue/ABC-1", {"expand": "changelog", "startAt": 0})


def test_changelog_without_payload_is_none(jira_client, transport):
    transport.get.return_value = None

    assert jira_client.get_full_changelog("ABC-1") is None
    assert transport.get.call_count == 1


def test_changelog_with_no_records_is_empty_list(jira_client, transport):
    transport.get.return_value = changelog_page(0, 0, 0)

    assert jira_client.get_full_changelog("ABC-1") == []
    assert transport.get.call_count == 1


def test_changelog_missing_changelog_member_is_empty_list(jira_client, transport):
    transport.get.return_value = json.dumps({"key": "ABC-1"})

    assert jira_client.get_full_changelog("ABC-1") == []


def test_changelog_with_out_of_range_total_is_empty_list(jira_client, transport):
    # 1e400 decodes to inf; the total falls back to 0 instead of raising
    transport.get.return_value = '{"key": "A-1", "changelog": {"total": 1e400, "histories": []}}'

    assert jira_client.get_full_changelog("A-1") == []
    assert transport.get.call_count == 1


def test_changelog_page_failure_discards_earlier_pages(jira_client, transport):
    cause = TransportError("connection reset")
    transport.get.side_effect = [changelog_page(0, 2, 5), cause]

    with pytest.raises(JiraError) as excinfo:
        jira_client.get_full_changelog("ABC-1")

    assert excinfo.value.__cause__ is cause
    assert "ABC-1" in str(excinfo.value)


def test_changelog_missing_later_page_is_an_error(jira_client, transport):
    transport.get.side_effect = [changelog_page(0, 2, 5), None]

    with pytest.raises(JiraError):
        jira_client.get_full_changelog("ABC-1")


def test_changelog_stops_when_server_returns_empty_page_early(jira_client, transport):
    transport.get.side_effect = [changelog_page(0, 2, 5), changelog_page(2, 0, 5)]

    with pytest.raises(JiraError, match="2 of 5"):
        jira_client.get_full_changelog("ABC-1")

    assert transport.get.call_count == 2


def test_changelog_non_object_payload_is_malformed(jira_client, transport):
    transport.get.return_value = json.dumps(["not", "an", "issue"])

    with pytest.raises(MalformedPayloadError):
        jira_client.get_full_changelog("ABC-1")


def test_filter_change_log_on_client(jira_client, transport):
    transport.get.return_value = changelog_page(0, 2, 2)

    histories = jira_client.get_full_changelog("ABC-1")

    assert len(JiraClient.filter_change_log(histories, "status")) == 2
    assert JiraClient.filter_change_log(histories, "assignee") == []

#--------------------------- get_backlog --------------------------

def test_get_backlog_sends_rapid_view_id(jira_client, transport):
    transport.get.return_value = json.dumps(
        {
            "issues": [{"id": 1, "key": "ABC-1"}, {"id": 2, "key": "ABC-2"}],
            "sprints": [{"id": 9, "name": "Sprint 9", "issuesIds": [1]}],
        }
    )

    backlog = jira_client.get_backlog(42)

    transport.get.assert_called_once_with("/rest/greenhopper/1.0/xboard/plan/backlog/data", {"rapidViewId": "42"})
    assert [i.key for i in backlog.sprints[0].issues] == ["ABC-1"]
    assert [i.key for i in backlog.backlog_issues] == ["ABC-2"]
    assert backlog.state is BacklogState.POPULATED


def test_get_backlog_without_payload_is_malformed(jira_client, transport):
    transport.get.return_value = None

    with pytest.raises(MalformedPayloadError):
        jira_client.get_backlog(42)
