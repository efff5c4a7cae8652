"""Unit tests for GreenHopper board access through JiraClient and JiraBoard."""

import json
from unittest.mock import MagicMock

import pytest

from jira_resources import RapidView
from jira_rest_client.jira_board import JiraBoard
from jira_rest_client.jira_impl import JiraClient


@pytest.fixture
def transport():
    return MagicMock()


@pytest.fixture
def jira_client(transport):
    return JiraClient("https://test.atlassian.net", transport=transport)

#--------------------------- JiraClient board methods --------------------------

def test_get_boards_reads_views_member(jira_client, transport):
    transport.get.return_value = json.dumps(
        {"views": [{"id": 1, "name": "Team A", "sprintSupportEnabled": True}, {"id": 2, "name": "Team B"}]}
    )

    boards = jira_client.get_boards()

    transport.get.assert_called_once_with("/rest/greenhopper/1.0/rapidview", None)
    assert all(isinstance(b, JiraBoard) for b in boards)
    assert [(b.id, b.name) for b in boards] == [("1", "Team A"), ("2", "Team B")]


def test_get_board(jira_client, transport):
    transport.get.return_value = json.dumps({"id": 7, "name": "Team C"})

    board = jira_client.get_board(7)

    transport.get.assert_called_once_with("/rest/greenhopper/1.0/rapidview/7", None)
    assert board.name == "Team C"


def test_get_sprints_reads_sprints_member(jira_client, transport):
    transport.get.return_value = json.dumps(
        {"sprints": [{"id": 3, "name": "Sprint 3", "state": "ACTIVE"}], "rapidViewId": 7}
    )

    sprints = jira_client.get_sprints(7)

    transport.get.assert_called_once_with("/rest/greenhopper/1.0/sprintquery/7", None)
    assert [s.name for s in sprints] == ["Sprint 3"]

#--------------------------- JiraBoard delegation --------------------------

def test_board_delegates_backlog_to_client():
    client = MagicMock()
    board = JiraBoard(RapidView(id="7", name="Team C"), client)

    backlog = board.get_backlog()

    client.get_backlog.assert_called_once_with("7")
    assert backlog is client.get_backlog.return_value


def test_board_delegates_sprints_to_client():
    client = MagicMock()
    board = JiraBoard(RapidView(id="7"), client)

    board.get_sprints()

    client.get_sprints.assert_called_once_with("7")


def test_board_without_id_refuses_calls():
    board = JiraBoard(RapidView(), MagicMock())

    with pytest.raises(ValueError):
        board.get_backlog()


def test_board_backlog_end_to_end(jira_client, transport):
    transport.get.side_effect = [
        json.dumps({"id": 7, "name": "Team C"}),
        json.dumps(
            {
                "issues": [{"id": 1, "key": "ABC-1"}],
                "sprints": [{"id": 3, "name": "Sprint 3", "issuesIds": [1]}],
            }
        ),
    ]

    backlog = jira_client.get_board(7).get_backlog()

    assert transport.get.call_args_list[1].args == (
        "/rest/greenhopper/1.0/xboard/plan/backlog/data",
        {"rapidViewId": "7"},
    )
    assert [i.key for i in backlog.sprints[0].issues] == ["ABC-1"]
    assert backlog.backlog_issues is None
