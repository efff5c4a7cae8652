"""Jira REST client that materializes responses into ``jira_resources`` types."""

from jira_rest_client.jira_board import JiraBoard
from jira_rest_client.jira_impl import JiraClient, JiraError, NotFoundError, get_client
from jira_rest_client.rest_client import RestClient, RestError

__all__ = ["JiraBoard", "JiraClient", "JiraError", "NotFoundError", "RestClient", "RestError", "get_client"]
