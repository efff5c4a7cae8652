"""
Authentication
--------------
The client supports two credential modes:

1. When get_client(interactive = True)
    User is prompted for the three values below at runtime if any are missing from the environment.
2. When get_client(interactive = False) - Default
        JIRA_BASE_URL   https://myorg.atlassian.net
        JIRA_USER_EMAIL me@example.com
        JIRA_API_TOKEN  <token from https://id.atlassian.com/manage-profile/security/api-tokens>

Optional settings:
        JIRA_API_REVISION     REST API revision, defaults to 'latest'
        JIRA_TIMEOUT_SECONDS  per-request timeout in seconds, defaults to 30

Dependencies:
    uv add requests

"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Iterator
from getpass import getpass
from typing import Any, TypeVar

from jira_resources.backlog import Backlog
from jira_resources.board import RapidView, Sprint
from jira_resources.client import (
    MalformedPayloadError,
    ResourceNotFoundError,
    TrackerClient,
    TrackerError,
    Transport,
)
from jira_resources.filter import Filter
from jira_resources.history import IssueHistory, filter_change_log
from jira_resources.issue import Issue, IssueType, Priority, Resolution, SearchResult, Votes
from jira_resources.jira_field import JiraField
from jira_resources.json_node import JsonNode
from jira_resources.link import LinkType, RemoteLink
from jira_resources.project import Project
from jira_resources.resource import materialize_many, materialize_one
from jira_resources.status import Status, StatusCategory

from jira_rest_client.jira_board import JiraBoard
from jira_rest_client.rest_client import DEFAULT_TIMEOUT_SECONDS, RestClient

logger = logging.getLogger(__name__)

R = TypeVar("R")


class JiraError(TrackerError):
    """Raised when a Jira operation fails; the underlying cause is chained."""


class NotFoundError(JiraError, ResourceNotFoundError):
    """Raised when the resource an operation targets does not exist."""


# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class JiraClient(TrackerClient):
    """
    Args:
        base_url:     Jira instance root URL (e.g. 'https://myorg.atlassian.net')
        user_email:   Email associated with the Jira account
        api_token:    API token generated from Atlassian account settings
        api_revision: REST API revision used in '/rest/api/<revision>/'
        timeout:      Seconds to wait for each response
        transport:    Replaces the default requests-based transport
    """

    _GREENHOPPER_PREFIX = "/rest/greenhopper/1.0"

    def __init__(
        self,
        base_url: str,
        user_email: str | None = None,
        api_token: str | None = None,
        *,
        api_revision: str = "latest",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Transport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_prefix = f"/rest/api/{api_revision}"
        self._transport = transport or RestClient(self._base_url, user_email, api_token, timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _api(self, path: str) -> str:
        return f"{self._api_prefix}/{path.lstrip('/')}"

    def _greenhopper(self, path: str) -> str:
        return f"{self._GREENHOPPER_PREFIX}/{path.lstrip('/')}"

    def _get_json(self, path: str, params: dict[str, Any] | None = None, *, what: str) -> Any:
        """Fetch and decode ``path``. Returns None when the server sent no payload."""
        try:
            raw = self._transport.get(path, params)
        except ResourceNotFoundError as exc:
            logger.warning(f"Failed to retrieve {what}: {exc}")
            raise NotFoundError(f"Failed to retrieve {what}") from exc
        except TrackerError as exc:
            logger.warning(f"Failed to retrieve {what}: {exc}")
            raise JiraError(f"Failed to retrieve {what}") from exc

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise JiraError(f"Failed to retrieve {what}: response is not valid JSON") from exc

    @staticmethod
    def _materialize(variant: type[R], payload: Any, *, what: str) -> R:
        try:
            return materialize_one(variant, payload)
        except MalformedPayloadError as exc:
            raise MalformedPayloadError(f"Malformed payload for {what}: {exc}") from exc

    @staticmethod
    def _materialize_many(variant: type[R], payload: Any, *, what: str) -> list[R]:
        try:
            return materialize_many(variant, payload)
        except MalformedPayloadError as exc:
            raise MalformedPayloadError(f"Malformed payload for {what}: {exc}") from exc

    # ------------------------------------------------------------------
    # TrackerClient contract
    # ------------------------------------------------------------------

    def get_one_resource(
        self,
        variant: type[R],
        path: str,
        params: dict[str, Any] | None = None,
        *,
        what: str,
    ) -> R:
        payload = self._get_json(path, params, what=what)
        if not isinstance(payload, dict):
            raise MalformedPayloadError(f"JSON payload is malformed for {what}")
        return self._materialize(variant, payload, what=what)

    def get_many_resources(
        self,
        variant: type[R],
        path: str,
        params: dict[str, Any] | None = None,
        *,
        what: str,
        key: str | None = None,
    ) -> list[R]:
        """
        Notes on usage:
            Some endpoints wrap the array in an object (e.g. {"issueLinkTypes": [...]});
            pass that member name as ``key``. A response with no payload, or a
            wrapper without that member, yields an empty list.
        """
        payload = self._get_json(path, params, what=what)
        if payload is None:
            return []
        if key is not None:
            if not isinstance(payload, dict):
                raise MalformedPayloadError(f"JSON payload is malformed for {what}")
            payload = payload.get(key)
            if payload is None:
                return []
        if not isinstance(payload, list):
            raise MalformedPayloadError(f"JSON payload is malformed for {what}")
        return self._materialize_many(variant, payload, what=what)

    def get_full_changelog(self, issue_id: str) -> list[IssueHistory] | None:
        """Fetch the complete change history of an issue.

        The server decides the page size. Pages are requested with ``startAt``
        set to the number of records accumulated so far until that number
        reaches the ``total`` the server declares.

        Returns:
            Every history record in server order, or None when the first
            request returned no payload at all.

        Raises:
            JiraError: If any page fails; records from earlier pages are discarded.
            MalformedPayloadError: If a page is not a JSON object.
        """
        what = f"change log for issue {issue_id}"
        path = self._api(f"issue/{issue_id}")
        changes: list[IssueHistory] | None = None
        start_at = 0

        while True:
            payload = self._get_json(path, {"expand": "changelog", "startAt": start_at}, what=what)
            if payload is None:
                if changes is None:
                    logger.debug(f"No change log payload for issue {issue_id}")
                    return None
                raise JiraError(f"Failed to retrieve {what}: no payload for page at {start_at}")
            if not isinstance(payload, dict):
                raise MalformedPayloadError(f"JSON payload is malformed for {what}")

            changelog = JsonNode(payload).get("changelog")
            total = changelog.get("total").as_integer()
            page = self._materialize_many(IssueHistory, changelog.get("histories"), what=what)
            if changes is None:
                changes = []
            changes.extend(page)
            logger.debug(f"Change log page for {issue_id}: startAt={start_at} got={len(page)} total={total}")

            if len(changes) >= total:
                break
            #an empty page before the total is reached would loop forever
            if not page:
                raise JiraError(f"Failed to retrieve {what}: server stopped at {len(changes)} of {total} records")
            start_at = len(changes)

        logger.info(f"Retrieved {len(changes)} change log records for issue {issue_id}")
        return changes

    def get_backlog(self, rapid_view_id: int | str) -> Backlog:
        return self.get_one_resource(
            Backlog,
            self._greenhopper("xboard/plan/backlog/data"),
            {"rapidViewId": str(rapid_view_id)},
            what=f"backlog data for rapid view {rapid_view_id}",
        )

    @staticmethod
    def filter_change_log(histories: Iterable[IssueHistory], fields: str | Iterable[str]) -> list[IssueHistory]:
        """Keep only the changes to ``fields``; see ``jira_resources.history.filter_change_log``."""
        return filter_change_log(histories, fields)

    # ------------------------------------------------------------------
    # Issues and search
    # ------------------------------------------------------------------

    def get_issue(self, key: str, *, fields: str | None = None, expand: str | None = None) -> Issue:
        """Fetch a single Jira issue by key or id."""
        params = {name: value for name, value in (("fields", fields), ("expand", expand)) if value}
        return self.get_one_resource(Issue, self._api(f"issue/{key}"), params or None, what=f"issue {key}")

    def search_issues(
        self,
        jql: str,
        *,
        fields: str | None = None,
        expand: str | None = None,
        max_results: int | None = None,
        start_at: int | None = None,
    ) -> SearchResult:
        """Fetch one page of issues matching ``jql``."""
        params: dict[str, Any] = {"jql": jql}
        if fields:
            params["fields"] = fields
        if expand:
            params["expand"] = expand
        if max_results is not None:
            params["maxResults"] = max_results
        if start_at is not None:
            params["startAt"] = start_at
        return self.get_one_resource(SearchResult, self._api("search"), params, what=f"search results for '{jql}'")

    def iter_issues(self, jql: str, *, fields: str | None = None, max_results: int = 50) -> Iterator[Issue]:
        """
        Iteration stops once "max_results" number of issues have been yielded or no more results exist.
        """
        start_at = 0
        page_size = min(max_results, 100) #Jira's maximum is 100
        yielded = 0

        #Each iteration makes one API request, fetching the next page
        #stop requesting pages when we have passed the total number of issues Jira reported
        while yielded < max_results:
            page = self.search_issues(jql, fields=fields, max_results=page_size, start_at=start_at)
            if not page.issues:
                break

            for issue in page.issues:
                if yielded >= max_results:
                    return
                yield issue
                yielded += 1

            start_at += len(page.issues)
            if start_at >= page.total:
                break

    def count_issues(self, jql: str) -> int:
        return self.search_issues(jql, fields="id", max_results=0).total

    def get_votes(self, issue: str) -> Votes:
        return self.get_one_resource(Votes, self._api(f"issue/{issue}/votes"), what=f"votes for issue {issue}")

    def get_remote_links(self, issue: str) -> list[RemoteLink]:
        return self.get_many_resources(
            RemoteLink, self._api(f"issue/{issue}/remotelink"), what=f"remote links for issue {issue}"
        )

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def get_project(self, key: str) -> Project:
        return self.get_one_resource(Project, self._api(f"project/{key}"), what=f"project {key}")

    def get_projects(self) -> list[Project]:
        return self.get_many_resources(Project, self._api("project"), what="projects")

    def get_project_statuses(self, key: str) -> dict[str, list[str]]:
        """Map each issue type name of a project to the names of its statuses."""
        issue_types = self.get_many_resources(
            IssueType, self._api(f"project/{key}/statuses"), what=f"statuses of project {key}"
        )
        return {
            issue_type.name: [status.name for status in issue_type.statuses if status.name is not None]
            for issue_type in issue_types
            if issue_type.name is not None
        }

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def get_issue_types(self) -> list[IssueType]:
        return self.get_many_resources(IssueType, self._api("issuetype"), what="issue types")

    def get_issue_type(self, issue_type_id: str) -> IssueType:
        return self.get_one_resource(
            IssueType, self._api(f"issuetype/{issue_type_id}"), what=f"issue type {issue_type_id}"
        )

    def get_issue_statuses(self) -> list[Status]:
        return self.get_many_resources(Status, self._api("status"), what="statuses")

    def get_status(self, status_id: str) -> Status:
        return self.get_one_resource(Status, self._api(f"status/{status_id}"), what=f"status {status_id}")

    def get_status_category(self, category_id: str) -> StatusCategory:
        return self.get_one_resource(
            StatusCategory, self._api(f"statuscategory/{category_id}"), what=f"status category {category_id}"
        )

    def get_resolutions(self) -> list[Resolution]:
        return self.get_many_resources(Resolution, self._api("resolution"), what="resolutions")

    def get_resolution(self, resolution_id: str) -> Resolution:
        return self.get_one_resource(
            Resolution, self._api(f"resolution/{resolution_id}"), what=f"resolution {resolution_id}"
        )

    def get_priorities(self) -> list[Priority]:
        return self.get_many_resources(Priority, self._api("priority"), what="priorities")

    def get_fields(self) -> list[JiraField]:
        return self.get_many_resources(JiraField, self._api("field"), what="fields")

    def get_filter(self, filter_id: str) -> Filter:
        return self.get_one_resource(Filter, self._api(f"filter/{filter_id}"), what=f"filter {filter_id}")

    def get_issue_link_types(self) -> list[LinkType]:
        return self.get_many_resources(
            LinkType, self._api("issueLinkType"), what="issue link types", key="issueLinkTypes"
        )

    def get_issue_link_type(self, link_type_id: str) -> LinkType:
        return self.get_one_resource(
            LinkType, self._api(f"issueLinkType/{link_type_id}"), what=f"issue link type {link_type_id}"
        )

    # ------------------------------------------------------------------
    # GreenHopper boards
    # ------------------------------------------------------------------

    def get_boards(self) -> list[JiraBoard]:
        views = self.get_many_resources(RapidView, self._greenhopper("rapidview"), what="rapid views", key="views")
        return [JiraBoard(view, self) for view in views]

    def get_board(self, rapid_view_id: int | str) -> JiraBoard:
        view = self.get_one_resource(
            RapidView, self._greenhopper(f"rapidview/{rapid_view_id}"), what=f"rapid view {rapid_view_id}"
        )
        return JiraBoard(view, self)

    def get_sprints(self, rapid_view_id: int | str) -> list[Sprint]:
        return self.get_many_resources(
            Sprint,
            self._greenhopper(f"sprintquery/{rapid_view_id}"),
            what=f"sprints of rapid view {rapid_view_id}",
            key="sprints",
        )


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False) -> JiraClient:
    """Return a configured JiraClient.

    Reads credentials from environment variables. If "interactive = True" and
    any variable is missing, the user will be prompted.

    Environment variables:
        JIRA_BASE_URL:        Base URL of the Jira instance.
        JIRA_USER_EMAIL:      Atlassian account email.
        JIRA_API_TOKEN:       API token from Atlassian account settings.
        JIRA_API_REVISION:    Optional REST API revision (default 'latest').
        JIRA_TIMEOUT_SECONDS: Optional per-request timeout (default 30).
    """
    base_url = os.environ.get("JIRA_BASE_URL", "")
    user_email = os.environ.get("JIRA_USER_EMAIL", "")
    api_token = os.environ.get("JIRA_API_TOKEN", "")
    api_revision = os.environ.get("JIRA_API_REVISION", "") or "latest"
    timeout_text = os.environ.get("JIRA_TIMEOUT_SECONDS", "")

    if interactive:
        if not base_url:
            base_url = input("Jira base URL (e.g. https://myorg.atlassian.net): ").strip()
        if not user_email:
            user_email = input("Jira user email: ").strip()
        if not api_token:
            api_token = getpass("Jira API token: ")
    else:
        #collects the missing fields and raises an error alerting to the missing values
        missing = [name for name, val in [
            ("JIRA_BASE_URL", base_url),
            ("JIRA_USER_EMAIL", user_email),
            ("JIRA_API_TOKEN", api_token),
        ] if not val]
        if missing:
            raise EnvironmentError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Set them or call get_client(interactive=True)."
            )

    try:
        timeout = float(timeout_text) if timeout_text else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        raise EnvironmentError(f"JIRA_TIMEOUT_SECONDS must be a number, got {timeout_text!r}") from None

    return JiraClient(base_url, user_email, api_token, api_revision=api_revision, timeout=timeout)
