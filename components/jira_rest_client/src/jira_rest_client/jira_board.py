"""A GreenHopper rapid view bound to the client that fetched it."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jira_resources.backlog import Backlog
from jira_resources.board import RapidView, Sprint

if TYPE_CHECKING:
    from jira_rest_client.jira_impl import JiraClient

logger = logging.getLogger(__name__)


@dataclass
class JiraBoard:
    """Rapid view plus the calls that need its id.

    Construct via ``JiraClient.get_board()`` / ``get_boards()`` rather than
    instantiating directly.
    """

    rapid_view: RapidView
    _client: JiraClient

    @property
    def id(self) -> str | None:
        """Return id."""
        return self.rapid_view.id

    @property
    def name(self) -> str | None:
        """Return name."""
        return self.rapid_view.name

    def get_sprints(self) -> list[Sprint]:
        """Fetch the sprints of this board.

          GET /rest/greenhopper/1.0/sprintquery/{rapidViewId}
        """
        return self._client.get_sprints(self._require_id())

    def get_backlog(self) -> Backlog:
        """Fetch the backlog with issues already partitioned into the board's sprints.

          GET /rest/greenhopper/1.0/xboard/plan/backlog/data?rapidViewId={rapidViewId}
        """
        backlog = self._client.get_backlog(self._require_id())
        logger.debug(
            f"Backlog for rapid view {self.id}: {len(backlog.issues)} issues, {len(backlog.sprints)} sprints"
        )
        return backlog

    def _require_id(self) -> str:
        if not self.rapid_view.id:
            msg = "rapid view has no id; fetch it with JiraClient.get_board()"
            raise ValueError(msg)
        return self.rapid_view.id
