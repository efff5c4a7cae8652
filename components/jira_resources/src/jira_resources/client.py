"""Core client contract definitions and the shared error taxonomy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from jira_resources.backlog import Backlog
    from jira_resources.history import IssueHistory

__all__ = [
    "MalformedPayloadError",
    "ResourceNotFoundError",
    "TrackerClient",
    "TrackerError",
    "Transport",
    "TransportError",
]

R = TypeVar("R")


class TrackerError(Exception):
    """Base class for every error raised by the resource layer and its clients."""


class ResourceNotFoundError(TrackerError):
    """Raised when the server reports that a requested resource does not exist."""


class MalformedPayloadError(TrackerError):
    """Raised when a response is present but not the JSON shape the caller expected.

    Individual fields that are missing or mis-shaped never raise this; they
    resolve to defaults during coercion.
    """


class TransportError(TrackerError):
    """Raised when the transport cannot deliver a response (connection, timeout, HTTP)."""


class Transport(ABC):
    """The boundary that turns a path into raw response text."""

    @abstractmethod
    def get(self, path: str, params: dict[str, Any] | None = None) -> str | None:
        """Fetch ``path`` and return the raw body.

        Args:
            path:   Server-relative path, e.g. '/rest/api/latest/project/ABC'.
            params: Optional query parameters.

        Returns:
            The response body, or None when the server sent no payload.

        Raises:
            TransportError: On any connection, timeout or protocol failure.
            ResourceNotFoundError: When the server answers 404.
        """
        raise NotImplementedError


class TrackerClient(ABC):
    """Reads remote tracker resources and materializes them."""

    # ------------------------------------------------------------------
    # Generic retrieval
    # ------------------------------------------------------------------
    @abstractmethod
    def get_one_resource(
        self,
        variant: type[R],
        path: str,
        params: dict[str, Any] | None = None,
        *,
        what: str,
    ) -> R:
        """Fetch a single JSON object and materialize it as ``variant``.

        Args:
            variant: Resource class providing ``from_json``.
            path:    Server-relative path.
            params:  Optional query parameters.
            what:    Human readable name of the target, used in error messages.

        Raises:
            MalformedPayloadError: If the payload is missing or not an object.
        """
        raise NotImplementedError

    @abstractmethod
    def get_many_resources(
        self,
        variant: type[R],
        path: str,
        params: dict[str, Any] | None = None,
        *,
        what: str,
        key: str | None = None,
    ) -> list[R]:
        """Fetch a JSON array (optionally nested under ``key``) and materialize each object."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Multi-page and post-processed collections
    # ------------------------------------------------------------------
    @abstractmethod
    def get_full_changelog(self, issue_id: str) -> list[IssueHistory] | None:
        """Return every history record of an issue, following pages until the declared total.

        Returns None when the server returned no payload for the first page,
        which is not the same as a retrieved but empty changelog.
        """
        raise NotImplementedError

    @abstractmethod
    def get_backlog(self, rapid_view_id: int | str) -> Backlog:
        """Return the backlog of a rapid view with issues partitioned into sprints."""
        raise NotImplementedError
