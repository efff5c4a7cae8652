"""HTTP transport for the Jira REST and GreenHopper APIs, built on requests."""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from jira_resources.client import ResourceNotFoundError, Transport, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class RestError(TransportError):
    """Raised when the server answers with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RestClient(Transport):
    """
    Args:
        base_url:   Jira instance root URL (e.g. 'https://myorg.atlassian.net')
        user_email: Email (or user name on Server) used for basic auth
        api_token:  API token (or password on Server)
        timeout:    Seconds to wait for each response
        session:    Optional pre-configured session, mainly for tests

    A single attempt is made per call; failures are raised immediately.
    """

    def __init__(
        self,
        base_url: str,
        user_email: str | None = None,
        api_token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        if user_email and api_token:
            self._session.auth = HTTPBasicAuth(user_email, api_token)
        self._session.headers.update({"Accept": "application/json"})

    @property
    def base_url(self) -> str:
        return self._base_url

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def get(self, path: str, params: dict[str, Any] | None = None) -> str | None:
        url = self._url(path)
        logger.debug(f"GET {url} params={params}")
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        self._raise_for_status(response)
        #204 No Content and empty bodies both mean "no payload"
        if response.status_code == 204 or not response.text:
            return None
        return response.text

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if response.status_code == 404:
            raise ResourceNotFoundError(f"Resource not found: {response.url}")
        if not response.ok:
            body = response.text
            raise RestError(
                f"Jira API error {response.status_code}: {body[:200] if body else ''}",
                status_code=response.status_code,
                body=body,
            )
