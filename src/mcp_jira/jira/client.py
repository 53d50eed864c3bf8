"""Base client module for Jira API interactions."""

import logging
from typing import Any

import requests
from atlassian import Jira

from ..utils.auth import configure_basic_auth
from ..utils.errors import error_from_requests
from .config import JiraConfig, JiraCredentials

logger = logging.getLogger("mcp-jira.client")

READ_HEADERS = {"Accept": "application/json"}
WRITE_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


class JiraClient:
    """Base client for Jira API interactions.

    Every request goes through ``_request``, which turns ``requests``
    failures into MCP Jira errors at the point they happen.
    """

    def __init__(
        self, credentials: JiraCredentials, config: JiraConfig | None = None
    ) -> None:
        """Initialize the Jira client for one set of resolved credentials.

        Args:
            credentials: Host, email and token for this invocation
            config: Defaults for SSL verification and timeout
        """
        self.credentials = credentials
        self.config = config or JiraConfig()

        session = requests.Session()
        configure_basic_auth(session, credentials.auth_header)

        self.jira = Jira(
            url=credentials.url,
            session=session,
            cloud=credentials.is_cloud,
            verify_ssl=self.config.ssl_verify,
            timeout=self.config.timeout,
        )

    @property
    def base_url(self) -> str:
        return self.credentials.url

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        data: Any = None,
        resource: tuple[str, str] | None = None,
    ) -> Any:
        """Send one REST call through the atlassian client.

        Args:
            method: GET, PUT or POST
            path: API path relative to the site, e.g. ``rest/api/3/project``
            params: Query parameters
            data: JSON body for PUT and POST
            resource: ``(kind, key)`` of the addressed resource, used to
                word not-found errors

        Returns:
            The decoded JSON body, or None for empty responses

        Raises:
            JiraApiError: Jira answered with an error status
            JiraNetworkError: No response was received
            JiraTransportError: The request could not be sent
        """
        logger.debug(f"{method} {path} params={params}")
        try:
            if method == "GET":
                return self.jira.get(path, params=params, headers=READ_HEADERS)
            if method == "PUT":
                return self.jira.put(path, data=data, headers=WRITE_HEADERS)
            if method == "POST":
                return self.jira.post(
                    path, data=data, params=params, headers=WRITE_HEADERS
                )
        except requests.RequestException as e:
            error = error_from_requests(e, self.base_url, resource)
            logger.debug(f"{method} {path} failed: {error.code} {error.message}")
            raise error from e
        raise ValueError(f"Unsupported HTTP method: {method}")
