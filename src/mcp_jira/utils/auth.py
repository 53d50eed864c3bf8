"""Authentication helpers for Jira Cloud API tokens."""

import base64
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Session

logger = logging.getLogger("mcp-jira.auth")


def create_basic_auth_header(email: str, api_token: str) -> str:
    """Build the HTTP Basic ``Authorization`` value for an email/API token pair.

    Args:
        email: Atlassian account email
        api_token: API token issued for that account

    Returns:
        ``"Basic <base64(email:token)>"``
    """
    raw = f"{email}:{api_token}".encode()
    return f"Basic {base64.b64encode(raw).decode('ascii')}"


def configure_basic_auth(session: "Session", auth_header: str) -> None:
    """Attach a prebuilt Basic authorization header to every session request."""
    logger.debug("Configuring Basic authentication for Jira Cloud API token")
    session.headers["Authorization"] = auth_header
