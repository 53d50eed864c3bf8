"""Configuration and credential resolution for Jira API interactions."""

import logging
from dataclasses import dataclass, field

from ..exceptions import CredentialsError
from ..utils.auth import create_basic_auth_header
from ..utils.env import get_env_int, get_env_str, is_env_ssl_verify
from ..utils.logging import mask_sensitive
from ..utils.urls import is_atlassian_cloud_url, normalize_host_url

logger = logging.getLogger("mcp-jira.config")

DEFAULT_TIMEOUT = 30


@dataclass
class JiraConfig:
    """Process-wide Jira defaults.

    Any of host, email and token may be missing here; tool calls can supply
    them per request and ``resolve_credentials`` decides what is used.
    """

    host: str | None = None  # Host name or URL of the Jira Cloud site
    email: str | None = None  # Atlassian account email
    api_token: str | None = field(default=None, repr=False)  # API token
    ssl_verify: bool = True  # Whether to verify SSL certificates
    timeout: int = DEFAULT_TIMEOUT  # Per-request timeout in seconds

    @classmethod
    def from_env(cls) -> "JiraConfig":
        """Create configuration from environment variables.

        Reads JIRA_HOST, JIRA_EMAIL, JIRA_API_TOKEN, JIRA_SSL_VERIFY and
        JIRA_TIMEOUT. Blank values count as unset.

        Returns:
            JiraConfig with values from environment variables
        """
        config = cls(
            host=get_env_str("JIRA_HOST"),
            email=get_env_str("JIRA_EMAIL"),
            api_token=get_env_str("JIRA_API_TOKEN"),
            ssl_verify=is_env_ssl_verify("JIRA_SSL_VERIFY"),
            timeout=get_env_int("JIRA_TIMEOUT", DEFAULT_TIMEOUT),
        )
        logger.debug(
            f"Loaded Jira defaults: host={config.host}, email={config.email}, "
            f"api_token={mask_sensitive(config.api_token)}, "
            f"ssl_verify={config.ssl_verify}, timeout={config.timeout}"
        )
        return config


@dataclass(frozen=True)
class JiraCredentials:
    """Resolved host, email and token for one tool invocation."""

    host: str
    email: str
    api_token: str = field(repr=False)

    @property
    def url(self) -> str:
        return normalize_host_url(self.host)

    @property
    def is_cloud(self) -> bool:
        return is_atlassian_cloud_url(self.url)

    @property
    def auth_header(self) -> str:
        return create_basic_auth_header(self.email, self.api_token)


def _pick(explicit: str | None, default: str | None) -> str | None:
    for value in (explicit, default):
        if value is not None and value.strip():
            return value.strip()
    return None


def resolve_credentials(
    host: str | None,
    email: str | None,
    api_token: str | None,
    defaults: JiraConfig,
) -> JiraCredentials:
    """Merge per-call credentials with the configured defaults.

    Each value prefers the explicit argument and falls back to ``defaults``.
    Blank strings count as missing.

    Args:
        host: Jira host given with the tool call
        email: Account email given with the tool call
        api_token: API token given with the tool call
        defaults: Process-wide configuration

    Returns:
        The resolved credentials

    Raises:
        CredentialsError: Naming every value that is still missing
    """
    resolved = {
        "Jira host": _pick(host, defaults.host),
        "email": _pick(email, defaults.email),
        "API token": _pick(api_token, defaults.api_token),
    }
    missing = [name for name, value in resolved.items() if value is None]
    if missing:
        logger.warning(f"Missing Jira credentials: {', '.join(missing)}")
        raise CredentialsError(missing)

    return JiraCredentials(
        host=resolved["Jira host"],  # type: ignore[arg-type]
        email=resolved["email"],  # type: ignore[arg-type]
        api_token=resolved["API token"],  # type: ignore[arg-type]
    )
