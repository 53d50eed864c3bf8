"""URL-related utility functions for MCP Jira."""

import re
from urllib.parse import urlparse

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def normalize_host_url(host: str) -> str:
    """Turn a configured Jira host into a base URL.

    ``your-domain.atlassian.net`` and ``https://your-domain.atlassian.net/``
    both become ``https://your-domain.atlassian.net``.

    Args:
        host: Host name or URL as given by the caller or environment

    Returns:
        The base URL with a scheme and without a trailing slash
    """
    value = host.strip()
    if not _SCHEME_RE.match(value):
        value = f"https://{value}"
    return value.rstrip("/")


def issue_browse_url(base_url: str, issue_key: str) -> str:
    return f"{base_url.rstrip('/')}/browse/{issue_key}"


def is_atlassian_cloud_url(url: str) -> bool:
    """Determine if a URL belongs to Atlassian Cloud.

    Args:
        url: The URL to check

    Returns:
        True for Atlassian Cloud hosts, False for everything else
        (including localhost and private network addresses)
    """
    if not url:
        return False

    hostname = urlparse(url).hostname or ""
    if (
        hostname == "localhost"
        or re.match(r"^127\.", hostname)
        or re.match(r"^192\.168\.", hostname)
        or re.match(r"^10\.", hostname)
        or re.match(r"^172\.(1[6-9]|2[0-9]|3[0-1])\.", hostname)
    ):
        return False

    return (
        ".atlassian.net" in hostname
        or ".jira.com" in hostname
        or ".jira-dev.com" in hostname
        or "api.atlassian.com" in hostname
    )
