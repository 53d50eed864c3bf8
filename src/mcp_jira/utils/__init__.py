"""
Utility functions for the MCP Jira integration.
"""

from .date import parse_date
from .env import is_env_extended_truthy, is_env_ssl_verify
from .io import is_read_only_mode
from .logging import mask_sensitive
from .urls import is_atlassian_cloud_url, issue_browse_url, normalize_host_url

__all__ = [
    "is_atlassian_cloud_url",
    "is_env_extended_truthy",
    "is_env_ssl_verify",
    "is_read_only_mode",
    "issue_browse_url",
    "mask_sensitive",
    "normalize_host_url",
    "parse_date",
]
