"""Jira API module for mcp_jira.

Each mixin covers one area of the REST API; JiraFetcher combines them.
"""

from .client import JiraClient
from .config import JiraConfig, JiraCredentials, resolve_credentials
from .issues import IssuesMixin
from .projects import ProjectsMixin
from .search import SearchMixin
from .transitions import TransitionsMixin
from .users import UsersMixin


class JiraFetcher(
    ProjectsMixin,
    SearchMixin,
    IssuesMixin,
    TransitionsMixin,
    UsersMixin,
):
    """The main Jira client class providing access to all Jira operations."""

    pass


__all__ = [
    "JiraClient",
    "JiraConfig",
    "JiraCredentials",
    "JiraFetcher",
    "resolve_credentials",
]
