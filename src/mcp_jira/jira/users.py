"""Module for Jira user lookup."""

import logging

from ..models.jira import JiraUser
from .client import JiraClient

logger = logging.getLogger("mcp-jira.users")


def select_user(users: list[JiraUser], query: str) -> JiraUser | None:
    """Pick one user out of a directory search result.

    An active user whose display name equals the query (case-insensitive)
    wins; otherwise the first active user in API order. Inactive users are
    never chosen.

    Args:
        users: Search results in the order Jira returned them
        query: The name the caller searched for

    Returns:
        The chosen user, or None if no active user was returned
    """
    wanted = query.strip().lower()
    active = [user for user in users if user.active]
    for user in active:
        if user.display_name.lower() == wanted:
            return user
    return active[0] if active else None


class UsersMixin(JiraClient):
    """Mixin for Jira user operations."""

    def search_users(self, query: str) -> list[JiraUser]:
        """Search the user directory with Jira's fuzzy ``query`` matcher."""
        data = self._request("GET", "rest/api/3/user/search", params={"query": query})
        if not isinstance(data, list):
            logger.debug(f"Unexpected user search response for '{query}': {data!r}")
            return []
        return [JiraUser.from_api_response(item) for item in data if isinstance(item, dict)]

    def find_user(self, query: str) -> JiraUser | None:
        """
        Resolve a free-text name to a single active user.

        Args:
            query: Display name, email or partial name

        Returns:
            The selected user, or None when nothing matched

        Raises:
            MCPJiraError: If the search request itself fails
        """
        user = select_user(self.search_users(query), query)
        if user is None:
            logger.info(f"No active user found for '{query}'")
        else:
            logger.debug(f"Resolved '{query}' to account {user.account_id}")
        return user
