"""Module for Jira search operations."""

import logging

from ..models.jira import JiraIssue
from .client import JiraClient

logger = logging.getLogger("mcp-jira.search")

DEFAULT_SEARCH_FIELDS = "summary,status,assignee,created,issuetype,priority"
DEFAULT_MAX_RESULTS = 50


def escape_jql_string(value: str) -> str:
    """Escape a value for use inside a double-quoted JQL string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_project_jql(
    project_key: str,
    assignee_name: str | None = None,
    assignee_account_id: str | None = None,
) -> str:
    """
    Build the JQL listing a project's issues, newest first.

    Args:
        project_key: The project key
        assignee_name: Fuzzy assignee filter (``assignee ~``)
        assignee_account_id: Exact assignee filter; wins over the name

    Returns:
        The JQL query string
    """
    clauses = [f'project = "{escape_jql_string(project_key)}"']
    if assignee_account_id:
        clauses.append(f'assignee = "{escape_jql_string(assignee_account_id)}"')
    elif assignee_name:
        clauses.append(f'assignee ~ "{escape_jql_string(assignee_name)}"')
    return " AND ".join(clauses) + " ORDER BY created DESC"


class SearchMixin(JiraClient):
    """Mixin for Jira search operations."""

    def search_issues(
        self,
        jql: str,
        fields: str = DEFAULT_SEARCH_FIELDS,
        max_results: int = DEFAULT_MAX_RESULTS,
        resource: tuple[str, str] | None = None,
    ) -> list[JiraIssue]:
        """
        Run a JQL search.

        Args:
            jql: JQL query string
            fields: Comma-separated fields to return
            max_results: Maximum number of issues
            resource: ``(kind, key)`` used to word not-found errors

        Returns:
            Matching issues in the order Jira returned them
        """
        logger.debug(f"Searching issues with JQL: {jql}")
        data = self._request(
            "GET",
            "rest/api/3/search/jql",
            params={"jql": jql, "fields": fields, "maxResults": max_results},
            resource=resource,
        )
        raw = data.get("issues", []) if isinstance(data, dict) else []
        return [JiraIssue.from_api_response(item) for item in raw if isinstance(item, dict)]
