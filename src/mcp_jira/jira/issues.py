"""Module for Jira issue operations."""

import logging
from typing import Any

from ..models.jira import JiraIssue
from .client import JiraClient

logger = logging.getLogger("mcp-jira.issues")


class IssuesMixin(JiraClient):
    """Mixin for Jira issue operations."""

    def get_issue(self, issue_key: str) -> JiraIssue:
        data = self._request(
            "GET", f"rest/api/3/issue/{issue_key}", resource=("issue", issue_key)
        )
        return JiraIssue.from_api_response(data or {})

    def update_issue_fields(self, issue_key: str, fields: dict[str, Any]) -> None:
        """
        Apply a sparse field update in one PUT.

        Args:
            issue_key: The issue key
            fields: Only the fields to change

        Raises:
            ValueError: If ``fields`` is empty
        """
        if not fields:
            raise ValueError("Refusing to send an empty field update")
        logger.info(f"Updating fields {sorted(fields)} on {issue_key}")
        self._request(
            "PUT",
            f"rest/api/3/issue/{issue_key}",
            data={"fields": fields},
            resource=("issue", issue_key),
        )

    def create_issue(self, project_key: str, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Create an issue.

        Args:
            project_key: Key of the target project, used for error messages
            fields: The complete ``fields`` object of the create request

        Returns:
            Jira's reply: ``{"id": ..., "key": ..., "self": ...}``
        """
        data = self._request(
            "POST",
            "rest/api/3/issue",
            data={"fields": fields},
            resource=("project", project_key),
        )
        if not isinstance(data, dict) or "key" not in data:
            msg = f"Unexpected response when creating issue in {project_key}: {data!r}"
            raise ValueError(msg)
        logger.info(f"Created issue {data['key']} in {project_key}")
        return data

    def add_issue_to_sprint(self, sprint_id: str, issue_key: str) -> None:
        self._request(
            "POST",
            f"rest/agile/1.0/sprint/{sprint_id}/issue",
            data={"issues": [issue_key]},
            resource=("sprint", sprint_id),
        )
