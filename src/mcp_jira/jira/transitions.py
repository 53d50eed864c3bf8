"""Module for Jira transition operations."""

import logging

from ..models.jira import JiraTransition
from .client import JiraClient

logger = logging.getLogger("mcp-jira.transitions")


def find_transition(
    transitions: list[JiraTransition], target_status: str
) -> JiraTransition | None:
    """Return the first transition leading to ``target_status`` (case-insensitive)."""
    wanted = target_status.strip().lower()
    for transition in transitions:
        if transition.target_name.lower() == wanted:
            return transition
    return None


def available_targets(transitions: list[JiraTransition]) -> str:
    """Comma-joined target status names, or ``None available``."""
    names = [transition.target_name for transition in transitions]
    return ", ".join(names) if names else "None available"


class TransitionsMixin(JiraClient):
    """Mixin for Jira transition operations."""

    def get_transitions_models(self, issue_key: str) -> list[JiraTransition]:
        """
        Get the transitions currently available for an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJECT-123')

        Returns:
            List of JiraTransition models, in the order Jira returned them
        """
        data = self._request(
            "GET",
            f"rest/api/3/issue/{issue_key}/transitions",
            resource=("issue", issue_key),
        )
        raw = data.get("transitions", []) if isinstance(data, dict) else []
        return [
            JiraTransition.from_api_response(item)
            for item in raw
            if isinstance(item, dict)
        ]

    def transition_issue(self, issue_key: str, transition_id: str) -> None:
        logger.info(f"Transitioning {issue_key} with transition {transition_id}")
        self._request(
            "POST",
            f"rest/api/3/issue/{issue_key}/transitions",
            data={"transition": {"id": transition_id}},
            resource=("issue", issue_key),
        )
