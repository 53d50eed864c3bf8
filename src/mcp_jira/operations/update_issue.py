"""The jira_update_issue operation.

Sequence per call: validate arguments, resolve credentials, look up the
assignee, PUT the sparse field payload, apply the status transition, then
fetch the issue again and report. Assignee and status problems become
warning lines; every other failure ends the call with an error report.
"""

from collections.abc import Mapping
from typing import Any

from ..exceptions import MCPJiraError
from ..jira import JiraFetcher
from ..jira.config import JiraConfig
from ..jira.transitions import available_targets, find_transition
from ..models.jira import JiraIssue, JiraUser, to_adf
from ..models.jira.schemas import UpdateIssueArguments
from ..utils.urls import issue_browse_url
from .base import (
    FetcherFactory,
    OperationOutcome,
    ToolResponse,
    connect,
    run_operation,
    validate_arguments,
)

NO_CHANGES_MESSAGE = "No update parameters provided. No changes made to the issue."


def build_fields_payload(
    summary: str | None = None,
    description: str | dict[str, Any] | None = None,
    assignee_account_id: str | None = None,
) -> dict[str, Any]:
    """
    Build the sparse ``fields`` object of an issue update.

    A key is present only for a value that was given. An empty summary is
    kept (it clears the field). The description always goes through
    ``to_adf``.

    Args:
        summary: New summary
        description: New description as text or ADF
        assignee_account_id: Account id of an already resolved assignee

    Returns:
        The payload; may be empty
    """
    fields: dict[str, Any] = {}
    if summary is not None:
        fields["summary"] = summary
    if description is not None:
        fields["description"] = to_adf(description)
    if assignee_account_id:
        fields["assignee"] = {"accountId": assignee_account_id}
    return fields


def resolve_assignee(
    jira: JiraFetcher, name: str, outcome: OperationOutcome
) -> JiraUser | None:
    try:
        user = jira.find_user(name)
    except MCPJiraError as e:
        outcome.warn(
            f"Error searching for assignee '{name}': {e.message}. Assignee not changed."
        )
        return None
    if user is None or not user.account_id:
        outcome.warn(f"Assignee '{name}' not found or not active. Assignee not changed.")
        return None
    return user


def apply_status(
    jira: JiraFetcher, issue_key: str, status: str, outcome: OperationOutcome
) -> bool:
    """
    Move the issue to ``status`` if a matching transition is available.

    Returns:
        True if the transition was applied
    """
    try:
        transitions = jira.get_transitions_models(issue_key)
        transition = find_transition(transitions, status)
        if transition is None:
            outcome.warn(
                f'Status transition to "{status}" not available or already in this '
                f"state. Available transitions: {available_targets(transitions)}."
            )
            return False
        jira.transition_issue(issue_key, transition.id)
    except MCPJiraError as e:
        outcome.warn(f"Error during status transition: {e.message}.")
        return False
    outcome.changed(f'- Status changed to "{transition.target_name}".')
    return True


def format_update_success(issue: JiraIssue, lines: list[str], base_url: str) -> str:
    """Render the success report of an update."""
    parts = [
        "## ✅ Issue Updated Successfully",
        "",
        f"Issue [{issue.key}]({issue_browse_url(base_url, issue.key)}) has been updated.",
    ]
    if lines:
        parts.extend(["", "**Changed fields:**", *lines])
    current = []
    if issue.status is not None:
        current.append(f"**Current Status:** {issue.status_name}")
    if issue.assignee is not None:
        current.append(f"**Current Assignee:** {issue.assignee_name}")
    if current:
        parts.extend(["", *current])
    return "\n".join(parts)


def _update_issue(
    arguments: Mapping[str, Any] | None,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory,
) -> str:
    request = validate_arguments(UpdateIssueArguments, arguments)
    jira = connect(request, defaults, fetcher_factory)

    if not request.has_changes():
        return NO_CHANGES_MESSAGE

    issue_key = request.issue_key
    outcome = OperationOutcome()

    assignee = None
    if request.assignee_name is not None:
        assignee = resolve_assignee(jira, request.assignee_name, outcome)

    fields = build_fields_payload(
        summary=request.summary,
        description=request.description,
        assignee_account_id=assignee.account_id if assignee else None,
    )
    if fields:
        jira.update_issue_fields(issue_key, fields)
        if "summary" in fields:
            outcome.changed("- Summary updated")
        if "description" in fields:
            outcome.changed("- Description updated")
        if "assignee" in fields and assignee is not None:
            outcome.changed(f"- Assignee updated to {assignee.display_name}")

    if request.status is not None:
        apply_status(jira, issue_key, request.status, outcome)

    issue = jira.get_issue(issue_key)
    return format_update_success(issue, outcome.lines, jira.base_url)


def update_issue(
    arguments: Mapping[str, Any] | None,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory = JiraFetcher,
) -> ToolResponse:
    """
    Update summary, description, assignee and/or status of an issue.

    Args:
        arguments: Raw tool arguments (``issue_key`` plus optional
            ``summary``, ``description``, ``status``, ``assignee_name`` and
            credential overrides)
        defaults: Configured Jira defaults
        fetcher_factory: Builds the Jira fetcher for the resolved credentials

    Returns:
        The update report, the no-op message, or an error report
    """
    issue_key = None
    if isinstance(arguments, Mapping):
        issue_key = arguments.get("issue_key") or arguments.get("issueIdOrKey")
    return run_operation(
        "jira_update_issue",
        lambda: _update_issue(arguments, defaults, fetcher_factory),
        issue_key=issue_key,
    )
