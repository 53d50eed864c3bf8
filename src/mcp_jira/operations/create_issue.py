"""The jira_create_issue operation."""

from collections.abc import Mapping
from typing import Any

from ..exceptions import MCPJiraError
from ..jira import JiraFetcher
from ..jira.config import JiraConfig
from ..models.jira import JiraIssue, JiraUser, adf_to_text, to_adf
from ..models.jira.schemas import CreateIssueArguments
from ..utils.urls import issue_browse_url
from .base import (
    FetcherFactory,
    OperationOutcome,
    ToolResponse,
    connect,
    md_table,
    run_operation,
    validate_arguments,
)

DESCRIPTION_PREVIEW_LENGTH = 500


def _resolve_user(
    jira: JiraFetcher, role: str, name: str, outcome: OperationOutcome
) -> JiraUser | None:
    try:
        user = jira.find_user(name)
    except MCPJiraError as e:
        outcome.warn(
            f"Error searching for {role} '{name}': {e.message}. "
            f"{role.capitalize()} not set."
        )
        return None
    if user is None or not user.account_id:
        outcome.warn(
            f"{role.capitalize()} '{name}' not found or not active. "
            f"{role.capitalize()} not set."
        )
        return None
    return user


def build_create_fields(
    request: CreateIssueArguments,
    assignee: JiraUser | None = None,
    reporter: JiraUser | None = None,
) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "project": {"key": request.project_key},
        "summary": request.summary,
        "description": to_adf(request.description),
        "issuetype": {"name": request.issue_type},
    }
    if assignee is not None:
        fields["assignee"] = {"accountId": assignee.account_id}
    if reporter is not None:
        fields["reporter"] = {"accountId": reporter.account_id}
    return fields


def format_create_success(
    issue: JiraIssue,
    base_url: str,
    description_text: str | None,
    outcome: OperationOutcome,
    sprint_id: str | None = None,
) -> str:
    """Render the report for a newly created issue."""
    link = issue_browse_url(base_url, issue.key)
    rows = [
        ["Key", f"[{issue.key}]({link})"],
        ["Summary", issue.summary],
        ["Type", issue.issue_type],
        ["Status", issue.status_name],
        ["Assignee", issue.assignee_name],
        ["Reporter", issue.reporter.display_name if issue.reporter else None],
    ]
    if sprint_id:
        rows.append(["Sprint", sprint_id])

    preview = description_text or "No description provided."
    if len(preview) > DESCRIPTION_PREVIEW_LENGTH:
        preview = preview[:DESCRIPTION_PREVIEW_LENGTH] + "..."

    parts = ["## ✅ Issue Created Successfully", "", md_table(["Field", "Value"], rows)]
    if outcome.lines:
        parts.extend(["", "**Notes:**", *outcome.lines])
    parts.extend(["", "### Description Preview", "", preview])
    return "\n".join(parts)


def _create_issue(arguments, defaults, fetcher_factory) -> str:
    request = validate_arguments(CreateIssueArguments, arguments)
    jira = connect(request, defaults, fetcher_factory)
    outcome = OperationOutcome()

    assignee = (
        _resolve_user(jira, "assignee", request.assignee_name, outcome)
        if request.assignee_name
        else None
    )
    reporter = (
        _resolve_user(jira, "reporter", request.reporter_name, outcome)
        if request.reporter_name
        else None
    )

    fields = build_create_fields(request, assignee, reporter)
    created = jira.create_issue(request.project_key, fields)
    issue_key = created["key"]

    sprint_id = None
    if request.sprint_id:
        try:
            jira.add_issue_to_sprint(request.sprint_id, issue_key)
            sprint_id = request.sprint_id
        except MCPJiraError as e:
            outcome.warn(
                f"Issue created but could not be added to sprint {request.sprint_id}: {e.message}."
            )

    issue = jira.get_issue(issue_key)
    return format_create_success(
        issue,
        jira.base_url,
        adf_to_text(fields["description"]),
        outcome,
        sprint_id=sprint_id,
    )


def create_issue(
    arguments: Mapping[str, Any] | None,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory = JiraFetcher,
) -> ToolResponse:
    """
    Create an issue, optionally assigning it and adding it to a sprint.

    Unresolved assignee or reporter names and a failed sprint assignment
    are reported as warnings; the issue is still created.
    """
    return run_operation(
        "jira_create_issue",
        lambda: _create_issue(arguments, defaults, fetcher_factory),
    )
