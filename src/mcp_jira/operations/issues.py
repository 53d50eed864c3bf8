"""Read-only issue operations: jira_get_issue and jira_search_issues."""

from collections.abc import Mapping
from typing import Any

from ..jira import JiraFetcher
from ..jira.config import JiraConfig
from ..jira.search import build_project_jql
from ..models.jira import JiraIssue
from ..models.jira.schemas import GetIssueArguments, SearchIssuesArguments
from ..utils.date import parse_date
from ..utils.urls import issue_browse_url
from .base import (
    FetcherFactory,
    ToolResponse,
    connect,
    md_table,
    run_operation,
    validate_arguments,
)

DATETIME_FORMAT = "%Y-%m-%d %H:%M"


def format_issue_details(issue: JiraIssue, base_url: str) -> str:
    rows = [
        ["Summary", issue.summary],
        ["Status", issue.status_name],
        ["Type", issue.issue_type],
        ["Priority", issue.priority],
        ["Assignee", issue.assignee_name],
        ["Reporter", issue.reporter.display_name if issue.reporter else None],
        ["Created", parse_date(issue.created, DATETIME_FORMAT)],
        ["Updated", parse_date(issue.updated, DATETIME_FORMAT)],
    ]
    return "\n".join(
        [
            f"# Issue [{issue.key}]({issue_browse_url(base_url, issue.key)})",
            "",
            md_table(["Field", "Value"], rows),
            "",
            "## Description",
            "",
            issue.description or "No description provided.",
        ]
    )


def format_issue_list(
    project_key: str, issues: list[JiraIssue], assignee_name: str | None = None
) -> str:
    """Render search results as a Markdown table."""
    heading = f"# Issues for Project: {project_key}"
    if assignee_name:
        heading += f" assigned to {assignee_name}"
    if not issues:
        return f"{heading}\n\nNo issues found."
    rows = [
        [
            issue.key,
            issue.summary,
            issue.status_name,
            issue.issue_type,
            issue.assignee_name,
            parse_date(issue.created),
        ]
        for issue in issues
    ]
    table = md_table(
        ["Issue Key", "Summary", "Status", "Type", "Assignee", "Created"], rows
    )
    return f"{heading}\n\nTotal issues: {len(issues)}\n\n{table}"


def _get_issue(arguments, defaults, fetcher_factory) -> str:
    request = validate_arguments(GetIssueArguments, arguments)
    jira = connect(request, defaults, fetcher_factory)
    issue = jira.get_issue(request.issue_key)
    return format_issue_details(issue, jira.base_url)


def _search_issues(arguments, defaults, fetcher_factory) -> str:
    request = validate_arguments(SearchIssuesArguments, arguments)
    jira = connect(request, defaults, fetcher_factory)
    jql = build_project_jql(request.project_key, assignee_name=request.assignee_name)
    issues = jira.search_issues(jql, resource=("project", request.project_key))
    return format_issue_list(request.project_key, issues, request.assignee_name)


def get_issue(
    arguments: Mapping[str, Any] | None,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory = JiraFetcher,
) -> ToolResponse:
    return run_operation(
        "jira_get_issue", lambda: _get_issue(arguments, defaults, fetcher_factory)
    )


def search_issues(
    arguments: Mapping[str, Any] | None,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory = JiraFetcher,
) -> ToolResponse:
    """List a project's issues, newest first, optionally for one assignee."""
    return run_operation(
        "jira_search_issues",
        lambda: _search_issues(arguments, defaults, fetcher_factory),
    )
