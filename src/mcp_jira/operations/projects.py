"""Project operations: listing projects, members and a member's issues."""

from collections.abc import Mapping
from typing import Any

from ..jira import JiraFetcher
from ..jira.config import JiraConfig
from ..jira.search import build_project_jql
from ..models.jira import JiraProject, JiraProjectMember
from ..models.jira.schemas import (
    CheckUserIssuesArguments,
    ListProjectsArguments,
    ProjectMembersArguments,
)
from .base import (
    FetcherFactory,
    ToolResponse,
    connect,
    md_table,
    run_operation,
    validate_arguments,
)
from .issues import format_issue_list


def format_projects(projects: list[JiraProject]) -> str:
    if not projects:
        return "# Jira Projects\n\nNo projects found."
    rows = [
        [project.key, project.name, project.project_type, project.lead_name]
        for project in projects
    ]
    table = md_table(["Project Key", "Name", "Type", "Lead"], rows)
    return f"# Jira Projects\n\nTotal projects: {len(projects)}\n\n{table}"


def format_members(project_key: str, members: list[JiraProjectMember]) -> str:
    heading = f"# Project Members for {project_key}"
    if not members:
        return f"{heading}\n\nNo project members found."
    rows = [
        [member.display_name, member.actor_type, member.email, ", ".join(member.roles)]
        for member in members
    ]
    table = md_table(["Name", "Type", "Email", "Roles"], rows)
    return f"{heading}\n\nTotal members: {len(members)}\n\n{table}"


def find_member(
    members: list[JiraProjectMember], user_name: str
) -> JiraProjectMember | None:
    wanted = user_name.strip().lower()
    for member in members:
        if member.display_name.lower() == wanted:
            return member
    return None


def _list_projects(arguments, defaults, fetcher_factory) -> str:
    request = validate_arguments(ListProjectsArguments, arguments)
    jira = connect(request, defaults, fetcher_factory)
    return format_projects(jira.get_all_projects())


def _list_project_members(arguments, defaults, fetcher_factory) -> str:
    request = validate_arguments(ProjectMembersArguments, arguments)
    jira = connect(request, defaults, fetcher_factory)
    members = jira.get_project_members(request.project_key)
    return format_members(request.project_key, members)


def _check_user_issues(arguments, defaults, fetcher_factory) -> str:
    request = validate_arguments(CheckUserIssuesArguments, arguments)
    jira = connect(request, defaults, fetcher_factory)

    members = jira.get_project_members(request.project_key)
    member = find_member(members, request.user_name)
    if member is None:
        names = ", ".join(m.display_name for m in members) or "None"
        return "\n".join(
            [
                "## ⚠️ User Not Found in Project",
                "",
                f'User "{request.user_name}" is not a member of project {request.project_key}.',
                "",
                f"**Project members:** {names}",
            ]
        )

    jql = build_project_jql(
        request.project_key,
        assignee_name=member.display_name,
        assignee_account_id=member.account_id,
    )
    issues = jira.search_issues(jql, resource=("project", request.project_key))
    return format_issue_list(request.project_key, issues, member.display_name)


def list_projects(
    arguments: Mapping[str, Any] | None,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory = JiraFetcher,
) -> ToolResponse:
    return run_operation(
        "jira_list_projects",
        lambda: _list_projects(arguments, defaults, fetcher_factory),
    )


def list_project_members(
    arguments: Mapping[str, Any] | None,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory = JiraFetcher,
) -> ToolResponse:
    """List every user and group holding a role in a project."""
    return run_operation(
        "jira_list_project_members",
        lambda: _list_project_members(arguments, defaults, fetcher_factory),
    )


def check_user_issues(
    arguments: Mapping[str, Any] | None,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory = JiraFetcher,
) -> ToolResponse:
    """
    List the issues assigned to a project member.

    A user who holds no role in the project gets a warning report listing
    the actual members rather than an error.
    """
    return run_operation(
        "jira_check_user_issues",
        lambda: _check_user_issues(arguments, defaults, fetcher_factory),
    )
