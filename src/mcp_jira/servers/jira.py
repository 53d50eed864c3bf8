"""Jira FastMCP server instance and tool definitions."""

import asyncio
import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from mcp_jira import operations
from mcp_jira.jira.config import JiraConfig
from mcp_jira.operations import ToolResponse
from mcp_jira.servers.dependencies import get_jira_config
from mcp_jira.utils.decorators import check_write_access

logger = logging.getLogger("mcp-jira.servers.jira")

jira_mcp = FastMCP(
    name="Jira MCP Service",
    instructions="Provides tools for interacting with Atlassian Jira.",
)

JiraHost = Annotated[
    str | None,
    Field(
        description=(
            "(Optional) Jira host, e.g. 'your-domain.atlassian.net'. "
            "Defaults to JIRA_HOST."
        ),
        default=None,
    ),
]
Email = Annotated[
    str | None,
    Field(
        description="(Optional) Atlassian account email. Defaults to JIRA_EMAIL.",
        default=None,
    ),
]
ApiToken = Annotated[
    str | None,
    Field(
        description="(Optional) Atlassian API token. Defaults to JIRA_API_TOKEN.",
        default=None,
    ),
]


async def _call(
    ctx: Context,
    operation: Callable[[dict[str, Any], JiraConfig], ToolResponse],
    arguments: dict[str, Any],
) -> str:
    """Run a blocking operation off the event loop and unwrap its response."""
    config = get_jira_config(ctx)
    response = await asyncio.to_thread(operation, arguments, config)
    if response.is_error:
        raise ToolError(response.text)
    return response.text


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "List Projects", "readOnlyHint": True},
)
async def list_projects(
    ctx: Context,
    jira_host: JiraHost = None,
    email: Email = None,
    api_token: ApiToken = None,
) -> str:
    """List all Jira projects visible to the account.

    Args:
        ctx: The FastMCP context.
        jira_host: Optional Jira host override.
        email: Optional account email override.
        api_token: Optional API token override.

    Returns:
        Markdown table of projects.
    """
    return await _call(
        ctx,
        operations.list_projects,
        {"jira_host": jira_host, "email": email, "api_token": api_token},
    )


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "Get Issue", "readOnlyHint": True},
)
async def get_issue(
    ctx: Context,
    issue_key: Annotated[str, Field(description="Jira issue key (e.g., 'PROJ-123')")],
    jira_host: JiraHost = None,
    email: Email = None,
    api_token: ApiToken = None,
) -> str:
    """Get the details of a Jira issue.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        jira_host: Optional Jira host override.
        email: Optional account email override.
        api_token: Optional API token override.

    Returns:
        Markdown summary of the issue with its description.
    """
    return await _call(
        ctx,
        operations.get_issue,
        {
            "issue_key": issue_key,
            "jira_host": jira_host,
            "email": email,
            "api_token": api_token,
        },
    )


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "Search Issues", "readOnlyHint": True},
)
async def search_issues(
    ctx: Context,
    project_key: Annotated[str, Field(description="Jira project key (e.g., 'PROJ')")],
    assignee_name: Annotated[
        str | None,
        Field(description="(Optional) Only issues whose assignee matches this name", default=None),
    ] = None,
    jira_host: JiraHost = None,
    email: Email = None,
    api_token: ApiToken = None,
) -> str:
    """Search the latest 50 issues of a project, optionally by assignee.

    Args:
        ctx: The FastMCP context.
        project_key: Jira project key.
        assignee_name: Optional assignee name filter.
        jira_host: Optional Jira host override.
        email: Optional account email override.
        api_token: Optional API token override.

    Returns:
        Markdown table of issues, newest first.
    """
    return await _call(
        ctx,
        operations.search_issues,
        {
            "project_key": project_key,
            "assignee_name": assignee_name,
            "jira_host": jira_host,
            "email": email,
            "api_token": api_token,
        },
    )


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "List Project Members", "readOnlyHint": True},
)
async def list_project_members(
    ctx: Context,
    project_key: Annotated[str, Field(description="Jira project key (e.g., 'PROJ')")],
    jira_host: JiraHost = None,
    email: Email = None,
    api_token: ApiToken = None,
) -> str:
    """List the users and groups holding a role in a project."""
    return await _call(
        ctx,
        operations.list_project_members,
        {
            "project_key": project_key,
            "jira_host": jira_host,
            "email": email,
            "api_token": api_token,
        },
    )


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "Check User Issues", "readOnlyHint": True},
)
async def check_user_issues(
    ctx: Context,
    project_key: Annotated[str, Field(description="Jira project key (e.g., 'PROJ')")],
    user_name: Annotated[str, Field(description="Display name of the project member")],
    jira_host: JiraHost = None,
    email: Email = None,
    api_token: ApiToken = None,
) -> str:
    """Check that a user belongs to a project and list the issues assigned to them."""
    return await _call(
        ctx,
        operations.check_user_issues,
        {
            "project_key": project_key,
            "user_name": user_name,
            "jira_host": jira_host,
            "email": email,
            "api_token": api_token,
        },
    )


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Create Issue", "destructiveHint": False},
)
@check_write_access
async def create_issue(
    ctx: Context,
    project_key: Annotated[str, Field(description="Jira project key (e.g., 'PROJ')")],
    summary: Annotated[str, Field(description="Summary (title) of the issue")],
    description: Annotated[
        str | dict[str, Any],
        Field(description="Issue description as plain text or an ADF document"),
    ],
    issue_type: Annotated[
        str,
        Field(description="Issue type: Task, Bug, Story or Epic", default="Task"),
    ] = "Task",
    assignee_name: Annotated[
        str | None,
        Field(description="(Optional) Display name of the assignee", default=None),
    ] = None,
    reporter_name: Annotated[
        str | None,
        Field(description="(Optional) Display name of the reporter", default=None),
    ] = None,
    sprint_id: Annotated[
        str | None,
        Field(description="(Optional) Sprint to add the new issue to", default=None),
    ] = None,
    jira_host: JiraHost = None,
    email: Email = None,
    api_token: ApiToken = None,
) -> str:
    """Create a new Jira issue.

    Args:
        ctx: The FastMCP context.
        project_key: Jira project key.
        summary: Issue summary.
        description: Plain text or ADF description.
        issue_type: Task, Bug, Story or Epic.
        assignee_name: Optional assignee display name.
        reporter_name: Optional reporter display name.
        sprint_id: Optional sprint id.
        jira_host: Optional Jira host override.
        email: Optional account email override.
        api_token: Optional API token override.

    Returns:
        Markdown report of the created issue.

    Raises:
        ToolError: If the issue could not be created or the server is read-only.
    """
    return await _call(
        ctx,
        operations.create_issue,
        {
            "project_key": project_key,
            "summary": summary,
            "description": description,
            "issue_type": issue_type,
            "assignee_name": assignee_name,
            "reporter_name": reporter_name,
            "sprint_id": sprint_id,
            "jira_host": jira_host,
            "email": email,
            "api_token": api_token,
        },
    )


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Update Issue", "destructiveHint": True},
)
@check_write_access
async def update_issue(
    ctx: Context,
    issue_key: Annotated[str, Field(description="Jira issue key (e.g., 'PROJ-123')")],
    summary: Annotated[
        str | None, Field(description="(Optional) New summary", default=None)
    ] = None,
    description: Annotated[
        str | dict[str, Any] | None,
        Field(
            description="(Optional) New description as plain text or an ADF document",
            default=None,
        ),
    ] = None,
    status: Annotated[
        str | None,
        Field(
            description="(Optional) Target status name, e.g. 'In Progress'",
            default=None,
        ),
    ] = None,
    assignee_name: Annotated[
        str | None,
        Field(description="(Optional) Display name of the new assignee", default=None),
    ] = None,
    jira_host: JiraHost = None,
    email: Email = None,
    api_token: ApiToken = None,
) -> str:
    """Update an issue's summary, description, assignee and/or status.

    An assignee that cannot be found or a status that is not reachable
    from the current state is reported as a warning; the other changes are
    still applied.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        summary: Optional new summary.
        description: Optional new description.
        status: Optional target status name.
        assignee_name: Optional new assignee display name.
        jira_host: Optional Jira host override.
        email: Optional account email override.
        api_token: Optional API token override.

    Returns:
        Markdown report of the applied changes.

    Raises:
        ToolError: If the update failed or the server is read-only.
    """
    return await _call(
        ctx,
        operations.update_issue,
        {
            "issue_key": issue_key,
            "summary": summary,
            "description": description,
            "status": status,
            "assignee_name": assignee_name,
            "jira_host": jira_host,
            "email": email,
            "api_token": api_token,
        },
    )
