"""Tool operations: validate arguments, call Jira, render Markdown."""

from .base import OperationOutcome, ToolResponse
from .create_issue import create_issue
from .issues import get_issue, search_issues
from .projects import check_user_issues, list_project_members, list_projects
from .update_issue import build_fields_payload, update_issue

__all__ = [
    "OperationOutcome",
    "ToolResponse",
    "build_fields_payload",
    "check_user_issues",
    "create_issue",
    "get_issue",
    "list_project_members",
    "list_projects",
    "search_issues",
    "update_issue",
]
