"""
Pydantic models for Jira API data and tool arguments.
"""

from .base import ApiModel
from .jira import (
    JiraIssue,
    JiraProject,
    JiraProjectMember,
    JiraStatus,
    JiraTransition,
    JiraUser,
)

__all__ = [
    "ApiModel",
    "JiraIssue",
    "JiraProject",
    "JiraProjectMember",
    "JiraStatus",
    "JiraTransition",
    "JiraUser",
]
