"""
Jira data models.
"""

from .adf import (
    adf_to_text,
    empty_adf_document,
    is_valid_adf_document,
    is_valid_adf_nodes,
    text_to_adf,
    to_adf,
)
from .common import (
    JiraIssue,
    JiraProject,
    JiraProjectMember,
    JiraStatus,
    JiraTransition,
    JiraUser,
)

__all__ = [
    "JiraIssue",
    "JiraProject",
    "JiraProjectMember",
    "JiraStatus",
    "JiraTransition",
    "JiraUser",
    "adf_to_text",
    "empty_adf_document",
    "is_valid_adf_document",
    "is_valid_adf_nodes",
    "text_to_adf",
    "to_adf",
]
