"""
Argument schemas for the Jira tools.

Every tool validates its raw argument bag against one of these models
before any credential lookup or HTTP call. Field names are snake_case;
the camelCase names used by older clients (``issueIdOrKey``,
``assigneeName``, ``jiraHost``...) are accepted as aliases. Unknown keys
are dropped.
"""

import re
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
)

from .adf import is_valid_adf_document

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
DESCRIPTION_ERROR = (
    "Description must be a string or a valid ADF object (with valid node structure)"
)
NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


def _check_description(value: Any) -> Any:
    if value is None or isinstance(value, str) or is_valid_adf_document(value):
        return value
    raise ValueError(DESCRIPTION_ERROR)


class JiraToolArguments(BaseModel):
    """Credential overrides accepted by every tool."""

    model_config = ConfigDict(extra="ignore")

    jira_host: str | None = Field(
        default=None, validation_alias=AliasChoices("jira_host", "jiraHost")
    )
    email: str | None = None
    api_token: str | None = Field(
        default=None, validation_alias=AliasChoices("api_token", "apiToken")
    )

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str | None) -> str | None:
        if value and not EMAIL_PATTERN.match(value.strip()):
            raise ValueError("email must be a valid email")
        return value


class ListProjectsArguments(JiraToolArguments):
    pass


class GetIssueArguments(JiraToolArguments):
    issue_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("issue_key", "issueIdOrKey", "issueKey"),
    )


class SearchIssuesArguments(JiraToolArguments):
    project_key: str = Field(
        min_length=1, validation_alias=AliasChoices("project_key", "projectKey")
    )
    assignee_name: str | None = Field(
        default=None, validation_alias=AliasChoices("assignee_name", "assigneeName")
    )


class ProjectMembersArguments(JiraToolArguments):
    project_key: str = Field(
        min_length=1, validation_alias=AliasChoices("project_key", "projectKey")
    )


class CheckUserIssuesArguments(JiraToolArguments):
    project_key: str = Field(
        min_length=1, validation_alias=AliasChoices("project_key", "projectKey")
    )
    user_name: str = Field(
        min_length=1, validation_alias=AliasChoices("user_name", "userName")
    )


class CreateIssueArguments(JiraToolArguments):
    project_key: str = Field(
        min_length=1, validation_alias=AliasChoices("project_key", "projectKey")
    )
    summary: str = Field(min_length=1)
    description: Any
    issue_type: Literal["Task", "Bug", "Story", "Epic"] = Field(
        default="Task", validation_alias=AliasChoices("issue_type", "issueType")
    )
    assignee_name: str | None = Field(
        default=None, validation_alias=AliasChoices("assignee_name", "assigneeName")
    )
    reporter_name: str | None = Field(
        default=None, validation_alias=AliasChoices("reporter_name", "reporterName")
    )
    sprint_id: str | None = Field(
        default=None, validation_alias=AliasChoices("sprint_id", "sprintId")
    )

    @field_validator("description")
    @classmethod
    def _description_shape(cls, value: Any) -> Any:
        if value is None:
            raise ValueError(DESCRIPTION_ERROR)
        return _check_description(value)

    @field_validator("sprint_id", mode="before")
    @classmethod
    def _sprint_id_text(cls, value: Any) -> Any:
        # Sprint ids are numeric in Jira; accept them unquoted
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class UpdateIssueArguments(JiraToolArguments):
    issue_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("issue_key", "issueIdOrKey", "issueKey"),
    )
    summary: NonEmptyStr | None = None
    description: Any = None
    status: NonEmptyStr | None = None
    assignee_name: NonEmptyStr | None = Field(
        default=None,
        validation_alias=AliasChoices("assignee_name", "assigneeName"),
    )

    @field_validator("description")
    @classmethod
    def _description_shape(cls, value: Any) -> Any:
        return _check_description(value)

    def has_changes(self) -> bool:
        """True when at least one field or the status was requested."""
        return any(
            value is not None
            for value in (self.summary, self.description, self.status, self.assignee_name)
        )
