"""
Jira entity models: users, statuses, transitions, projects and issues.
"""

from typing import Any

from pydantic import Field

from ..base import ApiModel
from .adf import adf_to_text


class JiraUser(ApiModel):
    """
    Model representing a Jira user account.
    """

    account_id: str | None = None
    display_name: str = "Unassigned"
    email: str | None = None
    active: bool = False

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraUser":
        if not data:
            return cls()
        return cls(
            account_id=data.get("accountId"),
            display_name=data.get("displayName") or "Unassigned",
            email=data.get("emailAddress"),
            active=data.get("active") is True,
        )


class JiraStatus(ApiModel):
    """
    Model representing a Jira workflow status.
    """

    id: str | None = None
    name: str = "Unknown"

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraStatus":
        if not data:
            return cls()
        status_id = data.get("id")
        return cls(
            id=str(status_id) if status_id is not None else None,
            name=data.get("name") or "Unknown",
        )


class JiraTransition(ApiModel):
    """
    Model representing a transition available on an issue right now.

    The set of transitions depends on the issue's current status and
    workflow, so instances are only valid for the request that fetched them.
    """

    id: str
    name: str = ""
    to_status: JiraStatus | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraTransition":
        to_status = data.get("to")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            to_status=JiraStatus.from_api_response(to_status)
            if isinstance(to_status, dict)
            else None,
        )

    @property
    def target_name(self) -> str:
        """Name of the status this transition leads to."""
        if self.to_status is not None:
            return self.to_status.name
        return self.name


class JiraProject(ApiModel):
    """
    Model representing a Jira project.
    """

    id: str | None = None
    key: str
    name: str = ""
    project_type: str | None = None
    lead_name: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraProject":
        lead = data.get("lead") or {}
        return cls(
            id=data.get("id"),
            key=data.get("key", ""),
            name=data.get("name", ""),
            project_type=data.get("projectTypeKey"),
            lead_name=lead.get("displayName") if isinstance(lead, dict) else None,
        )


class JiraProjectMember(ApiModel):
    """
    A user or group holding at least one role in a project.
    """

    display_name: str
    actor_type: str = "User"
    account_id: str | None = None
    email: str | None = None
    roles: list[str] = Field(default_factory=list)

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "JiraProjectMember":
        """
        Build a member from a role actor entry.

        Args:
            data: One item of the role's ``actors`` list
            **kwargs: ``role`` is recorded as the first role name

        Returns:
            JiraProjectMember for the actor
        """
        actor_user = data.get("actorUser") or {}
        is_group = data.get("type") == "atlassian-group-role-actor"
        role = kwargs.get("role")
        return cls(
            display_name=data.get("displayName") or data.get("name") or "Unknown",
            actor_type="Group" if is_group else "User",
            account_id=actor_user.get("accountId") if isinstance(actor_user, dict) else None,
            email=data.get("emailAddress"),
            roles=[role] if role else [],
        )


class JiraIssue(ApiModel):
    """
    Read-only projection of a Jira issue.
    """

    id: str | None = None
    key: str
    summary: str = ""
    description: str | None = None
    status: JiraStatus | None = None
    issue_type: str | None = None
    priority: str | None = None
    assignee: JiraUser | None = None
    reporter: JiraUser | None = None
    created: str | None = None
    updated: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraIssue":
        """
        Create a JiraIssue from a ``GET /rest/api/3/issue`` or search result.

        Args:
            data: The issue JSON
            **kwargs: Unused

        Returns:
            JiraIssue with the fields present in the payload
        """
        fields = data.get("fields") or {}

        def _named(value: Any) -> str | None:
            return value.get("name") if isinstance(value, dict) else None

        def _user(value: Any) -> JiraUser | None:
            return JiraUser.from_api_response(value) if isinstance(value, dict) else None

        status = fields.get("status")
        return cls(
            id=data.get("id"),
            key=data.get("key", ""),
            summary=fields.get("summary") or "",
            description=adf_to_text(fields.get("description")),
            status=JiraStatus.from_api_response(status) if isinstance(status, dict) else None,
            issue_type=_named(fields.get("issuetype")),
            priority=_named(fields.get("priority")),
            assignee=_user(fields.get("assignee")),
            reporter=_user(fields.get("reporter")),
            created=fields.get("created"),
            updated=fields.get("updated"),
        )

    @property
    def status_name(self) -> str:
        return self.status.name if self.status else "Unknown"

    @property
    def assignee_name(self) -> str:
        return self.assignee.display_name if self.assignee else "Unassigned"
