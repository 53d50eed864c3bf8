"""Tests for the Jira entity models."""

import pytest

from mcp_jira.models.base import ApiModel
from mcp_jira.models.jira import (
    JiraIssue,
    JiraProject,
    JiraProjectMember,
    JiraTransition,
    JiraUser,
)
from tests.utils.factories import (
    JiraIssueFactory,
    JiraProjectFactory,
    JiraRoleFactory,
    JiraTransitionFactory,
    JiraUserFactory,
)


def test_user_from_api_response():
    user = JiraUser.from_api_response(
        JiraUserFactory.create("Jane Doe", "acc-9", active=False, emailAddress="j@x.io")
    )
    assert user.account_id == "acc-9"
    assert user.display_name == "Jane Doe"
    assert user.email == "j@x.io"
    assert user.active is False


def test_user_active_flag_must_be_true():
    assert JiraUser.from_api_response({"accountId": "a1", "displayName": "Ghost"}).active is False
    assert JiraUser.from_api_response({"accountId": "a1", "active": "false"}).active is False
    assert JiraUser.from_api_response({"accountId": "a1", "active": True}).active is True


def test_transition_target_name_prefers_destination_status():
    transition = JiraTransition.from_api_response(
        JiraTransitionFactory.create("31", target="Done", name="Finish")
    )
    assert transition.id == "31"
    assert transition.name == "Finish"
    assert transition.target_name == "Done"

    bare = JiraTransition.from_api_response({"id": 5, "name": "Reopen"})
    assert bare.id == "5"
    assert bare.target_name == "Reopen"


def test_issue_from_api_response():
    issue = JiraIssue.from_api_response(JiraIssueFactory.create("TEST-7"))

    assert issue.key == "TEST-7"
    assert issue.summary == "Test Issue Summary"
    assert issue.description == "Issue description"
    assert issue.status_name == "To Do"
    assert issue.issue_type == "Task"
    assert issue.priority == "Medium"
    assert issue.assignee_name == "Test User"
    assert issue.reporter.display_name == "Reporter User"


def test_issue_without_status_or_assignee():
    issue = JiraIssue.from_api_response({"key": "TEST-8", "fields": {"summary": "s"}})
    assert issue.status_name == "Unknown"
    assert issue.assignee_name == "Unassigned"
    assert issue.description is None


def test_project_from_api_response():
    project = JiraProject.from_api_response(JiraProjectFactory.create("ABC", "Alpha"))
    assert project.key == "ABC"
    assert project.name == "Alpha"
    assert project.project_type == "software"
    assert project.lead_name == "Project Lead"


def test_project_member_from_actors():
    user = JiraProjectMember.from_api_response(
        JiraRoleFactory.user_actor("Jane Doe", "acc-1"), role="Developers"
    )
    group = JiraProjectMember.from_api_response(
        JiraRoleFactory.group_actor("jira-users"), role="Users"
    )

    assert user.actor_type == "User"
    assert user.account_id == "acc-1"
    assert user.roles == ["Developers"]
    assert group.actor_type == "Group"
    assert group.account_id is None
    assert group.display_name == "jira-users"


def test_api_models_must_implement_from_api_response():
    class Incomplete(ApiModel):
        name: str = ""

    with pytest.raises(TypeError):
        Incomplete()
