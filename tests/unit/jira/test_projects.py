"""Tests for the Jira Projects mixin."""

import pytest

from mcp_jira.exceptions import JiraApiError
from mcp_jira.jira import JiraFetcher
from tests.utils.factories import JiraProjectFactory, JiraRoleFactory
from tests.utils.mocks import make_http_error

ROLE_BASE = "https://test.atlassian.net/rest/api/3/project/TEST/role"


@pytest.fixture
def fetcher(mock_jira_class, jira_credentials, jira_config):
    return JiraFetcher(jira_credentials, jira_config)


def test_get_all_projects(fetcher, jira_routes):
    jira_routes.on(
        "GET",
        "rest/api/3/project",
        [JiraProjectFactory.create("ABC"), JiraProjectFactory.create("XYZ")],
    )
    assert [p.key for p in fetcher.get_all_projects()] == ["ABC", "XYZ"]


def test_get_project_members_merges_roles(fetcher, jira_routes):
    jira_routes.on(
        "GET",
        "rest/api/3/project/TEST/role",
        {"Administrators": f"{ROLE_BASE}/10002", "Developers": f"{ROLE_BASE}/10001"},
    )
    jira_routes.on(
        "GET",
        "rest/api/3/project/TEST/role/10002",
        JiraRoleFactory.create(
            10002, "Administrators", [JiraRoleFactory.user_actor("Jane Doe", "acc-1")]
        ),
    )
    jira_routes.on(
        "GET",
        "rest/api/3/project/TEST/role/10001",
        JiraRoleFactory.create(
            10001,
            "Developers",
            [
                JiraRoleFactory.user_actor("Jane Doe", "acc-1"),
                JiraRoleFactory.user_actor("John Roe", "acc-2"),
                JiraRoleFactory.group_actor("jira-developers"),
            ],
        ),
    )

    members = fetcher.get_project_members("TEST")

    assert [m.display_name for m in members] == ["Jane Doe", "John Roe", "jira-developers"]
    assert members[0].roles == ["Administrators", "Developers"]
    assert members[1].roles == ["Developers"]
    assert members[2].actor_type == "Group"


def test_get_project_members_without_roles(fetcher, jira_routes):
    jira_routes.on("GET", "rest/api/3/project/TEST/role", {})
    assert fetcher.get_project_members("TEST") == []


def test_get_project_members_role_failure_propagates(fetcher, jira_routes):
    jira_routes.on("GET", "rest/api/3/project/TEST/role", {"Users": f"{ROLE_BASE}/1"})
    jira_routes.on("GET", "rest/api/3/project/TEST/role/1", make_http_error(403))

    with pytest.raises(JiraApiError) as exc_info:
        fetcher.get_project_members("TEST")
    assert exc_info.value.code == "JIRA_FORBIDDEN"


def test_unknown_project_names_project(fetcher, jira_routes):
    jira_routes.on("GET", "rest/api/3/project/NOPE/role", make_http_error(404))

    with pytest.raises(JiraApiError) as exc_info:
        fetcher.get_project_members("NOPE")
    assert exc_info.value.suggestion == (
        'Project "NOPE" could not be found. Please verify the project key.'
    )
