"""Tests for the jira_update_issue operation."""

import pytest
import requests

from mcp_jira.operations.update_issue import (
    NO_CHANGES_MESSAGE,
    build_fields_payload,
    update_issue,
)
from tests.utils.factories import (
    JiraIssueFactory,
    JiraTransitionFactory,
    JiraUserFactory,
)
from tests.utils.mocks import make_http_error

ISSUE_PATH = "rest/api/3/issue/TEST-123"
TRANSITIONS_PATH = "rest/api/3/issue/TEST-123/transitions"
USER_SEARCH_PATH = "rest/api/3/user/search"


@pytest.fixture
def issue_routes(jira_routes):
    """Routes for a plain update of TEST-123 followed by the final fetch."""
    jira_routes.on("PUT", ISSUE_PATH, None)
    jira_routes.on(
        "GET",
        ISSUE_PATH,
        JiraIssueFactory.create(
            "TEST-123",
            fields={
                "status": {"name": "In Progress"},
                "assignee": {"displayName": "Jane Doe", "accountId": "acc-1"},
            },
        ),
    )
    return jira_routes


class TestBuildFieldsPayload:
    def test_empty_when_nothing_given(self):
        assert build_fields_payload() == {}

    def test_summary_only(self):
        assert build_fields_payload(summary="New") == {"summary": "New"}

    def test_empty_summary_is_kept(self):
        assert build_fields_payload(summary="") == {"summary": ""}

    def test_description_is_normalized(self):
        fields = build_fields_payload(description="Hello")
        assert fields["description"]["type"] == "doc"
        assert fields["description"]["content"][0]["content"] == [
            {"type": "text", "text": "Hello"}
        ]

    def test_assignee_only_with_account_id(self):
        assert build_fields_payload(assignee_account_id=None) == {}
        assert build_fields_payload(assignee_account_id="acc-1") == {
            "assignee": {"accountId": "acc-1"}
        }


class TestUpdateIssue:
    def test_summary_only(self, issue_routes, jira_config):
        response = update_issue(
            {"issue_key": "TEST-123", "summary": "Updated Summary"}, jira_config
        )

        assert response.is_error is False
        assert issue_routes.paths("PUT") == [ISSUE_PATH]
        assert issue_routes.calls("PUT")[0].kwargs["data"] == {
            "fields": {"summary": "Updated Summary"}
        }
        assert issue_routes.paths("POST") == []
        assert "## ✅ Issue Updated Successfully" in response.text
        assert (
            "Issue [TEST-123](https://test.atlassian.net/browse/TEST-123) has been updated."
            in response.text
        )
        assert "**Changed fields:**\n- Summary updated" in response.text
        assert "**Current Status:** In Progress" in response.text
        assert "**Current Assignee:** Jane Doe" in response.text

    def test_all_fields_in_one_put(self, issue_routes, jira_config):
        issue_routes.on(
            "GET", USER_SEARCH_PATH, [JiraUserFactory.create("Jane Doe", "acc-1")]
        )

        response = update_issue(
            {
                "issue_key": "TEST-123",
                "summary": "S",
                "description": "D",
                "assignee_name": "jane doe",
            },
            jira_config,
        )

        assert response.is_error is False
        body = issue_routes.calls("PUT")[0].kwargs["data"]["fields"]
        assert set(body) == {"summary", "description", "assignee"}
        assert body["assignee"] == {"accountId": "acc-1"}
        assert len(issue_routes.calls("PUT")) == 1
        assert (
            "- Summary updated\n- Description updated\n- Assignee updated to Jane Doe"
            in response.text
        )

    def test_unknown_assignee_is_a_warning(self, issue_routes, jira_config):
        issue_routes.on("GET", USER_SEARCH_PATH, [])

        response = update_issue(
            {"issue_key": "TEST-123", "summary": "S", "assignee_name": "UnknownUser"},
            jira_config,
        )

        assert response.is_error is False
        assert issue_routes.calls("PUT")[0].kwargs["data"] == {"fields": {"summary": "S"}}
        assert (
            "- ⚠️ Warning: Assignee 'UnknownUser' not found or not active. "
            "Assignee not changed."
        ) in response.text
        assert "- Summary updated" in response.text

    def test_assignee_only_not_found_still_reports(self, issue_routes, jira_config):
        issue_routes.on("GET", USER_SEARCH_PATH, [])

        response = update_issue(
            {"issue_key": "TEST-123", "assignee_name": "UnknownUser"}, jira_config
        )

        assert response.is_error is False
        assert issue_routes.paths("PUT") == []
        assert "Assignee 'UnknownUser' not found" in response.text
        assert "**Current Assignee:** Jane Doe" in response.text

    def test_assignee_search_error_is_a_warning(self, issue_routes, jira_config):
        issue_routes.on("GET", USER_SEARCH_PATH, make_http_error(500))

        response = update_issue(
            {"issue_key": "TEST-123", "summary": "S", "assignee_name": "Jane"},
            jira_config,
        )

        assert response.is_error is False
        assert "- ⚠️ Warning: Error searching for assignee 'Jane': " in response.text
        assert ". Assignee not changed." in response.text
        assert issue_routes.paths("PUT") == [ISSUE_PATH]

    def test_inactive_only_assignee_is_not_set(self, issue_routes, jira_config):
        issue_routes.on(
            "GET",
            USER_SEARCH_PATH,
            [JiraUserFactory.create("Jane Doe", "acc-1", active=False)],
        )

        response = update_issue(
            {"issue_key": "TEST-123", "assignee_name": "Jane Doe"}, jira_config
        )

        assert issue_routes.paths("PUT") == []
        assert "Assignee 'Jane Doe' not found or not active" in response.text

    def test_status_transition(self, issue_routes, jira_config):
        issue_routes.on(
            "GET",
            TRANSITIONS_PATH,
            {
                "transitions": [
                    JiraTransitionFactory.create("11", "To Do"),
                    JiraTransitionFactory.create("21", "In Progress"),
                ]
            },
        )
        issue_routes.on("POST", TRANSITIONS_PATH, None)

        response = update_issue(
            {"issue_key": "TEST-123", "status": "in progress"}, jira_config
        )

        assert response.is_error is False
        assert issue_routes.paths("PUT") == []
        assert issue_routes.calls("POST")[0].kwargs["data"] == {"transition": {"id": "21"}}
        assert '- Status changed to "In Progress".' in response.text

    def test_nonexistent_status(self, issue_routes, jira_config):
        issue_routes.on("GET", TRANSITIONS_PATH, {"transitions": []})

        response = update_issue(
            {"issue_key": "TEST-123", "status": "NonExistentStatus"}, jira_config
        )

        assert response.is_error is False
        assert issue_routes.paths("POST") == []
        assert (
            '- ⚠️ Warning: Status transition to "NonExistentStatus" not available or '
            "already in this state. Available transitions: None available."
        ) in response.text

    def test_unavailable_status_lists_options(self, issue_routes, jira_config):
        issue_routes.on(
            "GET",
            TRANSITIONS_PATH,
            {
                "transitions": [
                    JiraTransitionFactory.create("11", "To Do"),
                    JiraTransitionFactory.create("31", "Done"),
                ]
            },
        )

        response = update_issue(
            {"issue_key": "TEST-123", "summary": "S", "status": "Closed"}, jira_config
        )

        assert "Available transitions: To Do, Done." in response.text
        assert "- Summary updated" in response.text

    def test_transition_error_is_a_warning(self, issue_routes, jira_config):
        issue_routes.on(
            "GET",
            TRANSITIONS_PATH,
            {"transitions": [JiraTransitionFactory.create("31", "Done")]},
        )
        issue_routes.on(
            "POST",
            TRANSITIONS_PATH,
            make_http_error(400, {"errorMessages": ["Resolution is required"]}),
        )

        response = update_issue(
            {"issue_key": "TEST-123", "status": "Done"}, jira_config
        )

        assert response.is_error is False
        assert (
            "- ⚠️ Warning: Error during status transition: "
            "The Jira API returned an error: Resolution is required."
        ) in response.text

    def test_no_changes_requested(self, jira_routes, mock_jira, jira_config):
        response = update_issue({"issue_key": "TEST-123"}, jira_config)

        assert response.is_error is False
        assert response.text == NO_CHANGES_MESSAGE
        mock_jira.get.assert_not_called()
        mock_jira.put.assert_not_called()
        mock_jira.post.assert_not_called()
        assert response.to_dict() == {
            "content": [{"type": "text", "text": NO_CHANGES_MESSAGE}],
            "isError": False,
        }

    def test_update_404_is_fatal_and_names_issue(self, jira_routes, jira_config):
        jira_routes.on(
            "PUT",
            ISSUE_PATH,
            make_http_error(404, {"errorMessages": ["Issue does not exist"]}),
        )

        response = update_issue(
            {"issue_key": "TEST-123", "summary": "S"}, jira_config
        )

        assert response.is_error is True
        assert response.text.startswith("## ❌ Jira API Error (404)")
        assert "**Code:** JIRA_ISSUE_NOT_FOUND" in response.text
        assert "Issue does not exist" in response.text
        assert 'Issue "TEST-123" could not be found.' in response.text
        assert jira_routes.paths("GET") == []

    def test_final_fetch_failure_is_fatal(self, jira_routes, jira_config):
        jira_routes.on("PUT", ISSUE_PATH, None)
        jira_routes.on("GET", ISSUE_PATH, requests.ConnectionError("connection reset"))

        response = update_issue(
            {"issue_key": "TEST-123", "summary": "S"}, jira_config
        )

        assert response.is_error is True
        assert "**Code:** NETWORK_ERROR" in response.text

    def test_missing_credentials(self, mock_jira_class, empty_jira_config):
        response = update_issue(
            {"issue_key": "TEST-123", "summary": "S", "email": "me@example.com"},
            empty_jira_config,
        )

        assert response.is_error is True
        assert "## ❌ Authentication Error" in response.text
        assert "**Code:** CREDENTIALS_MISSING" in response.text
        assert "Missing required Jira credentials: Jira host, API token." in response.text
        mock_jira_class.assert_not_called()

    def test_explicit_credentials_override_defaults(self, issue_routes, mock_jira_class, jira_config):
        update_issue(
            {
                "issue_key": "TEST-123",
                "summary": "S",
                "jira_host": "https://other.atlassian.net/",
            },
            jira_config,
        )

        assert mock_jira_class.call_args.kwargs["url"] == "https://other.atlassian.net"

    @pytest.mark.parametrize(
        "arguments",
        [
            {},
            {"summary": "no key"},
            {"issue_key": "TEST-123", "description": {"type": "doc", "version": 1, "content": [{}]}},
            {"issue_key": "TEST-123", "status": ""},
        ],
    )
    def test_invalid_arguments_make_no_calls(self, arguments, mock_jira_class, jira_config):
        response = update_issue(arguments, jira_config)

        assert response.is_error is True
        assert "## ❌ Validation Error" in response.text
        assert "**Code:** VALIDATION_ERROR" in response.text
        mock_jira_class.assert_not_called()

    def test_invalid_description_message(self, mock_jira_class, jira_config):
        response = update_issue(
            {"issue_key": "TEST-123", "description": {"type": "paragraph"}},
            jira_config,
        )
        assert (
            "Description must be a string or a valid ADF object (with valid node structure)"
            in response.text
        )

    def test_unexpected_errors_are_reported(self, jira_config):
        def broken_factory(credentials, config):
            raise RuntimeError("boom")

        response = update_issue(
            {"issue_key": "TEST-123", "summary": "S"}, jira_config, broken_factory
        )

        assert response.is_error is True
        assert "## ❌ Unexpected Application Error" in response.text
        assert "**Code:** UNKNOWN_ERROR" in response.text
        assert "boom" in response.text

    def test_snapshot_without_status_or_assignee(self, jira_routes, jira_config):
        jira_routes.on("PUT", "rest/api/3/issue/T-1", None)
        jira_routes.on("GET", "rest/api/3/issue/T-1", {"key": "T-1", "fields": {}})

        response = update_issue({"issue_key": "T-1", "summary": "S"}, jira_config)

        assert response.is_error is False
        assert "**Current Status:**" not in response.text
        assert "**Current Assignee:**" not in response.text
        assert response.text.endswith("**Changed fields:**\n- Summary updated")

    def test_unassigned_issue_omits_assignee_line(self, jira_routes, jira_config):
        jira_routes.on("PUT", ISSUE_PATH, None)
        jira_routes.on(
            "GET",
            ISSUE_PATH,
            JiraIssueFactory.create("TEST-123", fields={"assignee": None}),
        )

        response = update_issue(
            {"issue_key": "TEST-123", "summary": "S"}, jira_config
        )

        assert response.text.endswith("**Current Status:** To Do")
        assert "**Current Assignee:**" not in response.text

    @pytest.mark.parametrize("arguments", [["TEST-123"], "TEST-123", 42])
    def test_non_mapping_arguments_are_a_validation_error(
        self, arguments, mock_jira_class, jira_config
    ):
        response = update_issue(arguments, jira_config)

        assert response.is_error is True
        assert "**Code:** VALIDATION_ERROR" in response.text
        mock_jira_class.assert_not_called()
