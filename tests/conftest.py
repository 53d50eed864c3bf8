"""
Shared fixtures for MCP Jira tests.

The atlassian ``Jira`` class is patched where the client imports it, so
every JiraFetcher built during a test talks to a MagicMock instead of HTTP.
"""

from unittest.mock import patch

import pytest

from mcp_jira.jira.config import JiraConfig, JiraCredentials
from tests.utils.mocks import JiraRouteMock

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def jira_config() -> JiraConfig:
    """Jira defaults with all three credentials set."""
    return JiraConfig(
        host="test.atlassian.net",
        email="test@example.com",
        api_token="test-token",
    )


@pytest.fixture
def empty_jira_config() -> JiraConfig:
    """Jira defaults with no credentials at all."""
    return JiraConfig()


@pytest.fixture
def jira_credentials() -> JiraCredentials:
    return JiraCredentials(
        host="test.atlassian.net", email="test@example.com", api_token="test-token"
    )


# ============================================================================
# Jira Client Mocks
# ============================================================================


@pytest.fixture
def mock_jira_class():
    """Patch the atlassian Jira class used by JiraClient."""
    with patch("mcp_jira.jira.client.Jira") as mock_cls:
        yield mock_cls


@pytest.fixture
def mock_jira(mock_jira_class):
    """The Jira instance every JiraFetcher receives during the test."""
    return mock_jira_class.return_value


@pytest.fixture
def jira_routes(mock_jira) -> JiraRouteMock:
    """Path based responses for the mocked Jira client."""
    return JiraRouteMock(mock_jira)
