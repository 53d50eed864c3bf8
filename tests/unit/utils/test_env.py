"""Tests for the environment variable helpers."""

import os
from unittest.mock import patch

import pytest

from mcp_jira.utils.env import (
    get_env_int,
    get_env_str,
    is_env_extended_truthy,
    is_env_ssl_verify,
)


@pytest.mark.parametrize("value", ["true", "1", "YES", "y", "On"])
def test_extended_truthy_values(value):
    with patch.dict(os.environ, {"FLAG": value}):
        assert is_env_extended_truthy("FLAG") is True


@pytest.mark.parametrize("value", ["false", "0", "no", "", "maybe"])
def test_extended_falsy_values(value):
    with patch.dict(os.environ, {"FLAG": value}):
        assert is_env_extended_truthy("FLAG") is False


def test_ssl_verify_defaults_to_true():
    with patch.dict(os.environ, {}, clear=True):
        assert is_env_ssl_verify("JIRA_SSL_VERIFY") is True


@pytest.mark.parametrize("value", ["false", "0", "NO"])
def test_ssl_verify_disabled(value):
    with patch.dict(os.environ, {"JIRA_SSL_VERIFY": value}):
        assert is_env_ssl_verify("JIRA_SSL_VERIFY") is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 30), ("45", 45), ("abc", 30), ("0", 30), ("-5", 30)],
)
def test_get_env_int(raw, expected):
    env = {} if raw is None else {"JIRA_TIMEOUT": raw}
    with patch.dict(os.environ, env, clear=True):
        assert get_env_int("JIRA_TIMEOUT", 30) == expected


def test_get_env_str_strips_and_treats_blank_as_unset():
    with patch.dict(os.environ, {"A": "  value ", "B": "   "}, clear=True):
        assert get_env_str("A") == "value"
        assert get_env_str("B") is None
        assert get_env_str("C") is None
