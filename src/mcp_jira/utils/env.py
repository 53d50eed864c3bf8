"""Environment variable utility functions for MCP Jira."""

import os


def is_env_extended_truthy(env_var_name: str, default: str = "") -> bool:
    """Check if environment variable is set to an extended truthy value.

    Considers 'true', '1', 'yes', 'y', 'on' as truthy values (case-insensitive).

    Args:
        env_var_name: Name of the environment variable to check
        default: Default value if environment variable is not set

    Returns:
        True if the environment variable is set to a truthy value, False otherwise
    """
    return os.getenv(env_var_name, default).lower() in ("true", "1", "yes", "y", "on")


def is_env_ssl_verify(env_var_name: str, default: str = "true") -> bool:
    """Check an SSL verification flag; only explicit false values disable it."""
    return os.getenv(env_var_name, default).lower() not in ("false", "0", "no")


def get_env_int(env_var_name: str, default: int) -> int:
    """Read a positive integer, ignoring unparsable or non-positive values."""
    raw = os.getenv(env_var_name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_env_str(env_var_name: str) -> str | None:
    """Read a string variable, treating blank values as unset."""
    value = os.getenv(env_var_name)
    if value is None or not value.strip():
        return None
    return value.strip()
