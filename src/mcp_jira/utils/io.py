"""Server mode flags read from the environment."""

from .env import is_env_extended_truthy


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode rejects calls to the tools that change Jira data
    (create and update) while every read tool keeps working.

    Returns:
        True if READ_ONLY_MODE is set to a truthy value, False otherwise
    """
    return is_env_extended_truthy("READ_ONLY_MODE", "false")
