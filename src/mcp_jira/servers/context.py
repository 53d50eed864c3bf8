from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_jira.jira.config import JiraConfig


@dataclass(frozen=True)
class MainAppContext:
    """Context holding the Jira defaults and server settings."""

    jira_config: JiraConfig | None = field(default=None)
    read_only: bool = False
