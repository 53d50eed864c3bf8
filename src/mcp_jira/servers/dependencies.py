"""Dependency providers for the Jira tools."""

from __future__ import annotations

import logging

from fastmcp import Context

from mcp_jira.jira.config import JiraConfig
from mcp_jira.servers.context import MainAppContext

logger = logging.getLogger("mcp-jira.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    lifespan_ctx_dict = ctx.request_context.lifespan_context
    if not isinstance(lifespan_ctx_dict, dict):
        return None
    return lifespan_ctx_dict.get("app_lifespan_context")


def get_jira_config(ctx: Context) -> JiraConfig:
    """
    Return the Jira defaults loaded by the server lifespan.

    Falls back to reading the environment when the server was started
    without the main lifespan (e.g. a bare sub-server).

    Args:
        ctx: The FastMCP context

    Returns:
        JiraConfig to resolve per-call credentials against
    """
    app_context = get_app_context(ctx)
    if app_context is not None and app_context.jira_config is not None:
        return app_context.jira_config
    logger.debug("No Jira config in lifespan context; loading from environment")
    return JiraConfig.from_env()
