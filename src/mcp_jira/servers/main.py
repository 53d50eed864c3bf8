"""Main FastMCP server setup for the Jira integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_jira.jira.config import JiraConfig
from mcp_jira.utils.io import is_read_only_mode
from mcp_jira.utils.logging import mask_sensitive

from .context import MainAppContext
from .jira import jira_mcp

logger = logging.getLogger("mcp-jira.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Jira MCP server lifespan starting...")
    jira_config = JiraConfig.from_env()
    read_only = is_read_only_mode()

    if jira_config.host:
        logger.info(
            f"Jira defaults loaded: host={jira_config.host}, "
            f"email={jira_config.email or 'Not Provided'}, "
            f"api_token={mask_sensitive(jira_config.api_token)}"
        )
    else:
        logger.info(
            "No JIRA_HOST configured; every tool call must supply its own credentials."
        )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")

    app_context = MainAppContext(jira_config=jira_config, read_only=read_only)
    try:
        yield {"app_lifespan_context": app_context}
    finally:
        logger.info("Main Jira MCP server lifespan shutdown complete.")


main_mcp = FastMCP(name="Jira MCP", lifespan=main_lifespan)
main_mcp.mount(jira_mcp, prefix="jira")


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
