import asyncio
import os

import click
from dotenv import load_dotenv

__version__ = "0.3.0"

from .logging_config import log_operation, setup_logger

logger = setup_logger()


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default=lambda: os.getenv("TRANSPORT", "stdio"),
    help="Transport type (stdio, sse or streamable-http)",
)
@click.option(
    "--port",
    type=int,
    default=lambda: int(os.getenv("PORT", "8000")),
    help="Port to listen on for SSE or Streamable HTTP transport",
)
@click.option(
    "--host",
    default=lambda: os.getenv("HOST", "0.0.0.0"),  # noqa: S104
    help="Host to bind to for SSE or Streamable HTTP transport",
)
@click.option(
    "--log-dir",
    help="Directory to store rotating log files",
)
@click.option(
    "--jira-host",
    help="Jira host (e.g., your-domain.atlassian.net)",
)
@click.option("--jira-email", help="Jira account email")
@click.option("--jira-token", help="Jira API token")
@click.option(
    "--jira-ssl-verify/--no-jira-ssl-verify",
    default=True,
    help="Verify SSL certificates (default: verify)",
)
@click.option(
    "--read-only",
    is_flag=True,
    default=False,
    help="Disable the tools that create or update issues",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    port: int,
    host: str,
    log_dir: str | None,
    jira_host: str | None,
    jira_email: str | None,
    jira_token: str | None,
    jira_ssl_verify: bool,
    read_only: bool,
) -> None:
    """MCP Jira Server - Jira issue, project and search tools for MCP.

    Credentials given here or in the environment are defaults; every tool
    call may override them.
    """
    if env_file:
        load_dotenv(env_file, override=True)
    else:
        load_dotenv()

    logging_level = None
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"
    setup_logger(name="mcp-jira", level=logging_level, log_dir=log_dir)

    with log_operation(logger, "application_startup", app_version=__version__):
        if env_file:
            logger.info(f"Loaded environment from file: {env_file}")

        # Command line values override the environment
        if jira_host:
            os.environ["JIRA_HOST"] = jira_host
        if jira_email:
            os.environ["JIRA_EMAIL"] = jira_email
        if jira_token:
            os.environ["JIRA_API_TOKEN"] = jira_token
        if not jira_ssl_verify:
            os.environ["JIRA_SSL_VERIFY"] = "false"
        if read_only:
            os.environ["READ_ONLY_MODE"] = "true"

        from .servers import main_mcp

        logger.info(f"Starting MCP Jira v{__version__} with {transport} transport")

    run_kwargs: dict = {"transport": transport}
    if transport != "stdio":
        run_kwargs.update(host=host, port=port)
    asyncio.run(main_mcp.run_async(**run_kwargs))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
