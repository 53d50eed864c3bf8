"""Shared plumbing for the Jira tool operations.

An operation takes the raw argument bag of a tool call plus the configured
defaults and always returns a ToolResponse; failures never escape as
exceptions.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..jira import JiraFetcher
from ..jira.config import JiraConfig, JiraCredentials, resolve_credentials
from ..logging_config import get_logger, log_operation
from ..models.jira.schemas import JiraToolArguments
from ..utils.errors import (
    classify_error,
    format_error_markdown,
    validation_error_from_pydantic,
)

logger = get_logger("mcp-jira.operations")

M = TypeVar("M", bound=BaseModel)
FetcherFactory = Callable[[JiraCredentials, JiraConfig], JiraFetcher]


@dataclass
class ToolResponse:
    """Result of one tool call: Markdown text plus an error flag."""

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


@dataclass
class OperationOutcome:
    """Ordered change and warning lines collected during one operation."""

    lines: list[str] = field(default_factory=list)

    def changed(self, line: str) -> None:
        self.lines.append(line)

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.lines.append(f"- ⚠️ Warning: {message}")


def validate_arguments(schema: type[M], arguments: Mapping[str, Any] | None) -> M:
    """
    Validate a raw argument bag.

    Raises:
        InputValidationError: With one message per offending field
    """
    try:
        if arguments is None:
            arguments = {}
        elif isinstance(arguments, Mapping):
            arguments = dict(arguments)
        return schema.model_validate(arguments)
    except ValidationError as e:
        raise validation_error_from_pydantic(e) from e


def connect(
    arguments: JiraToolArguments,
    defaults: JiraConfig,
    fetcher_factory: FetcherFactory = JiraFetcher,
) -> JiraFetcher:
    """Resolve credentials for a validated call and build its Jira fetcher."""
    credentials = resolve_credentials(
        arguments.jira_host, arguments.email, arguments.api_token, defaults
    )
    return fetcher_factory(credentials, defaults)


def run_operation(name: str, operation: Callable[[], str], **context: Any) -> ToolResponse:
    """
    Run one tool operation and convert its outcome into a ToolResponse.

    Args:
        name: Tool name, used as the logging operation
        operation: Produces the success Markdown or raises
        **context: Extra logging context (issue key, project key...)

    Returns:
        The success report, or a classified error report with ``is_error``
    """
    with log_operation(logger, name, **context):
        try:
            return ToolResponse(operation())
        except Exception as e:  # every failure becomes an error report
            error = classify_error(e)
            logger.error(f"{name} failed: {error.code} - {error.message}")
            if error.code.startswith("UNKNOWN"):
                logger.debug("Unclassified failure", exc_info=True)
            return ToolResponse(format_error_markdown(error), is_error=True)


def md_cell(value: Any) -> str:
    """Make a value safe for a Markdown table cell."""
    if value is None or value == "":
        return "-"
    return str(value).replace("|", "\\|").replace("\n", " ")


def md_table(headers: list[str], rows: list[list[Any]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("-" * (len(h) + 2) for h in headers) + "|",
    ]
    lines.extend("| " + " | ".join(md_cell(v) for v in row) + " |" for row in rows)
    return "\n".join(lines)
