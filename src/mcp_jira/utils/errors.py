"""Classification and rendering of tool failures."""

import json
import logging

import requests
from pydantic import ValidationError

from ..exceptions import (
    InputValidationError,
    JiraApiError,
    JiraNetworkError,
    JiraTransportError,
    MCPJiraError,
    UnknownErrorType,
    UnknownToolError,
)

logger = logging.getLogger("mcp-jira.utils.errors")


def _field_name(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or "input"


def validation_error_from_pydantic(error: ValidationError) -> InputValidationError:
    """Convert a pydantic ValidationError into an InputValidationError."""
    messages: list[str] = []
    details: list[str] = []
    for item in error.errors():
        field = _field_name(item.get("loc", ()))
        if item.get("type") == "missing":
            messages.append(f"{field} is a required field")
        else:
            msg = item.get("msg", "is invalid")
            # "Value error, <text>" comes from our own validators
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, ") :]
            messages.append(f"{field}: {msg}")
        if "input" in item and item.get("type") != "missing":
            details.append(
                f"Path: {field}, Value: {json.dumps(item['input'], default=str)}"
            )
    return InputValidationError(messages, details="; ".join(details) or None)


def error_from_requests(
    error: requests.RequestException,
    host: str,
    resource: tuple[str, str] | None = None,
) -> MCPJiraError:
    """Convert a ``requests`` failure into the matching MCP Jira error.

    Args:
        error: The exception raised by requests or atlassian-python-api
        host: Jira base URL the request was sent to
        resource: ``(kind, key)`` of the addressed resource, used to word
            not-found suggestions

    Returns:
        JiraApiError when an HTTP response came back, JiraNetworkError when
        none did, JiraTransportError for everything else
    """
    response = getattr(error, "response", None)
    if isinstance(error, requests.HTTPError) and response is not None:
        try:
            response_data = response.json()
        except ValueError:
            response_data = response.text or None
        fallback = str(error) or f"Request failed with status code {response.status_code}"
        return JiraApiError(
            response.status_code,
            JiraApiError.extract_message(response_data, fallback),
            response_data=response_data,
            resource=resource,
        )
    if isinstance(error, (requests.ConnectionError, requests.Timeout)):
        return JiraNetworkError(host, str(error))
    return JiraTransportError(str(error))


def classify_error(error: object) -> MCPJiraError:
    """Map any failure onto exactly one MCP Jira error category.

    Already classified errors pass through unchanged; everything else ends
    up as UnknownToolError, or UnknownErrorType for non-exception values.
    """
    if isinstance(error, MCPJiraError):
        return error
    if isinstance(error, ValidationError):
        return validation_error_from_pydantic(error)
    if isinstance(error, requests.RequestException):
        request = getattr(error, "request", None)
        host = getattr(request, "url", None) or "the configured Jira host"
        return error_from_requests(error, host)
    if isinstance(error, BaseException):
        return UnknownToolError(
            f"An unexpected error occurred: {error}",
            details=f"{type(error).__name__}: {error}",
        )
    return UnknownErrorType(
        "An unknown type of error occurred.",
        details=repr(error),
    )


def format_error_markdown(error: MCPJiraError) -> str:
    """Render an error as the Markdown report returned to MCP clients."""
    lines = [
        f"## ❌ {error.title}",
        "",
        f"**Code:** {error.code}",
        f"**Message:** {error.message}",
    ]
    if error.details:
        lines.append(f"**Details:** {error.details}")
    lines.extend(["", f"**Suggestion:** {error.suggestion}"])
    return "\n".join(lines)
