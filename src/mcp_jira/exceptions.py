"""Exceptions raised by MCP Jira tool operations.

Every failure that can end a tool call is converted into one of these
classes at the point where it happens. The tool layer renders them into a
Markdown error report with ``format_error_markdown``.
"""

import json
from typing import Any


class MCPJiraError(Exception):
    """Base exception for MCP Jira errors."""

    code = "MCP_JIRA_ERROR"
    title = "Error"
    default_suggestion = "Please check the details and try again."

    def __init__(
        self,
        message: str,
        *,
        details: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self._suggestion = suggestion

    @property
    def suggestion(self) -> str:
        return self._suggestion or self.default_suggestion


class InputValidationError(MCPJiraError):
    """Tool arguments failed schema validation."""

    code = "VALIDATION_ERROR"
    title = "Validation Error"
    default_suggestion = (
        "Please correct the input according to the validation rules and try again."
    )

    def __init__(self, errors: list[str], *, details: str | None = None) -> None:
        self.errors = list(errors)
        super().__init__(
            f"The provided input is invalid: {', '.join(self.errors)}",
            details=details,
        )


class CredentialsError(MCPJiraError):
    """Jira host, email or API token could not be resolved."""

    code = "CREDENTIALS_MISSING"
    title = "Authentication Error"
    default_suggestion = (
        "Please ensure your Jira host, email, and API token are correctly "
        "configured either in the arguments or as environment variables "
        "(JIRA_HOST, JIRA_EMAIL, JIRA_API_TOKEN)."
    )

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(
            "Missing required Jira credentials: "
            f"{', '.join(self.missing_fields)}. Please provide them in the "
            "request or set them as environment variables "
            "(JIRA_HOST, JIRA_EMAIL, JIRA_API_TOKEN)."
        )


# status -> (code, suggestion); 404 suggestions depend on the resource
STATUS_CODES: dict[int, tuple[str, str | None]] = {
    400: (
        "JIRA_BAD_REQUEST",
        "The request was malformed. Please check the provided parameters.",
    ),
    401: (
        "JIRA_UNAUTHORIZED",
        "Authentication failed. Please check your email and API token.",
    ),
    403: (
        "JIRA_FORBIDDEN",
        "You do not have permission to perform this action. "
        "Please check your Jira permissions.",
    ),
    404: ("JIRA_ISSUE_NOT_FOUND", None),
}


class JiraApiError(MCPJiraError):
    """Jira answered with a non-success HTTP status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        response_data: Any = None,
        resource: tuple[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.response_data = response_data
        self.resource = resource
        details = None
        if response_data is not None:
            details = f"Response Data: {json.dumps(response_data, indent=2, default=str)}"
        super().__init__(message, details=details)

    @property
    def code(self) -> str:  # type: ignore[override]
        entry = STATUS_CODES.get(self.status_code)
        return entry[0] if entry else "JIRA_API_ERROR"

    @property
    def title(self) -> str:  # type: ignore[override]
        return f"Jira API Error ({self.status_code})"

    @property
    def suggestion(self) -> str:
        if self.status_code == 404:
            return self._not_found_suggestion()
        entry = STATUS_CODES.get(self.status_code)
        if entry and entry[1]:
            return entry[1]
        return "An error occurred while communicating with the Jira API."

    def _not_found_suggestion(self) -> str:
        kind, key = self.resource or ("", "")
        if kind == "issue":
            return f'Issue "{key}" could not be found. Please verify the issue ID or key.'
        if kind == "project":
            return f'Project "{key}" could not be found. Please verify the project key.'
        if kind == "sprint":
            return f'Sprint "{key}" could not be found. Please verify the sprint ID.'
        return "The requested Jira resource could not be found. Please verify the identifiers provided."

    @staticmethod
    def extract_message(response_data: Any, fallback: str) -> str:
        """Fold Jira's ``errorMessages``/``errors`` body into one line.

        Args:
            response_data: Parsed JSON body of the error response, if any
            fallback: Text used when the body carries no error detail

        Returns:
            A human readable message prefixed with the API error marker
        """
        parts: list[str] = []
        if isinstance(response_data, dict):
            error_messages = response_data.get("errorMessages")
            if isinstance(error_messages, list):
                parts.extend(str(m) for m in error_messages if m)
            errors = response_data.get("errors")
            if isinstance(errors, dict) and errors:
                parts.extend(f"{field}: {msg}" for field, msg in errors.items())
            elif isinstance(errors, list):
                parts.extend(str(e) for e in errors if e)
        detail = ", ".join(parts) if parts else fallback
        return f"The Jira API returned an error: {detail}"


class JiraNetworkError(MCPJiraError):
    """The request never got an HTTP answer from Jira."""

    code = "NETWORK_ERROR"
    title = "Network Error"
    default_suggestion = (
        "Please check your network connection and the Jira host URL, "
        "then try again."
    )

    def __init__(self, host: str, reason: str) -> None:
        self.host = host
        super().__init__(
            f"Could not connect to the Jira host at {host}. No response was received.",
            details=reason,
        )


class JiraTransportError(MCPJiraError):
    """The HTTP client failed before a request could be sent."""

    code = "REQUESTS_ERROR"
    title = "HTTP Client Error"
    default_suggestion = "Please check the Jira host URL and request parameters."

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"An error occurred while setting up the API request: {reason}"
        )


class UnknownToolError(MCPJiraError):
    """Anything that escaped the other categories."""

    code = "UNKNOWN_ERROR"
    title = "Unexpected Application Error"
    default_suggestion = (
        "Please try again. If the problem persists, report it to the "
        "server maintainers."
    )

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message, details=details)


class UnknownErrorType(UnknownToolError):
    """A non-exception value was raised or passed along as an error."""

    code = "UNKNOWN_ERROR_TYPE"
    title = "Unknown Error Type"
