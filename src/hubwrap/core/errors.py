"""
Custom exceptions for hub.

Every error raised while rewriting a command line aborts the whole dispatch
before anything is executed. The CLI renders them and exits with status 1.

Exception Hierarchy:
    HubError (base)
    ├── UsageError (malformed or contradictory arguments)
    ├── DomainError (repository/remote precondition violated)
    ├── TransportError (hosted-service API call failed)
    └── ToolNotFoundError (wrapped executable missing)

Example:
    >>> from hubwrap.core.errors import DomainError
    >>> try:
    ...     raise DomainError("Aborted: the origin remote doesn't point to a GitHub repository.")
    ... except DomainError as e:
    ...     print(e)
    Aborted: the origin remote doesn't point to a GitHub repository.
"""

from __future__ import annotations

import json
from typing import Any


class HubError(Exception):
    """
    Base exception for all hub errors.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary of additional context
    """

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class UsageError(HubError):
    """
    Malformed or contradictory arguments.

    Attributes:
        usage: Optional usage line shown below the message
    """

    def __init__(self, message: str, usage: str | None = None, **context: object) -> None:
        super().__init__(message, **context)
        self.usage = usage


class DomainError(HubError):
    """A precondition about repository or remote state was violated."""


class ToolNotFoundError(HubError):
    """The wrapped version-control executable could not be launched."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Error: `{executable}` command not found", executable=executable)
        self.executable = executable


class GitHubAPIError(Exception):
    """
    Non-success response from the hosted-service API.

    Raised by the HTTP client. Rewrite rules convert it into a
    TransportError that names the action that failed.
    """

    def __init__(
        self,
        status_code: int,
        reason: str,
        body: str = "",
        content_type: str = "",
    ) -> None:
        super().__init__(f"{reason} (HTTP {status_code})")
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.content_type = content_type

    def error_messages(self) -> list[str]:
        """Extract validation messages from a JSON error body."""
        if "json" not in self.content_type or not self.body:
            return []
        try:
            data: Any = json.loads(self.body)
        except json.JSONDecodeError:
            return []
        if not isinstance(data, dict):
            return []

        messages: list[str] = []
        for key in ("error", "message"):
            value = data.get(key)
            if isinstance(value, str) and value:
                messages.append(value)
        errors = data.get("errors")
        if isinstance(errors, list):
            for item in errors:
                if isinstance(item, dict) and isinstance(item.get("message"), str):
                    messages.append(item["message"])
                elif isinstance(item, str):
                    messages.append(item)
        return messages


class TransportError(HubError):
    """
    A hosted-service API call failed.

    Attributes:
        action: What hub was doing, e.g. "creating fork"
        status_code: HTTP status code (0 when no response was received)
        reason: HTTP reason phrase or transport failure description
        details: Extra server-provided messages (422 validation errors)
    """

    def __init__(
        self,
        action: str,
        status_code: int,
        reason: str,
        details: list[str] | None = None,
    ) -> None:
        if status_code:
            message = f"Error {action}: {reason} (HTTP {status_code})"
        else:
            message = f"Error {action}: {reason}"
        super().__init__(message, action=action, status_code=status_code)
        self.action = action
        self.status_code = status_code
        self.reason = reason
        self.details = details or []

    @classmethod
    def from_api_error(cls, action: str, error: GitHubAPIError) -> TransportError:
        """Wrap an API error with the action that triggered it."""
        details = error.error_messages() if error.status_code == 422 else []
        return cls(action, error.status_code, error.reason, details)


__all__ = [
    "HubError",
    "UsageError",
    "DomainError",
    "ToolNotFoundError",
    "GitHubAPIError",
    "TransportError",
]
