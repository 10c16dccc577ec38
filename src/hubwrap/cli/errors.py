"""
Standardized error rendering and exit codes for the hub CLI.

Every HubError is printed to stderr and ends the process with status 1.
Transport errors add guidance for authentication (401) and the server's
validation messages (422).
"""

from enum import IntEnum

from rich.console import Console

from hubwrap.core.errors import HubError, TransportError, UsageError

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Exit codes hub sets itself (git's own status is passed through)."""

    SUCCESS = 0
    """Operation completed successfully, or help/version was displayed."""

    GENERAL_ERROR = 1
    """Any usage, domain, transport or launch error."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print an error message with optional explanation and fix.

    Args:
        problem: What went wrong, printed verbatim
        reason: Optional explanation or server-provided details
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Error creating fork: Unauthorized (HTTP 401)",
        ...     solution="Check your token configuration (`git config github.token`)",
        ... )
    """
    console.print(problem, style="red", markup=False, highlight=False, soft_wrap=True)

    if reason:
        console.print(reason, style="dim", markup=False, highlight=False, soft_wrap=True)

    if solution:
        console.print("[cyan]→ Try:[/cyan] ", end="", soft_wrap=True)
        console.print(solution, markup=False, highlight=False, soft_wrap=True)


def print_transport_error(error: TransportError) -> None:
    """Print a failed API call with guidance for common statuses."""
    solution = None
    if error.status_code == 401:
        solution = "Check your token configuration (`git config github.token`)"
    reason = "\n".join(error.details) if error.details else None
    print_error(error.message, reason=reason, solution=solution)


def print_usage_error(error: UsageError) -> None:
    """Print a usage error followed by the command's usage line, if known."""
    print_error(error.message, reason=error.usage)


def print_hub_error(error: HubError) -> None:
    """Render any HubError in the form appropriate for its kind."""
    if isinstance(error, TransportError):
        print_transport_error(error)
    elif isinstance(error, UsageError):
        print_usage_error(error)
    else:
        print_error(error.message)
