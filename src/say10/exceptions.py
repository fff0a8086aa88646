"""Custom exceptions for the command safety gateway."""

from typing import TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from say10.safety.models import ApprovalRequest, ApprovalResponse


class GatewayError(Exception):
    """Base exception for gateway-related errors."""

    pass


class ConfigLoadError(GatewayError):
    """Exception raised when the whitelist file cannot be loaded.

    Recovered inside the whitelist store by falling back to the default
    whitelist; never surfaced to gateway callers.
    """

    def __init__(self, path: Path | None, detail: str):
        """Initialize with the offending path.

        Args:
            path: Whitelist file path (None if no path was configured)
            detail: What went wrong
        """
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot load whitelist from {path}: {detail}")


class PatternError(GatewayError):
    """Exception raised when a regular expression is rejected.

    The dangerous-pattern checks are heuristics. Passing validation does
    not prove that a pattern is free of catastrophic backtracking.
    """

    def __init__(self, pattern: str, detail: str):
        """Initialize with the rejected pattern.

        Args:
            pattern: The rejected pattern
            detail: Why it was rejected
        """
        self.pattern = pattern
        self.detail = detail
        super().__init__(f"Rejected regex pattern: {detail}")


class NoHandlerError(GatewayError):
    """Exception raised when approval is requested before a handler exists.

    This is a bootstrap ordering bug in the host application.
    """

    def __init__(self, command: str):
        """Initialize with the command that needed approval.

        Args:
            command: Command awaiting approval
        """
        self.command = command
        super().__init__(
            f"No approval handler registered; cannot ask for approval of "
            f"'{command}'. The host application must call "
            f"set_approval_handler() during startup before running gated commands."
        )


class DeniedError(GatewayError):
    """Exception raised when approval for a command was not granted.

    The executor is guaranteed not to have run.
    """

    def __init__(self, request: "ApprovalRequest", response: "ApprovalResponse"):
        """Initialize with the request and the handler's decision.

        Args:
            request: The approval request that was shown
            response: The (negative) response
        """
        self.request = request
        self.response = response

        if response.timed_out:
            outcome = "was not approved in time"
        else:
            outcome = "was declined by the operator"

        message = f"Command '{request.command}' {outcome} (needed approval: {request.reason})."
        if response.reason:
            message += f" {response.reason}."
        message += " Nothing was executed; adjust the command or ask again."
        super().__init__(message)

    @property
    def command(self) -> str:
        """The command that was not executed."""
        return self.request.command


class InputValidationError(GatewayError):
    """Exception raised when a tool argument fails sanitization."""

    def __init__(self, field: str, value: object, detail: str):
        """Initialize with the rejected value.

        Args:
            field: Name of the argument (e.g. "service")
            value: Rejected value
            detail: Why it was rejected
        """
        self.field = field
        self.value = value
        self.detail = detail
        super().__init__(f"Invalid {field}: {detail}")


class CommandExecutionError(GatewayError):
    """Exception raised when the command runner cannot run a command."""

    def __init__(self, command: str, detail: str):
        """Initialize with the failing command.

        Args:
            command: Command that failed to run
            detail: What went wrong
        """
        self.command = command
        self.detail = detail
        super().__init__(f"Failed to run '{command}': {detail}")
