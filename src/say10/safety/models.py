"""Data models exchanged between the gateway and approval handlers."""

from datetime import datetime, UTC
from typing import Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field

from say10.safety.classifier import classify


class ApprovalRequest(BaseModel):
    """A command waiting for a human decision.

    Fully derived from the command text; carries no identity beyond it.
    """

    model_config = ConfigDict(frozen=True)

    command: str = Field(..., description="Command as the agent intends to run it")
    reason: str = Field(..., description="Why approval is required")
    destructive: bool = Field(default=False, description="Command contains a destructive verb")
    requires_sudo: bool = Field(default=False, description="Command needs root privileges")

    @classmethod
    def from_command(cls, command: str) -> "ApprovalRequest":
        """Build a request by classifying a command.

        Args:
            command: Raw command string

        Returns:
            ApprovalRequest: Request describing the command
        """
        classification = classify(command)
        return cls(
            command=command,
            reason=classification.reason,
            destructive=classification.destructive,
            requires_sudo=classification.requires_sudo,
        )


class ApprovalResponse(BaseModel):
    """Decision returned by an approval handler."""

    approved: bool = Field(..., description="Whether the command may run")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the decision was made",
    )
    reason: str | None = Field(default=None, description="Reason for denial (if not approved)")
    timed_out: bool = Field(default=False, description="Decision was made by the timeout policy")

    @classmethod
    def approve(cls) -> "ApprovalResponse":
        """Create an approved response."""
        return cls(approved=True)

    @classmethod
    def deny(cls, reason: str = "User denied") -> "ApprovalResponse":
        """Create a denied response.

        Args:
            reason: Reason for denial

        Returns:
            ApprovalResponse: Denied response
        """
        return cls(approved=False, reason=reason)


class CommandValidation(BaseModel):
    """Side-effect free preview of the gateway's decision."""

    safe: bool = Field(..., description="Whitelisted or read-only")
    needs_approval: bool = Field(..., description="Execution would prompt for approval")
    reason: str = Field(..., description="Approval reason, or why none is needed")


ApprovalHandler = Callable[[ApprovalRequest], Awaitable[ApprovalResponse]]
