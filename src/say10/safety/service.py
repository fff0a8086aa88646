"""Approval orchestration for gated command execution.

The ApprovalService decides per command whether a human has to approve it,
asks the registered approval handler, and only then runs the caller's
executor. One service is built at application startup and passed to the
tool handlers that need it.
"""

import asyncio
from typing import Any, Awaitable, Callable, Literal, TypeVar

from say10.config import Settings
from say10.exceptions import DeniedError, NoHandlerError
from say10.logging import command_context, get_logger, StageTimer
from say10.safety.models import (
    ApprovalHandler,
    ApprovalRequest,
    ApprovalResponse,
    CommandValidation,
)
from say10.safety.whitelist import WhitelistStore

logger = get_logger("say10.safety.service")

T = TypeVar("T")

TimeoutAction = Literal["deny", "approve"]

# Sentinel: "use the service default timeout"
_DEFAULT: Any = object()


class ApprovalService:
    """Gateway between tool handlers and the operating system.

    Commands that are whitelisted or read-only run straight away; everything
    else is sent to the approval handler first. Whitelist and read-only
    status take precedence over the destructive/sudo classification.

    Calls to the handler are serialized: while one request is being decided,
    further requests wait their turn in arrival order.
    """

    def __init__(
        self,
        whitelist: WhitelistStore | None = None,
        handler: ApprovalHandler | None = None,
        timeout: float | None = None,
        timeout_action: TimeoutAction = "deny",
    ):
        """Initialize the approval service.

        Args:
            whitelist: Whitelist store (default whitelist if None)
            handler: Approval handler (can be set later)
            timeout: Default seconds to wait for a decision (None waits forever)
            timeout_action: Decision applied when the timeout expires
        """
        self.whitelist = whitelist or WhitelistStore()
        self._handler = handler
        self.timeout = timeout
        self.timeout_action = timeout_action
        self._approval_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        handler: ApprovalHandler | None = None,
    ) -> "ApprovalService":
        """Build a service from application settings.

        Args:
            settings: Loaded settings
            handler: Optional approval handler

        Returns:
            ApprovalService: Configured service
        """
        return cls(
            whitelist=WhitelistStore(settings.whitelist_path),
            handler=handler,
            timeout=settings.approval_timeout,
            timeout_action=settings.approval_timeout_action,
        )

    @property
    def handler(self) -> ApprovalHandler | None:
        """The registered approval handler, if any."""
        return self._handler

    def set_approval_handler(self, handler: ApprovalHandler) -> None:
        """Register the approval handler, replacing any previous one.

        Args:
            handler: Async callable taking an ApprovalRequest
        """
        if self._handler is not None and self._handler is not handler:
            logger.debug("Replacing approval handler")
        self._handler = handler

    async def needs_approval(self, command: str) -> bool:
        """Check whether a command needs human approval.

        Args:
            command: Raw command string

        Returns:
            bool: False for whitelisted or read-only commands, else True
        """
        cmd = command.strip()

        if await self.whitelist.is_whitelisted(cmd):
            return False

        if self.whitelist.is_read_only(cmd):
            return False

        return True

    async def request_approval(
        self,
        command: str,
        timeout: float | None = _DEFAULT,
    ) -> ApprovalResponse:
        """Ask the approval handler for a decision on a command.

        Args:
            command: Raw command string
            timeout: Seconds to wait for the handler (defaults to the
                service timeout; None waits forever). Time spent waiting
                for an earlier request is not counted.

        Returns:
            ApprovalResponse: The handler's decision, or the timeout policy

        Raises:
            NoHandlerError: If no handler has been registered
        """
        return await self._ask(ApprovalRequest.from_command(command), timeout)

    async def _ask(
        self,
        request: ApprovalRequest,
        timeout: float | None = _DEFAULT,
    ) -> ApprovalResponse:
        handler = self._handler
        if timeout is _DEFAULT:
            timeout = self.timeout

        with command_context(request.command):
            if handler is None:
                logger.error("Approval requested without a registered handler")
                raise NoHandlerError(request.command)

            logger.info(
                "Approval requested",
                reason=request.reason,
                destructive=request.destructive,
                requires_sudo=request.requires_sudo,
            )

            async with self._approval_lock:
                async with StageTimer("approval", logger) as timer:
                    try:
                        async with asyncio.timeout(timeout) as deadline:
                            response = await handler(request)
                    except TimeoutError:
                        # A TimeoutError raised by the handler itself is an error, not expiry
                        if not deadline.expired():
                            raise
                        response = self._timeout_response(timeout)

            if response.approved:
                logger.info(
                    "Command approved",
                    timed_out=response.timed_out,
                    decision_ms=timer.elapsed_ms,
                )
            else:
                logger.info(
                    "Command denied",
                    reason=response.reason,
                    timed_out=response.timed_out,
                    decision_ms=timer.elapsed_ms,
                )

        return response

    def _timeout_response(self, timeout: float) -> ApprovalResponse:
        if self.timeout_action == "approve":
            logger.warning("Approval timed out, approving by policy", timeout_s=timeout)
            return ApprovalResponse(approved=True, timed_out=True)

        logger.warning("Approval timed out, denying", timeout_s=timeout)
        return ApprovalResponse(
            approved=False,
            reason=f"No decision within {timeout:g}s",
            timed_out=True,
        )

    async def execute_with_approval(
        self,
        command: str,
        executor: Callable[[], Awaitable[T]],
    ) -> T:
        """Run an executor once the command is allowed.

        The executor's own result or exception is passed through unchanged.

        Args:
            command: Command the executor will run
            executor: Zero-argument async callable performing the action

        Returns:
            The executor's result

        Raises:
            NoHandlerError: If approval is needed but no handler is registered
            DeniedError: If approval was not granted (executor not called)
        """
        if await self.needs_approval(command):
            request = ApprovalRequest.from_command(command)
            response = await self._ask(request)

            if not response.approved:
                raise DeniedError(request, response)
        else:
            logger.debug("Command allowed without approval", command=command)

        with command_context(command):
            logger.info("Executing command")
            return await executor()

    async def validate_command(self, command: str) -> CommandValidation:
        """Preview the gateway's decision without asking or executing.

        Args:
            command: Raw command string

        Returns:
            CommandValidation: Whether the command is safe and needs approval
        """
        whitelisted = await self.whitelist.is_whitelisted(command)
        read_only = self.whitelist.is_read_only(command)
        needs = not (whitelisted or read_only)

        return CommandValidation(
            safe=whitelisted or read_only,
            needs_approval=needs,
            reason=ApprovalRequest.from_command(command).reason if needs else "Whitelisted/read-only",
        )
