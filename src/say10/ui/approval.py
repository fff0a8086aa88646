"""Terminal approval handler for gated commands.

This module provides the TerminalApprovalHandler, the interactive
implementation of the approval handler contract: it shows the pending
command to the operator and asks for a yes/no decision.
"""

import asyncio
import threading
from typing import Any, Callable, TypeVar

from rich.panel import Panel
from rich.text import Text

from say10.logging import get_logger
from say10.safety.classifier import classify, risk_style
from say10.safety.models import ApprovalRequest, ApprovalResponse
from say10.ui.console import Say10Console
from say10.ui.prompts import confirm

T = TypeVar("T")

logger = get_logger("say10.ui.approval")


def _prompt_in_daemon_thread(func: Callable[..., T], *args: Any, **kwargs: Any) -> "asyncio.Future[T]":
    """Run a blocking prompt in a daemon thread and return a future for its answer.

    Unlike asyncio.to_thread, the thread is not owned by the loop's default
    executor, so an abandoned prompt (approval timeout) does not keep
    asyncio.run() from returning.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def _deliver(setter: Callable[[Any], None], value: Any) -> None:
        if not future.done():
            setter(value)

    def _worker() -> None:
        try:
            outcome = (future.set_result, func(*args, **kwargs))
        except Exception as e:
            outcome = (future.set_exception, e)

        try:
            loop.call_soon_threadsafe(_deliver, *outcome)
        except RuntimeError:
            # Loop already closed: nobody is waiting for the answer any more
            pass

    threading.Thread(target=_worker, name="say10-approval-prompt", daemon=True).start()
    return future


class TerminalApprovalHandler:
    """Asks the operator on the terminal whether a command may run.

    Instances are async callables and can be passed straight to
    ApprovalService.set_approval_handler(). The prompt defaults to "no".
    """

    def __init__(self, console: Say10Console):
        """Initialize the approval handler.

        Args:
            console: Console for user interaction
        """
        self.console = console

    async def __call__(self, request: ApprovalRequest) -> ApprovalResponse:
        """Request approval for a command."""
        return await self.request_approval(request)

    async def request_approval(self, request: ApprovalRequest) -> ApprovalResponse:
        """Show the request and wait for the operator's decision.

        The blocking prompt runs in a daemon thread so the event loop (and
        an approval timeout) keeps running. If the wait is cancelled the
        prompt is abandoned and its late answer is ignored.

        Args:
            request: Pending approval request

        Returns:
            ApprovalResponse: Operator's decision
        """
        self.console.print()
        self.console.print(self.format_approval_prompt(request))

        try:
            approved = await _prompt_in_daemon_thread(
                confirm,
                "Run this command?",
                default=False,
                console=self.console.console,
            )
        except asyncio.CancelledError:
            self.console.print()
            self.console.warning("No answer in time, prompt abandoned")
            raise
        self.console.print()

        if approved:
            logger.info("Operator approved command", command=request.command)
            return ApprovalResponse.approve()

        logger.info("Operator declined command", command=request.command)
        return ApprovalResponse.deny("Operator declined at the terminal prompt")

    def format_approval_prompt(self, request: ApprovalRequest) -> Panel:
        """Format an approval request as a Rich Panel.

        Args:
            request: Pending approval request

        Returns:
            Panel: Formatted approval prompt
        """
        color, icon = risk_style(classify(request.command))

        content = Text()
        content.append("Command: ", style="bold")
        content.append(f"{request.command}\n", style="cyan bold")
        content.append("Reason:  ", style="bold")
        content.append(f"{request.reason}\n", style="yellow")

        if request.destructive:
            content.append("\n⚠  Destructive action", style="red bold")

        if request.requires_sudo:
            content.append("\n⚠  Requires sudo/root privileges", style="red bold")

        return Panel(
            content,
            title=f"[bold]{icon} Approval Required[/bold]",
            border_style=color,
            padding=(1, 2),
        )
