"""Subprocess runner used as the executor for approved commands.

Commands are split with shlex and executed directly, without a shell, so
pipes and redirections in the command string are passed as literal
arguments.
"""

import asyncio
import shlex

from pydantic import BaseModel, Field

from say10.exceptions import CommandExecutionError
from say10.logging import get_logger, StageTimer

logger = get_logger("say10.tools.runner")


class CommandResult(BaseModel):
    """Outcome of a finished command."""

    command: str = Field(..., description="Command that was run")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")
    exit_code: int = Field(..., description="Process exit status")

    @property
    def success(self) -> bool:
        """Whether the command exited with status 0."""
        return self.exit_code == 0


async def run_command(command: str, timeout: float = 30) -> CommandResult:
    """Run a command and capture its output.

    A non-zero exit status is reported in the result, not raised.

    Args:
        command: Command line to run
        timeout: Seconds before the process is killed

    Returns:
        CommandResult: Exit status and captured output

    Raises:
        CommandExecutionError: If the command cannot be parsed or started,
            or does not finish in time
    """
    try:
        argv = shlex.split(command)
    except ValueError as e:
        raise CommandExecutionError(command, f"cannot parse command: {e}") from e

    if not argv:
        raise CommandExecutionError(command, "empty command")

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (FileNotFoundError, PermissionError) as e:
        raise CommandExecutionError(command, str(e)) from e

    async with StageTimer("run_command", logger) as timer:
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            logger.warning("Command timed out", command=command, timeout_s=timeout)
            raise CommandExecutionError(command, f"timed out after {timeout:g}s") from e

    result = CommandResult(
        command=command,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
        exit_code=process.returncode,
    )
    logger.info(
        "Command finished",
        command=command,
        exit_code=result.exit_code,
        duration_ms=timer.elapsed_ms,
    )
    return result
