"""Main entry point for the say10 CLI.

This module provides the command-line interface using Click: previewing the
gateway's decision for a command, inspecting the whitelist, checking regex
patterns, and running commands behind the terminal approval prompt.
"""

import asyncio
import sys

import click
from rich.table import Table

from say10 import __version__
from say10.config import Settings, get_settings
from say10.exceptions import CommandExecutionError, DeniedError, PatternError
from say10.logging import setup_logging
from say10.safety import ApprovalService, classify, validate_pattern
from say10.tools.runner import run_command
from say10.ui.approval import TerminalApprovalHandler
from say10.ui.console import Say10Console


def _setup(ctx: click.Context) -> tuple[Settings, Say10Console]:
    """Configure logging and build the console from global options."""
    settings = get_settings()
    verbose = ctx.obj.get("verbose", False)
    debug = ctx.obj.get("debug", False)

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = settings.say10_log_level

    setup_logging(level=level, log_file=settings.say10_log_file)
    console = Say10Console(no_color=ctx.obj.get("no_color", False), verbose=verbose or debug)
    return settings, console


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", "-d", is_flag=True, help="Enable debug mode (very detailed logging)")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, no_color: bool):
    """say10 - command safety gateway

    Decides which server administration commands may run unattended and
    asks for approval before anything destructive or privileged runs.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["no_color"] = no_color


@cli.command()
@click.argument("command")
@click.pass_context
def check(ctx: click.Context, command: str):
    """Preview whether COMMAND would need approval."""
    settings, console = _setup(ctx)
    service = ApprovalService.from_settings(settings)

    validation = asyncio.run(service.validate_command(command))
    classification = classify(command)

    table = Table(title="Command Check", show_header=True)
    table.add_column("Check", style="say10.primary")
    table.add_column("Result", style="say10.info")
    table.add_row("Command", command)
    table.add_row("Safe", "yes" if validation.safe else "no")
    table.add_row("Needs approval", "yes" if validation.needs_approval else "no")
    table.add_row("Requires sudo", "yes" if classification.requires_sudo else "no")
    table.add_row("Destructive", "yes" if classification.destructive else "no")
    table.add_row("Reason", validation.reason)
    console.print(table)


@cli.command()
@click.pass_context
def whitelist(ctx: click.Context):
    """Show the active whitelist."""
    settings, console = _setup(ctx)
    service = ApprovalService.from_settings(settings)
    store = service.whitelist

    config = asyncio.run(store.load())

    source = str(store.path) if store.source == "file" else "built-in defaults"
    console.info(f"Whitelist source: {source}")

    table = Table(title="Whitelisted Commands", show_header=True)
    table.add_column("Type", style="say10.primary")
    table.add_column("Entry", style="say10.command")
    for entry in config.commands:
        table.add_row("command", entry)
    for pattern in config.patterns:
        table.add_row("pattern", pattern)
    console.print(table)

    for pattern in store.skipped_patterns:
        console.warning(f"Skipped pattern: {pattern[:50]}")


@cli.command()
@click.argument("pattern")
@click.pass_context
def pattern(ctx: click.Context, pattern: str):
    """Check whether a regex PATTERN is accepted."""
    _, console = _setup(ctx)

    try:
        validate_pattern(pattern)
    except PatternError as e:
        console.error(str(e))
        sys.exit(1)

    console.success("Pattern accepted (heuristic check only)")


@cli.command()
@click.argument("command")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for approval")
@click.pass_context
def run(ctx: click.Context, command: str, timeout: float | None):
    """Run COMMAND, asking for approval when required."""
    settings, console = _setup(ctx)
    if timeout is not None:
        settings = settings.model_copy(update={"approval_timeout": timeout})

    asyncio.run(run_gated(command, settings, console))


async def run_gated(command: str, settings: Settings, console: Say10Console) -> None:
    """Run a command through the approval gateway.

    Args:
        command: Command line to run
        settings: Application settings
        console: Console for output and prompts
    """
    service = ApprovalService.from_settings(settings)
    service.set_approval_handler(TerminalApprovalHandler(console))

    try:
        result = await service.execute_with_approval(
            command,
            lambda: run_command(command, timeout=settings.command_timeout),
        )
    except DeniedError as e:
        console.warning(str(e))
        sys.exit(1)
    except CommandExecutionError as e:
        console.error(str(e))
        sys.exit(1)

    console.divider(command)
    if result.stdout:
        console.print(result.stdout, end="", markup=False)
    if result.stderr:
        console.print(result.stderr, end="", style="say10.warning", markup=False)

    if not result.success:
        console.error(f"Command exited with status {result.exit_code}")
        sys.exit(result.exit_code)


@cli.command()
@click.pass_context
def config(ctx: click.Context):
    """Show current configuration."""
    settings, console = _setup(ctx)
    console.show_config(settings.model_dump_safe())

    if console.verbose:
        console.print("\n[dim]Configuration loaded from:[/dim]")
        console.print("  - Environment variables")
        console.print("  - .env file (if present)")


@cli.command()
def version():
    """Show version information."""
    click.echo(f"say10 {__version__}")


if __name__ == "__main__":
    cli()
