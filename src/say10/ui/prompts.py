"""User input handling for say10."""

from rich.console import Console
from rich.prompt import Confirm


# Console instance for prompts
_prompt_console = Console()


def confirm(
    message: str,
    default: bool = False,
    console: Console | None = None,
) -> bool:
    """Ask the user for yes/no confirmation.

    Args:
        message: The question to ask
        default: Default value if user just presses Enter
        console: Optional console instance (uses default if None)

    Returns:
        bool: True if user confirmed, False otherwise
    """
    console = console or _prompt_console

    return Confirm.ask(
        f"[yellow]?[/yellow] {message}",
        default=default,
        console=console,
    )
