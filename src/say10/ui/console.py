"""Rich console wrapper for say10 with consistent styling and theming.

This module provides the Say10Console class which wraps Rich Console with
say10-specific styling and convenience methods for common outputs.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme


# say10 color scheme
SAY10_THEME = Theme({
    # Primary colors
    "say10.primary": "cyan",
    "say10.secondary": "blue",

    # Status colors
    "say10.success": "green",
    "say10.error": "red bold",
    "say10.warning": "yellow",
    "say10.info": "blue",

    # Special elements
    "say10.command": "cyan bold",
    "say10.header": "cyan bold",
    "say10.footer": "dim",
})


class Say10Console:
    """Rich console with say10-specific styling.

    Attributes:
        console: The underlying Rich Console instance
    """

    def __init__(self, no_color: bool = False, verbose: bool = False):
        """Initialize the console.

        Args:
            no_color: Disable colored output
            verbose: Enable verbose output
        """
        self.console = Console(
            theme=SAY10_THEME,
            highlight=False,
            no_color=no_color,
        )
        self.verbose = verbose
        self.no_color = no_color

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (passthrough to Rich Console)."""
        self.console.print(*args, **kwargs)

    def error(self, message: str, exception: Exception | None = None) -> None:
        """Display an error message.

        Args:
            message: Error message
            exception: Optional exception object
        """
        self.console.print(f"✗ Error: {message}", style="say10.error", markup=False)

        if exception and self.verbose:
            self.console.print_exception(show_locals=False)

    def warning(self, message: str) -> None:
        """Display a warning message."""
        self.console.print(f"⚠ Warning: {message}", style="say10.warning", markup=False)

    def success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(f"✓ {message}", style="say10.success", markup=False)

    def info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(f"ℹ {message}", style="say10.info", markup=False)

    def show_table(self, title: str, rows: dict[str, Any], key_header: str = "Setting") -> None:
        """Display a two-column key/value table.

        Args:
            title: Table title
            rows: Mapping of keys to values
            key_header: Header of the key column
        """
        table = Table(title=title, show_header=True)
        table.add_column(key_header, style="say10.primary")
        table.add_column("Value", style="say10.info")

        for key, value in rows.items():
            table.add_row(key, str(value))

        self.console.print(table)

    def show_config(self, config_dict: dict[str, Any]) -> None:
        """Display configuration settings."""
        self.show_table("say10 Configuration", config_dict)

    def divider(self, title: str | None = None) -> None:
        """Print a divider line.

        Args:
            title: Optional title for the divider
        """
        if title:
            self.console.rule(f"[say10.header]{escape(title)}[/say10.header]")
        else:
            self.console.rule(style="say10.footer")


# Global console instance
_console: Say10Console | None = None


def get_console(no_color: bool = False, verbose: bool = False) -> Say10Console:
    """Get the global console instance.

    Args:
        no_color: Disable colored output
        verbose: Enable verbose output

    Returns:
        Say10Console: The global console instance
    """
    global _console
    if _console is None:
        _console = Say10Console(no_color=no_color, verbose=verbose)
    return _console
