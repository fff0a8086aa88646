"""User interface components for say10.

This module provides console output, user prompts and the interactive
terminal approval handler.
"""

from say10.ui.approval import TerminalApprovalHandler
from say10.ui.console import Say10Console, get_console, SAY10_THEME
from say10.ui.prompts import confirm

__all__ = [
    "Say10Console",
    "get_console",
    "SAY10_THEME",
    "TerminalApprovalHandler",
    "confirm",
]
