"""Helpers for tool handlers that build and run commands.

Argument sanitizers and the subprocess runner passed to the gateway as an
executor.
"""

from say10.tools.runner import CommandResult, run_command
from say10.tools.validation import (
    parse_int_safe,
    sanitize_container_name,
    sanitize_error_message,
    sanitize_hostname,
    sanitize_hostname_or_ip,
    sanitize_log_path,
    sanitize_record_type,
    sanitize_search_pattern,
    sanitize_service_name,
    truncate_string,
)

__all__ = [
    "CommandResult",
    "run_command",
    "parse_int_safe",
    "sanitize_container_name",
    "sanitize_error_message",
    "sanitize_hostname",
    "sanitize_hostname_or_ip",
    "sanitize_log_path",
    "sanitize_record_type",
    "sanitize_search_pattern",
    "sanitize_service_name",
    "truncate_string",
]
