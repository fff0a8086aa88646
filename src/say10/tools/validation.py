"""Input sanitization for tool arguments.

Tool handlers run these checks on agent-supplied arguments before the
arguments end up inside a command string, to keep shell metacharacters,
path traversal and pathological regexes out.
"""

import ipaddress
import os
import re

from say10.exceptions import InputValidationError
from say10.safety.patterns import sanitize_search_pattern

__all__ = [
    "DNS_RECORD_TYPES",
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

_SERVICE_NAME = re.compile(r"^[a-zA-Z0-9@._-]+$")
_CONTAINER_NAME = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$")
# RFC 1123
_HOSTNAME = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.(?!-)[A-Za-z0-9-]{1,63}(?<!-))*$")
_DOTTED_QUAD = re.compile(r"^\d+(\.\d+){3}$")

LOG_ROOT = "/var/log/"

DNS_RECORD_TYPES = ("A", "AAAA", "MX", "NS", "TXT", "CNAME", "SOA", "PTR")


def sanitize_service_name(service: str) -> str:
    """Validate a systemd unit name.

    Args:
        service: Service name, with or without the .service suffix

    Returns:
        str: The unchanged name

    Raises:
        InputValidationError: If the name has invalid characters or is too long
    """
    if len(service) > 100:
        raise InputValidationError("service", service, "name too long (max 100 characters)")

    if not _SERVICE_NAME.match(service):
        raise InputValidationError("service", service, f"invalid service name: {service!r}")

    return service


def sanitize_container_name(container: str | None) -> str:
    """Validate a docker container name or id.

    Args:
        container: Container name or hex id

    Returns:
        str: The unchanged name

    Raises:
        InputValidationError: If the name is empty, too long or malformed
    """
    if not container:
        raise InputValidationError("container", container, "container name is required")

    if len(container) > 255:
        raise InputValidationError("container", container, "name too long (max 255 characters)")

    if not _CONTAINER_NAME.match(container):
        raise InputValidationError("container", container, f"invalid container name: {container!r}")

    return container


def sanitize_hostname(hostname: str) -> str:
    """Validate an RFC 1123 hostname.

    Raises:
        InputValidationError: If the hostname is malformed or too long
    """
    if len(hostname) > 253:
        raise InputValidationError("hostname", hostname, "hostname too long (max 253 characters)")

    if not _HOSTNAME.match(hostname):
        raise InputValidationError("hostname", hostname, f"invalid hostname: {hostname!r}")

    return hostname


def sanitize_hostname_or_ip(value: str) -> str:
    """Validate an IPv4/IPv6 address or a hostname.

    Four dot-separated numbers are always treated as an IPv4 address.

    Raises:
        InputValidationError: If the value is neither a valid address nor hostname
    """
    if not value:
        raise InputValidationError("host", value, "host is required")

    try:
        ipaddress.ip_address(value)
        return value
    except ValueError:
        pass

    if _DOTTED_QUAD.match(value):
        raise InputValidationError("host", value, f"invalid IPv4 address: {value!r}")

    try:
        return sanitize_hostname(value)
    except InputValidationError as e:
        raise InputValidationError("host", value, e.detail) from e


def sanitize_log_path(path: str) -> str:
    """Resolve a log file path and confine it to /var/log.

    Args:
        path: Path supplied by the caller

    Returns:
        str: Normalized absolute path

    Raises:
        InputValidationError: If the path escapes /var/log or is hidden
    """
    normalized = os.path.normpath(os.path.abspath(path))

    if not normalized.startswith(LOG_ROOT):
        raise InputValidationError(
            "path", path, f"only log files under {LOG_ROOT} are allowed (got {path!r})"
        )

    if any(part.startswith(".") for part in normalized.split("/") if part):
        raise InputValidationError("path", path, "hidden files are not allowed")

    return normalized


def sanitize_record_type(record_type: str) -> str:
    """Validate a DNS record type (case-insensitive).

    Returns:
        str: Upper-cased record type

    Raises:
        InputValidationError: If the type is not supported
    """
    upper = record_type.upper()
    if upper not in DNS_RECORD_TYPES:
        raise InputValidationError(
            "record_type",
            record_type,
            f"unsupported record type {record_type!r}; allowed: {', '.join(DNS_RECORD_TYPES)}",
        )
    return upper


def parse_int_safe(
    value: str | int | None,
    default: int,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    """Parse an integer argument, clamping it into a range.

    Args:
        value: Raw value (string, int or None)
        default: Returned when the value is missing or not a number
        min_value: Optional lower bound
        max_value: Optional upper bound

    Returns:
        int: Parsed and clamped value
    """
    if value is None:
        return default

    if isinstance(value, int):
        parsed = value
    else:
        try:
            parsed = int(str(value).strip(), 10)
        except ValueError:
            return default

    if min_value is not None and parsed < min_value:
        return min_value

    if max_value is not None and parsed > max_value:
        return max_value

    return parsed


def sanitize_error_message(message: str | None) -> str:
    """Strip paths, IP addresses and ports from an error message.

    Args:
        message: Raw error text

    Returns:
        str: Redacted message
    """
    if not message:
        return "Unknown error"

    sanitized = re.sub(r"/[\w/.-]+", "[PATH]", message)
    sanitized = re.sub(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b", "[IP]", sanitized)
    sanitized = re.sub(r":\d{2,5}\b", ":[PORT]", sanitized)
    return sanitized


def truncate_string(text: str, max_length: int, ellipsis: str = "...") -> str:
    """Shorten text to at most max_length characters.

    Breaks at a word boundary when one falls in the last 30% of the text.

    Args:
        text: Text to shorten
        max_length: Maximum length including the ellipsis
        ellipsis: Suffix marking the cut

    Returns:
        str: Original or truncated text
    """
    if len(text) <= max_length:
        return text

    truncated = text[: max_length - len(ellipsis)]
    last_space = truncated.rfind(" ")

    if last_space > max_length * 0.7:
        truncated = truncated[:last_space]

    return truncated.rstrip() + ellipsis
