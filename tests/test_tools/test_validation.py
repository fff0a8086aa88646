"""Tests for tool argument sanitization."""

import pytest

from say10.exceptions import InputValidationError, PatternError
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


class TestServiceName:
    """Test sanitize_service_name function."""

    def test_valid_names(self):
        """Test typical systemd unit names."""
        assert sanitize_service_name("nginx") == "nginx"
        assert sanitize_service_name("nginx.service") == "nginx.service"
        assert sanitize_service_name("getty@tty1") == "getty@tty1"

    @pytest.mark.parametrize("name", ["nginx; rm -rf /", "$(whoami)", "a b", ""])
    def test_invalid_names(self, name):
        """Test that metacharacters are rejected."""
        with pytest.raises(InputValidationError) as exc_info:
            sanitize_service_name(name)

        assert exc_info.value.field == "service"

    def test_too_long(self):
        """Test the length cap."""
        with pytest.raises(InputValidationError):
            sanitize_service_name("a" * 101)


class TestContainerName:
    """Test sanitize_container_name function."""

    def test_valid_names(self):
        """Test names and ids."""
        assert sanitize_container_name("web_1") == "web_1"
        assert sanitize_container_name("3f2a9c") == "3f2a9c"

    @pytest.mark.parametrize("name", [None, "", "-web", "web|cat", "a" * 256])
    def test_invalid_names(self, name):
        """Test empty, malformed and overlong names."""
        with pytest.raises(InputValidationError):
            sanitize_container_name(name)


class TestHostnames:
    """Test hostname and address sanitizers."""

    def test_valid_hostname(self):
        """Test RFC 1123 hostnames."""
        assert sanitize_hostname("example.com") == "example.com"
        assert sanitize_hostname("web-01") == "web-01"

    @pytest.mark.parametrize("host", ["-bad.com", "bad-.com", "a..b", "ex ample.com"])
    def test_invalid_hostname(self, host):
        """Test malformed hostnames."""
        with pytest.raises(InputValidationError):
            sanitize_hostname(host)

    def test_ip_addresses(self):
        """Test IPv4 and IPv6 addresses."""
        assert sanitize_hostname_or_ip("192.168.1.10") == "192.168.1.10"
        assert sanitize_hostname_or_ip("::1") == "::1"
        assert sanitize_hostname_or_ip("example.com") == "example.com"

    def test_invalid_ipv4(self):
        """Test that out-of-range dotted quads are not taken as hostnames."""
        with pytest.raises(InputValidationError) as exc_info:
            sanitize_hostname_or_ip("999.1.1.1")

        assert "IPv4" in str(exc_info.value)

    def test_empty_host(self):
        """Test that an empty host is rejected."""
        with pytest.raises(InputValidationError):
            sanitize_hostname_or_ip("")


class TestLogPath:
    """Test sanitize_log_path function."""

    def test_valid_path(self):
        """Test a plain log path."""
        assert sanitize_log_path("/var/log/syslog") == "/var/log/syslog"
        assert sanitize_log_path("/var/log/nginx/../nginx/access.log") == "/var/log/nginx/access.log"

    @pytest.mark.parametrize(
        "path",
        ["/etc/passwd", "/var/log/../../etc/shadow", "/var/logs/x", "/var/log/.hidden"],
    )
    def test_rejected_paths(self, path):
        """Test traversal, foreign and hidden paths."""
        with pytest.raises(InputValidationError):
            sanitize_log_path(path)


class TestRecordType:
    """Test sanitize_record_type function."""

    def test_case_insensitive(self):
        """Test that record types are upper-cased."""
        assert sanitize_record_type("mx") == "MX"
        assert sanitize_record_type("AAAA") == "AAAA"

    def test_unsupported(self):
        """Test an unsupported record type."""
        with pytest.raises(InputValidationError):
            sanitize_record_type("AXFR")


class TestParseIntSafe:
    """Test parse_int_safe function."""

    def test_parse(self):
        """Test parsing and defaults."""
        assert parse_int_safe("42", 10) == 42
        assert parse_int_safe(None, 10) == 10
        assert parse_int_safe("abc", 10) == 10
        assert parse_int_safe(7, 10) == 7

    def test_clamp(self):
        """Test clamping to the bounds."""
        assert parse_int_safe("5000", 100, min_value=1, max_value=1000) == 1000
        assert parse_int_safe("-5", 100, min_value=1, max_value=1000) == 1


class TestSearchPattern:
    """Test that the search pattern sanitizer is re-exported."""

    def test_rejects_redos(self):
        """Test that dangerous patterns are rejected."""
        with pytest.raises(PatternError):
            sanitize_search_pattern("(x+)+y")


class TestSanitizeErrorMessage:
    """Test sanitize_error_message function."""

    def test_redacts(self):
        """Test that paths, addresses and ports are redacted."""
        message = sanitize_error_message("cannot open /etc/app/config.yml on 10.0.0.5:8080")

        assert "/etc" not in message
        assert "[PATH]" in message
        assert "[IP]" in message
        assert ":[PORT]" in message

    def test_empty(self):
        """Test the fallback for empty messages."""
        assert sanitize_error_message("") == "Unknown error"
        assert sanitize_error_message(None) == "Unknown error"


class TestTruncateString:
    """Test truncate_string function."""

    def test_short_text_unchanged(self):
        """Test text within the limit."""
        assert truncate_string("hello", 10) == "hello"

    def test_word_boundary(self):
        """Test that truncation prefers a word boundary."""
        result = truncate_string("the quick brown fox jumps over", 20)

        assert result == "the quick brown..."
        assert len(result) <= 20

    def test_hard_cut(self):
        """Test a cut without a usable word boundary."""
        assert truncate_string("abcdefghijklmnop", 10) == "abcdefg..."
