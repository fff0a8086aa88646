"""Tests for logging helpers."""

import asyncio
import time

import pytest
import structlog

from say10.logging import StageTimer, command_context


class RecordingLogger:
    """Logger stand-in that records (level, event, fields) tuples."""

    def __init__(self):
        self.records = []

    def debug(self, event, **fields):
        self.records.append(("debug", event, fields))

    def warning(self, event, **fields):
        self.records.append(("warning", event, fields))


class TestCommandContext:
    """Test command_context function."""

    def test_binds_and_unbinds(self):
        """Test that the command is bound only inside the block."""
        with command_context("rm file", destructive=True):
            bound = structlog.contextvars.get_contextvars()
            assert bound["command"] == "rm file"
            assert bound["destructive"] is True

        assert "command" not in structlog.contextvars.get_contextvars()

    def test_nested_restores_outer(self):
        """Test that an inner command gives way to the outer one on exit."""
        with command_context("outer"):
            with command_context("inner"):
                assert structlog.contextvars.get_contextvars()["command"] == "inner"
            assert structlog.contextvars.get_contextvars()["command"] == "outer"


class TestStageTimer:
    """Test StageTimer class."""

    def test_completed(self):
        """Test a fast stage logged at debug level."""
        logger = RecordingLogger()

        with StageTimer("whitelist_parse", logger) as timer:
            pass

        level, event, fields = logger.records[0]
        assert (level, event) == ("debug", "Stage completed")
        assert fields["stage"] == "whitelist_parse"
        assert timer.elapsed_ms >= 0

    def test_slow_stage_warns(self):
        """Test that exceeding warn_after logs a warning."""
        logger = RecordingLogger()

        with StageTimer("whitelist_parse", logger, warn_after=0.001):
            time.sleep(0.01)

        level, event, fields = logger.records[0]
        assert (level, event) == ("warning", "Stage slow")
        assert fields["warn_after_s"] == 0.001
        assert fields["elapsed_ms"] >= 1

    def test_failed_stage(self):
        """Test that an exception is logged as a failed stage and propagates."""
        logger = RecordingLogger()

        with pytest.raises(ValueError):
            with StageTimer("run_command", logger, warn_after=0.0):
                raise ValueError("boom")

        assert logger.records[0][1] == "Stage failed"

    @pytest.mark.asyncio
    async def test_async_usage(self):
        """Test the timer as an async context manager."""
        logger = RecordingLogger()

        async with StageTimer("approval", logger) as timer:
            await asyncio.sleep(0.01)

        assert timer.elapsed >= 0.005
        assert logger.records[0][1] == "Stage completed"
