"""Logging configuration for say10 with structlog.

Gateway events are structured key/value records. While a command is being
decided or run, the command is bound to the structlog context, so every
event emitted in that window carries it without passing it around.
"""

import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import structlog
from structlog.contextvars import bound_contextvars


def setup_logging(level: str | None = "INFO", log_file: Path | None = None) -> None:
    """Configure structlog for stderr and optional file output.

    Logs never go to stdout, which carries the output of approved commands.
    With a log file, every event is rendered as JSON for both destinations.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR), or None to use INFO
        log_file: Optional file path to write logs
    """
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=log_level, handlers=handlers, format="%(message)s", force=True)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso" if log_file else "%H:%M:%S", utc=bool(log_file)),
    ]

    if log_file:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger for a module.

    Args:
        name: Module name (e.g., "say10.safety.whitelist")

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


@contextmanager
def command_context(command: str, **extra: Any) -> Iterator[None]:
    """Bind a command to every log event emitted inside the block.

    Args:
        command: Command under review
        **extra: Further keys to bind (e.g. destructive=True)
    """
    with bound_contextvars(command=command, **extra):
        yield


class StageTimer:
    """Times one stage of the gateway (whitelist parse, approval, run).

    Works as a sync or async context manager. On exit it logs
    "Stage completed" at debug level, "Stage failed" if the block raised, or
    a "Stage slow" warning when ``warn_after`` seconds were exceeded.

    Usage:
        async with StageTimer("approval", logger) as timer:
            response = await handler(request)
        logger.info("Decided", decision_ms=timer.elapsed_ms)
    """

    def __init__(self, stage: str, logger: Any | None = None, warn_after: float | None = None):
        """Initialize the timer.

        Args:
            stage: Stage name logged with the timing
            logger: Logger instance (uses "say10.timing" if None)
            warn_after: Seconds after which the stage counts as slow
        """
        self.stage = stage
        self.logger = logger or get_logger("say10.timing")
        self.warn_after = warn_after
        self.elapsed: float = 0
        self._start: float = 0

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds, rounded to 0.1 ms."""
        return round(self.elapsed * 1000, 1)

    def __enter__(self) -> "StageTimer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: type[BaseException] | None, *args: Any) -> None:
        self.elapsed = time.perf_counter() - self._start

        if exc_type is not None:
            self.logger.debug("Stage failed", stage=self.stage, elapsed_ms=self.elapsed_ms)
        elif self.warn_after is not None and self.elapsed > self.warn_after:
            self.logger.warning(
                "Stage slow",
                stage=self.stage,
                elapsed_ms=self.elapsed_ms,
                warn_after_s=self.warn_after,
            )
        else:
            self.logger.debug("Stage completed", stage=self.stage, elapsed_ms=self.elapsed_ms)

    async def __aenter__(self) -> "StageTimer":
        return self.__enter__()

    async def __aexit__(self, exc_type: type[BaseException] | None, *args: Any) -> None:
        self.__exit__(exc_type, *args)
