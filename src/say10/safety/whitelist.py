"""Whitelist of commands that may run without approval.

The whitelist is a JSON file of exact command prefixes and regex patterns.
It is loaded once per store and cached. Any problem with the file falls back
to a built-in default whitelist, so loading never fails.
"""

import asyncio
import json
import re
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from say10.exceptions import ConfigLoadError, PatternError
from say10.logging import get_logger, StageTimer
from say10.safety.patterns import compile_pattern

logger = get_logger("say10.safety.whitelist")

DEFAULT_COMMANDS = [
    "df",
    "free",
    "ps",
    "top",
    "htop",
    "uptime",
    "systemctl status",
    "systemctl list-units",
    "journalctl",
    "cat",
    "tail",
    "head",
    "grep",
    "ls",
    "pwd",
    "whoami",
    "date",
    "uname",
]

DEFAULT_PATTERNS = [
    r"^df\s+",
    r"^free\s+",
    r"^ps\s+",
    r"^systemctl\s+status\s+",
    r"^systemctl\s+list-units",
    r"^journalctl\s+",
    r"^cat\s+/var/log/",
    r"^tail\s+",
    r"^grep\s+",
    r"^ls\s+",
]

# Always safe, independent of the whitelist file
READ_ONLY_COMMANDS = (
    "cat",
    "tail",
    "head",
    "less",
    "more",
    "grep",
    "find",
    "ls",
    "pwd",
    "whoami",
    "date",
    "uptime",
    "df",
    "du",
    "free",
    "ps",
    "top",
    "htop",
    "systemctl status",
    "systemctl list-units",
    "systemctl is-active",
    "systemctl is-enabled",
    "journalctl",
)


class WhitelistConfig(BaseModel):
    """Commands and patterns permitted without approval."""

    commands: list[str] = Field(default_factory=list, description="Exact command prefixes")
    patterns: list[str] = Field(default_factory=list, description="Regex source strings")

    @classmethod
    def default(cls) -> "WhitelistConfig":
        """Get the built-in default whitelist."""
        return cls(commands=list(DEFAULT_COMMANDS), patterns=list(DEFAULT_PATTERNS))


def _matches_prefix(command: str, entry: str) -> bool:
    return command == entry or command.startswith(f"{entry} ")


def is_read_only(command: str) -> bool:
    """Check whether a command is on the built-in read-only list.

    Comparison is case-insensitive; an entry matches exactly or as a prefix
    followed by a space.

    Args:
        command: Raw command string

    Returns:
        bool: True if the command is read-only
    """
    cmd = command.strip().lower()
    return any(_matches_prefix(cmd, entry) for entry in READ_ONLY_COMMANDS)


class WhitelistStore:
    """Loads, caches and queries the command whitelist.

    Exact entries are matched case-sensitively. Patterns are screened by
    the pattern validator; rejected ones are skipped with a warning and the
    rest stay active.
    """

    def __init__(self, path: Path | None = None):
        """Initialize the store.

        Args:
            path: Whitelist JSON file (None uses the default whitelist)
        """
        self.path = path
        self._config: WhitelistConfig | None = None
        self._compiled: list[re.Pattern[str]] = []
        self._skipped: list[str] = []
        self._source: str | None = None
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        """Whether the whitelist has been loaded."""
        return self._config is not None

    @property
    def source(self) -> str | None:
        """Where the active whitelist came from ("file" or "defaults")."""
        return self._source

    @property
    def skipped_patterns(self) -> list[str]:
        """Patterns that were rejected while loading."""
        return list(self._skipped)

    async def load(self) -> WhitelistConfig:
        """Load the whitelist, using the cache after the first call.

        Returns:
            WhitelistConfig: Active commands and accepted patterns
        """
        if self._config is not None:
            return self._config

        async with self._lock:
            # Another caller may have finished loading while we waited
            if self._config is not None:
                return self._config

            try:
                raw = await asyncio.to_thread(self._read_file)
                source = "file"
                logger.info(
                    "Whitelist loaded",
                    path=str(self.path),
                    command_count=len(raw.commands),
                    pattern_count=len(raw.patterns),
                )
            except ConfigLoadError as e:
                logger.warning(
                    "Whitelist config unavailable, using defaults",
                    path=str(e.path),
                    detail=e.detail,
                )
                raw = WhitelistConfig.default()
                source = "defaults"

            self._activate(raw, source)
            return self._config

    def _read_file(self) -> WhitelistConfig:
        """Read and parse the whitelist file.

        Raises:
            ConfigLoadError: If the file is missing, unreadable or malformed
        """
        if self.path is None:
            raise ConfigLoadError(None, "no whitelist path configured")

        if not self.path.is_file():
            raise ConfigLoadError(self.path, "file not found")

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigLoadError(self.path, f"unreadable: {e}") from e

        with StageTimer("whitelist_parse", logger, warn_after=1.0):
            try:
                return WhitelistConfig.model_validate(json.loads(content))
            except json.JSONDecodeError as e:
                raise ConfigLoadError(self.path, f"invalid JSON: {e}") from e
            except ValidationError as e:
                raise ConfigLoadError(
                    self.path, f"unexpected structure: {e.error_count()} error(s)"
                ) from e

    def _activate(self, raw: WhitelistConfig, source: str) -> None:
        compiled = []
        accepted = []
        skipped = []

        for pattern in raw.patterns:
            try:
                compiled.append(compile_pattern(pattern))
                accepted.append(pattern)
            except PatternError as e:
                preview = pattern if len(pattern) <= 50 else pattern[:50] + "..."
                logger.warning("Skipping whitelist pattern", pattern=preview, detail=e.detail)
                skipped.append(pattern)

        self._compiled = compiled
        self._skipped = skipped
        self._source = source
        self._config = WhitelistConfig(commands=list(raw.commands), patterns=accepted)

    async def is_whitelisted(self, command: str) -> bool:
        """Check whether a command may run without approval.

        Args:
            command: Raw command string

        Returns:
            bool: True on an exact/prefix entry match or a pattern match
        """
        config = await self.load()
        cmd = command.strip()

        if any(_matches_prefix(cmd, entry) for entry in config.commands):
            return True

        return any(pattern.search(cmd) for pattern in self._compiled)

    def is_read_only(self, command: str) -> bool:
        """Check the built-in read-only list (see module-level is_read_only)."""
        return is_read_only(command)

    def reset(self) -> None:
        """Drop the cached whitelist so the next query reloads it."""
        self._config = None
        self._compiled = []
        self._skipped = []
        self._source = None
