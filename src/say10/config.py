"""Configuration management for say10 using Pydantic settings.

Settings are loaded from environment variables and .env files with
sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WHITELIST_PATH = Path(__file__).parent / "data" / "whitelist.json"


class Settings(BaseSettings):
    """Main configuration settings for say10.

    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    say10_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level for the application",
    )
    say10_log_file: Path | None = Field(
        default=None,
        description="Optional file path to write logs (defaults to console only)",
    )
    say10_data_dir: Path = Field(
        default=Path.home() / ".say10",
        description="Base directory for local data (logs)",
    )

    # Security Settings
    whitelist_path: Path = Field(
        default=DEFAULT_WHITELIST_PATH,
        description="JSON file with commands and patterns allowed without approval",
    )
    approval_timeout: float | None = Field(
        default=None,
        description="Seconds to wait for an approval decision (None waits forever)",
        ge=1,
        le=3600,
    )
    approval_timeout_action: Literal["deny", "approve"] = Field(
        default="deny",
        description="Decision applied when an approval request times out",
    )

    # Execution Settings
    command_timeout: int = Field(
        default=30,
        description="Timeout for running an approved command in seconds",
        ge=1,
        le=600,
    )

    @field_validator("say10_log_file", "say10_data_dir", "whitelist_path", mode="before")
    @classmethod
    def expand_paths(cls, v: str | Path | None) -> Path | None:
        """Expand relative paths to absolute paths."""
        if v is None:
            return None
        path = Path(v)
        return path.expanduser().resolve()

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        directories = [
            self.say10_data_dir,
            self.say10_data_dir / "logs",
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def log_file_path(self) -> Path:
        """Get the path to the main log file."""
        return self.say10_log_file or self.say10_data_dir / "logs" / "say10.log"

    def model_dump_safe(self) -> dict[str, str]:
        """Dump settings as a dictionary with string representations.

        Useful for logging and displaying configuration.
        """
        return {
            "log_level": self.say10_log_level,
            "log_file": str(self.say10_log_file) if self.say10_log_file else "console only",
            "data_dir": str(self.say10_data_dir),
            "whitelist_path": str(self.whitelist_path),
            "approval_timeout": (
                f"{self.approval_timeout:g}s" if self.approval_timeout else "none"
            ),
            "approval_timeout_action": self.approval_timeout_action,
            "command_timeout": f"{self.command_timeout}s",
        }


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Creates and caches the settings on first call.

    Returns:
        Settings: The global settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment/files.

    Useful for testing or when configuration changes at runtime.

    Returns:
        Settings: The newly loaded settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
