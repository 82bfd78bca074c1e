"""Configuration management for babel-julia."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from babel_julia.errors import ConfigurationError

DEFAULT_SESSION = "main"
EPHEMERAL_SESSION = "none"
MAX_LINE_LENGTH = 12000


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BABEL_JULIA_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Transport
    debug: bool = Field(default=False, description="Send a commented trace of each evaluation to the session")
    poll_interval: float = Field(default=0.1, description="Seconds between output file checks")
    poll_attempts: int = Field(default=100, description="Maximum number of output file checks")
    max_line_length: int = Field(default=MAX_LINE_LENGTH, description="Longest output line returned unsuppressed")
    temp_dir: Path | None = Field(default=None, description="Directory for side files (system temp when unset)")

    # Sessions
    default_session: str = Field(default=DEFAULT_SESSION, description="Session used when a block names none")
    julia_command: str = Field(default="julia", description="Julia executable")
    julia_args: list[str] = Field(default_factory=lambda: ["--quiet", "--interactive"], description="Extra Julia arguments")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("poll_interval")
    @classmethod
    def _positive_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("poll_interval must be positive")
        return value

    @field_validator("poll_attempts", "max_line_length")
    @classmethod
    def _positive_count(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("default_session")
    @classmethod
    def _named_default(cls, value: str) -> str:
        value = value.strip()
        if not value or value == EPHEMERAL_SESSION:
            raise ValueError(f"default_session must name a persistent session, got {value!r}")
        return value


def get_settings(**overrides: Any) -> Settings:
    """Get application settings.

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the resulting values fail validation.
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
