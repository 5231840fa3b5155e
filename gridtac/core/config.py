"""
Configuration management using pydantic-settings.

Loads settings from environment variables and .env file.
Provides type-safe access with validation.
"""

from enum import Enum

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MAX_BOARD_SIZE = 12


class LogLevel(str, Enum):
    """Log levels accepted by settings and the CLI."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def _group_config(prefix: str) -> SettingsConfigDict:
    """Nested groups read the same .env file as the top-level settings."""
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# ─────────────────────────────────────────────────────────────
# NESTED SETTINGS
# ─────────────────────────────────────────────────────────────


class GameSettings(BaseSettings):
    """Game setup configuration."""

    model_config = _group_config("GAME_")

    board_size: int = Field(default=3, ge=1, le=MAX_BOARD_SIZE, description="Cells per side")
    human_symbol: str = Field(default="X", min_length=1)
    ai_symbol: str = Field(default="O", min_length=1)
    human_first: bool = True

    @model_validator(mode="after")
    def _distinct_symbols(self) -> "GameSettings":
        if self.human_symbol == self.ai_symbol:
            raise ValueError("human_symbol and ai_symbol must differ")
        return self


class AISettings(BaseSettings):
    """Random agent configuration."""

    model_config = _group_config("AI_")

    seed: int | None = Field(default=None, description="Seed for reproducible games")
    sample_empty_only: bool = Field(
        default=False,
        description="Draw only from empty cells instead of the whole board",
    )


class UISettings(BaseSettings):
    """Dashboard configuration."""

    model_config = _group_config("UI_")

    port: int = 8501


class LogSettings(BaseSettings):
    """Logging configuration."""

    model_config = _group_config("LOG_")

    level: LogLevel = LogLevel.WARNING
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ─────────────────────────────────────────────────────────────
# MAIN SETTINGS
# ─────────────────────────────────────────────────────────────


class Settings(BaseSettings):
    """
    Main application settings.

    Loads from .env file and environment variables.
    Environment variables take precedence over .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    game: GameSettings = Field(default_factory=GameSettings)
    ai: AISettings = Field(default_factory=AISettings)
    ui: UISettings = Field(default_factory=UISettings)
    log: LogSettings = Field(default_factory=LogSettings)


# ─────────────────────────────────────────────────────────────
# SINGLETON ACCESS
# ─────────────────────────────────────────────────────────────

_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (for testing)."""
    global _settings
    _settings = None
