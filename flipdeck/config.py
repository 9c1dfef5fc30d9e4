"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path.home() / ".flipdeck"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Storage
    DATA_DIR: Path = DEFAULT_DATA_DIR
    DECK_FILENAME: str = "deck.json"
    BACKUPS_DIRNAME: str = "backups"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Logging; None picks a level from ENVIRONMENT
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None

    # Study session
    SHOW_ONLY_DUE_CARDS: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def deck_path(self) -> Path:
        """Location of the live deck file."""
        return self.DATA_DIR / self.DECK_FILENAME

    @computed_field  # type: ignore[prop-decorator]
    @property
    def backups_dir(self) -> Path:
        """Directory holding deck backups."""
        return self.DATA_DIR / self.BACKUPS_DIRNAME

    @field_validator("DATA_DIR", mode="after")
    @classmethod
    def expand_data_dir(cls, value: Path) -> Path:
        """Expand ``~`` in the data directory."""
        return value.expanduser()

    @field_validator("DECK_FILENAME", "BACKUPS_DIRNAME", mode="after")
    @classmethod
    def reject_nested_names(cls, value: str) -> str:
        """File and directory names must stay inside DATA_DIR."""
        value = value.strip()
        if not value or Path(value).name != value:
            msg = f"{value!r} must be a plain file or directory name"
            raise ValueError(msg)
        return value


def configure_logging(environment: str = "development", level: str | None = None) -> None:
    """
    Route stdlib logging and structlog to stdout.

    Production gets one JSON object per line; other environments get the
    coloured console renderer. Without an explicit level, development
    logs at DEBUG and everything else at INFO.
    """
    if level is None:
        level = "DEBUG" if environment == "development" else "INFO"
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level.upper())

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
