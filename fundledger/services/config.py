"""Application configuration from environment variables and .env file."""

import logging
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class AppConfig(BaseSettings):
    """Configuration loaded from environment variables.

    Pydantic automatically loads values from:
    1. OS environment variables (at instantiation time)
    2. .env file (if present in the working directory)

    IMPORTANT: Instantiate AFTER environment variables are loaded.
    This is handled by the lazy loader below.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields in .env file
    )

    database_url: str = "sqlite:///./festa.db"
    log_level: str = "INFO"
    log_file: str = "logs/server.log"

    # Dinner revenue counts only guests flagged as present
    count_only_present_guests: bool = False

    # "conservative" keeps projected dinner profit out of the spendable ceiling
    remainder_policy: Literal["conservative", "theoretical"] = "conservative"

    host: str = "0.0.0.0"
    port: int = 8000


# Lazy loader to ensure environment is loaded before instantiation
_app_config_instance: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """Return the process-wide configuration, creating it on first use."""
    global _app_config_instance
    if _app_config_instance is None:
        _app_config_instance = AppConfig()
        logger.debug(
            "Configuration loaded: database=%s policy=%s",
            _app_config_instance.database_url.split("://", 1)[0],
            _app_config_instance.remainder_policy,
        )
    return _app_config_instance


def reset_app_config() -> None:
    """Drop the cached configuration (next call re-reads the environment)."""
    global _app_config_instance
    _app_config_instance = None


__all__ = ["AppConfig", "get_app_config", "reset_app_config"]
