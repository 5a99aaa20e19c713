"""Configuration management using pydantic-settings.

Provides validated configuration with support for:
- Environment variables (DISCORD_AUTH_TOKEN, DISCORD_SCRAPER_*)
- An optional .env file
- Command-line overrides applied on top
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DB_PATH = Path("./data/messages.db")
DEFAULT_USER_AGENT = "MessageScraperBot (1.0.0)"


class ConfigurationError(Exception):
    """Raised when the run cannot start because of bad or missing settings."""


class AppSettings(BaseSettings):
    """Application settings with validation.

    The token is read from DISCORD_AUTH_TOKEN; everything else may be set
    with the DISCORD_SCRAPER_ prefix (e.g. DISCORD_SCRAPER_DB_PATH).
    """

    auth_token: str | None = Field(default=None, validation_alias="DISCORD_AUTH_TOKEN")
    db_path: Path = DEFAULT_DB_PATH
    user_agent: str = DEFAULT_USER_AGENT
    page_size: int = Field(default=100, ge=1, le=100)
    max_rate_limit_retries: int = Field(default=30, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="DISCORD_SCRAPER_",
        env_file=".env",
        extra="ignore",
    )


def load_settings(
    auth_token: str | None = None,
    db_path: str | Path | None = None,
) -> AppSettings:
    """Load settings from the environment and apply CLI overrides.

    Args:
        auth_token: Token from the command line; wins over the environment
        db_path: Database path from the command line

    Returns:
        AppSettings instance with a non-empty auth token

    Raises:
        ConfigurationError: If no token is available or settings are invalid
    """
    try:
        settings = AppSettings()
    except ValueError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e

    overrides: dict[str, object] = {}
    if auth_token:
        overrides["auth_token"] = auth_token
    if db_path:
        overrides["db_path"] = Path(db_path)
    if overrides:
        settings = settings.model_copy(update=overrides)

    if not settings.auth_token or not settings.auth_token.strip():
        raise ConfigurationError("No authorization token found!")

    return settings


def database_url(db_path: str | Path) -> str:
    """Build the SQLAlchemy URL for a SQLite database file."""
    return f"sqlite+aiosqlite:///{Path(db_path)}"


def parse_channel_ids(values: list[str]) -> list[int]:
    """Parse channel IDs given as separate and/or comma-separated arguments.

    Duplicates are dropped while keeping the first-seen order.

    Raises:
        ConfigurationError: If an ID is not a positive integer snowflake
    """
    channel_ids: list[int] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit() or int(part) == 0:
                raise ConfigurationError(f"Invalid channel ID: {part!r}")
            channel_id = int(part)
            if channel_id not in channel_ids:
                channel_ids.append(channel_id)

    if not channel_ids:
        raise ConfigurationError("No channel IDs given")
    return channel_ids
