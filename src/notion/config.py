"""Configuration for the Notion workspace using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.paths import ENV_FILE


class NotionSettings(BaseSettings):
    """Configuration for the Notion workspace.

    All settings are loaded from environment variables with the NOTION_ prefix.
    The token and the three database IDs are required, so a missing value fails
    at construction rather than when the first query runs.

    :param token: Notion integration token.
    :param tasks_db: Database ID of the tasks collection.
    :param projects_db: Database ID of the projects collection.
    :param goals_db: Database ID of the goals collection.
    :param request_timeout: Timeout in seconds for read requests.
    :param write_timeout: Timeout in seconds for create/update requests.
    :param cache_ttl_seconds: Lifetime of cached collection fetches.
    :param page_size: Results requested per query page (max 100).
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTION_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    token: str = Field(..., min_length=1, description="Notion integration token")
    tasks_db: str = Field(..., min_length=1, description="Tasks database ID")
    projects_db: str = Field(..., min_length=1, description="Projects database ID")
    goals_db: str = Field(..., min_length=1, description="Goals database ID")
    request_timeout: float = Field(
        default=15.0,
        gt=0,
        le=60,
        description="Timeout in seconds for read requests",
    )
    write_timeout: float = Field(
        default=10.0,
        gt=0,
        le=60,
        description="Timeout in seconds for create/update requests",
    )
    cache_ttl_seconds: float = Field(
        default=300.0,
        ge=0,
        description="Lifetime of cached collection fetches in seconds",
    )
    page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Results requested per query page",
    )


@lru_cache
def get_notion_settings() -> NotionSettings:
    """Get cached Notion settings.

    Settings are loaded once and cached for the lifetime of the process.

    :returns: Configured NotionSettings instance.
    :raises pydantic.ValidationError: If a required setting is missing.
    """
    return NotionSettings()  # type: ignore[call-arg]
