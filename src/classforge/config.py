"""Library configuration with pydantic-settings.

All fields have sensible defaults and can be overridden through environment
variables prefixed with ``CLASSFORGE_`` or a local ``.env`` file.

Usage:
    from classforge.config import get_settings

    settings = get_settings()
    settings.database_url  # sqlite:////home/me/.config/classforge/classforge.sqlite3
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_PATH = Path.home() / ".config" / "classforge" / "classforge.sqlite3"


class Settings(BaseSettings):
    """classforge settings."""

    model_config = SettingsConfigDict(
        env_prefix="CLASSFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Storage ===

    database_path: Path = Field(
        default=DEFAULT_DATABASE_PATH,
        description="Path of the SQLite database holding classes and projects",
    )

    # === Logging ===

    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    # === Remote repositories ===

    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    gitlab_api_url: str = Field(
        default="https://gitlab.com/api/v4",
        description="GitLab REST API base URL",
    )
    github_token: str | None = Field(
        default=None,
        description="Optional GitHub token (raises rate limits, allows private repos)",
    )
    gitlab_token: str | None = Field(
        default=None,
        description="Optional GitLab personal access token",
    )
    default_branch: str = Field(
        default="master",
        description="Branch used when a repository URL does not name one",
    )
    page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Entries requested per page from paginated tree endpoints",
    )
    max_pages: int = Field(
        default=1000,
        ge=1,
        description="Upper bound on pages fetched for a single tree",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for ``database_path``."""
        return f"sqlite:///{self.database_path.expanduser()}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
