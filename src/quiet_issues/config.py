"""Configuration management using Pydantic settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quiet_issues.github.models import RepoContext

SUPPRESSION_STRATEGIES = ("graphql", "rest")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Required settings
    github_token: str = Field(
        ...,
        description="GitHub token allowed to write issues and manage notifications",
    )

    # Optional settings
    github_repository: str | None = Field(
        default=None,
        description="Default repository to act on (owner/repo format, set by Actions runners)",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL (GraphQL lives at <url>/graphql)",
    )
    suppression_strategy: str = Field(
        default="graphql",
        description="How to unsubscribe after creating: 'graphql' or 'rest'",
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP timeout in seconds for GitHub API calls",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("github_repository")
    @classmethod
    def _check_repository(cls, value: str | None) -> str | None:
        if value is not None:
            RepoContext.from_full_name(value)
        return value

    @field_validator("suppression_strategy")
    @classmethod
    def _check_strategy(cls, value: str) -> str:
        value = value.lower()
        if value not in SUPPRESSION_STRATEGIES:
            raise ValueError(f"suppression_strategy must be one of {SUPPRESSION_STRATEGIES}")
        return value

    def repo_context(self) -> RepoContext:
        """Get the repository the helper acts on."""
        if not self.github_repository:
            raise ValueError("No repository configured: set GITHUB_REPOSITORY or pass --repo")
        return RepoContext.from_full_name(self.github_repository)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
