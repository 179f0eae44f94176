"""Configuration for the Patch Reviewer service."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    environment: str = "development"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8080

    # LLM - OpenRouter (multi-provider gateway) or OpenAI directly
    openrouter_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    # GitHub - personal access token, or GitHub App authentication
    github_token: Optional[str] = None
    github_app_id: Optional[str] = None
    github_private_key: Optional[str] = None
    github_installation_id: Optional[str] = None
    github_webhook_secret: Optional[str] = None

    # Default Repository (for #123 shorthand on the command line)
    default_repo_owner: Optional[str] = None
    default_repo_name: Optional[str] = None

    # Analysis Configuration
    analysis_model: str = "gpt-4o-mini"
    analysis_temperature: float = 0.3
    pacing_interval_seconds: float = Field(default=0.5, ge=0)
    max_content_chars: int = Field(default=50_000, gt=0)
    max_files_per_review: int = Field(default=50, gt=0)

    # Hidden marker identifying the summary comment so re-runs update it
    summary_marker: str = "<!-- patch-reviewer:summary -->"


settings = Settings()
