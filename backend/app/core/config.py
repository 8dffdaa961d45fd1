"""Application configuration loaded from environment variables.

All configuration is via environment variables (or a local .env file).
No hardcoded credentials: provider API keys live in the api_settings table,
the values below only tune how the service talks to the providers.
"""

from functools import lru_cache

from pydantic import Field, PostgresDsn
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CLAUDE_MODELS = [
    "claude-3-haiku-20240307",
    "claude-3-5-haiku-20241022",
    "claude-haiku-4-5-20251001",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Post Translation Service")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # Server
    port: int = Field(default=8000, description="Port to bind to")
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    frontend_url: str | None = Field(
        default=None, description="Allowed CORS origin for the admin frontend"
    )

    # Database
    database_url: PostgresDsn = Field(
        ...,
        description="PostgreSQL connection string",
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size")
    db_max_overflow: int = Field(default=10, description="Max overflow connections")
    db_pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    db_slow_query_threshold_ms: int = Field(
        default=100, description="Threshold for slow query warnings (ms)"
    )
    db_connect_timeout: int = Field(
        default=60, description="Connection timeout in seconds"
    )
    db_command_timeout: int = Field(
        default=60, description="Command timeout in seconds"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format: json or text")

    # Claude/Anthropic LLM
    anthropic_api_url: str = Field(
        default="https://api.anthropic.com", description="Anthropic API base URL"
    )
    claude_model: str = Field(
        default="claude-3-haiku-20240307",
        description="Claude model used when the request does not pick one",
    )
    claude_allowed_models: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CLAUDE_MODELS),
        description="Claude models a translation request may select",
    )
    claude_timeout: float = Field(
        default=120.0, description="Claude API request timeout in seconds"
    )

    # OpenAI LLM
    openai_api_url: str = Field(
        default="https://api.openai.com/v1", description="OpenAI API base URL"
    )
    openai_model: str = Field(
        default="gpt-4o-mini", description="OpenAI model used for translations"
    )
    openai_timeout: float = Field(
        default=120.0, description="OpenAI API request timeout in seconds"
    )

    # Translation
    translation_max_tokens: int = Field(
        default=4096, description="Maximum tokens in a translation response"
    )
    translation_temperature: float = Field(
        default=0.2, description="Sampling temperature for translations"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
