"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Editor engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SCREENFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # The app being edited
    app_name: str = Field(default="My App", description="Name of the app being edited")
    industry: str | None = Field(
        default=None, description="Industry of the app; picks the starter template and hints the assistant"
    )

    # Remote assistant
    assistant_enabled: bool = Field(default=True, description="Use the remote assistant when reachable")
    assistant_url: str = Field(default="http://localhost:5000", description="Assistant service URL")
    assistant_timeout: float = Field(default=20.0, gt=0, description="Assistant request timeout")
    context_node_cap: int = Field(
        default=25, gt=0, description="Max top-level nodes sent to the assistant"
    )

    # Persistence
    persistence_url: str = Field(default="http://localhost:5000", description="Persistence API URL")
    persistence_timeout: float = Field(default=5.0, gt=0, description="Persistence request timeout")
    app_id: str = Field(default="", description="Identifier of the app whose screens are edited")

    # Circuit breaker
    breaker_fail_max: int = Field(default=5, gt=0, description="Failures before the breaker opens")
    breaker_reset_timeout: int = Field(default=30, gt=0, description="Seconds before a retry")

    # History
    history_limit: int = Field(default=100, gt=0, le=1000, description="Undo stack depth")

    # Validation
    max_command_length: int = Field(default=2_000, gt=0, description="Max command prompt length")
    max_blueprint_size: int = Field(
        default=1024 * 1024, gt=0, description="Max blueprint document size (bytes)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
