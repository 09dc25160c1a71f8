"""Core configuration for counterboard.

Configuration is loaded from environment variables and a local `.env` file
(if present). Tests can override the env file via `AppConfig(_env_file=path)`.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from counterboard.core.logging import configure_logging


class LLMConfig(BaseSettings):
    """Configuration for LLM providers."""

    provider: Literal["openai", "offline"] = Field(
        default="openai",
        description="LLM provider to use",
    )

    # OpenAI settings
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model to use",
    )
    openai_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Temperature for OpenAI model",
    )
    openai_base_url: str | None = Field(
        default=None,
        description="Override for OpenAI-compatible endpoints",
    )

    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Transport timeout for a single LLM call",
    )

    model_config = SettingsConfigDict(
        env_prefix="COUNTERBOARD_LLM_",
        env_file=".env",
        extra="ignore",
    )


class AppConfig(BaseSettings):
    """Main configuration for counterboard."""

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="LLM configuration",
    )

    model_config = SettingsConfigDict(
        env_prefix="COUNTERBOARD_",
        env_file=".env",
        extra="ignore",
    )

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        level = "DEBUG" if self.debug else self.log_level
        configure_logging(level, fmt=self.log_format)
