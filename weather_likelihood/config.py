"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_likelihood.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
    )
    allowed_origins: str = "http://localhost:5173"

    # Request Handling
    request_timeout_seconds: float = 90.0

    # Logging
    log_level: str = "INFO"

    # Generative provider (OpenAI-compatible endpoint)
    gemini_api_key: str = ""
    generative_api_base_url: str = (
        "https://generativelanguage.googleapis.com/v1beta/openai/"
    )
    generative_model: str = "gemini-flash-latest"
    generative_temperature: float = 0.7
    generative_top_p: float = 0.95
    # Sent via extra_body only when > 0; the OpenAI-compatible schema has no top_k
    generative_top_k: int = 0
    generative_max_output_tokens: int = 8192
    analysis_timeout_seconds: float = 60.0

    # Weather data provider (Visual Crossing)
    visual_crossing_api_key: str = ""
    weather_api_base_url: str = (
        "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
    )
    weather_api_timeout: float = 30.0
    historical_years: int = 5
    weather_data_enabled: bool = True

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated allowed origins into a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def missing_required_keys(self) -> List[str]:
        """Names of required API keys that are not configured."""
        missing = []
        if not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")
        if not self.visual_crossing_api_key:
            missing.append("VISUAL_CROSSING_API_KEY")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def validate_settings(settings: Settings) -> None:
    """Raise ConfigurationError if a required API key is absent."""
    missing = settings.missing_required_keys()
    if missing:
        raise ConfigurationError(
            f"{', '.join(missing)} not set in environment variables",
            missing=missing,
        )
