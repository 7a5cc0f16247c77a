"""
Configuration management for the Food Guess API.
Loads environment variables using Pydantic Settings.
"""

from functools import lru_cache
from typing import List, Optional, Union
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "Food Guess API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS Configuration (will be parsed by model_validator)
    CORS_ORIGINS: Union[str, List[str]] = ["*"]

    # Upstream inference API
    OPENAI_API_KEY: Optional[str] = None  # Checked per request, not at startup
    OPENAI_API_URL: str = "https://api.openai.com/v1/responses"
    OPENAI_MODEL: str = "gpt-4.1-mini"
    HTTP_TIMEOUT_SECONDS: float = 60.0

    # Request limits
    MAX_IMAGE_BASE64_LENGTH: int = 3_500_000

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins(cls, values):
        """Parse CORS_ORIGINS from comma-separated string to list."""
        if isinstance(values, dict) and isinstance(values.get("CORS_ORIGINS"), str):
            values["CORS_ORIGINS"] = [
                origin.strip() for origin in values["CORS_ORIGINS"].split(",")
            ]
        return values

    @property
    def upstream_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)


@lru_cache
def get_settings() -> Settings:
    """
    Get the process-wide settings instance.
    Used as a FastAPI dependency so tests can override it.
    """
    return Settings()
