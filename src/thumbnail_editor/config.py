"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    image_provider: Literal["gemini", "openai"] = "gemini"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash-image"
    openai_api_key: str | None = None
    openai_image_model: str = "gpt-image-1"
    upload_dir: str | None = None
    session_ttl_seconds: int = 3600
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def provider_api_key(self) -> str:
        """Return the API key for the selected provider."""
        key = (
            self.gemini_api_key
            if self.image_provider == "gemini"
            else self.openai_api_key
        )
        if not key:
            raise ValueError(f"{self.image_provider.upper()}_API_KEY required")
        return key

    def provider_model(self) -> str:
        """Return the image model name for the selected provider."""
        if self.image_provider == "gemini":
            return self.gemini_model
        return self.openai_image_model
