"""Configuration loading for Referent."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from referent.errors import ConfigurationError
from referent.utils.secrets import get_secret_manager

DEFAULT_IMAGE_MODELS = [
    "black-forest-labs/FLUX.1-dev",
    "stabilityai/stable-diffusion-xl-base-1.0",
    "runwayml/stable-diffusion-v1-5",
    "stabilityai/stable-diffusion-2-1",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="REFERENT_")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(default="json", description="Log renderer")

    # Text generation
    text_provider: Literal["openrouter", "gemini"] = Field(
        default="openrouter", description="Text generation backend"
    )
    openrouter_api_key: str | None = Field(default=None, description="OpenRouter API key")
    openrouter_model: str = Field(default="deepseek/deepseek-chat")
    openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1")
    app_url: str = Field(default="http://localhost:3000", description="Sent as HTTP-Referer")
    app_title: str = Field(default="Referent - Article AI Processor", description="Sent as X-Title")
    target_language: str = Field(default="Russian", description="Language of generated artifacts")

    # GCP settings
    gcp_project_id: str | None = Field(default=None, description="Google Cloud project ID")
    gcp_region: str = Field(default="europe-west1", description="Google Cloud region")
    gemini_model: str = Field(default="gemini-2.0-flash-001")

    # Image generation
    huggingface_api_key: str | None = Field(default=None, description="Hugging Face API key")
    image_models: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IMAGE_MODELS),
        description="Image models in the order they are tried",
    )

    # Timeouts in seconds
    fetch_timeout: float = Field(default=30.0, gt=0)
    generation_timeout: float = Field(default=60.0, gt=0)
    image_timeout: float = Field(default=120.0, gt=0)

    @field_validator("openrouter_api_key", "huggingface_api_key", "gcp_project_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty values as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("image_models")
    @classmethod
    def validate_image_models(cls, v: list[str]) -> list[str]:
        """Require at least one image model."""
        models = [m.strip() for m in v if m and m.strip()]
        if not models:
            raise ValueError("REFERENT_IMAGE_MODELS must list at least one model.")
        return models


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def _resolve_api_key(settings: Settings, value: str | None, secret_id: str, label: str) -> str:
    if value:
        return value
    if settings.gcp_project_id:
        secret = get_secret_manager(settings.gcp_project_id).get_secret(secret_id)
        if secret:
            return secret
    raise ConfigurationError(f"{label} API key is not configured")


def get_openrouter_api_key(settings: Settings) -> str:
    """Get the OpenRouter key from the environment or Secret Manager."""
    return _resolve_api_key(
        settings, settings.openrouter_api_key, "openrouter-api-key", "OpenRouter"
    )


def get_huggingface_api_key(settings: Settings) -> str:
    """Get the Hugging Face key from the environment or Secret Manager."""
    return _resolve_api_key(
        settings, settings.huggingface_api_key, "huggingface-api-key", "Hugging Face"
    )
