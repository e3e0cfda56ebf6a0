"""Gateway and client configuration, read from the environment or a .env file."""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM Provider Selection
    llm_provider: LLMProvider = LLMProvider.ANTHROPIC

    # Anthropic Configuration
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Google Gemini Configuration
    google_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # LLM Settings
    llm_temperature: float = 0.0
    llm_max_tokens: int = 1500
    llm_timeout: float = 60.0  # Seconds, applied to the single upstream call

    # Image payloads are forwarded as-is, the client only sends JPEG-compatible data
    image_media_type: str = "image/jpeg"

    # CORS
    cors_origins: list[str] = ["*"]

    # Client
    api_base_url: str = "http://localhost:8000"
    client_timeout: float = 90.0

    # Logging
    log_level: str = "INFO"

    # App
    debug: bool = False
    app_name: str = "Fridge Check API"
    api_version: str = "1.0.0"

    @property
    def llm_api_key(self) -> str:
        """Credential for the selected provider, empty when unset."""
        match self.llm_provider:
            case LLMProvider.OPENAI:
                return self.openai_api_key
            case LLMProvider.GEMINI:
                return self.google_api_key
            case _:
                return self.anthropic_api_key

    @property
    def is_llm_configured(self) -> bool:
        return bool(self.llm_api_key)

    @property
    def llm_model(self) -> str:
        """Model name for the selected provider."""
        match self.llm_provider:
            case LLMProvider.OPENAI:
                return self.openai_model
            case LLMProvider.GEMINI:
                return self.gemini_model
            case _:
                return self.anthropic_model


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
