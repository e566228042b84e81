"""Application configuration using pydantic-settings."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Browserless (managed headless browser for capture)
    browserless_api_key: Optional[str] = None
    browserless_base_url: str = "https://production-sfo.browserless.io"

    # Public CORS relay used when direct fetches are blocked
    cors_proxy_url: str = "https://api.allorigins.win/get"

    # Per-strategy capture timeouts (seconds)
    capture_browser_timeout: float = 45.0
    capture_fetch_timeout: float = 20.0
    capture_proxy_timeout: float = 25.0
    # Append the always-succeeds template strategy to the capture chain
    capture_template_fallback: bool = True

    # Anthropic (text rewriting and roasts)
    anthropic_api_key: Optional[str] = None
    claude_model: str = "claude-sonnet-4-20250514"
    rewrite_max_tokens: int = 4000

    # OpenAI (image restyling, optional)
    openai_api_key: Optional[str] = None
    image_model: str = "dall-e-3"
    image_edit_model: str = "gpt-image-1"
    image_transform_batch_size: int = 3
    image_transform_max_images: int = 5
    image_cache_capacity: int = 256

    # ElevenLabs (roast narration, optional)
    elevenlabs_api_key: Optional[str] = None
    elevenlabs_voice_id: str = "UgBBYS2sOqTuMpoF3BR0"
    elevenlabs_model_id: str = "eleven_multilingual_v2"

    # Preview storage
    preview_store: Literal["memory", "supabase"] = "memory"
    preview_ttl_hours: int = 24
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None

    # CORS
    cors_origins: str = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings for testing."""
    global _settings
    _settings = None
