"""Application configuration using pydantic-settings."""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    gemini_api_key: str

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    # Uploads (matches the web client's limit)
    max_upload_size: int = 5 * 1024 * 1024  # 5MB

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or "*" for all

    # Gemini Settings
    gemini_text_model: str = "gemini-2.0-flash"
    # Only image-capable models can illustrate recipes
    gemini_image_model: str = "gemini-2.0-flash-exp"
    gemini_temperature: float = 0.7

    # Pipeline
    min_recipes: int = 6
    suggest_timeout_seconds: float = 110.0  # keep below the hosting gateway timeout

    # Performance logging
    slow_request_threshold: float = 10.0  # seconds
    very_slow_request_threshold: float = 30.0  # seconds

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of CORS origins."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
