"""
Application Configuration Module
Handles environment variable loading and application settings.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values shipped in .env.example; treated the same as no key at all
PLACEHOLDER_API_KEYS = ("your_gemini_api_key_here", "your_google_gemini_api_key_here")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    # Missing key is reported by /health only; the server still starts
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-flash-latest"

    # Generation parameters
    gemini_temperature: float = 0.9
    gemini_top_p: float = 0.95
    gemini_top_k: int = 64
    gemini_max_output_tokens: int = 8192

    # Model caller retry policy
    model_max_attempts: int = 3

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: str = "*"  # comma-separated, e.g. "http://a.example,http://b.example"

    # Logging
    log_level: str = "INFO"
    log_format: str = ""  # "json" for structured output

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def api_key_configured(self) -> bool:
        key = (self.gemini_api_key or "").strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS

    @property
    def cors_origin_list(self) -> List[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",")]
        return [origin for origin in origins if origin] or ["*"]
