"""Application configuration using pydantic-settings.

All environment variables should be accessed through the settings object
rather than using os.getenv() directly.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Database - defaults to relative path for Docker, override via env for local dev
    database_url: str = "sqlite:///./data/kiosk_menu.db"

    # CORS - comma-separated origins or "*" for development only
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    # Server
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_editor: str = "60/minute"  # kiosk editor mutations
    rate_limit_read: str = "120/minute"

    # Kiosk menu
    kiosk_max_category_name: int = 100

    @field_validator("kiosk_max_category_name")
    @classmethod
    def validate_category_name_length(cls, v: int) -> int:
        # kiosk_categories.name is String(100)
        if v < 1 or v > 100:
            raise ValueError("kiosk_max_category_name must be between 1 and 100")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Warn about development-only settings outside debug mode."""
        import warnings

        if not self.debug and self.cors_origins == "*":
            warnings.warn(
                "CORS_ORIGINS is '*' in production mode. "
                "Set CORS_ORIGINS to the kiosk and admin front-end origins.",
                UserWarning,
                stacklevel=2,
            )
        return self

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list, filtering localhost in production."""
        if self.cors_origins == "*":
            return ["*"]

        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

        # Filter out localhost origins in production mode
        if not self.debug:
            localhost_patterns = ["localhost", "127.0.0.1", "0.0.0.0"]
            origins = [o for o in origins if not any(p in o for p in localhost_patterns)]

        return origins


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
