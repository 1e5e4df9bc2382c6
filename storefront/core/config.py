"""Storefront Configuration"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Catalog service
    catalog_base_url: str = "https://job-task-ecommerce.vercel.app/api"
    request_timeout: float = 30.0

    # Checkout
    checkout_success_delay: float = 3.0  # seconds the confirmation stays visible

    # Sessions
    session_max_age_hours: int = 24


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
