"""
Configuration management for the WaveOrder storefront service
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "WaveOrder Storefront"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./waveorder.db"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Catalog listing
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 200
    MAX_PAGE: int = 10_000
    # Per-parameter cap on comma-separated category/collection/group/brand ids
    MAX_FILTER_IDS: int = 50
    MIN_LISTED_PRICE: float = 0.01

    # Search
    DEFAULT_SEARCH_LOCALE: str = "sq"

    # Stores whose listings fall back to the Albanian description
    # regardless of storefront language
    DESCRIPTION_FALLBACK_SLUGS: list[str] = ["swarovski", "swatch", "villeroy-boch"]

    # System events (404/500 diagnostics)
    PERSIST_SYSTEM_LOGS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
