"""
API configuration and settings management.
"""
import os

from listing_extractor.config import config as extractor_config


class Config:
    """Application configuration."""

    # Database
    DB_PATH: str = extractor_config.DB_PATH

    # API settings
    API_TITLE: str = "Listing Extractor API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Extract real-estate listings from scraped pages and keep per-user choices"

    # CORS settings
    CORS_ORIGINS: list = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list = ["*"]
    CORS_ALLOW_HEADERS: list = ["*"]

    # Authenticated user id, set by the upstream auth gateway
    USER_HEADER: str = os.getenv("USER_HEADER", "X-User-Id")

    # Scrape history page size
    DEFAULT_HISTORY_LIMIT: int = 50
    MAX_HISTORY_LIMIT: int = 500

    # Raw markdown echoed back from /api/scrape
    RAW_PREVIEW_CHARS: int = 2000

    # Logging
    LOG_LEVEL: str = extractor_config.LOG_LEVEL

    @classmethod
    def validate(cls) -> None:
        """Validate configuration on startup."""
        if not cls.DB_PATH:
            raise ValueError("Database path not configured")
        os.makedirs(os.path.dirname(cls.DB_PATH) or ".", exist_ok=True)


# Global config instance
config = Config()
