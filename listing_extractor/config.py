"""
Extractor configuration and settings management.
"""
import os


class Config:
    """Extraction and scrape provider settings."""

    # Record caps per call site
    RECORD_LIMIT: int = int(os.getenv("RECORD_LIMIT", "10"))
    BROWSER_RECORD_LIMIT: int = int(os.getenv("BROWSER_RECORD_LIMIT", "20"))

    # Fallback preview lengths
    PREVIEW_CHARS: int = int(os.getenv("PREVIEW_CHARS", "300"))
    BROWSER_PREVIEW_CHARS: int = int(os.getenv("BROWSER_PREVIEW_CHARS", "200"))

    # Upper bound on text handed to the scanners
    MAX_SCAN_CHARS: int = int(os.getenv("MAX_SCAN_CHARS", "1000000"))

    # Remote scrape provider
    FIRECRAWL_API_URL: str = os.getenv("FIRECRAWL_API_URL", "https://api.firecrawl.dev/v1/scrape")
    FIRECRAWL_API_KEY: str = os.getenv("FIRECRAWL_API_KEY", "")
    SCRAPE_TIMEOUT: float = float(os.getenv("SCRAPE_TIMEOUT", "60"))

    # Record store
    DB_PATH: str = os.getenv("LISTINGS_DB", "./data/db/listings.db")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


# Global config instance
config = Config()
