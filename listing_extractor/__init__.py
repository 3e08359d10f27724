"""
Real-estate listing extractor package.
"""
from .models import (
    ExtractionParams,
    RawPageContent,
    ListingRecord,
    ExtractionProfile,
    ScrapeResult,
    GENERAL_PROFILE,
    BROWSER_PROFILE,
)
from .extract import extract_listings, should_include_listing, build_fallback_record
from .core import run_scrape
from .scrape_client import ScrapeClient, ScrapeProviderError
from .database import (
    db_connect,
    db_init,
    save_scrape,
    add_choice,
    save_results
)
from .export import save_output_rows
from .utils import init_logger, now_iso

__version__ = "1.0.0"

__all__ = [
    "ExtractionParams",
    "RawPageContent",
    "ListingRecord",
    "ExtractionProfile",
    "ScrapeResult",
    "GENERAL_PROFILE",
    "BROWSER_PROFILE",
    "extract_listings",
    "should_include_listing",
    "build_fallback_record",
    "run_scrape",
    "ScrapeClient",
    "ScrapeProviderError",
    "db_connect",
    "db_init",
    "save_scrape",
    "add_choice",
    "save_results",
    "save_output_rows",
    "init_logger",
    "now_iso"
]
