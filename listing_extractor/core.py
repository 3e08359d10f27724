"""
Core scrape orchestration: fetch a page, then extract listings from it.
"""
import asyncio
from typing import List, Optional

from .extract import extract_listings
from .models import GENERAL_PROFILE, BROWSER_PROFILE, ExtractionParams, ExtractionProfile, ScrapeResult
from .scrape_client import ScrapeClient


async def run_scrape(
    url: str,
    params: Optional[ExtractionParams] = None,
    client: Optional[ScrapeClient] = None,
    profile: ExtractionProfile = GENERAL_PROFILE,
    formats: Optional[List[str]] = None,
    logger=None
) -> ScrapeResult:
    """
    Scrape one URL through the provider and extract its listings.

    The browser profile only asks the provider for markdown, which is all the
    extractor reads.
    """
    params = params or ExtractionParams()
    if formats is None:
        formats = ["markdown"] if profile is BROWSER_PROFILE else ["markdown", "html"]

    if client is None:
        async with ScrapeClient() as own_client:
            content = await own_client.fetch(url, formats=formats)
    else:
        content = await client.fetch(url, formats=formats)

    # scanning runs off the event loop
    listings = await asyncio.to_thread(extract_listings, content, params, profile)
    if logger:
        logger.info(f">>> {url}: {len(listings)} listing(s) [{listings[0].status}]")

    return ScrapeResult(url=url, params=params, content=content, listings=listings)
