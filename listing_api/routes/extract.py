"""
API route handlers for extraction and live scraping.
"""
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException

from listing_extractor.core import run_scrape
from listing_extractor.extract import extract_listings
from listing_extractor.models import PROFILES, ExtractionProfile, RawPageContent
from listing_extractor.scrape_client import ScrapeClient, ScrapeProviderError

from ..config import config
from ..models import ExtractRequest, ExtractResponse, ListingOut, ScrapeRequest, ScrapeResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["extract"])


def resolve_profile(name: str) -> ExtractionProfile:
    profile = PROFILES.get(name)
    if profile is None:
        raise HTTPException(status_code=422, detail=f"Unknown profile: {name}")
    return profile


async def get_scrape_client() -> AsyncIterator[ScrapeClient]:
    """Dependency yielding a provider client for the duration of a request."""
    async with ScrapeClient() as client:
        yield client


@router.post("/extract", response_model=ExtractResponse)
def extract_from_content(body: ExtractRequest):
    """Extract listings from page text the client already has."""
    profile = resolve_profile(body.profile)
    content = RawPageContent(markdown=body.markdown, html=body.html)
    listings = extract_listings(content, body.params.to_params(), profile)
    return ExtractResponse(
        profile=profile.name,
        record_limit=profile.record_limit,
        total=len(listings),
        listings=[ListingOut.from_record(r) for r in listings],
    )


@router.post("/scrape", response_model=ScrapeResponse)
async def scrape_and_extract(body: ScrapeRequest, client: ScrapeClient = Depends(get_scrape_client)):
    """Fetch a page through the scrape provider and extract its listings."""
    profile = resolve_profile(body.profile)
    try:
        result = await run_scrape(
            body.url,
            body.params.to_params(),
            client=client,
            profile=profile,
            formats=body.formats,
        )
    except ScrapeProviderError as e:
        logger.error(f"Scrape failed for {body.url}: {e}")
        raise HTTPException(
            status_code=e.status_code,
            detail={"error": str(e), "details": e.details},
        )

    return ScrapeResponse(
        source_url=result.url,
        title=result.title,
        total=len(result.listings),
        listings=[ListingOut.from_record(r) for r in result.listings],
        raw_content=result.raw_preview(config.RAW_PREVIEW_CHARS),
    )
