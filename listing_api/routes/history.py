"""
Scrape history route handlers.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from listing_extractor.database import delete_scrape, get_scrape, list_scrapes, save_scrape
from listing_extractor.models import RawPageContent, ScrapeResult

from ..auth import get_current_user
from ..config import config
from ..database import get_db_connection
from ..models import SaveScrapeRequest, ScrapeDetail, ScrapeSummary

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/scrapes", tags=["history"])


@router.post("", response_model=ScrapeSummary, status_code=201)
async def create_scrape(body: SaveScrapeRequest, user_id: str = Depends(get_current_user)):
    """Save a scrape to the user's history."""
    result = ScrapeResult(
        url=body.url,
        params=body.params.to_params(),
        content=RawPageContent(markdown=body.markdown, html=body.html),
        listings=[item.to_record() for item in body.listings],
        scrape_type=body.scrape_type,
    )
    try:
        with get_db_connection() as conn:
            scrape_id = save_scrape(conn, user_id, result)
            row = get_scrape(conn, user_id, scrape_id)
    except Exception as e:
        logger.error(f"Error saving scrape for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save to database")

    return ScrapeSummary(**row)


@router.get("", response_model=List[ScrapeSummary])
async def get_scrapes(
    user_id: str = Depends(get_current_user),
    limit: int = Query(config.DEFAULT_HISTORY_LIMIT, ge=1, le=config.MAX_HISTORY_LIMIT),
):
    """List the user's saved scrapes, newest first."""
    try:
        with get_db_connection() as conn:
            rows = list_scrapes(conn, user_id, limit)
        return [ScrapeSummary(**row) for row in rows]

    except Exception as e:
        logger.error(f"Error loading history for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{scrape_id}", response_model=ScrapeDetail)
async def get_scrape_detail(scrape_id: int, user_id: str = Depends(get_current_user)):
    """Get one saved scrape with its stored content."""
    try:
        with get_db_connection() as conn:
            row = get_scrape(conn, user_id, scrape_id)
        if not row:
            raise HTTPException(status_code=404, detail="Scrape not found")

        return ScrapeDetail(**row)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching scrape {scrape_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{scrape_id}", status_code=204)
async def remove_scrape(scrape_id: int, user_id: str = Depends(get_current_user)):
    """Delete a saved scrape."""
    try:
        with get_db_connection() as conn:
            deleted = delete_scrape(conn, user_id, scrape_id)
        if not deleted:
            raise HTTPException(status_code=404, detail="Scrape not found")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting scrape {scrape_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
