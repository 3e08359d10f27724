"""
Route handlers for liked choices and saved page results.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from listing_extractor.database import (
    add_choice, delete_choice, get_choice, list_choices,
    save_results, set_choice_notes, toggle_like
)
from listing_extractor.export import export_choices

from ..auth import get_current_user
from ..database import get_db_connection
from ..models import ChoiceIn, ChoiceOut, NotesIn, ResultsIn, ResultsSaved

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["choices"])


@router.post("/choices", response_model=ChoiceOut, status_code=201)
async def create_choice(body: ChoiceIn, user_id: str = Depends(get_current_user)):
    """Add a listing to the user's choices."""
    try:
        with get_db_connection() as conn:
            choice_id = add_choice(
                conn, user_id, body.listing.to_record(), body.source_url, body.params.to_params()
            )
            row = get_choice(conn, user_id, choice_id)
    except Exception as e:
        logger.error(f"Error adding to choices: {e}")
        raise HTTPException(status_code=500, detail="Failed to add to choices")

    return ChoiceOut(**row)


@router.get("/choices", response_model=List[ChoiceOut])
async def get_choices(user_id: str = Depends(get_current_user)):
    """List the user's choices, newest first."""
    try:
        with get_db_connection() as conn:
            rows = list_choices(conn, user_id)
        return [ChoiceOut(**row) for row in rows]

    except Exception as e:
        logger.error(f"Error loading choices for {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/choices/{choice_id}/like", response_model=ChoiceOut)
async def flip_like(choice_id: int, user_id: str = Depends(get_current_user)):
    """Toggle the liked flag on a choice."""
    try:
        with get_db_connection() as conn:
            liked = toggle_like(conn, user_id, choice_id)
            if liked is None:
                raise HTTPException(status_code=404, detail="Choice not found")
            row = get_choice(conn, user_id, choice_id)
        return ChoiceOut(**row)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error toggling like on {choice_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/choices/{choice_id}/notes", response_model=ChoiceOut)
async def update_notes(choice_id: int, body: NotesIn, user_id: str = Depends(get_current_user)):
    """Replace the notes on a choice."""
    try:
        with get_db_connection() as conn:
            if not set_choice_notes(conn, user_id, choice_id, body.notes):
                raise HTTPException(status_code=404, detail="Choice not found")
            row = get_choice(conn, user_id, choice_id)
        return ChoiceOut(**row)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating notes on {choice_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/choices/{choice_id}", status_code=204)
async def remove_choice(choice_id: int, user_id: str = Depends(get_current_user)):
    """Delete a choice."""
    try:
        with get_db_connection() as conn:
            deleted = delete_choice(conn, user_id, choice_id)
        if not deleted:
            raise HTTPException(status_code=404, detail="Choice not found")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting choice {choice_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/choices/export/csv")
async def export_choices_csv(user_id: str = Depends(get_current_user)):
    """Export the user's choices as CSV."""
    try:
        with get_db_connection() as conn:
            df = export_choices(conn, user_id)

        csv_content = df.to_csv(index=False).encode('utf-8')

        return StreamingResponse(
            iter([csv_content]),
            media_type='text/csv',
            headers={'Content-Disposition': 'attachment; filename="choices.csv"'}
        )

    except Exception as e:
        logger.error(f"Error exporting CSV: {e}")
        raise HTTPException(status_code=500, detail="Error generating CSV export")


@router.post("/results", response_model=ResultsSaved, status_code=201)
async def create_results(body: ResultsIn, user_id: str = Depends(get_current_user)):
    """Save page results; liked ones are also added to choices."""
    if not body.listings:
        raise HTTPException(status_code=400, detail="No results to save")
    try:
        with get_db_connection() as conn:
            saved, liked = save_results(
                conn, user_id, [item.to_record() for item in body.listings],
                body.source_url, body.liked
            )
        return ResultsSaved(saved=saved, liked=liked)

    except Exception as e:
        logger.error(f"Error saving results: {e}")
        raise HTTPException(status_code=500, detail="Failed to save results")
