"""
Export utilities for extracted listings and saved choices.
"""
import sqlite3
from typing import List

import pandas as pd

from .models import ListingRecord

RECORD_COLUMNS = [
    "location", "price", "beds", "baths", "sqft", "property_type", "status",
    "price_range", "distance_from", "max_distance", "content_preview",
]


def records_frame(records: List[ListingRecord]) -> pd.DataFrame:
    """Listing records as a DataFrame with a stable column order."""
    return pd.DataFrame([r.to_dict() for r in records], columns=RECORD_COLUMNS)


def export_choices(conn: sqlite3.Connection, user_id: str) -> pd.DataFrame:
    """Export a user's saved choices."""
    q = """
    SELECT id, location, property_type, price_range, distance_from, max_distance,
           content_preview, source_url, liked, notes, created_at
    FROM real_estate_choices
    WHERE user_id = ?
    ORDER BY created_at DESC, id DESC
    """
    return pd.read_sql_query(q, conn, params=(user_id,))


def export_scrape_history(conn: sqlite3.Connection, user_id: str) -> pd.DataFrame:
    """Export a user's scrape history (without stored page content)."""
    q = """
    SELECT id, scrape_type, url, title, created_at
    FROM scraped_data
    WHERE user_id = ?
    ORDER BY created_at DESC, id DESC
    """
    return pd.read_sql_query(q, conn, params=(user_id,))


def write_frame(df: pd.DataFrame, out_path: str) -> None:
    """Write to Excel for .xlsx paths, CSV otherwise."""
    if out_path.lower().endswith(".xlsx"):
        df.to_excel(out_path, index=False)
    else:
        df.to_csv(out_path, index=False)


def save_output_rows(records: List[ListingRecord], out_path: str, logger=None):
    """Save listing records to CSV or Excel file."""
    df = records_frame(records)
    write_frame(df, out_path)

    if logger:
        logger.info(f">>> Saved {len(df)} rows to {out_path}")
    else:
        print(f">>> Saved {len(df)} rows to {out_path}")
