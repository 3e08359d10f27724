"""
Record store: scrape history, saved results and liked choices per user.
"""
import json
import sqlite3
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import ExtractionParams, ListingRecord, ScrapeResult
from .utils import now_iso


# Schema definitions
DDL_SCRAPED_DATA = """
CREATE TABLE IF NOT EXISTS scraped_data (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  user_id TEXT NOT NULL,
  scrape_type TEXT,
  url TEXT,
  title TEXT,
  content TEXT,
  created_at TEXT
);
"""

DDL_CHOICES = """
CREATE TABLE IF NOT EXISTS real_estate_choices (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  user_id TEXT NOT NULL,
  location TEXT,
  property_type TEXT,
  price_range TEXT,
  distance_from TEXT,
  max_distance REAL,
  content_preview TEXT,
  source_url TEXT,
  liked INTEGER DEFAULT 1,
  notes TEXT DEFAULT '',
  created_at TEXT
);
"""

DDL_RESULTS = """
CREATE TABLE IF NOT EXISTS real_estate_results (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  user_id TEXT NOT NULL,
  location TEXT,
  price TEXT,
  beds TEXT,
  baths TEXT,
  sqft TEXT,
  property_type TEXT,
  source_url TEXT,
  content_preview TEXT,
  liked INTEGER DEFAULT 0,
  created_at TEXT
);
"""

DDL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_scraped_data_user ON scraped_data(user_id, created_at);",
    "CREATE INDEX IF NOT EXISTS idx_choices_user ON real_estate_choices(user_id, created_at);",
    "CREATE INDEX IF NOT EXISTS idx_results_user ON real_estate_results(user_id);"
]


def db_connect(path: str) -> sqlite3.Connection:
    """Create database connection with optimized settings."""
    conn = sqlite3.connect(path)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    return conn


def db_init(conn: sqlite3.Connection):
    """Initialize database schema with tables and indexes."""
    conn.execute(DDL_SCRAPED_DATA)
    conn.execute(DDL_CHOICES)
    conn.execute(DDL_RESULTS)
    for ddl in DDL_INDEXES:
        conn.execute(ddl)
    conn.commit()


def row_to_dict(cur, row):
    """Convert a result row to dictionary."""
    return {desc[0]: row[i] for i, desc in enumerate(cur.description)}


def _fetch_all(conn: sqlite3.Connection, sql: str, params: tuple) -> List[Dict]:
    cur = conn.execute(sql, params)
    return [row_to_dict(cur, r) for r in cur.fetchall()]


# --- scrape history ---------------------------------------------------------

def save_scrape(conn: sqlite3.Connection, user_id: str, result: ScrapeResult) -> int:
    """Persist a scrape (params, page content and listings). Returns the row id."""
    cur = conn.execute("""
    INSERT INTO scraped_data (user_id, scrape_type, url, title, content, created_at)
    VALUES (?,?,?,?,?,?)
    """, (
        user_id, result.scrape_type, result.url, result.title,
        json.dumps(result.to_content(), ensure_ascii=False), now_iso()
    ))
    conn.commit()
    return cur.lastrowid


def _decode_scrape(row: Dict) -> Dict:
    row["content"] = json.loads(row["content"]) if row.get("content") else {}
    return row


def list_scrapes(conn: sqlite3.Connection, user_id: str, limit: int = 50) -> List[Dict]:
    """Most recent scrapes for a user, without the stored content."""
    return _fetch_all(conn, """
    SELECT id, user_id, scrape_type, url, title, created_at
    FROM scraped_data WHERE user_id = ?
    ORDER BY created_at DESC, id DESC LIMIT ?
    """, (user_id, limit))


def get_scrape(conn: sqlite3.Connection, user_id: str, scrape_id: int) -> Optional[Dict]:
    cur = conn.execute(
        "SELECT * FROM scraped_data WHERE id = ? AND user_id = ?", (scrape_id, user_id)
    )
    r = cur.fetchone()
    if not r:
        return None
    return _decode_scrape(row_to_dict(cur, r))


def delete_scrape(conn: sqlite3.Connection, user_id: str, scrape_id: int) -> bool:
    cur = conn.execute(
        "DELETE FROM scraped_data WHERE id = ? AND user_id = ?", (scrape_id, user_id)
    )
    conn.commit()
    return cur.rowcount > 0


# --- choices ----------------------------------------------------------------

def add_choice(
    conn: sqlite3.Connection,
    user_id: str,
    record: ListingRecord,
    source_url: str,
    params: Optional[ExtractionParams] = None,
    liked: bool = True,
) -> int:
    """Save a listing to the user's choices. Params fill fields the record lacks."""
    params = params or ExtractionParams()
    cur = conn.execute("""
    INSERT INTO real_estate_choices (
      user_id, location, property_type, price_range, distance_from, max_distance,
      content_preview, source_url, liked, created_at
    ) VALUES (?,?,?,?,?,?,?,?,?,?)
    """, (
        user_id,
        record.location or params.location or "N/A",
        record.property_type or params.property_type or "N/A",
        record.price_range or params.price_range_label(),
        record.distance_from or params.distance_from or None,
        record.max_distance or params.max_distance or None,
        record.summary(),
        source_url,
        int(liked),
        now_iso(),
    ))
    conn.commit()
    return cur.lastrowid


def list_choices(conn: sqlite3.Connection, user_id: str) -> List[Dict]:
    rows = _fetch_all(conn, """
    SELECT * FROM real_estate_choices WHERE user_id = ?
    ORDER BY created_at DESC, id DESC
    """, (user_id,))
    for row in rows:
        row["liked"] = bool(row["liked"])
    return rows


def get_choice(conn: sqlite3.Connection, user_id: str, choice_id: int) -> Optional[Dict]:
    cur = conn.execute(
        "SELECT * FROM real_estate_choices WHERE id = ? AND user_id = ?", (choice_id, user_id)
    )
    r = cur.fetchone()
    if not r:
        return None
    row = row_to_dict(cur, r)
    row["liked"] = bool(row["liked"])
    return row


def toggle_like(conn: sqlite3.Connection, user_id: str, choice_id: int) -> Optional[bool]:
    """Flip the liked flag. Returns the new value, or None if the choice is missing."""
    existing = get_choice(conn, user_id, choice_id)
    if existing is None:
        return None
    liked = not existing["liked"]
    conn.execute(
        "UPDATE real_estate_choices SET liked = ? WHERE id = ? AND user_id = ?",
        (int(liked), choice_id, user_id),
    )
    conn.commit()
    return liked


def set_choice_notes(conn: sqlite3.Connection, user_id: str, choice_id: int, notes: str) -> bool:
    cur = conn.execute(
        "UPDATE real_estate_choices SET notes = ? WHERE id = ? AND user_id = ?",
        (notes, choice_id, user_id),
    )
    conn.commit()
    return cur.rowcount > 0


def delete_choice(conn: sqlite3.Connection, user_id: str, choice_id: int) -> bool:
    cur = conn.execute(
        "DELETE FROM real_estate_choices WHERE id = ? AND user_id = ?", (choice_id, user_id)
    )
    conn.commit()
    return cur.rowcount > 0


# --- results ----------------------------------------------------------------

def save_results(
    conn: sqlite3.Connection,
    user_id: str,
    records: List[ListingRecord],
    source_url: str,
    liked_indexes: Iterable[int] = (),
) -> Tuple[int, int]:
    """
    Save a batch of extracted listings; liked ones are also added to choices.

    Returns:
        Tuple of (results_saved, choices_added)
    """
    liked = {i for i in liked_indexes if 0 <= i < len(records)}
    ts = now_iso()
    conn.executemany("""
    INSERT INTO real_estate_results (
      user_id, location, price, beds, baths, sqft, property_type,
      source_url, content_preview, liked, created_at
    ) VALUES (?,?,?,?,?,?,?,?,?,?,?)
    """, [
        (
            user_id, r.location, r.price, r.beds, r.baths, r.sqft,
            r.property_type or "N/A", source_url, r.content_preview, int(i in liked), ts
        )
        for i, r in enumerate(records)
    ])
    conn.executemany("""
    INSERT INTO real_estate_choices (
      user_id, location, property_type, price_range, distance_from, max_distance,
      content_preview, source_url, liked, created_at
    ) VALUES (?,?,?,?,NULL,NULL,?,?,1,?)
    """, [
        (user_id, r.location, r.property_type or "N/A", r.price, r.content_preview, source_url, ts)
        for i, r in enumerate(records) if i in liked
    ])
    conn.commit()
    return len(records), len(liked)


def list_results(conn: sqlite3.Connection, user_id: str) -> List[Dict[str, Any]]:
    rows = _fetch_all(conn, """
    SELECT * FROM real_estate_results WHERE user_id = ? ORDER BY id ASC
    """, (user_id,))
    for row in rows:
        row["liked"] = bool(row["liked"])
    return rows
