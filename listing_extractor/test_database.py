"""
Tests for the SQLite record store and exports.
"""
import pytest

from listing_extractor.database import (
    add_choice, db_connect, db_init, delete_choice, delete_scrape, get_choice,
    get_scrape, list_choices, list_results, list_scrapes, save_results,
    save_scrape, set_choice_notes, toggle_like
)
from listing_extractor.export import export_choices, records_frame, save_output_rows
from listing_extractor.extract import extract_listings
from listing_extractor.models import ExtractionParams, ListingRecord, RawPageContent, ScrapeResult


@pytest.fixture
def conn(tmp_path):
    c = db_connect(str(tmp_path / "listings.db"))
    db_init(c)
    yield c
    c.close()


def sample_result():
    params = ExtractionParams(location="Austin, TX", min_price=100000)
    content = RawPageContent(markdown="1 Oak Street, Austin $400,000 3 beds 2 baths 1,500 sqft")
    return ScrapeResult(
        url="https://homes.example/austin",
        params=params,
        content=content,
        listings=extract_listings(content, params),
    )


def test_scrape_history_is_per_user(conn):
    scrape_id = save_scrape(conn, "alice", sample_result())

    [summary] = list_scrapes(conn, "alice")
    assert summary["id"] == scrape_id
    assert summary["title"] == "Real Estate - Austin, TX"
    assert "content" not in summary
    assert list_scrapes(conn, "bob") == []

    detail = get_scrape(conn, "alice", scrape_id)
    assert detail["content"]["listings"][0]["price"] == "$400,000"
    assert detail["content"]["params"]["min_price"] == 100000
    assert get_scrape(conn, "bob", scrape_id) is None

    assert not delete_scrape(conn, "bob", scrape_id)
    assert delete_scrape(conn, "alice", scrape_id)
    assert get_scrape(conn, "alice", scrape_id) is None


def test_add_choice_uses_summary(conn):
    record = sample_result().listings[0]
    choice_id = add_choice(conn, "alice", record, "https://homes.example/austin")

    choice = get_choice(conn, "alice", choice_id)
    assert choice["content_preview"] == "3 bed, 2 bath, 1,500 sqft"
    assert choice["price_range"] == "$400,000"
    assert choice["liked"] is True
    assert choice["notes"] == ""


def test_add_choice_falls_back_to_params(conn):
    record = ListingRecord(location="", price="", property_type="")
    params = ExtractionParams(location="Reno, NV", property_type="house", distance_from="Airport")
    choice_id = add_choice(conn, "alice", record, "https://x", params)

    choice = get_choice(conn, "alice", choice_id)
    assert choice["location"] == "Reno, NV"
    assert choice["property_type"] == "house"
    assert choice["price_range"] == "$0 - $No limit"
    assert choice["distance_from"] == "Airport"
    assert choice["content_preview"] == "No details available"


def test_choice_updates(conn):
    choice_id = add_choice(conn, "alice", ListingRecord(location="a", price="$1"), "https://x")

    assert toggle_like(conn, "alice", choice_id) is False
    assert toggle_like(conn, "alice", choice_id) is True
    assert toggle_like(conn, "bob", choice_id) is None

    assert set_choice_notes(conn, "alice", choice_id, "close to school")
    assert not set_choice_notes(conn, "bob", choice_id, "mine now")
    assert list_choices(conn, "alice")[0]["notes"] == "close to school"

    assert not delete_choice(conn, "bob", choice_id)
    assert delete_choice(conn, "alice", choice_id)
    assert list_choices(conn, "alice") == []


def test_save_results_copies_liked(conn):
    records = [
        ListingRecord(location="1 Oak St", price="$100", content_preview="1 bed, N/A bath, N/A sqft"),
        ListingRecord(location="2 Elm Rd", price="$200", content_preview="2 bed, N/A bath, N/A sqft"),
    ]
    saved, liked = save_results(conn, "alice", records, "https://x", liked_indexes=[1, 7])
    assert (saved, liked) == (2, 1)

    rows = list_results(conn, "alice")
    assert [r["liked"] for r in rows] == [False, True]
    [choice] = list_choices(conn, "alice")
    assert choice["location"] == "2 Elm Rd"
    assert choice["price_range"] == "$200"
    assert choice["distance_from"] is None


def test_exports(conn, tmp_path):
    add_choice(conn, "alice", ListingRecord(location="a", price="$1"), "https://x")
    df = export_choices(conn, "alice")
    assert list(df["location"]) == ["a"]
    assert export_choices(conn, "bob").empty

    records = sample_result().listings
    frame = records_frame(records)
    assert frame.loc[0, "price"] == "$400,000"

    out = tmp_path / "out.csv"
    save_output_rows(records, str(out))
    assert out.read_text(encoding="utf-8").splitlines()[0].startswith("location,price,beds")
