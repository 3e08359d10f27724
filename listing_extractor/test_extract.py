"""
Tests for the token scanners and listing assembly.
"""
import time

import pytest

from listing_extractor import patterns
from listing_extractor.config import config
from listing_extractor.extract import build_fallback_record, extract_listings, should_include_listing
from listing_extractor.models import (
    BROWSER_PROFILE,
    GENERAL_PROFILE,
    ExtractionParams,
    ExtractionProfile,
    ListingRecord,
    RawPageContent,
)
from listing_extractor.patterns import scan_addresses, scan_baths, scan_beds, scan_prices, scan_sqft


def page(markdown, html=None):
    return RawPageContent(markdown=markdown, html=html)


def listing_lines(n):
    return "".join(
        f"- {i + 1} Oak Street, Austin ${400 + i},000\n" for i in range(n)
    )


# --- scanners ---------------------------------------------------------------

def test_scan_prices():
    """Prices keep separators, cents and duplicates, in page order."""
    text = "Was $1,234.56, now $ 99 or $450,000 (also $450,000)"
    assert scan_prices(text) == ["$1,234.56", "$ 99", "$450,000", "$450,000"]
    assert scan_prices("no prices here") == []


def test_scan_addresses():
    """Addresses need a street type and run through the following words."""
    assert scan_addresses("Visit 42 Elm Ave, Denver today") == ["42 Elm Ave, Denver today"]
    assert scan_addresses("7 oak st, austin") == ["7 oak st, austin"]
    assert scan_addresses("3 beds 2 baths") == []


def test_scan_beds_and_baths():
    """Bed and bath counts are captured case-insensitively."""
    assert scan_beds("3 Beds, 4bd, 1 bedroom") == ["3", "4", "1"]
    assert scan_baths("2.5 baths, 1 BA, 3 bathrooms") == ["2.5", "1", "3"]


def test_scan_sqft():
    """Square footage keeps its thousands separators."""
    text = "1,850 sq ft, 900 sqft and 2,000 square feet"
    assert scan_sqft(text) == ["1,850", "900", "2,000"]


def test_scan_text_is_bounded(monkeypatch):
    """Text past MAX_SCAN_CHARS is never scanned."""
    monkeypatch.setattr(config, "MAX_SCAN_CHARS", 10)
    assert scan_prices("$1 " + "x" * 20 + " $2") == ["$1"]
    assert patterns.bound_text("", 5) == ""
    assert patterns.bound_text("abcdef", 0) == "abcdef"


def test_scan_sqft_keeps_thousands_shape():
    """Only the trailing "d,ddd,ddd" part of a longer digit run is kept."""
    assert scan_sqft("1234 sqft") == ["234"]
    assert scan_sqft("12345,678 sq ft") == ["345,678"]
    assert scan_sqft("1,5,567 sqft") == ["5,567"]
    assert scan_sqft("1,000,000 square feet") == ["1,000,000"]
    assert scan_sqft("1,000, sqft") == []


def test_address_whitespace_after_number():
    """The street type must be preceded by at least one letter or a second space."""
    assert scan_addresses("1  St, Main") == ["1  St, Main"]
    assert scan_addresses("1 St, Main") == []


def test_only_ascii_digits_count():
    assert scan_beds("\u0663 beds") == []
    assert scan_beds("\uff13 beds") == []
    assert scan_prices("$\u0661\u0662") == []
    assert scan_sqft("\u0661,\u0662\u0663\u0664 sqft") == []


@pytest.mark.parametrize("scan, text", [
    (scan_addresses, "1" * 20000 + " " + "st" * 20000 + "!"),
    (scan_addresses, "1" + " " * 40000 + "!"),
    (scan_beds, "1" * 40000 + "!"),
    (scan_baths, "1" * 20000 + "." + "1" * 20000 + "!"),
    (scan_sqft, "1,000" * 10000 + "!"),
    (scan_prices, "$" + " " * 40000 + "!"),
])
def test_long_digit_and_letter_runs_scan_quickly(scan, text):
    """Runs that never complete a match are walked once, not once per digit."""
    started = time.perf_counter()
    assert scan(text) == []
    assert time.perf_counter() - started < 2.0


# --- price filter -----------------------------------------------------------

def test_filter_without_bounds_always_passes():
    assert should_include_listing("$5", ExtractionParams())
    assert should_include_listing("Price not found", ExtractionParams())


def test_filter_boundaries():
    """A $250,000 token is outside a 300k floor and inside 200k-300k."""
    assert not should_include_listing("$250,000", ExtractionParams(min_price=300000))
    assert should_include_listing("$250,000", ExtractionParams(min_price=200000, max_price=300000))
    assert not should_include_listing("$250,000", ExtractionParams(max_price=249999))
    assert should_include_listing("$250,000", ExtractionParams(min_price=250000, max_price=250000))


def test_filter_ignores_cents():
    """$1,234.56 compares as 1234."""
    assert should_include_listing("$1,234.56", ExtractionParams(min_price=1234, max_price=1234))
    assert not should_include_listing("$1,234.56", ExtractionParams(min_price=1235))


def test_filter_is_permissive_for_unparseable_tokens():
    params = ExtractionParams(min_price=100000)
    assert should_include_listing("Price not found", params)
    assert should_include_listing("$,", params)


def test_filter_treats_zero_as_unset():
    assert should_include_listing("$5", ExtractionParams(min_price=0, max_price=0))


# --- assembly ---------------------------------------------------------------

def test_positional_zip():
    """Tokens are paired by index, with placeholders for missing addresses."""
    listings = extract_listings(page("$100 1 bed, $200 2 bed"), ExtractionParams())
    assert [r.status for r in listings] == ["Extracted", "Extracted"]
    assert [r.price for r in listings] == ["$100", "$200"]
    assert [r.beds for r in listings] == ["1", "2"]
    assert [r.location for r in listings] == ["Address not specified"] * 2
    assert listings[0].content_preview == "1 bed, N/A bath, N/A sqft"


def test_positional_zip_uses_param_location():
    listings = extract_listings(page("$100 1 bed, $200 2 bed"), ExtractionParams(location="Austin, TX"))
    assert [r.location for r in listings] == ["Austin, TX", "Austin, TX"]


def test_full_listing_fields():
    markdown = "123 Main Street, Springfield - $450,000 3 beds 2.5 baths 1,850 sqft"
    params = ExtractionParams(property_type="house", distance_from="Downtown", max_distance=5)
    [record] = extract_listings(page(markdown), params)

    assert record.location.strip() == "123 Main Street, Springfield"
    assert record.price == "$450,000"
    assert (record.beds, record.baths, record.sqft) == ("3", "2.5", "1,850")
    assert record.property_type == "house"
    assert record.status == "Extracted"
    assert record.content_preview == "3 bed, 2.5 bath, 1,850 sqft"
    assert record.distance_from == "Downtown"
    assert record.max_distance == 5
    assert record.price_range == "$450,000"


def test_missing_price_slot_gets_placeholder():
    """More addresses than prices leaves later records without a price."""
    markdown = "$300,000 for 1 Oak Street, Austin and 2 Elm Road, Dallas"
    listings = extract_listings(page(markdown))
    assert len(listings) == 2
    assert listings[0].price == "$300,000"
    assert listings[1].price == "Price not found"


def test_record_cap():
    """Fifteen price/address pairs yield at most RECORD_LIMIT records."""
    markdown = listing_lines(15)
    assert len(scan_prices(markdown)) == 15
    assert len(scan_addresses(markdown)) == 15
    listings = extract_listings(page(markdown))
    assert len(listings) == GENERAL_PROFILE.record_limit == 10


def test_browser_profile_cap():
    listings = extract_listings(page(listing_lines(25)), profile=BROWSER_PROFILE)
    assert len(listings) == 20


def test_address_matching_can_be_disabled():
    """Without address matching the gate needs bedroom counts."""
    profile = ExtractionProfile(name="no-address", record_limit=10, preview_chars=100, match_addresses=False)
    listings = extract_listings(page(listing_lines(3)), profile=profile)
    assert len(listings) == 1
    assert listings[0].status == "Basic Extraction"


def test_cents_are_displayed():
    [record] = extract_listings(page("$1,234.56 3 beds"), ExtractionParams(min_price=1000))
    assert record.price == "$1,234.56"
    assert record.status == "Extracted"


def test_price_filter_excludes_record():
    listings = extract_listings(page("$250,000 3 beds"), ExtractionParams(min_price=300000))
    assert len(listings) == 1
    assert listings[0].status == "Basic Extraction"
    # The fallback still reports the first price seen on the page
    assert listings[0].price == "$250,000"

    listings = extract_listings(page("$250,000 3 beds"), ExtractionParams(min_price=200000, max_price=300000))
    assert listings[0].status == "Extracted"


def test_fallback_without_prices():
    markdown = "Lovely homes, 3 beds and 2 baths, call today"
    [record] = extract_listings(page(markdown), ExtractionParams(location="Austin, TX"))
    assert record.status == "Basic Extraction"
    assert record.location == "Austin, TX"
    assert record.price == "$0 - $No limit"
    assert record.content_preview == markdown
    assert (record.beds, record.baths, record.sqft) == ("N/A", "N/A", "N/A")
    assert record.property_type == "any"


def test_fallback_price_range_from_params():
    [record] = extract_listings(page("nothing"), ExtractionParams(min_price=100000, max_price=250000.5))
    assert record.price == "$100000 - $250000.5"


def test_gate_requires_address_or_beds():
    """A price alone is not enough structure."""
    [record] = extract_listings(page("Only $500,000 here"))
    assert record.status == "Basic Extraction"
    assert record.price == "$500,000"


def test_empty_content():
    for content in (None, RawPageContent(), page(None, html="<p>$100 1 bed</p>")):
        [record] = extract_listings(content)
        assert record.status == "Basic Extraction"
        assert record.location == "N/A"
        assert record.content_preview == "No detailed content extracted"


def test_fallback_preview_is_truncated():
    markdown = "x" * 1000
    record = build_fallback_record(markdown, [], ExtractionParams())
    assert len(record.content_preview) == GENERAL_PROFILE.preview_chars
    record = build_fallback_record(markdown, [], ExtractionParams(), BROWSER_PROFILE)
    assert len(record.content_preview) == BROWSER_PROFILE.preview_chars


@pytest.mark.parametrize("markdown", [
    "",
    "plain text",
    "$1",
    "$1 2 beds",
    listing_lines(40),
    "1 bed " * 50 + "$9",
])
def test_result_is_never_empty(markdown):
    listings = extract_listings(page(markdown))
    assert 1 <= len(listings) <= GENERAL_PROFILE.record_limit
    assert all(isinstance(r, ListingRecord) for r in listings)


def test_non_ascii_digits_fall_back():
    [record] = extract_listings(page("$\u0661\u0662 \u0663 beds"), ExtractionParams(min_price=5))
    assert record.status == "Basic Extraction"
    assert record.price == "$5 - $No limit"


def test_long_unmatched_runs_fall_back_quickly():
    started = time.perf_counter()
    [record] = extract_listings(page("1" * 20000 + " " + "st" * 20000 + "!"))
    assert time.perf_counter() - started < 2.0
    assert record.status == "Basic Extraction"


def test_calls_are_independent():
    first = extract_listings(page("$100 1 bed"))
    extract_listings(page("$999 9 bed, $1 1 bed"))
    assert extract_listings(page("$100 1 bed")) == first
