"""
Listing assembly: turns scanner output into listing records.
"""
import logging
import re
from typing import List, Optional

from .models import (
    GENERAL_PROFILE,
    STATUS_BASIC,
    STATUS_EXTRACTED,
    ExtractionParams,
    ExtractionProfile,
    ListingRecord,
    RawPageContent,
)
from .patterns import scan_addresses, scan_baths, scan_beds, scan_prices, scan_sqft

logger = logging.getLogger(__name__)

_DIGIT_GROUP_RE = re.compile(r"[0-9,]+")


def should_include_listing(price_token: str, params: ExtractionParams) -> bool:
    """
    Check a price token against the requested price band.

    Only the dollar part of the token is compared; cents are dropped. Tokens
    without a number always pass.
    """
    if not params.min_price and not params.max_price:
        return True

    m = _DIGIT_GROUP_RE.search(price_token or "")
    if not m:
        return True
    digits = m.group(0).replace(",", "")
    if not digits:
        return True
    price = int(digits)

    if params.min_price and price < int(params.min_price):
        return False
    if params.max_price and price > int(params.max_price):
        return False
    return True


def build_fallback_record(
    markdown: str,
    prices: List[str],
    params: ExtractionParams,
    profile: ExtractionProfile = GENERAL_PROFILE,
) -> ListingRecord:
    """The single record emitted when no structured listing survives."""
    price = prices[0] if prices else params.price_range_label()
    return ListingRecord(
        location=params.location or "N/A",
        price=price,
        property_type=params.property_type or "any",
        status=STATUS_BASIC,
        content_preview=markdown[:profile.preview_chars] or "No detailed content extracted",
        distance_from=params.distance_from or None,
        max_distance=params.max_distance or None,
    )


def extract_listings(
    content: Optional[RawPageContent],
    params: Optional[ExtractionParams] = None,
    profile: ExtractionProfile = GENERAL_PROFILE,
) -> List[ListingRecord]:
    """
    Extract listing records from scraped page text.

    Tokens from each scanner are paired by position: record ``i`` takes the
    i-th price, address, bed, bath and sqft match, whether or not they came
    from the same listing on the page. Always returns between 1 and
    ``profile.record_limit`` records.
    """
    content = content or RawPageContent()
    params = params or ExtractionParams()
    markdown = content.markdown_text

    prices = scan_prices(markdown)
    addresses = scan_addresses(markdown) if profile.match_addresses else []
    beds = scan_beds(markdown)
    baths = scan_baths(markdown)
    sqfts = scan_sqft(markdown)
    logger.debug(
        f"Scanned {len(markdown)} chars: prices={len(prices)} addresses={len(addresses)} "
        f"beds={len(beds)} baths={len(baths)} sqft={len(sqfts)}"
    )

    listings: List[ListingRecord] = []
    if prices and (addresses or beds):
        count = min(profile.record_limit, max(len(prices), len(addresses), len(beds)))
        property_type = params.property_type or "any"

        for i in range(count):
            price = prices[i] if i < len(prices) else "Price not found"
            address = addresses[i] if i < len(addresses) else (params.location or "Address not specified")
            bed_count = beds[i] if i < len(beds) else "N/A"
            bath_count = baths[i] if i < len(baths) else "N/A"
            sqft = sqfts[i] if i < len(sqfts) else "N/A"

            if not should_include_listing(price, params):
                logger.debug(f"Filtered out {price} at index {i}")
                continue

            listings.append(ListingRecord(
                location=address,
                price=price,
                beds=bed_count,
                baths=bath_count,
                sqft=sqft,
                property_type=property_type,
                status=STATUS_EXTRACTED,
                content_preview=f"{bed_count} bed, {bath_count} bath, {sqft} sqft",
                distance_from=params.distance_from or None,
                max_distance=params.max_distance or None,
            ))

    if not listings:
        logger.info(f"No structured listings found ({profile.name}); using basic extraction")
        listings.append(build_fallback_record(markdown, prices, params, profile))

    return listings
