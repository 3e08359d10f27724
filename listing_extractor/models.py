"""
Data models for the listing extractor.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .config import config
from .utils import format_amount, to_float

STATUS_EXTRACTED = "Extracted"
STATUS_BASIC = "Basic Extraction"


@dataclass(frozen=True)
class ExtractionParams:
    """User-supplied search filters. Every field is optional."""

    location: Optional[str] = None
    property_type: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    distance_from: Optional[str] = None
    max_distance: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ExtractionParams":
        """Build params from form-style input where blanks mean "not set"."""
        data = data or {}

        def text(key: str) -> Optional[str]:
            value = data.get(key)
            if value is None:
                return None
            value = str(value).strip()
            return value or None

        return cls(
            location=text("location"),
            property_type=text("property_type"),
            min_price=to_float(text("min_price")),
            max_price=to_float(text("max_price")),
            distance_from=text("distance_from"),
            max_distance=to_float(text("max_distance")),
        )

    def price_range_label(self) -> str:
        """Render the requested price band, e.g. "$0 - $No limit"."""
        low = format_amount(self.min_price) if self.min_price else "0"
        high = format_amount(self.max_price) if self.max_price else "No limit"
        return f"${low} - ${high}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RawPageContent:
    """Page text returned by the scrape provider."""

    markdown: Optional[str] = None
    html: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Optional[Mapping[str, Any]]) -> "RawPageContent":
        """Build content from a provider payload of the form {"data": {...}}."""
        data = (payload or {}).get("data") or {}
        return cls(markdown=data.get("markdown") or None, html=data.get("html") or None)

    @property
    def markdown_text(self) -> str:
        return self.markdown if isinstance(self.markdown, str) else ""

    @property
    def html_text(self) -> str:
        return self.html if isinstance(self.html, str) else ""


@dataclass(frozen=True)
class ListingRecord:
    """One extracted (or synthesized fallback) real-estate listing."""

    location: str
    price: str
    beds: str = "N/A"
    baths: str = "N/A"
    sqft: str = "N/A"
    property_type: str = "any"
    status: str = STATUS_EXTRACTED
    content_preview: str = ""
    distance_from: Optional[str] = None
    max_distance: Optional[float] = None

    @property
    def price_range(self) -> str:
        return self.price

    @property
    def has_details(self) -> bool:
        """True when beds, baths and sqft were all found."""
        return all(v and v != "N/A" for v in (self.beds, self.baths, self.sqft))

    def summary(self) -> str:
        """Preview used when a record is saved as a choice."""
        if self.has_details:
            return f"{self.beds} bed, {self.baths} bath, {self.sqft} sqft"
        return self.content_preview or "No details available"

    def to_dict(self) -> Dict[str, Any]:
        row = asdict(self)
        row["price_range"] = self.price_range
        return row

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ListingRecord":
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        return cls(**known)


@dataclass(frozen=True)
class ExtractionProfile:
    """
    Call-site settings for the extractor.

    The general search form and the embedded-browser page scrape share one
    algorithm and differ only in these knobs.
    """

    name: str
    record_limit: int
    preview_chars: int
    match_addresses: bool = True


GENERAL_PROFILE = ExtractionProfile(
    name="general",
    record_limit=config.RECORD_LIMIT,
    preview_chars=config.PREVIEW_CHARS,
)

BROWSER_PROFILE = ExtractionProfile(
    name="browser",
    record_limit=config.BROWSER_RECORD_LIMIT,
    preview_chars=config.BROWSER_PREVIEW_CHARS,
)

PROFILES: Dict[str, ExtractionProfile] = {
    GENERAL_PROFILE.name: GENERAL_PROFILE,
    BROWSER_PROFILE.name: BROWSER_PROFILE,
}


@dataclass
class ScrapeResult:
    """A fetched page plus the listings extracted from it."""

    url: str
    params: ExtractionParams
    content: RawPageContent
    listings: List[ListingRecord] = field(default_factory=list)
    scrape_type: str = "real_estate"

    @property
    def title(self) -> str:
        return f"Real Estate - {self.params.location or 'Unknown Location'}"

    def raw_preview(self, limit: int = 2000) -> str:
        return self.content.markdown_text[:limit]

    def to_content(self) -> Dict[str, Any]:
        """Payload stored with a saved scrape."""
        return {
            "params": self.params.to_dict(),
            "scraped_content": {
                "markdown": self.content.markdown_text,
                "html": self.content.html_text,
            },
            "listings": [r.to_dict() for r in self.listings],
        }
