"""
Pydantic models for API request/response serialization.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from listing_extractor.models import ExtractionParams, ListingRecord


class ParamsIn(BaseModel):
    """Search filters as submitted by the client."""
    location: Optional[str] = None
    property_type: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    distance_from: Optional[str] = None
    max_distance: Optional[float] = None

    def to_params(self) -> ExtractionParams:
        return ExtractionParams.from_mapping(self.model_dump())


class ListingOut(BaseModel):
    """Output model for one listing record."""
    location: str
    price: str
    beds: str = "N/A"
    baths: str = "N/A"
    sqft: str = "N/A"
    property_type: str = "any"
    status: str = "Extracted"
    price_range: str = ""
    content_preview: str = ""
    distance_from: Optional[str] = None
    max_distance: Optional[float] = None

    @classmethod
    def from_record(cls, record: ListingRecord) -> "ListingOut":
        return cls(**record.to_dict())

    def to_record(self) -> ListingRecord:
        return ListingRecord.from_dict(self.model_dump())


class ExtractRequest(BaseModel):
    markdown: Optional[str] = None
    html: Optional[str] = None
    params: ParamsIn = Field(default_factory=ParamsIn)
    profile: str = "general"


class ExtractResponse(BaseModel):
    profile: str
    record_limit: int
    total: int
    listings: List[ListingOut]


class ScrapeRequest(BaseModel):
    url: str
    params: ParamsIn = Field(default_factory=ParamsIn)
    profile: str = "general"
    formats: Optional[List[str]] = None


class ScrapeResponse(BaseModel):
    success: bool = True
    source_url: str
    title: str
    total: int
    listings: List[ListingOut]
    raw_content: str = ""


class SaveScrapeRequest(BaseModel):
    """A scrape the client wants kept in its history."""
    url: str
    scrape_type: str = "real_estate"
    params: ParamsIn = Field(default_factory=ParamsIn)
    markdown: Optional[str] = None
    html: Optional[str] = None
    listings: List[ListingOut] = Field(default_factory=list)


class ScrapeSummary(BaseModel):
    id: int
    scrape_type: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    created_at: Optional[str] = None


class ScrapeDetail(ScrapeSummary):
    content: Dict = Field(default_factory=dict)


class ChoiceIn(BaseModel):
    listing: ListingOut
    source_url: str
    params: ParamsIn = Field(default_factory=ParamsIn)


class ChoiceOut(BaseModel):
    id: int
    location: Optional[str] = None
    property_type: Optional[str] = None
    price_range: Optional[str] = None
    distance_from: Optional[str] = None
    max_distance: Optional[float] = None
    content_preview: Optional[str] = None
    source_url: Optional[str] = None
    liked: bool = True
    notes: Optional[str] = ""
    created_at: Optional[str] = None


class NotesIn(BaseModel):
    notes: str = ""


class ResultsIn(BaseModel):
    """A batch of page listings; ``liked`` holds indexes into ``listings``."""
    source_url: str
    listings: List[ListingOut]
    liked: List[int] = Field(default_factory=list)


class ResultsSaved(BaseModel):
    saved: int
    liked: int
