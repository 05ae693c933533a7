import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TITLE_SENTINEL = "Título não disponível"
PRICE_SENTINEL = "Preço não informado"
LOCATION_SENTINEL = "Localização não informada"
DESCRIPTION_SENTINEL = "Descrição não disponível"
DEFAULT_LOCATION_LABEL = "Brasil"

MAX_PER_SOURCE_LIMIT = 50


class SourceName(str, Enum):
    OLX = "OLX"
    WEBMOTORS = "Webmotors"
    ICARROS = "iCarros"


class CamelModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Listing(CamelModel):
    id: str
    title: str = TITLE_SENTINEL
    price: str = PRICE_SENTINEL
    location: str = LOCATION_SENTINEL
    description: str = DESCRIPTION_SENTINEL
    image_url: Optional[str] = None
    detail_url: Optional[str] = None
    year: Optional[str] = None
    mileage_text: Optional[str] = None
    fuel: Optional[str] = None
    transmission: Optional[str] = None
    color: Optional[str] = None
    source_name: SourceName
    scraped_at: datetime.datetime

    @property
    def has_title(self) -> bool:
        return bool(self.title) and self.title != TITLE_SENTINEL

    @property
    def has_price(self) -> bool:
        return bool(self.price) and self.price != PRICE_SENTINEL

    def completeness(self) -> int:
        """Number of descriptive fields that are set; placeholders count as set."""
        values = (
            self.title, self.price, self.location, self.description,
            self.image_url, self.detail_url, self.year, self.mileage_text,
            self.fuel, self.transmission, self.color,
        )
        return sum(1 for value in values if value is not None and value != "")


class SearchRequest(CamelModel):
    query_text: str = Field(min_length=1)
    location_filter: Optional[str] = None
    per_source_limit: int = Field(default=10, ge=1, le=MAX_PER_SOURCE_LIMIT)

    @classmethod
    def build(
        cls,
        query: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[Any] = None,
        location: Optional[str] = None,
        limit: int = 10,
    ) -> "SearchRequest":
        # A bare model name (optionally with a year) stands in for a free-text query.
        query_text = (query or "").strip()
        if not query_text and model:
            query_text = f"{model} {year or ''}".strip()
        if not query_text:
            raise ValueError("either 'query' or 'model' is required")
        return cls(query_text=query_text, location_filter=location or None, per_source_limit=limit)


class ExtractionResult(CamelModel):
    listings: List[Listing] = Field(default_factory=list)
    source_name: SourceName
    total_found: int = 0


class SourceOutcome(CamelModel):
    source_name: SourceName
    status: Literal["success", "error"]
    listings: List[Listing] = Field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def success(cls, source_name: SourceName, listings: List[Listing]) -> "SourceOutcome":
        return cls(source_name=source_name, status="success", listings=listings)

    @classmethod
    def failure(cls, source_name: SourceName, message: str) -> "SourceOutcome":
        return cls(source_name=source_name, status="error", message=message)


class SourceStatus(CamelModel):
    status: Literal["success", "error"]
    ads_count: int = 0
    error: Optional[str] = None


class SearchResult(CamelModel):
    query: str
    location: str = DEFAULT_LOCATION_LABEL
    listings: List[Listing] = Field(default_factory=list)
    total_results: int = 0
    per_source_status: Dict[str, SourceStatus] = Field(default_factory=dict)
    execution_time_ms: int = 0
    searched_at: datetime.datetime

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True, mode="json", exclude={"per_source_status"})
        payload["perSourceStatus"] = {
            name: status.model_dump(by_alias=True, mode="json", exclude_none=True)
            for name, status in self.per_source_status.items()
        }
        return payload
