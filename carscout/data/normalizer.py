import datetime
import itertools
import uuid
from typing import Any, Callable, Mapping, Optional

from carscout.data.models import (
    DESCRIPTION_SENTINEL,
    LOCATION_SENTINEL,
    PRICE_SENTINEL,
    TITLE_SENTINEL,
    Listing,
    SourceName,
)

Clock = Callable[[], datetime.datetime]


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class SequentialIdSource:
    """Builds ids as ``<source>_<epoch ms>_<sequence>``; the sequence is per instance."""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or utc_now
        self._counter = itertools.count()

    def next_id(self, source: SourceName) -> str:
        millis = int(self.clock().timestamp() * 1000)
        return f"{source.value.lower()}_{millis}_{next(self._counter)}"


class UuidIdSource:
    def next_id(self, source: SourceName) -> str:
        return f"{source.value.lower()}_{uuid.uuid4().hex}"


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class ListingNormalizer:
    def __init__(self, id_source=None, clock: Optional[Clock] = None):
        self.clock = clock or utc_now
        self.id_source = id_source or SequentialIdSource(self.clock)

    def normalize(self, raw: Mapping[str, Any], source: SourceName) -> Listing:
        return Listing(
            id=_text(raw.get("id")) or self.id_source.next_id(source),
            title=_text(raw.get("title")) or TITLE_SENTINEL,
            price=_text(raw.get("price")) or PRICE_SENTINEL,
            location=_text(raw.get("location")) or LOCATION_SENTINEL,
            description=_text(raw.get("description")) or DESCRIPTION_SENTINEL,
            image_url=_text(raw.get("image_url")),
            detail_url=_text(raw.get("detail_url")),
            year=_text(raw.get("year")),
            mileage_text=_text(raw.get("mileage")),
            fuel=_text(raw.get("fuel")),
            transmission=_text(raw.get("transmission")),
            color=_text(raw.get("color")),
            source_name=source,
            scraped_at=self.clock(),
        )
