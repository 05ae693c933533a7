"""Pytest fixtures."""

import datetime

import pytest

from carscout.data.models import ExtractionResult, Listing, SourceName
from carscout.data.normalizer import ListingNormalizer, SequentialIdSource

FIXED_NOW = datetime.datetime(2026, 10, 19, 12, 0, tzinfo=datetime.timezone.utc)


class FakeFetcher:
    """Stands in for HttpFetcher: returns *html* or raises *error*."""

    def __init__(self, html: str = "", error: Exception = None):
        self.html = html
        self.error = error
        self.calls = []

    async def fetch(self, url, referer=None):
        self.calls.append((url, referer))
        if self.error is not None:
            raise self.error
        return self.html


class FakeRenderer:
    def __init__(self, html: str = ""):
        self.html = html
        self.calls = []

    async def render_document(self, url, referer=None):
        self.calls.append((url, referer))
        return self.html


class StubProvider:
    """Provider double for aggregator tests."""

    def __init__(self, source_name: SourceName, listings=None, error: Exception = None):
        self.source_name = source_name
        self.listings = listings or []
        self.error = error
        self.calls = []

    async def extract(self, query_text, location_filter=None, limit=10):
        self.calls.append((query_text, location_filter, limit))
        if self.error is not None:
            raise self.error
        kept = self.listings[:limit]
        return ExtractionResult(listings=kept, source_name=self.source_name, total_found=len(kept))


@pytest.fixture
def fixed_now() -> datetime.datetime:
    return FIXED_NOW


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def normalizer(fixed_clock) -> ListingNormalizer:
    return ListingNormalizer(id_source=SequentialIdSource(fixed_clock), clock=fixed_clock)


@pytest.fixture
def fake_fetcher_cls():
    return FakeFetcher


@pytest.fixture
def fake_renderer_cls():
    return FakeRenderer


@pytest.fixture
def stub_provider_cls():
    return StubProvider


@pytest.fixture
def make_listing():
    counter = {"n": 0}

    def factory(source: SourceName = SourceName.OLX, **fields) -> Listing:
        counter["n"] += 1
        fields.setdefault("id", f"{source.value.lower()}_{counter['n']}")
        fields.setdefault("title", f"Carro {counter['n']}")
        return Listing(source_name=source, scraped_at=FIXED_NOW, **fields)

    return factory
