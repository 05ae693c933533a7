import asyncio
import datetime
import time
from typing import Dict, List, Optional, Sequence

import structlog

from carscout.core.ranking import cap_listings, rank_listings
from carscout.data.base_provider import BaseProvider
from carscout.data.models import (
    DEFAULT_LOCATION_LABEL,
    Listing,
    SearchRequest,
    SearchResult,
    SourceOutcome,
    SourceStatus,
)
from carscout.data.registry import build_providers
from carscout.utils.config import AppSettings

logger = structlog.get_logger()


class SearchAggregator:
    """Fans one search out to every provider and merges whatever comes back."""

    def __init__(
        self,
        providers: Optional[Sequence[BaseProvider]] = None,
        settings: Optional[AppSettings] = None,
    ):
        self.settings = settings or AppSettings()
        self.providers = list(providers) if providers is not None else build_providers(self.settings)

    def describe_sources(self) -> Dict[str, str]:
        return {provider.source_name.value: "operational" for provider in self.providers}

    async def run(self, request: SearchRequest) -> SearchResult:
        return await self.search(request.query_text, request.location_filter, request.per_source_limit)

    async def search(
        self,
        query_text: str,
        location_filter: Optional[str] = None,
        per_source_limit: int = 10,
    ) -> SearchResult:
        started = time.perf_counter()
        logger.info("search_started", query=query_text, location=location_filter, limit=per_source_limit)

        outcomes = await asyncio.gather(
            *(self._settle(provider, query_text, location_filter, per_source_limit) for provider in self.providers)
        )

        per_source_status: Dict[str, SourceStatus] = {}
        merged: List[Listing] = []
        for outcome in outcomes:
            name = outcome.source_name.value
            if outcome.status == "success":
                per_source_status[name] = SourceStatus(status="success", ads_count=len(outcome.listings))
                merged.extend(outcome.listings)
            else:
                per_source_status[name] = SourceStatus(status="error", ads_count=0, error=outcome.message)

        ranked = cap_listings(rank_listings(merged), per_source_limit, self.settings.RESULT_CAP_MULTIPLIER)
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            "search_finished",
            query=query_text,
            total=len(ranked),
            failed_sources=[name for name, status in per_source_status.items() if status.status == "error"],
            execution_time_ms=elapsed_ms,
        )
        return SearchResult(
            query=query_text,
            location=location_filter or DEFAULT_LOCATION_LABEL,
            listings=ranked,
            total_results=len(ranked),
            per_source_status=per_source_status,
            execution_time_ms=elapsed_ms,
            searched_at=datetime.datetime.now(datetime.timezone.utc),
        )

    async def _settle(
        self,
        provider: BaseProvider,
        query_text: str,
        location_filter: Optional[str],
        limit: int,
    ) -> SourceOutcome:
        try:
            result = await provider.extract(query_text, location_filter, limit)
        except Exception as e:
            logger.error("provider_search_failed", source=provider.source_name.value, error=str(e))
            return SourceOutcome.failure(provider.source_name, str(e) or type(e).__name__)
        return SourceOutcome.success(provider.source_name, result.listings)
