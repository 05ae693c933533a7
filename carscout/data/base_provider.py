from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Pattern, Tuple
from urllib.parse import quote, urlencode, urljoin

from bs4 import BeautifulSoup, Tag
import structlog

from carscout.core.exceptions import (
    BlockedFailure,
    ExtractionFailure,
    FragmentFailure,
    TransportFailure,
)
from carscout.data.cleaners import (
    clean_color,
    clean_location,
    clean_mileage,
    clean_price,
    clean_text,
    clean_year,
)
from carscout.data.fetcher import HttpFetcher
from carscout.data.models import ExtractionResult, Listing, SourceName
from carscout.data.normalizer import ListingNormalizer
from carscout.data.renderer import PageRenderer
from carscout.data.selectors import (
    ListingStrategy,
    anchor_strategy,
    css_strategy,
    first_attribute,
    first_text,
    locate_fragments,
)

logger = structlog.get_logger()

IMAGE_ATTRIBUTES = ("src", "data-src", "data-lazy-src", "data-original")


class BaseProvider(ABC):
    """
    One classifieds source. Subclasses only describe the site (URLs, query
    parameter names, selector chains); fetching, fallbacks and field
    extraction are shared.
    """

    base_url: str = ""
    search_path: str = ""
    query_param: str = "q"
    location_param: str = "location"
    # Listing card selectors, most specific first.
    listing_selectors: Tuple[str, ...] = ()
    # Path fragment of listing detail links, used by the generic anchor fallback.
    listing_path: str = ""
    field_selectors: Dict[str, Tuple[str, ...]] = {}
    image_attributes: Tuple[str, ...] = IMAGE_ATTRIBUTES
    id_pattern: Optional[Pattern] = None

    def __init__(
        self,
        fetcher: Optional[HttpFetcher] = None,
        renderer: Optional[PageRenderer] = None,
        normalizer: Optional[ListingNormalizer] = None,
    ):
        self.fetcher = fetcher or HttpFetcher()
        self.renderer = renderer or PageRenderer()
        self.normalizer = normalizer or ListingNormalizer()

    @property
    @abstractmethod
    def source_name(self) -> SourceName:
        ...

    @property
    def referer(self) -> str:
        return self.base_url.rstrip("/") + "/"

    def build_search_url(self, query_text: str, location_filter: Optional[str] = None) -> str:
        params = {self.query_param: query_text}
        if location_filter:
            params[self.location_param] = location_filter
        return f"{self.base_url}{self.search_path}?{urlencode(params, quote_via=quote)}"

    def listing_strategies(self) -> List[ListingStrategy]:
        strategies = [css_strategy(selector) for selector in self.listing_selectors]
        if self.listing_path:
            strategies.append(anchor_strategy(self.listing_path))
        return strategies

    def locate(self, html: str) -> List[Tag]:
        soup = BeautifulSoup(html or "", "html.parser")
        fragments, strategy = locate_fragments(soup, self.listing_strategies())
        if fragments:
            logger.info("fragments_located", source=self.source_name.value, strategy=strategy, count=len(fragments))
        return fragments

    async def extract(self, query_text: str, location_filter: Optional[str] = None, limit: int = 10) -> ExtractionResult:
        source = self.source_name.value
        url = self.build_search_url(query_text, location_filter)
        logger.info("extraction_started", source=source, url=url, limit=limit)

        html, rendered = await self._fetch_document(url)
        fragments = self.locate(html)

        if not fragments and not rendered:
            # Some result pages only fill their cards client-side.
            logger.info("no_fragments_retrying_with_render", source=source)
            html = await self.renderer.render_document(url, self.referer)
            fragments = self.locate(html)

        if not fragments:
            raise ExtractionFailure(source, "no listings found on the results page")

        listings: List[Listing] = []
        seen_ids = set()
        for index, fragment in enumerate(fragments):
            if len(listings) >= limit:
                break
            try:
                listing = self.parse_fragment(fragment, index)
            except FragmentFailure as e:
                logger.warning("fragment_skipped", source=source, index=index, error=e.cause)
                continue
            if listing is None or listing.id in seen_ids:
                continue
            seen_ids.add(listing.id)
            listings.append(listing)

        logger.info("extraction_finished", source=source, kept=len(listings), scanned=len(fragments))
        return ExtractionResult(listings=listings, source_name=self.source_name, total_found=len(listings))

    async def _fetch_document(self, url: str) -> Tuple[str, bool]:
        """Return ``(html, rendered)``; falls back to the renderer on transport errors and blocks."""
        source = self.source_name.value
        try:
            return await self.fetcher.fetch(url, referer=self.referer), False
        except BlockedFailure as e:
            cause = str(e)
            logger.warning("direct_fetch_blocked", source=source, status=e.status_code)
        except TransportFailure as e:
            cause = str(e)
            logger.warning("direct_fetch_failed", source=source, error=cause, kind=e.error_kind)

        html = await self.renderer.render_document(url, self.referer)
        if not html:
            raise ExtractionFailure(source, f"direct fetch failed ({cause}) and render fallback returned nothing")
        return html, True

    def parse_fragment(self, fragment: Tag, index: int) -> Optional[Listing]:
        """Build a Listing from one fragment; ``None`` when it has neither title nor price."""
        try:
            raw = self.extract_fields(fragment)
            listing = self.normalizer.normalize(raw, self.source_name)
        except Exception as e:
            raise FragmentFailure(self.source_name.value, index, str(e) or type(e).__name__) from e

        if not (listing.has_title or listing.has_price):
            logger.debug("fragment_discarded", source=self.source_name.value, index=index)
            return None
        return listing

    def extract_fields(self, fragment: Tag) -> dict:
        def field(name: str) -> str:
            return first_text(fragment, self.field_selectors.get(name, ()))

        title = clean_text(field("title"))
        detail_url = self.extract_detail_url(fragment)
        return {
            "id": self.extract_listing_id(detail_url),
            "title": title,
            "price": clean_price(field("price")),
            "location": clean_location(field("location")),
            "description": clean_text(field("description")),
            "image_url": first_attribute(fragment.find("img"), self.image_attributes),
            "detail_url": detail_url,
            "year": clean_year(field("year")) or clean_year(title),
            "mileage": clean_mileage(field("mileage")),
            "fuel": clean_text(field("fuel")),
            "transmission": clean_text(field("transmission")),
            "color": clean_color(field("color")),
        }

    def extract_detail_url(self, fragment: Tag) -> Optional[str]:
        href = fragment.get("href") if fragment.name == "a" else None
        if not href:
            link = fragment.find("a", href=True)
            href = link["href"] if link is not None else None
        if not href or href.strip().lower().startswith("javascript:"):
            return None
        return urljoin(self.referer, href.strip())

    def extract_listing_id(self, detail_url: Optional[str]) -> Optional[str]:
        if not detail_url or self.id_pattern is None:
            return None
        match = self.id_pattern.search(detail_url)
        if not match:
            return None
        return f"{self.source_name.value.lower()}_{match.group(1)}"
