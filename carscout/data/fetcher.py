import asyncio
from typing import Callable, Dict, Optional

import httpx
import structlog

from carscout.core.exceptions import BlockedFailure, TransportFailure

logger = structlog.get_logger()

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)

BROWSER_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Cache-Control": "max-age=0",
}

# Client errors that mean "the site refused us" rather than "nothing here".
BLOCKING_STATUSES = frozenset({401, 403, 429})


class HttpFetcher:
    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.client_factory = client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True)

    def build_headers(self, referer: Optional[str] = None) -> Dict[str, str]:
        headers = dict(BROWSER_HEADERS)
        if referer:
            headers["Referer"] = referer
        return headers

    async def fetch(self, url: str, referer: Optional[str] = None) -> str:
        """Return the response body for any status below 500 that is not a block."""
        try:
            async with self.client_factory() as client:
                # The client timeout is per phase; this bounds the whole request.
                response = await asyncio.wait_for(
                    client.get(url, headers=self.build_headers(referer)), self.timeout_seconds
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise TransportFailure(f"timeout after {self.timeout_seconds}s", url=url, error_kind="timeout") from e
        except httpx.HTTPError as e:
            raise TransportFailure(str(e) or type(e).__name__, url=url, error_kind="connection") from e

        status = response.status_code
        if status >= 500:
            raise TransportFailure(f"HTTP {status}", url=url, status_code=status, error_kind="http_5xx")
        if status in BLOCKING_STATUSES:
            raise BlockedFailure(url, status)

        logger.debug("document_fetched", url=url, status=status, size=len(response.text))
        return response.text
