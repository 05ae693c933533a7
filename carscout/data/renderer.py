import asyncio
from typing import Optional

from playwright.async_api import async_playwright
import structlog

from carscout.core.exceptions import RenderFailure
from carscout.data.fetcher import USER_AGENT

logger = structlog.get_logger()

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-blink-features=AutomationControlled",
]


class PageRenderer:
    """
    Fetches a document through a headless Chromium when the plain HTTP
    response is blocked or only fills its listings client-side.
    Every call launches its own browser and closes it before returning.
    """

    def __init__(
        self,
        executable_path: Optional[str] = None,
        timeout_seconds: float = 90.0,
        settle_seconds: float = 1.5,
        playwright_factory=async_playwright,
    ):
        self.executable_path = executable_path
        self.timeout_seconds = timeout_seconds
        self.settle_seconds = settle_seconds
        self.playwright_factory = playwright_factory

    async def render_document(self, url: str, referer: Optional[str] = None) -> str:
        try:
            return await self.render(url, referer)
        except RenderFailure as e:
            logger.error("render_fallback_failed", url=url, error=e.cause)
            return ""

    async def render(self, url: str, referer: Optional[str] = None) -> str:
        logger.info("render_fallback_started", url=url)
        try:
            html = await asyncio.wait_for(
                self._render(url, referer),
                timeout=self.timeout_seconds + self.settle_seconds,
            )
        except asyncio.TimeoutError as e:
            raise RenderFailure(url, f"timed out after {self.timeout_seconds}s") from e
        except Exception as e:
            raise RenderFailure(url, str(e) or type(e).__name__) from e

        if not html:
            raise RenderFailure(url, "empty document")
        logger.info("render_fallback_finished", url=url, size=len(html))
        return html

    async def _render(self, url: str, referer: Optional[str]) -> str:
        launch_options = {"headless": True, "args": LAUNCH_ARGS}
        if self.executable_path:
            launch_options["executable_path"] = self.executable_path

        headers = {"Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8"}
        if referer:
            headers["Referer"] = referer

        async with self.playwright_factory() as p:
            browser = await p.chromium.launch(**launch_options)
            try:
                context = await browser.new_context(user_agent=USER_AGENT, extra_http_headers=headers)
                page = await context.new_page()
                # Mask automation
                await page.add_init_script("Object.defineProperty(navigator, 'webdriver', {get: () => undefined})")
                await page.goto(url, wait_until="domcontentloaded", timeout=int(self.timeout_seconds * 1000))
                # Lazy cards need a moment after DOMContentLoaded
                await asyncio.sleep(self.settle_seconds)
                return await page.content()
            finally:
                await browser.close()
