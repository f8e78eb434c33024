"""Page renderer — the browser side of screenshot capture."""

from __future__ import annotations

import logging
from typing import Protocol

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from shotdiff.models.config import PipelineConfig

logger = logging.getLogger(__name__)


class PageRenderer(Protocol):
    """Anything that can load a URL and rasterize the loaded page."""

    async def navigate(self, url: str, timeout_ms: int) -> None: ...

    async def capture(self) -> bytes: ...


async def launch_browser(playwright: Playwright, headless: bool = True) -> Browser:
    """Launch Chromium with container-friendly arguments."""
    return await playwright.chromium.launch(
        headless=headless,
        args=["--no-sandbox", "--disable-setuid-sandbox"],
    )


class PlaywrightRenderer:
    """Renders pages in a single Chromium page reused for a whole phase.

    Use as an async context manager; the browser is closed on exit.
    """

    def __init__(self, config: PipelineConfig):
        self.config = config
        self._playwright_cm = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    async def __aenter__(self) -> "PlaywrightRenderer":
        self._playwright_cm = async_playwright()
        playwright = await self._playwright_cm.__aenter__()
        try:
            logger.debug("Launching Chromium (headless=%s)...", self.config.headless)
            self._browser = await launch_browser(playwright, headless=self.config.headless)
            context_opts = {
                "viewport": {"width": self.config.viewport.width, "height": self.config.viewport.height},
            }
            if self.config.user_agent:
                context_opts["user_agent"] = self.config.user_agent
            self._context = await self._browser.new_context(**context_opts)
            self._page = await self._context.new_page()
        except BaseException:
            await self.__aexit__(None, None, None)
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if self._context:
                await self._context.close()
            if self._browser:
                await self._browser.close()
        finally:
            if self._playwright_cm:
                await self._playwright_cm.__aexit__(exc_type, exc, tb)
            self._page = self._context = self._browser = self._playwright_cm = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("PlaywrightRenderer used outside of 'async with'")
        return self._page

    async def navigate(self, url: str, timeout_ms: int) -> None:
        await self.page.goto(url, wait_until=self.config.wait_until, timeout=timeout_ms)
        # Let late fonts, animations and lazy content settle
        if self.config.settle_delay_ms:
            await self.page.wait_for_timeout(self.config.settle_delay_ms)

    async def capture(self) -> bytes:
        return await self.page.screenshot(full_page=True, type="png")
