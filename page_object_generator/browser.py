# browser.py
import logging
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, TimeoutError as PlaywrightTimeoutError

from .constants import NAVIGATION_TIMEOUT_MS

logger = logging.getLogger(__name__)


class BrowserSession:
    """Chromium browser, context and page for one generation run."""

    def __init__(self, headful: bool = False):
        self.headful = headful
        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()

    async def initialize(self):
        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(headless=not self.headful)
        self.context = await self.browser.new_context()
        self.page = await self.context.new_page()

    async def cleanup(self):
        if self.page:
            await self.page.close()
        if self.context:
            await self.context.close()
        if self.browser:
            await self.browser.close()
        if self.playwright:
            await self.playwright.stop()

    async def open(self, url: str) -> Page:
        await self.page.goto(url, wait_until='load', timeout=NAVIGATION_TIMEOUT_MS)
        try:
            await self.page.wait_for_load_state('networkidle', timeout=10000)
        except PlaywrightTimeoutError:
            logger.info("networkidle timeout, continuing")
        logger.info(f"Current URL: {self.page.url}")
        return self.page
