"""
Playwright browser wrapper used by the crawl sessions.

A provider owns one browser with a primary page for list pages. Detail pages
are opened in separate browser contexts so a broken detail page cannot affect
the list-page state.
"""

import logging
from contextlib import contextmanager

from playwright.sync_api import sync_playwright, Page, Browser, BrowserContext

from jobspider import settings

logger = logging.getLogger(__name__)


class BrowserProvider:
    """Launches and tears down a Chromium instance."""

    def __init__(self, headless: bool = settings.HEADLESS):
        self.headless = headless
        self._playwright = None
        self.browser: Browser = None
        self.context: BrowserContext = None
        self.page: Page = None

    def launch(self) -> Page:
        logger.info("Launching browser...")
        self._playwright = sync_playwright().start()
        self.browser = self._playwright.chromium.launch(
            headless=self.headless,
            args=settings.BROWSER_ARGS,
            timeout=settings.TIMEOUT
        )
        self.context = self._new_context()
        self.page = self.context.new_page()
        logger.info("Browser launched successfully")
        return self.page

    @contextmanager
    def isolated_page(self):
        """Yield a page in a fresh browser context; the context is always closed."""
        context = self._new_context()
        try:
            yield context.new_page()
        finally:
            context.close()

    def close(self):
        """Close the browser and stop Playwright. Safe to call more than once."""
        try:
            if self.browser:
                self.browser.close()
                logger.info("Browser closed")
        except Exception as e:
            logger.warning(f"⚠️  Error closing browser: {e}")
        finally:
            self.browser = None
            self.context = None
            self.page = None
            if self._playwright:
                self._playwright.stop()
                self._playwright = None

    def _new_context(self) -> BrowserContext:
        context = self.browser.new_context(
            viewport=settings.VIEWPORT,
            user_agent=settings.USER_AGENT,
            ignore_https_errors=True
        )
        context.set_default_navigation_timeout(settings.NAVIGATION_TIMEOUT)
        context.set_default_timeout(settings.TIMEOUT)
        return context
