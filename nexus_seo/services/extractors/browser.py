"""
Nexus SEO headless browser extractor

Loads a page in Playwright Chromium and reads structural signals from the
rendered DOM. Each call gets its own browser process and context; both are
released on every exit path.
"""

from __future__ import annotations

import logging
import time
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import (
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Route,
    TimeoutError as PlaywrightTimeout,
    async_playwright,
)
from pydantic import ValidationError as PydanticValidationError

from nexus_seo.config import settings
from nexus_seo.core.exceptions import (
    ExtractionContractError,
    FetchFailedError,
    NavigationTimeoutError,
)
from nexus_seo.schemas.page import ExtractedPageData
from nexus_seo.services.extractors.base import (
    ExtractorCapabilities,
    PageExtractor,
    validate_url,
)

logger = logging.getLogger(__name__)

EXTRACTION_SCRIPT_VERSION = "1"

# Output keys must match ExtractedPageData aliases exactly (extra keys are rejected).
EXTRACTION_SCRIPT = """
() => {
    const host = window.location.hostname;
    const metaContent = (selector) => {
        const el = document.querySelector(selector);
        return el ? (el.getAttribute('content') || '').trim() : '';
    };
    const description = metaContent('meta[name="description"]')
        || metaContent('meta[property="og:description"]');

    const h1s = Array.from(document.querySelectorAll('h1'))
        .map(h => (h.innerText || h.textContent || '').trim())
        .filter(text => text.length > 0);

    const images = Array.from(document.querySelectorAll('img'));
    const missingAltCount = images
        .filter(img => !(img.getAttribute('alt') || '').trim()).length;

    const anchors = Array.from(document.querySelectorAll('a'));
    let internalLinkCount = 0;
    for (const a of anchors) {
        const href = a.getAttribute('href');
        if (href === null) continue;
        try {
            if (new URL(href, document.baseURI).hostname === host) internalLinkCount++;
        } catch (e) {}
    }

    const text = (document.body ? document.body.innerText || '' : '')
        .replace(/\\s+/g, ' ').trim();
    const wordCount = text ? text.split(' ').length : 0;

    let loadTime = 0;
    const nav = performance.getEntriesByType('navigation')[0];
    if (nav) {
        const end = nav.loadEventEnd > 0 ? nav.loadEventEnd : nav.domContentLoadedEventEnd;
        loadTime = Math.max(0, Math.round(end - nav.startTime));
    }

    return {
        title: document.title || '',
        description,
        h1s,
        imgCount: images.length,
        missingAltCount,
        linkCount: anchors.length,
        internalLinkCount,
        wordCount,
        loadTime,
    };
}
"""


class BrowserPageExtractor(PageExtractor):
    """
    Headless Chromium extractor.

    Stylesheet, font and media requests are aborted: pages load faster and fail
    less, but layout performance is not measured.
    """

    name = "browser"
    capabilities = ExtractorCapabilities(
        renders_javascript=True,
        measures_load_time=True,
        runs_in_browser=True,
    )

    def __init__(
        self,
        timeout_ms: int | None = None,
        user_agent: str | None = None,
        block_resources: list[str] | None = None,
        headless: bool | None = None,
    ):
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.NAVIGATION_TIMEOUT_MS
        self.user_agent = user_agent or settings.CRAWLER_USER_AGENT
        self.block_resources = (
            block_resources if block_resources is not None else settings.blocked_resource_types
        )
        self.headless = settings.BROWSER_HEADLESS if headless is None else headless

    async def extract(self, url: str) -> ExtractedPageData:
        url = validate_url(url)
        start_time = time.time()

        async with self._browser_context() as context:
            page = await context.new_page()
            await self._navigate(page, url)
            try:
                raw = await page.evaluate(EXTRACTION_SCRIPT)
            except PlaywrightError as e:
                raise ExtractionContractError(f"script v{EXTRACTION_SCRIPT_VERSION} failed: {e}") from e

        data = self._validate(raw)
        logger.info(
            f"Extracted {url} in {time.time() - start_time:.2f}s "
            f"(h1s={len(data.h1s)}, images={data.img_count}, links={data.link_count}, words={data.word_count})"
        )
        return data

    @asynccontextmanager
    async def _browser_context(self) -> AsyncIterator[BrowserContext]:
        """Launch a browser and isolated context; tear both down on exit."""
        async with AsyncExitStack() as stack:
            playwright = await stack.enter_async_context(async_playwright())
            browser = await playwright.chromium.launch(headless=self.headless)
            stack.push_async_callback(browser.close)

            context = await browser.new_context(
                user_agent=self.user_agent,
                ignore_https_errors=True,
                java_script_enabled=True,
            )
            stack.push_async_callback(context.close)

            if self.block_resources:
                await context.route("**/*", self._handle_route)

            yield context

    async def _handle_route(self, route: Route):
        """Handle resource blocking."""
        if route.request.resource_type in self.block_resources:
            await route.abort()
        else:
            await route.continue_()

    async def _navigate(self, page: Page, url: str) -> None:
        try:
            response = await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.timeout_ms,
            )
        except PlaywrightTimeout as e:
            logger.warning(f"Timeout loading {url} after {self.timeout_ms}ms")
            raise NavigationTimeoutError(url, self.timeout_ms) from e
        except PlaywrightError as e:
            raise FetchFailedError(url, reason=e.message) from e

        if response is None:
            raise FetchFailedError(url, reason="no navigation response")
        if not response.ok:
            raise FetchFailedError(url, response.status)

    @staticmethod
    def _validate(raw: object) -> ExtractedPageData:
        try:
            return ExtractedPageData.model_validate(raw)
        except PydanticValidationError as e:
            raise ExtractionContractError(str(e)) from e
