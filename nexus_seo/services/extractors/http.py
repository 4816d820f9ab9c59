"""
Plain HTTP extractor (reduced fidelity).

Fetches raw HTML with httpx and parses it with BeautifulSoup. No JavaScript is
executed, so client-rendered content is invisible, and `loadTime` is the HTTP
round trip rather than a page load.
"""

import logging
import time
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from nexus_seo.config import settings
from nexus_seo.core.exceptions import FetchFailedError, NavigationTimeoutError
from nexus_seo.schemas.page import ExtractedPageData
from nexus_seo.services.extractors.base import (
    ExtractorCapabilities,
    PageExtractor,
    validate_url,
)

logger = logging.getLogger(__name__)


class HttpPageExtractor(PageExtractor):
    """Fetch-and-parse extractor used by the synchronous crawl endpoint."""

    name = "http"
    capabilities = ExtractorCapabilities(
        renders_javascript=False,
        measures_load_time=False,
        runs_in_browser=False,
    )

    def __init__(
        self,
        timeout_seconds: float | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.HTTP_FETCH_TIMEOUT_SECONDS
        )
        self.user_agent = user_agent or settings.CRAWLER_USER_AGENT
        self._transport = transport

    async def extract(self, url: str) -> ExtractedPageData:
        _, data = await self.crawl(url)
        return data

    async def crawl(self, url: str) -> tuple[int, ExtractedPageData]:
        """Fetch `url` and return (HTTP status, extracted data)."""
        url = validate_url(url)
        logger.info(f"Fetching: {url}")

        start_time = time.time()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout: {url}")
            raise NavigationTimeoutError(url, int(self.timeout_seconds * 1000)) from e
        except httpx.RequestError as e:
            logger.warning(f"Request error for {url}: {type(e).__name__}: {e}")
            raise FetchFailedError(url, reason=type(e).__name__) from e

        load_time_ms = int((time.time() - start_time) * 1000)

        if not response.is_success:
            raise FetchFailedError(url, response.status_code, response.reason_phrase)

        data = parse_html(response.text, str(response.url), load_time_ms)
        return response.status_code, data


def parse_html(html: str, page_url: str, load_time_ms: int = 0) -> ExtractedPageData:
    """Extract page signals from raw HTML."""
    soup = BeautifulSoup(html, "lxml")
    page_host = urlparse(page_url).hostname

    title = ""
    title_tag = soup.find("title")
    if title_tag:
        title = title_tag.get_text(strip=True)

    description = _meta_content(soup, {"name": "description"}) or _meta_content(
        soup, {"property": "og:description"}
    )

    h1s = [h.get_text(" ", strip=True) for h in soup.find_all("h1")]
    h1s = [h for h in h1s if h]

    images = soup.find_all("img")
    missing_alt = sum(1 for img in images if not (img.get("alt") or "").strip())

    anchors = soup.find_all("a")
    internal_links = 0
    for a in anchors:
        href = a.get("href")
        if href is None:
            continue
        if urlparse(urljoin(page_url, href)).hostname == page_host:
            internal_links += 1

    body = soup.find("body") or soup
    for tag in body.find_all(["script", "style", "noscript", "template"]):
        tag.decompose()
    text = " ".join(body.get_text(" ").split())
    word_count = len(text.split(" ")) if text else 0

    return ExtractedPageData(
        title=title,
        description=description,
        h1s=h1s,
        img_count=len(images),
        missing_alt_count=missing_alt,
        link_count=len(anchors),
        internal_link_count=internal_links,
        word_count=word_count,
        load_time=load_time_ms,
    )


def _meta_content(soup: BeautifulSoup, attrs: dict) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag:
        return (tag.get("content") or "").strip()
    return ""
