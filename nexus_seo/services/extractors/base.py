"""
Page extractor interface.

Both extractors produce the same `ExtractedPageData` contract; what differs is
fidelity, which each implementation declares through `capabilities` instead of
silently returning weaker numbers.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from urllib.parse import urlparse

from nexus_seo.core.exceptions import InvalidURLError, MissingURLError
from nexus_seo.schemas.page import ExtractedPageData


@dataclass(frozen=True)
class ExtractorCapabilities:
    """What an extractor can actually observe."""
    renders_javascript: bool
    measures_load_time: bool  # False: loadTime is an HTTP round trip, not a page load
    runs_in_browser: bool


def validate_url(url: str | None) -> str:
    """Return the stripped URL or raise before any network activity."""
    if url is None or not url.strip():
        raise MissingURLError()
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise InvalidURLError(url)
    return url


class PageExtractor(ABC):
    """Load one URL and pull structural signals out of it."""

    name: str = "base"
    capabilities: ExtractorCapabilities

    @abstractmethod
    async def extract(self, url: str) -> ExtractedPageData:
        """
        Extract page signals.

        Raises:
            InvalidURLError: URL is malformed (raised before any I/O)
            NavigationTimeoutError: the page did not load within the budget
            FetchFailedError: non-success or missing response
            ExtractionContractError: extracted payload failed validation
        """
        ...
