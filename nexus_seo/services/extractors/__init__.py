"""
Page extractors.

- browser: headless Playwright Chromium, full DOM and navigation timing
- http: plain fetch + BeautifulSoup, reduced fidelity
"""

from nexus_seo.services.extractors.base import (
    ExtractorCapabilities,
    PageExtractor,
    validate_url,
)
from nexus_seo.services.extractors.factory import get_page_extractor

__all__ = [
    "ExtractorCapabilities",
    "PageExtractor",
    "validate_url",
    "get_page_extractor",
]
