"""
Extractor selection by configuration.
"""
import logging

from nexus_seo.config import settings
from nexus_seo.services.extractors.base import PageExtractor

logger = logging.getLogger(__name__)

EXTRACTOR_BACKENDS = ("browser", "http")


def get_page_extractor(backend: str | None = None) -> PageExtractor:
    """
    Build the configured page extractor.

    Args:
        backend: "browser" (headless Playwright) or "http" (plain fetch).
            Defaults to settings.EXTRACTOR_BACKEND.
    """
    backend = (backend or settings.EXTRACTOR_BACKEND).strip().lower()

    if backend == "browser":
        from nexus_seo.services.extractors.browser import BrowserPageExtractor
        extractor: PageExtractor = BrowserPageExtractor()
    elif backend == "http":
        from nexus_seo.services.extractors.http import HttpPageExtractor
        extractor = HttpPageExtractor()
    else:
        raise ValueError(
            f"Unknown extractor backend {backend!r}; expected one of {', '.join(EXTRACTOR_BACKENDS)}"
        )

    logger.info(f"Using {extractor.name} page extractor ({extractor.capabilities})")
    return extractor
