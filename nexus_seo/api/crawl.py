"""
Synchronous Crawl API

Plain fetch-and-parse of one page within the request. Superseded by the jobs
API for real audits; kept for quick checks and as a reduced-fidelity fallback.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from nexus_seo.core.deps import HttpExtractorDep
from nexus_seo.core.exceptions import NexusSEOError
from nexus_seo.schemas.common import ErrorResponse
from nexus_seo.schemas.jobs import CrawlRequest, CrawlResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/crawl", tags=["Crawl"])


@router.post(
    "",
    response_model=CrawlResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Crawl a page synchronously",
)
async def crawl_page(request: CrawlRequest, extractor: HttpExtractorDep):
    """Fetch and parse a page within the request."""
    try:
        status_code, data = await extractor.crawl(request.url)
    except NexusSEOError:
        raise
    except Exception as e:
        logger.error(f"[Crawler] Error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error", "details": str(e)},
        )

    return CrawlResponse(url=request.url.strip(), status_code=status_code, data=data)
