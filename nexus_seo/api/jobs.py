"""
Crawl Jobs API

Asynchronous crawl: submit a URL, receive a job id, poll for the result.
"""

from fastapi import APIRouter, status

from nexus_seo.config import settings
from nexus_seo.core.deps import JobEngineDep
from nexus_seo.schemas.common import ErrorResponse
from nexus_seo.schemas.jobs import JobAcceptedResponse, JobStatusResponse, JobSubmitRequest


router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post(
    "",
    response_model=JobAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={400: {"model": ErrorResponse}},
    summary="Submit a crawl job",
    description="""
    Queue a headless crawl of one page. Returns immediately with a job id;
    poll `/jobs/{job_id}` until the status is COMPLETED or FAILED.
    """,
)
async def submit_job(request: JobSubmitRequest, engine: JobEngineDep) -> JobAcceptedResponse:
    """Queue a crawl for a page."""
    job = engine.submit(request.url)
    return JobAcceptedResponse(
        job_id=job.id,
        status=job.status,
        message=f"Crawl queued. Poll {settings.API_PREFIX}/jobs/{job.id} for status.",
    )


@router.get(
    "/{job_id}",
    response_model=JobStatusResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get crawl job status",
)
async def get_job(job_id: str, engine: JobEngineDep) -> JobStatusResponse:
    """Get the latest state of a crawl job."""
    return JobStatusResponse.from_job(engine.get_status(job_id))
