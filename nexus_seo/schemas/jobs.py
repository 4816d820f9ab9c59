"""
Job and crawl API schemas.
"""
from datetime import datetime

from pydantic import Field

from nexus_seo.models.job import Job, JobStatus
from nexus_seo.schemas.common import BaseSchema
from nexus_seo.schemas.page import ExtractedPageData


class JobSubmitRequest(BaseSchema):
    """Submit crawl job request. `url` is checked by the engine, not by pydantic."""

    url: str | None = Field(default=None, examples=["https://example.com"])


class JobAcceptedResponse(BaseSchema):

    success: bool = True
    job_id: str
    status: JobStatus = JobStatus.PENDING
    message: str


class JobStatusResponse(BaseSchema):
    """Full job record snapshot."""

    id: str
    url: str
    status: JobStatus
    submitted_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None
    result: ExtractedPageData | None = None
    error: str | None = None

    @classmethod
    def from_job(cls, job: Job) -> "JobStatusResponse":
        return cls(
            id=job.id,
            url=job.url,
            status=job.status,
            submitted_at=job.submitted_at,
            started_at=job.started_at,
            completed_at=job.completed_at,
            result=job.result,
            error=job.error,
        )


class CrawlRequest(BaseSchema):
    """Synchronous crawl request."""

    url: str | None = Field(default=None, examples=["https://example.com"])


class CrawlResponse(BaseSchema):

    success: bool = True
    url: str
    status_code: int
    data: ExtractedPageData
