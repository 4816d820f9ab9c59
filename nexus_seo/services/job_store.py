"""
In-memory job registry.

Every operation is synchronous, so no read-modify-write on a record is ever
interleaved with another coroutine on the event loop.
"""
import logging
from datetime import datetime, timedelta

from nexus_seo.core.exceptions import InvalidJobTransitionError, JobNotFoundError
from nexus_seo.models.job import Job, JobStatus, utcnow
from nexus_seo.schemas.page import ExtractedPageData

logger = logging.getLogger(__name__)

_ALLOWED_TRANSITIONS: dict[JobStatus, set[JobStatus]] = {
    JobStatus.PENDING: {JobStatus.PROCESSING},
    JobStatus.PROCESSING: {JobStatus.COMPLETED, JobStatus.FAILED},
    JobStatus.COMPLETED: set(),
    JobStatus.FAILED: set(),
}


class JobStore:
    """Keyed registry holding exactly one record per submitted job."""

    def __init__(self):
        self._jobs: dict[str, Job] = {}

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: str) -> bool:
        return job_id in self._jobs

    def insert(self, job: Job) -> Job:
        if job.id in self._jobs:
            raise ValueError(f"Duplicate job id: {job.id}")
        self._jobs[job.id] = job
        return job.snapshot()

    def get(self, job_id: str) -> Job:
        """Return a snapshot of the job; mutating it does not touch the store."""
        return self._require(job_id).snapshot()

    def mark_processing(self, job_id: str) -> Job:
        job = self._transition(job_id, JobStatus.PROCESSING)
        job.started_at = max(utcnow(), job.submitted_at)
        return job.snapshot()

    def mark_completed(self, job_id: str, result: ExtractedPageData) -> Job:
        job = self._transition(job_id, JobStatus.COMPLETED)
        job.result = result
        job.error = None
        job.completed_at = max(utcnow(), job.started_at or job.submitted_at)
        return job.snapshot()

    def mark_failed(self, job_id: str, error: str) -> Job:
        job = self._transition(job_id, JobStatus.FAILED)
        job.result = None
        job.error = error or "Unknown error"
        job.completed_at = max(utcnow(), job.started_at or job.submitted_at)
        return job.snapshot()

    def delete(self, job_id: str) -> None:
        self._jobs.pop(job_id, None)

    def sweep(self, now: datetime | None = None, retention: timedelta = timedelta(hours=1)) -> int:
        """Remove terminal jobs completed longer than `retention` ago.

        PENDING and PROCESSING jobs are kept regardless of age.
        """
        now = now or utcnow()
        cutoff = now - retention
        expired = [
            job_id
            for job_id, job in self._jobs.items()
            if job.is_terminal and job.completed_at is not None and job.completed_at < cutoff
        ]
        for job_id in expired:
            del self._jobs[job_id]
        if expired:
            logger.info(f"Swept {len(expired)} expired jobs ({len(self._jobs)} remaining)")
        return len(expired)

    def clear(self) -> None:
        self._jobs.clear()

    def _require(self, job_id: str) -> Job:
        job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    def _transition(self, job_id: str, target: JobStatus) -> Job:
        job = self._require(job_id)
        if target not in _ALLOWED_TRANSITIONS[job.status]:
            raise InvalidJobTransitionError(job_id, job.status.value, target.value)
        job.status = target
        return job
