"""
Nexus SEO crawl job engine

Submission/polling job queue in front of a page extractor:
- submit() records a PENDING job and enqueues it without suspending
- a fixed pool of worker tasks runs extractions (bounded browser concurrency)
- each job is mutated only by the worker that dequeued it
- a periodic sweep drops terminal jobs past the retention window
"""

import asyncio
import logging
from datetime import timedelta

from nexus_seo.config import settings
from nexus_seo.core.exceptions import MissingURLError, NexusSEOError
from nexus_seo.models.job import Job
from nexus_seo.services.extractors.base import PageExtractor
from nexus_seo.services.job_store import JobStore

logger = logging.getLogger(__name__)

SHUTDOWN_ERROR = "Job engine shut down before the crawl finished"


class JobEngine:
    """Accepts crawl submissions and processes them on the event loop."""

    def __init__(
        self,
        extractor: PageExtractor,
        store: JobStore | None = None,
        max_concurrent_jobs: int | None = None,
        retention: timedelta | None = None,
        sweep_interval: float | None = None,
    ):
        self.extractor = extractor
        self.store = store if store is not None else JobStore()
        self.max_concurrent_jobs = (
            max_concurrent_jobs if max_concurrent_jobs is not None else settings.MAX_CONCURRENT_JOBS
        )
        if self.max_concurrent_jobs < 1:
            raise ValueError("max_concurrent_jobs must be at least 1")
        self.retention = retention or timedelta(seconds=settings.JOB_RETENTION_SECONDS)
        self.sweep_interval = (
            sweep_interval if sweep_interval is not None else settings.JOB_SWEEP_INTERVAL_SECONDS
        )

        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._workers: list[asyncio.Task] = []
        self._sweeper: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return bool(self._workers)

    @property
    def queued(self) -> int:
        return self._queue.qsize()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self):
        """Spawn the worker pool and the retention sweeper."""
        if self._workers:
            return

        self._workers = [
            asyncio.create_task(self._worker(f"worker-{i}"))
            for i in range(self.max_concurrent_jobs)
        ]
        self._sweeper = asyncio.create_task(self._sweep_loop())
        logger.info(
            f"Job engine started: {self.max_concurrent_jobs} workers, "
            f"{self.extractor.name} extractor, retention {self.retention}"
        )

    async def stop(self):
        """Cancel workers and sweeper, then drain the store."""
        tasks = list(self._workers)
        if self._sweeper is not None:
            tasks.append(self._sweeper)

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._workers = []
        self._sweeper = None
        self.store.clear()
        logger.info("Job engine stopped")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit(self, url: str | None) -> Job:
        """Record a PENDING job for `url` and schedule it. Never blocks."""
        if url is None or not url.strip():
            raise MissingURLError()

        job = self.store.insert(Job(url=url.strip()))
        self._queue.put_nowait(job.id)
        logger.info(f"Job queued: {job.id} ({job.url})")
        return job

    def get_status(self, job_id: str) -> Job:
        """Latest committed snapshot of the job; raises JobNotFoundError."""
        return self.store.get(job_id)

    def sweep(self) -> int:
        return self.store.sweep(retention=self.retention)

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------

    async def _worker(self, name: str):
        while True:
            job_id = await self._queue.get()
            try:
                await self._process(job_id)
            except Exception as e:
                logger.error(f"{name} error on job {job_id}: {e}")
            finally:
                self._queue.task_done()

    async def _process(self, job_id: str):
        """Run one job: PENDING -> PROCESSING -> COMPLETED | FAILED."""
        if job_id not in self.store:
            return

        job = self.store.mark_processing(job_id)
        logger.info(f"Job started: {job_id} ({job.url})")

        try:
            result = await self.extractor.extract(job.url)
        except asyncio.CancelledError:
            self.store.mark_failed(job_id, SHUTDOWN_ERROR)
            raise
        except NexusSEOError as e:
            logger.warning(f"Job failed: {job_id} ({job.url}): {e.message}")
            self.store.mark_failed(job_id, e.message)
        except Exception as e:
            # Any escape here would strand the job in PROCESSING.
            logger.exception(f"Unexpected error in job {job_id} ({job.url})")
            self.store.mark_failed(job_id, getattr(e, "message", None) or str(e) or type(e).__name__)
        else:
            self.store.mark_completed(job_id, result)
            logger.info(f"Job completed: {job_id} ({job.url})")

    async def _sweep_loop(self):
        while True:
            await asyncio.sleep(self.sweep_interval)
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Job sweep failed: {e}")

