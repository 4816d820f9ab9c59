"""
Audit assembler

Client-side orchestration over the job API:
1. POST {base}/jobs -> job id
2. GET {base}/jobs/{id} every poll interval, up to max attempts
3. COMPLETED -> score the extracted data

With `degrade_to_simulated` on, any failure along the way (engine unreachable,
job FAILED, polling budget exhausted) yields a simulated audit after a short
delay, so `run_audit` always returns an audit.
"""

import asyncio
import logging
from typing import Optional

import httpx

from nexus_seo.config import settings
from nexus_seo.core.exceptions import (
    AuditTimeoutError,
    JobFailedError,
    UpstreamUnavailableError,
)
from nexus_seo.integrations.insights import InsightsClient
from nexus_seo.models.job import JobStatus
from nexus_seo.schemas.audit import ScoredAudit
from nexus_seo.schemas.jobs import JobAcceptedResponse, JobStatusResponse
from nexus_seo.services.scoring import build_scored_audit
from nexus_seo.services.simulation import generate_simulated_audit

logger = logging.getLogger(__name__)


class AuditAssembler:
    """Submit a crawl job, poll it, and turn the result into a scored audit."""

    def __init__(
        self,
        base_url: str | None = None,
        client: Optional[httpx.AsyncClient] = None,
        poll_interval: float | None = None,
        max_attempts: int | None = None,
        fallback_delay: float | None = None,
        degrade_to_simulated: bool | None = None,
        request_timeout: float = 10.0,
    ):
        self.base_url = (base_url or settings.AUDIT_API_BASE_URL).rstrip("/")
        self.client = client
        self.poll_interval = (
            poll_interval if poll_interval is not None else settings.AUDIT_POLL_INTERVAL_SECONDS
        )
        self.max_attempts = max_attempts if max_attempts is not None else settings.AUDIT_MAX_POLL_ATTEMPTS
        self.fallback_delay = (
            fallback_delay if fallback_delay is not None else settings.AUDIT_FALLBACK_DELAY_SECONDS
        )
        self.degrade_to_simulated = (
            degrade_to_simulated if degrade_to_simulated is not None else settings.AUDIT_DEGRADE_TO_SIMULATED
        )
        self.request_timeout = request_timeout

    async def run_audit(self, url: str) -> ScoredAudit:
        try:
            if self.client is not None:
                return await self._crawl(self.client, url)
            async with httpx.AsyncClient(timeout=self.request_timeout) as client:
                return await self._crawl(client, url)
        except Exception as e:
            if not self.degrade_to_simulated:
                raise
            logger.warning(
                f"Crawl job for {url} failed ({type(e).__name__}: {e}). Switching to simulation mode."
            )
            await asyncio.sleep(self.fallback_delay)
            return generate_simulated_audit(url)

    async def run_audit_with_insights(
        self,
        url: str,
        insights_client: Optional[InsightsClient] = None,
    ) -> ScoredAudit:
        """Run the audit, then merge AI insights in as a separate step."""
        audit = await self.run_audit(url)

        if insights_client is not None:
            insights = await insights_client.generate_insights(audit)
            return audit.with_insights(insights)

        insights_client = InsightsClient()
        try:
            insights = await insights_client.generate_insights(audit)
        finally:
            await insights_client.close()
        return audit.with_insights(insights)

    async def _crawl(self, client: httpx.AsyncClient, url: str) -> ScoredAudit:
        job_id = await self._submit(client, url)
        logger.info(f"Job queued: {job_id}")

        for attempt in range(1, self.max_attempts + 1):
            await asyncio.sleep(self.poll_interval)

            response = await client.get(f"{self.base_url}/jobs/{job_id}")
            if not response.is_success:
                logger.debug(f"Poll {attempt}/{self.max_attempts} for {job_id}: HTTP {response.status_code}")
                continue

            job = JobStatusResponse.model_validate(response.json())
            logger.debug(f"Job {job_id} status: {job.status.value} ({attempt}/{self.max_attempts})")

            if job.status == JobStatus.COMPLETED and job.result is not None:
                return build_scored_audit(url, job.result)
            if job.status == JobStatus.FAILED:
                raise JobFailedError(job.error or "Crawler job failed on server")

        raise AuditTimeoutError(self.poll_interval * self.max_attempts)

    async def _submit(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            response = await client.post(f"{self.base_url}/jobs", json={"url": url})
        except httpx.TransportError as e:
            raise UpstreamUnavailableError(f"Job engine unreachable: {type(e).__name__}: {e}") from e

        if not response.is_success:
            raise UpstreamUnavailableError(
                f"Job submission failed: HTTP {response.status_code} {response.reason_phrase}"
            )

        return JobAcceptedResponse.model_validate(response.json()).job_id
