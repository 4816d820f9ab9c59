"""
Integration tests for the crawl jobs API.
"""
import asyncio
import uuid

import pytest
from fastapi import status

from nexus_seo.schemas.jobs import JobStatusResponse
from nexus_seo.schemas.page import ExtractedPageData
from nexus_seo.services.scoring import build_scored_audit


async def _poll(async_client, job_id: str, attempts: int = 100) -> dict:
    for _ in range(attempts):
        response = await async_client.get(f"/api/jobs/{job_id}")
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        if body["status"] in ("COMPLETED", "FAILED"):
            return body
        await asyncio.sleep(0.01)
    raise AssertionError(f"Job {job_id} did not finish")


class TestSubmitJob:
    """Test POST /api/jobs."""

    @pytest.mark.asyncio
    async def test_missing_url(self, async_client):
        response = await async_client.post("/api/jobs", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "URL is required"}

    @pytest.mark.asyncio
    async def test_no_body(self, async_client):
        response = await async_client.post("/api/jobs")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "URL is required"}

    @pytest.mark.asyncio
    async def test_non_string_url(self, async_client):
        response = await async_client.post("/api/jobs", json={"url": 42})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "URL is required"}

    @pytest.mark.asyncio
    async def test_malformed_json(self, async_client):
        response = await async_client.post(
            "/api/jobs",
            content=b'{"url": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Request body is not valid JSON"}

    @pytest.mark.asyncio
    async def test_blank_url(self, async_client):
        response = await async_client.post("/api/jobs", json={"url": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "URL is required"}

    @pytest.mark.asyncio
    async def test_accepted(self, async_client):
        response = await async_client.post("/api/jobs", json={"url": "https://example.com"})

        assert response.status_code == status.HTTP_202_ACCEPTED
        body = response.json()
        assert body["success"] is True
        assert body["status"] == "PENDING"
        assert uuid.UUID(body["jobId"])
        assert f"/api/jobs/{body['jobId']}" in body["message"]

    @pytest.mark.asyncio
    async def test_duplicate_submissions_are_independent(self, async_client):
        first = await async_client.post("/api/jobs", json={"url": "https://example.com"})
        second = await async_client.post("/api/jobs", json={"url": "https://example.com"})

        assert first.json()["jobId"] != second.json()["jobId"]


class TestGetJob:
    """Test GET /api/jobs/{id}."""

    @pytest.mark.asyncio
    async def test_not_found(self, async_client):
        fake_id = str(uuid.uuid4())

        response = await async_client.get(f"/api/jobs/{fake_id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": f"Job not found: {fake_id}"}

    @pytest.mark.asyncio
    async def test_completed_job(self, async_client):
        submitted = await async_client.post("/api/jobs", json={"url": "https://example.com"})
        job_id = submitted.json()["jobId"]

        body = await _poll(async_client, job_id)

        assert body["id"] == job_id
        assert body["url"] == "https://example.com"
        assert body["status"] == "COMPLETED"
        assert body["error"] is None
        job = JobStatusResponse.model_validate(body)
        assert job.submitted_at <= job.started_at <= job.completed_at
        assert body["result"] == {
            "title": "Example Domain",
            "description": "",
            "h1s": ["Example Domain"],
            "imgCount": 0,
            "missingAltCount": 0,
            "linkCount": 1,
            "internalLinkCount": 0,
            "wordCount": 28,
            "loadTime": 200,
        }

    @pytest.mark.asyncio
    async def test_completed_result_scores(self, async_client):
        """example.com: no description, no images, one h1."""
        submitted = await async_client.post("/api/jobs", json={"url": "https://example.com"})

        body = await _poll(async_client, submitted.json()["jobId"])
        audit = build_scored_audit(body["url"], ExtractedPageData.model_validate(body["result"]))

        assert audit.technical.meta_tags.description.score == 0
        assert audit.on_page.images.score == 100
        assert audit.on_page.headers.h1_count == 1

    @pytest.mark.asyncio
    async def test_failed_job(self, async_client):
        submitted = await async_client.post("/api/jobs", json={"url": "not-a-url"})
        assert submitted.status_code == status.HTTP_202_ACCEPTED

        body = await _poll(async_client, submitted.json()["jobId"])

        assert body["status"] == "FAILED"
        assert body["result"] is None
        assert body["error"].startswith("Invalid URL format")
        assert body["completedAt"] is not None


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, async_client):
        await async_client.post("/api/jobs", json={"url": "https://example.com"})

        for path in ("/health", "/api/health"):
            response = await async_client.get(path)

            assert response.status_code == status.HTTP_200_OK
            body = response.json()
            assert body["status"] == "healthy"
            assert body["jobs"] == 1
