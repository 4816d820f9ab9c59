"""
Integration tests for the audit assembler.

The assembler drives the real jobs API in-process (ASGITransport) with a stub
extractor behind the engine, or a MockTransport when the API itself
misbehaves.
"""
import asyncio
import json
from unittest.mock import patch

import httpx
import pytest

from nexus_seo.core.exceptions import (
    AuditTimeoutError,
    FetchFailedError,
    JobFailedError,
    UpstreamUnavailableError,
)
from nexus_seo.integrations.insights import InsightsClient, mock_insights
from nexus_seo.integrations.llm import LLMClient, LLMConfig, LLMProvider
from nexus_seo.services import simulation
from nexus_seo.services.assembler import AuditAssembler


def _assembler(client: httpx.AsyncClient, **overrides) -> AuditAssembler:
    options = {
        "base_url": "http://test/api",
        "client": client,
        "poll_interval": 0.01,
        "max_attempts": 100,
        "fallback_delay": 0,
        "degrade_to_simulated": False,
    }
    options.update(overrides)
    return AuditAssembler(**options)


@pytest.fixture
def simulated_spy():
    """Count calls into the simulated audit generator."""
    with patch(
        "nexus_seo.services.assembler.generate_simulated_audit",
        wraps=simulation.generate_simulated_audit,
    ) as spy:
        yield spy


def _mock_api(get_handler) -> httpx.AsyncClient:
    """Job API double: accepts every submission, delegates polls to `get_handler`."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(
                202,
                json={"success": True, "jobId": "job-1", "status": "PENDING", "message": "queued"},
            )
        return get_handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestRunAudit:
    """Test the submit/poll/score flow."""

    @pytest.mark.asyncio
    async def test_completed_job_is_scored(self, async_client, simulated_spy):
        audit = await _assembler(async_client).run_audit("https://example.com")

        assert audit.website_url == "https://example.com"
        assert audit.technical.meta_tags.description.score == 0
        assert audit.on_page.images.score == 100
        assert audit.on_page.headers.h1_count == 1
        simulated_spy.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_job_raises_without_degrade(self, async_client, stub_extractor):
        stub_extractor.error = FetchFailedError("https://example.com", 500)

        with pytest.raises(JobFailedError) as exc_info:
            await _assembler(async_client).run_audit("https://example.com")

        assert exc_info.value.message == "Failed to fetch page: HTTP 500"

    @pytest.mark.asyncio
    async def test_failed_job_degrades_to_simulation(self, async_client, stub_extractor, simulated_spy):
        stub_extractor.error = FetchFailedError("https://example.com", 500)

        audit = await _assembler(async_client, degrade_to_simulated=True).run_audit("https://example.com")

        simulated_spy.assert_called_once_with("https://example.com")
        assert audit.scores.overall == 85
        assert audit.scores.technical == 90

    @pytest.mark.asyncio
    async def test_timeout_raises_without_degrade(self, async_client, stub_extractor):
        stub_extractor.gate = asyncio.Event()

        with pytest.raises(AuditTimeoutError) as exc_info:
            await _assembler(async_client, max_attempts=3).run_audit("https://example.com")

        assert exc_info.value.message == "Crawl timed out after 0.03 seconds"

    @pytest.mark.asyncio
    async def test_timeout_falls_back_exactly_once(self, async_client, stub_extractor, simulated_spy):
        stub_extractor.gate = asyncio.Event()

        audit = await _assembler(
            async_client, max_attempts=3, degrade_to_simulated=True
        ).run_audit("https://example.com")

        assert simulated_spy.call_count == 1
        assert audit.website_url == "https://example.com"

    @pytest.mark.asyncio
    async def test_unreachable_engine(self, simulated_spy):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(UpstreamUnavailableError):
                await _assembler(client).run_audit("https://example.com")

            audit = await _assembler(client, degrade_to_simulated=True).run_audit("https://example.com")

        assert audit.scores.content == 70
        simulated_spy.assert_called_once()

    @pytest.mark.asyncio
    async def test_submission_rejected(self, async_client):
        with pytest.raises(UpstreamUnavailableError, match="HTTP 400"):
            await _assembler(async_client).run_audit("   ")

    @pytest.mark.asyncio
    async def test_failed_polls_count_as_attempts(self):
        polls = []

        def on_poll(request: httpx.Request) -> httpx.Response:
            polls.append(request)
            return httpx.Response(500, json={"error": "Internal Server Error"})

        async with _mock_api(on_poll) as client:
            with pytest.raises(AuditTimeoutError):
                await _assembler(client, max_attempts=3).run_audit("https://example.com")

        assert len(polls) == 3
        assert str(polls[0].url) == "http://test/api/jobs/job-1"

    @pytest.mark.asyncio
    async def test_pending_until_completed(self):
        responses = iter(["PENDING", "PROCESSING", "COMPLETED"])

        def on_poll(request: httpx.Request) -> httpx.Response:
            job_status = next(responses)
            body = {
                "id": "job-1",
                "url": "https://acme.com",
                "status": job_status,
                "submittedAt": "2026-01-10T12:00:00Z",
            }
            if job_status == "COMPLETED":
                body["result"] = {"title": "Acme", "h1s": ["Acme"], "imgCount": 2, "missingAltCount": 1}
            return httpx.Response(200, json=body)

        async with _mock_api(on_poll) as client:
            audit = await _assembler(client).run_audit("https://acme.com")

        assert audit.on_page.images.score == 50
        assert audit.technical.meta_tags.title.content == "Acme"


class TestRunAuditWithInsights:

    @pytest.mark.asyncio
    async def test_insights_merged_after_scoring(self, async_client):
        insights_client = InsightsClient(
            LLMClient(config=LLMConfig(provider=LLMProvider.OPENAI, base_url="", api_key="", model="m"))
        )

        audit = await _assembler(async_client).run_audit_with_insights(
            "https://example.com", insights_client=insights_client
        )

        assert audit.ai_analysis.summary == mock_insights().summary
        assert audit.technical.meta_tags.description.score == 0

    @pytest.mark.asyncio
    async def test_default_insights_client_is_closed(self, async_client):
        answer = {
            "industry": {"primary": "Technology", "subCategory": "SaaS", "confidence": 80, "reasoning": "Docs."},
            "summary": "Reserved documentation domain.",
        }
        llm = LLMClient(
            config=LLMConfig(provider=LLMProvider.OPENAI, base_url="https://llm.test/v1", api_key="sk-test", model="m"),
            transport=httpx.MockTransport(
                lambda request: httpx.Response(
                    200,
                    json={"choices": [{"message": {"role": "assistant", "content": json.dumps(answer)}}]},
                )
            ),
        )

        with patch(
            "nexus_seo.services.assembler.InsightsClient",
            side_effect=lambda: InsightsClient(llm),
        ):
            audit = await _assembler(async_client).run_audit_with_insights("https://example.com")

        assert audit.ai_analysis.summary == "Reserved documentation domain."
        assert llm._http is None

    @pytest.mark.asyncio
    async def test_caller_insights_client_left_open(self, async_client):
        llm = LLMClient(
            config=LLMConfig(provider=LLMProvider.OPENAI, base_url="https://llm.test/v1", api_key="sk-test", model="m"),
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )

        audit = await _assembler(async_client).run_audit_with_insights(
            "https://example.com", insights_client=InsightsClient(llm)
        )

        assert audit.ai_analysis.summary == mock_insights().summary
        assert llm._http is not None and not llm._http.is_closed
        await llm.close()
