"""
Pytest configuration and fixtures for Nexus SEO tests.
"""
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from nexus_seo.schemas.page import ExtractedPageData
from nexus_seo.services.job_engine import JobEngine
from nexus_seo.services.job_store import JobStore
from tests.fixtures.extractors import StubExtractor


# ============================================================================
# Sample Data Fixtures
# ============================================================================

@pytest.fixture
def example_page_data() -> ExtractedPageData:
    """What the browser extractor reads from https://example.com."""
    return ExtractedPageData(
        title="Example Domain",
        description="",
        h1s=["Example Domain"],
        img_count=0,
        missing_alt_count=0,
        link_count=1,
        internal_link_count=0,
        word_count=28,
        load_time=200,
    )


@pytest.fixture
def stub_extractor(example_page_data: ExtractedPageData) -> StubExtractor:
    return StubExtractor(data=example_page_data)


# ============================================================================
# Engine / App Fixtures
# ============================================================================

@pytest.fixture
def job_store() -> JobStore:
    return JobStore()


@pytest_asyncio.fixture(scope="function")
async def job_engine(stub_extractor: StubExtractor, job_store: JobStore) -> AsyncGenerator[JobEngine, None]:
    """Running engine over the stub extractor."""
    engine = JobEngine(stub_extractor, store=job_store, max_concurrent_jobs=2)
    await engine.start()
    yield engine
    await engine.stop()


@pytest.fixture(scope="function")
def app(job_engine: JobEngine) -> FastAPI:
    """Create test FastAPI application wired to the running engine."""
    from nexus_seo.main import create_app

    test_app = create_app()
    test_app.state.job_engine = job_engine

    yield test_app

    test_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
