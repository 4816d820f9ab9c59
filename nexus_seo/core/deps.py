"""
FastAPI dependencies for the job engine and extractors.
"""
from typing import Annotated

from fastapi import Depends, Request

from nexus_seo.services.extractors.http import HttpPageExtractor
from nexus_seo.services.job_engine import JobEngine


def get_job_engine(request: Request) -> JobEngine:
    """The engine created by the application lifespan."""
    engine = getattr(request.app.state, "job_engine", None)
    if engine is None:
        raise RuntimeError("Job engine is not initialized; is the application lifespan running?")
    return engine


def get_http_extractor() -> HttpPageExtractor:
    return HttpPageExtractor()


JobEngineDep = Annotated[JobEngine, Depends(get_job_engine)]
HttpExtractorDep = Annotated[HttpPageExtractor, Depends(get_http_extractor)]
