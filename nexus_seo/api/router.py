"""
API router aggregating all endpoints.
"""
from fastapi import APIRouter

from nexus_seo.api.jobs import router as jobs_router
from nexus_seo.api.crawl import router as crawl_router

api_router = APIRouter()

api_router.include_router(jobs_router)
api_router.include_router(crawl_router)
