"""
FastAPI application entry point for Nexus SEO.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nexus_seo.api.router import api_router
from nexus_seo.config import settings
from nexus_seo.core.exceptions import MissingURLError, NexusSEOError
from nexus_seo.services.extractors import get_page_extractor
from nexus_seo.services.job_engine import JobEngine

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    engine = getattr(app.state, "job_engine", None)
    if engine is None:
        engine = JobEngine(get_page_extractor())
        app.state.job_engine = engine
    await engine.start()
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} ready ({settings.ENVIRONMENT})")
    yield
    # Shutdown
    await engine.stop()


async def nexus_error_handler(request: Request, exc: NexusSEOError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body validation failures in the same `{error}` shape as domain errors."""
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        message = "Request body is not valid JSON"
    else:
        message = MissingURLError().message
    logger.debug(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=f"{settings.API_PREFIX}/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NexusSEOError, nexus_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        return _health(request)

    @app.get(f"{settings.API_PREFIX}/health")
    async def api_health_check(request: Request):
        """API health check endpoint."""
        return _health(request)

    return app


def _health(request: Request) -> dict:
    engine = getattr(request.app.state, "job_engine", None)
    return {
        "status": "healthy" if engine is not None and engine.running else "starting",
        "version": settings.VERSION,
        "jobs": len(engine.store) if engine is not None else 0,
    }


app = create_app()
