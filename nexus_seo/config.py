from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    PROJECT_NAME: str = "Nexus SEO"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    API_PREFIX: str = "/api"

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    LOG_LEVEL: str = "INFO"

    # Page extraction
    # Backend: "browser" for headless Playwright, "http" for plain fetch + parse
    EXTRACTOR_BACKEND: str = "browser"
    CRAWLER_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    NAVIGATION_TIMEOUT_MS: int = 45000
    HTTP_FETCH_TIMEOUT_SECONDS: int = 30
    BLOCKED_RESOURCE_TYPES: str = "stylesheet,font,media"
    BROWSER_HEADLESS: bool = True

    # Job engine
    MAX_CONCURRENT_JOBS: int = 3
    JOB_RETENTION_SECONDS: int = 60 * 60
    JOB_SWEEP_INTERVAL_SECONDS: int = 60 * 60

    # Audit assembler (client side of the job API)
    AUDIT_API_BASE_URL: str = "http://localhost:3001/api"
    AUDIT_POLL_INTERVAL_SECONDS: float = 2.0
    AUDIT_MAX_POLL_ATTEMPTS: int = 30  # ~60s wall clock
    AUDIT_FALLBACK_DELAY_SECONDS: float = 2.0
    AUDIT_DEGRADE_TO_SIMULATED: bool = True

    # LLM Configuration (AI insights)
    # Provider: "openai" or "local" (any OpenAI-compatible endpoint)
    LLM_PROVIDER: str = "openai"
    LLM_BASE_URL: str = "https://api.openai.com/v1"
    LLM_API_KEY: str = ""
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT_SECONDS: float = 60.0

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def blocked_resource_types(self) -> list[str]:
        return [r.strip() for r in self.BLOCKED_RESOURCE_TYPES.split(",") if r.strip()]


settings = Settings()
