"""
Pydantic schemas for Nexus SEO.
"""
from nexus_seo.schemas.common import BaseSchema, FrozenSchema, ErrorResponse
from nexus_seo.schemas.page import ExtractedPageData
from nexus_seo.schemas.audit import (
    AIAnalysis,
    AuditInsights,
    AuditScores,
    MetaTagAnalysis,
    ScoredAudit,
)
from nexus_seo.schemas.jobs import (
    CrawlRequest,
    CrawlResponse,
    JobAcceptedResponse,
    JobStatusResponse,
    JobSubmitRequest,
)

__all__ = [
    "BaseSchema",
    "FrozenSchema",
    "ErrorResponse",
    "ExtractedPageData",
    "AIAnalysis",
    "AuditInsights",
    "AuditScores",
    "MetaTagAnalysis",
    "ScoredAudit",
    "CrawlRequest",
    "CrawlResponse",
    "JobAcceptedResponse",
    "JobStatusResponse",
    "JobSubmitRequest",
]
