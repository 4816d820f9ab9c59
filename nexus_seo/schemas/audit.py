"""
Scored audit schemas.

Field names are snake_case in Python and serialize to the camelCase audit
object consumed by the dashboard (``technical.metaTags.description.score``,
``onPage.headers.h1Count`` and so on).
"""
from datetime import datetime
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import Field, model_serializer

from nexus_seo.schemas.common import FrozenSchema


class ImpactLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class EffortLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# ---------------------------------------------------------------------------
# Technical
# ---------------------------------------------------------------------------

class MetaTagAnalysis(FrozenSchema):
    content: str
    length: int
    has_keyword: bool | None = None
    has_cta: bool | None = Field(default=None, alias="hasCTA")
    score: int
    recommendations: list[str] = Field(default_factory=list)


class MetaTags(FrozenSchema):
    title: MetaTagAnalysis
    description: MetaTagAnalysis


class SSLCheck(FrozenSchema):
    valid: bool
    score: int
    issues: list[str] = Field(default_factory=list)


class CanonicalCheck(FrozenSchema):
    present: bool
    url: str | None = None
    count: int
    score: int
    issues: list[str] = Field(default_factory=list)


class CoreWebVitals(FrozenSchema):
    lcp: float
    fid: int
    cls: float


class PageSpeed(FrozenSchema):
    desktop: int
    mobile: int
    cwv: CoreWebVitals
    score: int


class MobileResponsiveCheck(FrozenSchema):
    valid: bool
    score: int
    issues: list[str] = Field(default_factory=list)


class SitemapCheck(FrozenSchema):
    present: bool
    valid: bool
    url: str
    score: int


class SchemaError(FrozenSchema):
    type: str
    message: str


class SchemaCheck(FrozenSchema):
    types: list[str] = Field(default_factory=list)
    valid: bool
    errors: list[SchemaError] = Field(default_factory=list)
    score: int


class TechnicalAudit(FrozenSchema):
    ssl: SSLCheck
    canonical: CanonicalCheck
    page_speed: PageSpeed
    mobile_responsive: MobileResponsiveCheck
    sitemap: SitemapCheck
    schema_markup: SchemaCheck = Field(alias="schema")
    meta_tags: MetaTags


# ---------------------------------------------------------------------------
# On-page
# ---------------------------------------------------------------------------

class HeaderTag(FrozenSchema):
    tag: str
    content: str


class HeadingsAnalysis(FrozenSchema):
    h1_count: int
    structure: list[HeaderTag] = Field(default_factory=list)
    score: int


class InternalLinksAnalysis(FrozenSchema):
    count: int
    broken: int
    score: int


class ImagesAnalysis(FrozenSchema):
    total: int
    missing_alt: int
    optimized: int
    score: int


class OnPageAudit(FrozenSchema):
    headers: HeadingsAnalysis
    internal_links: InternalLinksAnalysis
    images: ImagesAnalysis
    word_count: int


# ---------------------------------------------------------------------------
# AI analysis (filled by the insights collaborator after scoring)
# ---------------------------------------------------------------------------

class IndustryClassification(FrozenSchema):
    primary: str
    sub_category: str
    confidence: float
    reasoning: str


class Recommendation(FrozenSchema):
    id: str
    priority: int
    title: str
    impact: ImpactLevel
    effort: EffortLevel
    category: str
    description: str
    steps: list[str] = Field(default_factory=list)
    estimated_time: str


class KeywordOpportunity(FrozenSchema):
    phrase: str
    volume: int
    difficulty: Literal["Easy", "Medium", "Hard"]
    intent: str


class AIAnalysis(FrozenSchema):
    industry: IndustryClassification | None = None
    recommendations: list[Recommendation] | None = None
    keyword_opportunities: list[KeywordOpportunity] | None = None
    summary: str | None = None

    @model_serializer(mode="wrap")
    def _drop_unset(self, handler):
        # Before insights are merged the dashboard expects `{}`.
        return {key: value for key, value in handler(self).items() if value is not None}


class AuditInsights(FrozenSchema):
    """Output shape of the insights collaborator."""

    industry: IndustryClassification
    recommendations: list[Recommendation] = Field(default_factory=list)
    keywords: list[KeywordOpportunity] = Field(default_factory=list)
    summary: str = ""


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

class AuditScores(FrozenSchema):
    overall: int
    technical: int
    on_page: int
    content: int


class ScoredAudit(FrozenSchema):
    id: UUID
    website_url: str
    audit_date: datetime
    technical: TechnicalAudit
    on_page: OnPageAudit
    ai_analysis: AIAnalysis = Field(default_factory=AIAnalysis)
    scores: AuditScores

    def with_insights(self, insights: AuditInsights) -> "ScoredAudit":
        """Return a copy with the AI analysis merged in."""
        ai_analysis = AIAnalysis(
            industry=insights.industry,
            recommendations=insights.recommendations,
            keyword_opportunities=insights.keywords,
            summary=insights.summary,
        )
        return self.model_copy(update={"ai_analysis": ai_analysis})
