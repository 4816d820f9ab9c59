"""
AI audit insights.

Asks an LLM to classify the site's industry, propose recommendations and
keyword opportunities, and summarize the audit. The call is optional: with no
credentials, or on any failure, fixed mock insights are returned instead.
"""
import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from nexus_seo.integrations.llm import LLMClient, Message
from nexus_seo.schemas.audit import (
    AuditInsights,
    EffortLevel,
    ImpactLevel,
    IndustryClassification,
    KeywordOpportunity,
    Recommendation,
    ScoredAudit,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an elite SEO Strategist. You answer with a single JSON object only."

RESPONSE_SHAPE = """{
  "industry": {"primary": str, "subCategory": str, "confidence": number 0-100, "reasoning": str},
  "recommendations": [{"id": str, "priority": int, "title": str, "impact": "High"|"Medium"|"Low",
                       "effort": "High"|"Medium"|"Low", "category": str, "description": str,
                       "steps": [str], "estimatedTime": str}],
  "keywords": [{"phrase": str, "volume": int, "difficulty": "Easy"|"Medium"|"Hard", "intent": str}],
  "summary": str
}"""


def build_insights_prompt(audit: ScoredAudit) -> str:
    technical = audit.technical
    on_page = audit.on_page
    return f"""Analyze the following technical audit data for {audit.website_url}.

Audit Summary:
- Title: {technical.meta_tags.title.content}
- Description: {technical.meta_tags.description.content}
- H1 Count: {on_page.headers.h1_count}
- Word Count: {on_page.word_count}
- Core Web Vitals LCP: {technical.page_speed.cwv.lcp}s
- SSL: {str(technical.ssl.valid).lower()}

Task:
1. Classify the industry.
2. Generate 3 high-impact strategic recommendations.
3. Suggest 5 keyword opportunities (mix of long-tail).
4. Write a 2-sentence executive summary.

Return ONLY JSON with this shape:
{RESPONSE_SHAPE}"""


def mock_insights() -> AuditInsights:
    """Fallback for demo/no-key scenarios."""
    return AuditInsights(
        industry=IndustryClassification(
            primary="Technology",
            sub_category="SaaS",
            confidence=85,
            reasoning="Detected technical terminology and software product schemas.",
        ),
        recommendations=[
            Recommendation(
                id="rec_1",
                priority=1,
                title="Implement Schema.org Structured Data",
                impact=ImpactLevel.HIGH,
                effort=EffortLevel.LOW,
                category="Technical",
                description="Enhance rich snippets by adding Organization and Product schema.",
                steps=["Generate JSON-LD", "Inject into Head"],
                estimated_time="1 hour",
            ),
            Recommendation(
                id="rec_2",
                priority=2,
                title="Optimize LCP (Largest Contentful Paint)",
                impact=ImpactLevel.HIGH,
                effort=EffortLevel.MEDIUM,
                category="Performance",
                description="Your LCP is 3.2s. Aim for < 2.5s by optimizing hero images.",
                steps=["Convert to WebP", "Preload hero image"],
                estimated_time="3 hours",
            ),
        ],
        keywords=[
            KeywordOpportunity(
                phrase="enterprise seo platform", volume=1200, difficulty="Hard", intent="Commercial"
            ),
            KeywordOpportunity(
                phrase="seo audit tools for agencies", volume=450, difficulty="Medium", intent="Transactional"
            ),
        ],
        summary=(
            "The site has a strong technical foundation but lacks semantic depth. "
            "Performance optimizations and structured data implementation will yield the highest ROI."
        ),
    )


class InsightsClient:
    """Generate AI insights for a scored audit."""

    def __init__(self, llm: Optional[LLMClient] = None):
        self.llm = llm or LLMClient()

    async def generate_insights(self, audit: ScoredAudit) -> AuditInsights:
        if not self.llm.config.configured:
            logger.warning("No LLM API key configured. Returning mock AI insights.")
            return mock_insights()

        messages = [
            Message(role="system", content=SYSTEM_PROMPT),
            Message(role="user", content=build_insights_prompt(audit)),
        ]

        try:
            response = await self.llm.chat(messages, json_mode=True)
            if not response.content:
                raise ValueError("Empty response from AI")
            return AuditInsights.model_validate(json.loads(response.content))
        except (httpx.HTTPError, ValueError, KeyError, PydanticValidationError) as e:
            logger.error(f"AI insight generation failed for {audit.website_url}: {type(e).__name__}: {e}")
            return mock_insights()

    async def close(self):
        await self.llm.close()
