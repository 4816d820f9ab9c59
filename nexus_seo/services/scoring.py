"""
Nexus SEO scoring engine

Deterministic mapping from extracted page signals to 0-100 scores with
human-readable recommendations. No I/O.

Aggregates are plain means over fixed inputs:
    overall   = floor(mean(performance, images, ON_PAGE_BASELINE, meta description))
    technical = floor(mean(performance, TECHNICAL_BASELINE, meta description))
    on_page   = floor(mean(images, headings, ON_PAGE_BASELINE))
    content   = CONTENT_BASELINE (until AI content scoring exists)

Canonical, sitemap, schema, mobile and internal-link scores are fixed
placeholders until real per-page analysis backs them.
"""

import math
from datetime import datetime, timezone
from urllib.parse import urlparse
from uuid import uuid4

from nexus_seo.schemas.audit import (
    AuditScores,
    CanonicalCheck,
    CoreWebVitals,
    HeaderTag,
    HeadingsAnalysis,
    ImagesAnalysis,
    InternalLinksAnalysis,
    MetaTagAnalysis,
    MetaTags,
    MobileResponsiveCheck,
    OnPageAudit,
    PageSpeed,
    SchemaCheck,
    ScoredAudit,
    SitemapCheck,
    SSLCheck,
    TechnicalAudit,
)
from nexus_seo.schemas.page import ExtractedPageData

CTA_WORDS = (
    "call", "shop", "buy", "learn", "discover", "get",
    "sign", "contact", "try", "join", "click", "read",
)

META_DESCRIPTION_MIN_LENGTH = 120
META_DESCRIPTION_MAX_LENGTH = 165
TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60

# (threshold seconds, penalty); penalties compound
PERFORMANCE_PENALTIES = ((2.5, 20), (4.0, 30), (6.0, 20))
PERFORMANCE_FLOOR = 10
MOBILE_PENALTY = 15

ON_PAGE_BASELINE = 80
TECHNICAL_BASELINE = 100
CONTENT_BASELINE = 70

INTERNAL_LINKS_SCORE = 90
MOBILE_RESPONSIVE_SCORE = 90
SCHEMA_SCORE = 85
SCHEMA_TYPES = ("Organization",)

SSL_MISSING_ISSUE = "SSL Certificate missing or invalid"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def extract_domain(url: str) -> str:
    return urlparse(url).hostname or url


def domain_keyword(url: str) -> str:
    """First dot-delimited label of the hostname, lowercased."""
    return extract_domain(url).split(".")[0].lower()


# =========================================================================
# Meta tags
# =========================================================================

def analyze_meta_description(content: str, keyword: str) -> MetaTagAnalysis:
    """Score a meta description for length, keyword and call-to-action."""
    content = content or ""
    if not content:
        return MetaTagAnalysis(
            content="",
            length=0,
            has_keyword=False,
            has_cta=False,
            score=0,
            recommendations=["Meta description is missing."],
        )

    score = 100
    recommendations: list[str] = []
    lower_content = content.lower()
    length = len(content)

    if length < META_DESCRIPTION_MIN_LENGTH:
        score -= 20
        recommendations.append(
            f"Description is too short ({length} chars). Aim for 150-160 characters."
        )
    elif length > META_DESCRIPTION_MAX_LENGTH:
        score -= 10
        recommendations.append(
            f"Description is too long ({length} chars). Truncation may occur in SERPs."
        )

    keyword = keyword.lower()
    has_keyword = keyword in lower_content
    if keyword and not has_keyword:
        score -= 30
        recommendations.append(f'Primary keyword "{keyword}" is missing from the description.')

    has_cta = any(word in lower_content for word in CTA_WORDS)
    if not has_cta:
        score -= 30
        recommendations.append(
            "No Call-to-Action detected (e.g., 'Learn more', 'Sign up', 'Discover')."
        )

    return MetaTagAnalysis(
        content=content,
        length=length,
        has_keyword=has_keyword,
        has_cta=has_cta,
        score=max(0, score),
        recommendations=recommendations,
    )


def analyze_title(title: str, keyword: str) -> MetaTagAnalysis:
    title = title or ""
    length = len(title)
    recommendations = []
    if length < TITLE_MIN_LENGTH:
        recommendations.append("Title is too short (recommended 30-60 chars)")
    if length > TITLE_MAX_LENGTH:
        recommendations.append("Title is too long (recommended 30-60 chars)")

    return MetaTagAnalysis(
        content=title,
        length=length,
        has_keyword=keyword.lower() in title.lower(),
        score=100 if not recommendations else 50,
        recommendations=recommendations,
    )


# =========================================================================
# Component scores
# =========================================================================

def image_score(img_count: int, missing_alt_count: int) -> int:
    if img_count <= 0:
        return 100
    return max(0, round_half_up(100 * (1 - missing_alt_count / img_count)))


def performance_score(load_time_ms: float) -> int:
    load_time_sec = load_time_ms / 1000
    score = 100
    for threshold, penalty in PERFORMANCE_PENALTIES:
        if load_time_sec > threshold:
            score -= penalty
    return max(PERFORMANCE_FLOOR, score)


def mobile_performance_score(desktop_score: int) -> int:
    """Desktop minus a fixed penalty; deliberately not floored."""
    return desktop_score - MOBILE_PENALTY


def heading_score(h1_count: int) -> int:
    return 100 if h1_count == 1 else 50


def estimate_core_web_vitals(load_time_ms: float) -> CoreWebVitals:
    """Proxy vitals from a single load time measurement."""
    load_time_sec = load_time_ms / 1000
    return CoreWebVitals(
        lcp=round(load_time_sec * 0.8, 2),
        fid=round_half_up(load_time_sec * 20),
        cls=0.05,
    )


def check_ssl(url: str) -> SSLCheck:
    is_secure = urlparse(url).scheme == "https"
    return SSLCheck(
        valid=is_secure,
        score=100 if is_secure else 0,
        issues=[] if is_secure else [SSL_MISSING_ISSUE],
    )


def check_canonical(url: str) -> CanonicalCheck:
    return CanonicalCheck(present=True, url=url, count=1, score=100, issues=[])


def check_sitemap(url: str) -> SitemapCheck:
    return SitemapCheck(present=True, valid=True, url=f"{url.rstrip('/')}/sitemap.xml", score=100)


def check_schema() -> SchemaCheck:
    return SchemaCheck(types=list(SCHEMA_TYPES), valid=True, errors=[], score=SCHEMA_SCORE)


def check_mobile_responsive() -> MobileResponsiveCheck:
    return MobileResponsiveCheck(valid=True, score=MOBILE_RESPONSIVE_SCORE, issues=[])


def aggregate_scores(
    performance: int,
    images: int,
    meta_description: int,
    headings: int,
) -> AuditScores:
    return AuditScores(
        overall=math.floor((performance + images + ON_PAGE_BASELINE + meta_description) / 4),
        technical=math.floor((performance + TECHNICAL_BASELINE + meta_description) / 3),
        on_page=math.floor((images + headings + ON_PAGE_BASELINE) / 3),
        content=CONTENT_BASELINE,
    )


# =========================================================================
# Audit assembly
# =========================================================================

def build_scored_audit(url: str, data: ExtractedPageData) -> ScoredAudit:
    """Turn raw extraction output for `url` into a scored audit."""
    keyword = domain_keyword(url)

    description = analyze_meta_description(data.description, keyword)
    title = analyze_title(data.title, keyword)

    desktop = performance_score(data.load_time)
    images = image_score(data.img_count, data.missing_alt_count)
    headings = heading_score(len(data.h1s))

    technical = TechnicalAudit(
        ssl=check_ssl(url),
        canonical=check_canonical(url),
        page_speed=PageSpeed(
            desktop=desktop,
            mobile=mobile_performance_score(desktop),
            cwv=estimate_core_web_vitals(data.load_time),
            score=desktop,
        ),
        mobile_responsive=check_mobile_responsive(),
        sitemap=check_sitemap(url),
        schema_markup=check_schema(),
        meta_tags=MetaTags(title=title, description=description),
    )

    on_page = OnPageAudit(
        headers=HeadingsAnalysis(
            h1_count=len(data.h1s),
            structure=[HeaderTag(tag="h1", content=h1) for h1 in data.h1s],
            score=headings,
        ),
        internal_links=InternalLinksAnalysis(
            count=data.internal_link_count, broken=0, score=INTERNAL_LINKS_SCORE
        ),
        images=ImagesAnalysis(
            total=data.img_count,
            missing_alt=data.missing_alt_count,
            optimized=0,
            score=images,
        ),
        word_count=data.word_count,
    )

    return ScoredAudit(
        id=uuid4(),
        website_url=url,
        audit_date=datetime.now(timezone.utc),
        technical=technical,
        on_page=on_page,
        scores=aggregate_scores(desktop, images, description.score, headings),
    )
