"""
Simulated audit used when the crawl path is unavailable.

Content is a pure function of the URL (seeded by its length); only the id and
timestamp vary between calls.
"""
from datetime import datetime, timezone
from uuid import uuid4

from nexus_seo.schemas.audit import (
    AuditScores,
    HeaderTag,
    HeadingsAnalysis,
    ImagesAnalysis,
    InternalLinksAnalysis,
    MetaTagAnalysis,
    MetaTags,
    OnPageAudit,
    PageSpeed,
    CoreWebVitals,
    ScoredAudit,
    TechnicalAudit,
)
from nexus_seo.services.scoring import (
    PERFORMANCE_FLOOR,
    analyze_meta_description,
    check_canonical,
    check_mobile_responsive,
    check_schema,
    check_sitemap,
    check_ssl,
    domain_keyword,
    extract_domain,
    mobile_performance_score,
)


def generate_simulated_audit(url: str) -> ScoredAudit:
    seed = len(url)
    domain = extract_domain(url)
    keyword = domain_keyword(url)

    lcp = round(1.2 + (seed % 3), 2)
    performance = max(PERFORMANCE_FLOOR, round(100 - lcp * 10))

    if seed % 3 == 0:
        description_content = f"Discover the best {keyword} solutions. Join satisfied customers."
    else:
        description_content = "Generic description text."

    ssl = check_ssl(url).model_copy(update={"issues": []})

    technical = TechnicalAudit(
        ssl=ssl,
        canonical=check_canonical(url),
        page_speed=PageSpeed(
            desktop=performance,
            mobile=mobile_performance_score(performance),
            cwv=CoreWebVitals(lcp=lcp, fid=30, cls=0.05),
            score=performance,
        ),
        mobile_responsive=check_mobile_responsive(),
        sitemap=check_sitemap(url),
        schema_markup=check_schema(),
        meta_tags=MetaTags(
            title=MetaTagAnalysis(
                content=f"Home | {domain}",
                length=25,
                has_keyword=True,
                score=60,
                recommendations=[],
            ),
            description=analyze_meta_description(description_content, keyword),
        ),
    )

    on_page = OnPageAudit(
        headers=HeadingsAnalysis(
            h1_count=1,
            structure=[HeaderTag(tag="h1", content="Main")],
            score=95,
        ),
        internal_links=InternalLinksAnalysis(count=12, broken=0, score=100),
        images=ImagesAnalysis(total=8, missing_alt=2, optimized=6, score=80),
        word_count=850,
    )

    return ScoredAudit(
        id=uuid4(),
        website_url=url,
        audit_date=datetime.now(timezone.utc),
        technical=technical,
        on_page=on_page,
        scores=AuditScores(overall=85, technical=90, on_page=80, content=70),
    )
