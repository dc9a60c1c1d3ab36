"""Turn a raw Lighthouse payload into an AuditReport."""

import random
from datetime import datetime
from typing import Optional

from .fallback import (
    MISSING_HTTPS,
    accessibility_details,
    draw_issues,
    draw_page_size,
    draw_requests,
    draw_sitemap,
)
from .models import (
    AccessibilityResult,
    AuditReport,
    PerformanceMetrics,
    PerformanceResult,
    SecurityDetails,
    SecurityResult,
    SeoDetails,
    SeoResult,
)
from .provider import RawProviderPayload
from .scoring import clamp, compliance_level, isoformat, overall_score, to_percent


# Lighthouse marks a passing binary audit with score 1.
PASSING = 1

SECURE_HEADERS = ("HTTPS", "Secure Headers")


def _passed(payload: RawProviderPayload, audit: str) -> bool:
    return payload.audit_score(audit) == PASSING


def _metric(payload: RawProviderPayload, audit: str) -> float:
    value = payload.audit_value(audit)
    return clamp(value, 0) if value is not None else 0.0


def _security(payload: RawProviderPayload) -> SecurityResult:
    https_used = _passed(payload, "is-on-https")
    mixed_content = not _passed(payload, "mixed-content")
    return SecurityResult(
        score=to_percent(payload.category_score("best-practices")),
        ssl=https_used,
        headers=8 if https_used else 4,
        vulnerabilities=1 if mixed_content else 0,
        details=SecurityDetails(
            https_used=https_used,
            mixed_content=mixed_content,
            security_headers=SECURE_HEADERS if https_used else MISSING_HTTPS,
        ),
    )


def _performance(payload: RawProviderPayload, rng: random.Random) -> PerformanceResult:
    fcp = _metric(payload, "first-contentful-paint")
    return PerformanceResult(
        score=to_percent(payload.category_score("performance")),
        load_time=fcp / 1000,
        # Page weight and request count are not in the category scores.
        page_size=draw_page_size(rng),
        requests=draw_requests(rng),
        metrics=PerformanceMetrics(
            first_contentful_paint=fcp,
            largest_contentful_paint=_metric(payload, "largest-contentful-paint"),
            cumulative_layout_shift=_metric(payload, "cumulative-layout-shift"),
            total_blocking_time=_metric(payload, "total-blocking-time"),
        ),
    )


def _seo(payload: RawProviderPayload, rng: random.Random) -> SeoResult:
    title_present = _passed(payload, "document-title")
    description_present = _passed(payload, "meta-description")
    h1_present = _passed(payload, "heading-order")
    return SeoResult(
        score=to_percent(payload.category_score("seo")),
        meta_tags=5 + sum((title_present, description_present, h1_present)),
        headings=h1_present,
        sitemap=draw_sitemap(rng),
        details=SeoDetails(
            title_present=title_present,
            meta_description_present=description_present,
            h1_present=h1_present,
            image_alt_present=_passed(payload, "image-alt"),
        ),
    )


def _accessibility(payload: RawProviderPayload, rng: random.Random) -> AccessibilityResult:
    score = to_percent(payload.category_score("accessibility"))
    color_contrast = _passed(payload, "color-contrast")
    alt_text = _passed(payload, "image-alt")
    return AccessibilityResult(
        score=score,
        issues=draw_issues(rng, color_contrast, alt_text),
        compliance=compliance_level(score),
        details=accessibility_details(score, color_contrast, alt_text),
    )


def normalize_payload(
    payload: RawProviderPayload,
    url: str,
    rng: random.Random,
    captured_at: Optional[datetime] = None,
) -> AuditReport:
    """Build a report from real provider scores.

    Category scores always come from the payload. Only the fields Lighthouse
    does not report (page size, request count, sitemap, issue count) are
    drawn from ``rng``.
    """
    security = _security(payload)
    performance = _performance(payload, rng)
    seo = _seo(payload, rng)
    accessibility = _accessibility(payload, rng)

    return AuditReport(
        url=url,
        timestamp=isoformat(captured_at),
        overall_score=overall_score(
            security.score, performance.score, seo.score, accessibility.score
        ),
        security=security,
        performance=performance,
        seo=seo,
        accessibility=accessibility,
        source="provider",
    )
