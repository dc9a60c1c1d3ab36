"""Synthetic reports for when the provider gives no signal.

Every function takes the random source explicitly, so a seeded
``random.Random`` reproduces a report exactly. Ranges are half-open
unless noted.
"""

import random
from datetime import datetime
from typing import Optional

from .models import (
    AccessibilityDetails,
    AccessibilityResult,
    AuditReport,
    PerformanceMetrics,
    PerformanceResult,
    SecurityDetails,
    SecurityResult,
    SeoDetails,
    SeoResult,
)
from .scoring import (
    MAX_META_TAGS,
    MAX_SECURITY_HEADERS,
    clamp,
    clamp_int,
    compliance_level,
    isoformat,
    overall_score,
)


SCORE_RANGES = {
    "performance": (65, 95),
    "security": (70, 95),
    "seo": (70, 95),
    "accessibility": (60, 95),
}

HTTPS_HEADERS = ("HTTPS", "HSTS", "CSP")
MISSING_HTTPS = ("Missing HTTPS",)


def _chance(rng: random.Random, probability: float) -> bool:
    return rng.random() < probability


def draw_page_size(rng: random.Random) -> float:
    """Page weight in KB."""
    return round(clamp(rng.uniform(500, 2500), 0), 2)


def draw_requests(rng: random.Random) -> int:
    """Request count, 20 to 69 inclusive."""
    return clamp_int(rng.randint(20, 69), 0)


def draw_sitemap(rng: random.Random) -> bool:
    return _chance(rng, 0.6)


def draw_issues(rng: random.Random, color_contrast: bool, alt_text: bool) -> int:
    """Accessibility issue count.

    Narrow range (0-2) when contrast and alt text pass, wide (3-10) otherwise.
    """
    if color_contrast and alt_text:
        return rng.randint(0, 2)
    return rng.randint(3, 10)


def accessibility_details(score: int, color_contrast: bool, alt_text: bool) -> AccessibilityDetails:
    return AccessibilityDetails(
        color_contrast=color_contrast,
        alt_text=alt_text,
        keyboard_navigation=score >= 70,
        aria_labels=score >= 80,
    )


def draw_scores(rng: random.Random) -> dict[str, int]:
    return {name: rng.randrange(low, high) for name, (low, high) in SCORE_RANGES.items()}


def _security(rng: random.Random, score: int) -> SecurityResult:
    ssl = _chance(rng, 0.8)
    headers = clamp_int(rng.randint(7, 9), 0, MAX_SECURITY_HEADERS)
    vulnerabilities = clamp_int(rng.randint(0, 2), 0)
    mixed_content = _chance(rng, 0.3)
    if mixed_content:
        vulnerabilities = max(vulnerabilities, 1)
    return SecurityResult(
        score=score,
        ssl=ssl,
        headers=headers,
        vulnerabilities=vulnerabilities,
        details=SecurityDetails(
            https_used=ssl,
            mixed_content=mixed_content,
            security_headers=HTTPS_HEADERS if ssl else MISSING_HTTPS,
        ),
    )


def _performance(rng: random.Random, score: int) -> PerformanceResult:
    fcp = round(clamp(rng.uniform(1000, 3000), 0), 1)
    lcp = round(clamp(rng.uniform(2000, 5000), fcp), 1)
    cls = round(clamp(rng.uniform(0, 0.3), 0), 3)
    tbt = round(clamp(rng.uniform(100, 600), 0), 1)
    return PerformanceResult(
        score=score,
        load_time=round(clamp(rng.uniform(1, 4), 0), 2),
        page_size=draw_page_size(rng),
        requests=draw_requests(rng),
        metrics=PerformanceMetrics(
            first_contentful_paint=fcp,
            largest_contentful_paint=lcp,
            cumulative_layout_shift=cls,
            total_blocking_time=tbt,
        ),
    )


def _seo(rng: random.Random, score: int) -> SeoResult:
    h1_present = _chance(rng, 0.8)
    return SeoResult(
        score=score,
        meta_tags=clamp_int(rng.randint(7, 11), 0, MAX_META_TAGS),
        headings=h1_present,
        sitemap=draw_sitemap(rng),
        details=SeoDetails(
            title_present=_chance(rng, 0.8),
            meta_description_present=_chance(rng, 0.7),
            h1_present=h1_present,
            image_alt_present=_chance(rng, 0.6),
        ),
    )


def _accessibility(rng: random.Random, score: int) -> AccessibilityResult:
    color_contrast = score >= 70
    alt_text = score >= 60
    return AccessibilityResult(
        score=score,
        issues=draw_issues(rng, color_contrast, alt_text),
        compliance=compliance_level(score),
        details=accessibility_details(score, color_contrast, alt_text),
    )


def generate_fallback(
    url: str,
    rng: random.Random,
    captured_at: Optional[datetime] = None,
) -> AuditReport:
    """Build a plausible, self-consistent report with no provider data."""
    scores = draw_scores(rng)
    security = _security(rng, scores["security"])
    performance = _performance(rng, scores["performance"])
    seo = _seo(rng, scores["seo"])
    accessibility = _accessibility(rng, scores["accessibility"])

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
        source="fallback",
    )
