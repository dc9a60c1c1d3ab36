"""Data models for website audit reports."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Severity(Enum):
    """Severity level for recommendations."""
    PASS = "pass"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Finding:
    """A single recommendation derived from a report."""
    check: str
    message: str
    severity: Severity
    details: Optional[str] = None
    fix_hint: Optional[str] = None
    impact: int = 1  # 1-10 scale for prioritization


@dataclass(frozen=True)
class SecurityDetails:
    https_used: bool
    mixed_content: bool
    security_headers: tuple[str, ...]


@dataclass(frozen=True)
class SecurityResult:
    """Security category: SSL, security headers (out of 10), vulnerabilities."""
    score: int
    ssl: bool
    headers: int
    vulnerabilities: int
    details: SecurityDetails

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "ssl": self.ssl,
            "headers": self.headers,
            "vulnerabilities": self.vulnerabilities,
            "details": {
                "httpsUsed": self.details.https_used,
                "mixedContent": self.details.mixed_content,
                "securityHeaders": list(self.details.security_headers),
            },
        }


@dataclass(frozen=True)
class PerformanceMetrics:
    """Lab metrics. Paint and blocking times in ms, layout shift unitless."""
    first_contentful_paint: float
    largest_contentful_paint: float
    cumulative_layout_shift: float
    total_blocking_time: float


@dataclass(frozen=True)
class PerformanceResult:
    """Performance category. load_time in seconds, page_size in KB."""
    score: int
    load_time: float
    page_size: float
    requests: int
    metrics: PerformanceMetrics

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "loadTime": self.load_time,
            "pageSize": self.page_size,
            "requests": self.requests,
            "metrics": {
                "firstContentfulPaint": self.metrics.first_contentful_paint,
                "largestContentfulPaint": self.metrics.largest_contentful_paint,
                "cumulativeLayoutShift": self.metrics.cumulative_layout_shift,
                "totalBlockingTime": self.metrics.total_blocking_time,
            },
        }


@dataclass(frozen=True)
class SeoDetails:
    title_present: bool
    meta_description_present: bool
    h1_present: bool
    image_alt_present: bool


@dataclass(frozen=True)
class SeoResult:
    """SEO category. meta_tags counts present tags out of 12."""
    score: int
    meta_tags: int
    headings: bool
    sitemap: bool
    details: SeoDetails

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "metaTags": self.meta_tags,
            "headings": self.headings,
            "sitemap": self.sitemap,
            "details": {
                "titlePresent": self.details.title_present,
                "metaDescriptionPresent": self.details.meta_description_present,
                "h1Present": self.details.h1_present,
                "imageAltPresent": self.details.image_alt_present,
            },
        }


@dataclass(frozen=True)
class AccessibilityDetails:
    color_contrast: bool
    alt_text: bool
    keyboard_navigation: bool
    aria_labels: bool


@dataclass(frozen=True)
class AccessibilityResult:
    """Accessibility category with its WCAG-style compliance grade."""
    score: int
    issues: int
    compliance: str  # "A", "AA" or "AAA"
    details: AccessibilityDetails

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "issues": self.issues,
            "compliance": self.compliance,
            "details": {
                "colorContrast": self.details.color_contrast,
                "altText": self.details.alt_text,
                "keyboardNavigation": self.details.keyboard_navigation,
                "ariaLabels": self.details.aria_labels,
            },
        }


@dataclass(frozen=True)
class AuditReport:
    """Complete audit report for a URL.

    Built once by the synthesizer and never modified afterwards. ``source``
    records which path produced it: ``"provider"`` or ``"fallback"``.
    """
    url: str
    timestamp: str
    overall_score: int
    security: SecurityResult
    performance: PerformanceResult
    seo: SeoResult
    accessibility: AccessibilityResult
    source: str = "provider"

    @property
    def category_scores(self) -> dict[str, int]:
        return {
            "security": self.security.score,
            "performance": self.performance.score,
            "seo": self.seo.score,
            "accessibility": self.accessibility.score,
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys consumers expect."""
        return {
            "url": self.url,
            "timestamp": self.timestamp,
            "overallScore": self.overall_score,
            "source": self.source,
            "security": self.security.to_dict(),
            "performance": self.performance.to_dict(),
            "seo": self.seo.to_dict(),
            "accessibility": self.accessibility.to_dict(),
        }
