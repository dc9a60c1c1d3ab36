"""Recommendations derived from a report's gated signal fields."""

from .models import AuditReport, Finding, Severity
from .scoring import ISSUE_THRESHOLD


def _security(report: AuditReport) -> list[Finding]:
    findings: list[Finding] = []
    security = report.security

    if security.ssl:
        findings.append(Finding(
            check="security",
            message="Valid SSL certificate found",
            severity=Severity.PASS
        ))
    else:
        findings.append(Finding(
            check="security",
            message="No valid SSL certificate",
            severity=Severity.ERROR,
            fix_hint="Implement SSL/TLS encryption",
            impact=9
        ))

    if security.headers < 8:
        findings.append(Finding(
            check="security",
            message=f"Only {security.headers}/10 security headers implemented",
            severity=Severity.WARNING,
            fix_hint="Add missing security headers (HSTS, CSP, X-Frame-Options)",
            impact=6
        ))

    if security.vulnerabilities > 0:
        findings.append(Finding(
            check="security",
            message=f"{security.vulnerabilities} vulnerabilities found",
            severity=Severity.ERROR,
            details="Mixed content detected" if security.details.mixed_content else None,
            fix_hint="Address identified vulnerabilities",
            impact=8
        ))

    return findings


def _performance(report: AuditReport) -> list[Finding]:
    findings: list[Finding] = []
    performance = report.performance
    metrics = performance.metrics

    if performance.load_time > 2:
        findings.append(Finding(
            check="performance",
            message=f"Slow load time ({performance.load_time:.1f}s)",
            severity=Severity.WARNING if performance.load_time < 4 else Severity.ERROR,
            fix_hint="Optimize server response time",
            impact=6
        ))
    if performance.page_size > 1000:
        findings.append(Finding(
            check="performance",
            message=f"Heavy page ({performance.page_size:.0f} KB)",
            severity=Severity.WARNING,
            fix_hint="Compress images and enable gzip compression",
            impact=4
        ))
    if performance.requests > 30:
        findings.append(Finding(
            check="performance",
            message=f"{performance.requests} HTTP requests",
            severity=Severity.INFO,
            fix_hint="Reduce HTTP requests by combining files",
            impact=3
        ))
    if metrics.first_contentful_paint > 1800:
        findings.append(Finding(
            check="performance",
            message=f"First Contentful Paint is {metrics.first_contentful_paint / 1000:.1f}s",
            severity=Severity.WARNING,
            fix_hint="Improve First Contentful Paint by optimizing critical resources",
            impact=5
        ))
    if metrics.largest_contentful_paint > 2500:
        findings.append(Finding(
            check="performance",
            message=f"Largest Contentful Paint is {metrics.largest_contentful_paint / 1000:.1f}s",
            severity=Severity.WARNING,
            fix_hint="Optimize Largest Contentful Paint by improving image loading",
            impact=5
        ))
    if metrics.cumulative_layout_shift > 0.1:
        findings.append(Finding(
            check="performance",
            message=f"Cumulative Layout Shift is {metrics.cumulative_layout_shift:.3f}",
            severity=Severity.WARNING,
            fix_hint="Reduce Cumulative Layout Shift by setting image dimensions",
            impact=4
        ))

    return findings


def _seo(report: AuditReport) -> list[Finding]:
    findings: list[Finding] = []
    seo = report.seo

    if seo.meta_tags < 8:
        findings.append(Finding(
            check="seo",
            message=f"Only {seo.meta_tags}/12 meta tags present",
            severity=Severity.WARNING,
            fix_hint="Add missing meta tags (description, keywords, og tags)",
            impact=5
        ))
    if not seo.headings:
        findings.append(Finding(
            check="seo",
            message="Heading structure needs work",
            severity=Severity.WARNING,
            fix_hint="Use a single H1 and keep heading levels in order",
            impact=4
        ))
    if not seo.sitemap:
        findings.append(Finding(
            check="seo",
            message="No XML sitemap found",
            severity=Severity.INFO,
            fix_hint="Create and submit an XML sitemap",
            impact=3
        ))

    return findings


def _accessibility(report: AuditReport) -> list[Finding]:
    findings: list[Finding] = []
    accessibility = report.accessibility

    if accessibility.issues >= ISSUE_THRESHOLD:
        findings.append(Finding(
            check="accessibility",
            message=f"{accessibility.issues} accessibility issues",
            severity=Severity.ERROR if accessibility.issues > 5 else Severity.WARNING,
            fix_hint="Fix color contrast and add alt text to images",
            impact=7
        ))
    if accessibility.compliance == "A":
        findings.append(Finding(
            check="accessibility",
            message="Only WCAG level A compliance",
            severity=Severity.WARNING,
            fix_hint="Add ARIA labels and ensure full keyboard navigation",
            impact=6
        ))
    elif accessibility.compliance == "AAA":
        findings.append(Finding(
            check="accessibility",
            message="WCAG AAA compliance",
            severity=Severity.PASS
        ))

    return findings


def build_recommendations(report: AuditReport) -> list[Finding]:
    """All findings for a report, grouped by category."""
    return (
        _security(report)
        + _performance(report)
        + _seo(report)
        + _accessibility(report)
    )


def quick_wins(findings: list[Finding], limit: int = 5) -> list[Finding]:
    """Top findings sorted by impact that come with a fix."""
    actionable = [
        f for f in findings
        if f.severity in (Severity.ERROR, Severity.WARNING) and f.fix_hint
    ]
    return sorted(actionable, key=lambda f: f.impact, reverse=True)[:limit]
