"""Score arithmetic shared by the provider and fallback paths."""

import math
from datetime import datetime, timezone

from .errors import SynthesisError
from .models import AuditReport


COMPLIANCE_LEVELS = ("A", "AA", "AAA")
MAX_SECURITY_HEADERS = 10
MAX_META_TAGS = 12

# Accessibility issues below this count mean contrast and alt text both pass.
ISSUE_THRESHOLD = 3


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    ``round()`` uses banker's rounding, which would turn a 72.5 mean into 72.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float = math.inf) -> float:
    return max(low, min(high, value))


def clamp_int(value: int, low: int, high: int | None = None) -> int:
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


def to_percent(fraction: float | None) -> int:
    """Scale a provider score in [0, 1] to an integer percentage.

    Absent scores count as 0. Anything outside [0, 1] is clamped.
    """
    if fraction is None:
        return 0
    return round_half_up(clamp(fraction, 0.0, 1.0) * 100)


def overall_score(*scores: int) -> int:
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


def compliance_level(score: int) -> str:
    """Map an accessibility score to its compliance grade."""
    if score >= 90:
        return "AAA"
    elif score >= 70:
        return "AA"
    else:
        return "A"


def score_label(score: int) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 70:
        return "Good"
    elif score >= 50:
        return "Needs Improvement"
    else:
        return "Poor"


def isoformat(captured_at: datetime | None = None) -> str:
    """Capture time as an ISO-8601 UTC string with millisecond precision."""
    if captured_at is None:
        captured_at = datetime.now(timezone.utc)
    elif captured_at.tzinfo is None:
        captured_at = captured_at.replace(tzinfo=timezone.utc)
    stamp = captured_at.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def _is_score(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 100


def report_problems(report: AuditReport) -> list[str]:
    """List every invariant the report breaks. Empty means valid."""
    problems: list[str] = []

    for name, score in report.category_scores.items():
        if not _is_score(score):
            problems.append(f"{name}.score out of range: {score!r}")
    if not _is_score(report.overall_score):
        problems.append(f"overall_score out of range: {report.overall_score!r}")
    elif not problems:
        expected = overall_score(*report.category_scores.values())
        if report.overall_score != expected:
            problems.append(
                f"overall_score {report.overall_score} != mean of categories {expected}"
            )

    security = report.security
    if not 0 <= security.headers <= MAX_SECURITY_HEADERS:
        problems.append(f"security.headers out of range: {security.headers}")
    if security.vulnerabilities < 0:
        problems.append(f"security.vulnerabilities negative: {security.vulnerabilities}")

    performance = report.performance
    for name, value in (
        ("load_time", performance.load_time),
        ("page_size", performance.page_size),
        ("requests", performance.requests),
        ("first_contentful_paint", performance.metrics.first_contentful_paint),
        ("largest_contentful_paint", performance.metrics.largest_contentful_paint),
        ("cumulative_layout_shift", performance.metrics.cumulative_layout_shift),
        ("total_blocking_time", performance.metrics.total_blocking_time),
    ):
        if not value >= 0:
            problems.append(f"performance.{name} negative or NaN: {value}")

    if not 0 <= report.seo.meta_tags <= MAX_META_TAGS:
        problems.append(f"seo.meta_tags out of range: {report.seo.meta_tags}")

    accessibility = report.accessibility
    if accessibility.issues < 0:
        problems.append(f"accessibility.issues negative: {accessibility.issues}")
    if _is_score(accessibility.score):
        expected_level = compliance_level(accessibility.score)
        if accessibility.compliance != expected_level:
            problems.append(
                f"accessibility.compliance {accessibility.compliance!r} "
                f"!= {expected_level!r} for score {accessibility.score}"
            )
    favorable = accessibility.details.color_contrast and accessibility.details.alt_text
    if favorable != (accessibility.issues < ISSUE_THRESHOLD):
        problems.append(
            f"accessibility.issues={accessibility.issues} inconsistent with "
            f"contrast/alt-text flags"
        )

    return problems


def validate_report(report: AuditReport) -> AuditReport:
    """Return the report unchanged, or raise SynthesisError."""
    problems = report_problems(report)
    if problems:
        raise SynthesisError(
            f"Report for {report.url} violates invariants: " + "; ".join(problems)
        )
    return report
