"""Tests for recommendations built from report signals."""

import random

import pytest

from site_audit.models import Severity
from site_audit.normalize import normalize_payload
from site_audit.provider import parse_payload
from site_audit.recommendations import build_recommendations, quick_wins


URL = "https://example.com"


def report_for(body, seed=0):
    return normalize_payload(parse_payload(body, URL), URL, random.Random(seed))


def messages(findings, check):
    return [f.message for f in findings if f.check == check]


def test_healthy_security_has_only_passes(make_body):
    findings = build_recommendations(report_for(make_body()))
    security = [f for f in findings if f.check == "security"]
    assert [f.severity for f in security] == [Severity.PASS]


def test_failing_audits_gate_recommendations(make_body):
    findings = build_recommendations(report_for(make_body(audits={})))

    security = messages(findings, "security")
    assert "No valid SSL certificate" in security
    assert "Only 4/10 security headers implemented" in security
    assert "1 vulnerabilities found" in security

    assert "Only 5/12 meta tags present" in messages(findings, "seo")
    assert "Heading structure needs work" in messages(findings, "seo")
    assert any("accessibility issues" in m for m in messages(findings, "accessibility"))


def test_compliance_findings(make_body):
    low = build_recommendations(report_for(make_body(categories={"accessibility": 0.5})))
    high = build_recommendations(report_for(make_body(categories={"accessibility": 0.95})))

    assert "Only WCAG level A compliance" in messages(low, "accessibility")
    assert "WCAG AAA compliance" in messages(high, "accessibility")


def test_slow_metrics_are_flagged(make_body):
    audits = {
        "first-contentful-paint": {"numericValue": 4500.0},
        "largest-contentful-paint": {"numericValue": 6000.0},
        "cumulative-layout-shift": {"numericValue": 0.4},
    }
    findings = build_recommendations(report_for(make_body(audits=audits)))
    performance = messages(findings, "performance")

    assert "Slow load time (4.5s)" in performance
    assert "First Contentful Paint is 4.5s" in performance
    assert "Largest Contentful Paint is 6.0s" in performance
    assert "Cumulative Layout Shift is 0.400" in performance


@pytest.mark.parametrize("seed", range(5))
def test_quick_wins_sorted_by_impact(make_body, seed):
    findings = build_recommendations(report_for(make_body(audits={}), seed=seed))
    wins = quick_wins(findings)

    assert 0 < len(wins) <= 5
    impacts = [f.impact for f in wins]
    assert impacts == sorted(impacts, reverse=True)
    assert all(f.fix_hint for f in wins)
    assert all(f.severity in (Severity.ERROR, Severity.WARNING) for f in wins)
    assert wins[0].message == "No valid SSL certificate"
