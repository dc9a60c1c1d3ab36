"""Shared fixtures: Lighthouse payload builders and a fixed capture time."""

from datetime import datetime, timezone

import httpx
import pytest

from site_audit.config import Settings


PASSING_AUDITS = {
    "is-on-https": {"score": 1},
    "mixed-content": {"score": 1},
    "document-title": {"score": 1},
    "meta-description": {"score": 1},
    "heading-order": {"score": 1},
    "image-alt": {"score": 1},
    "color-contrast": {"score": 1},
    "first-contentful-paint": {"score": 0.9, "numericValue": 1200.0},
    "largest-contentful-paint": {"score": 0.8, "numericValue": 2100.0},
    "cumulative-layout-shift": {"score": 1, "numericValue": 0.02},
    "total-blocking-time": {"score": 0.95, "numericValue": 150.0},
}


def lighthouse_body(categories=None, audits=None):
    """A runPagespeed response body with the given category fractions."""
    if categories is None:
        categories = {
            "performance": 0.9,
            "accessibility": 0.95,
            "best-practices": 0.85,
            "seo": 0.92,
        }
    if audits is None:
        audits = PASSING_AUDITS
    return {
        "id": "https://example.com/",
        "lighthouseResult": {
            "requestedUrl": "https://example.com/",
            "categories": {
                name: {"id": name, "score": score} for name, score in categories.items()
            },
            "audits": audits,
        },
    }


@pytest.fixture
def captured_at():
    return datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)



@pytest.fixture
def settings():
    return Settings(api_key="test-key", timeout=5.0)


@pytest.fixture
def mock_client():
    """Build an httpx.Client whose requests go to ``handler``."""
    clients = []

    def factory(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def make_body():
    return lighthouse_body
