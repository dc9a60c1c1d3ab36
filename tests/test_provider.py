"""Tests for the PageSpeed Insights adapter."""

import asyncio

import httpx
import pytest

from site_audit.config import PAGESPEED_ENDPOINT, Settings
from site_audit.errors import DecodeError, ProviderStatusError, TransportError
from site_audit.provider import (
    build_params,
    fetch_raw,
    fetch_raw_async,
    normalize_url,
    parse_payload,
)


class TestNormalizeUrl:

    def test_adds_https_when_scheme_missing(self):
        assert normalize_url("example.com") == "https://example.com"

    def test_keeps_existing_scheme(self):
        assert normalize_url("http://example.com") == "http://example.com"
        assert normalize_url("https://example.com/path") == "https://example.com/path"

    def test_scheme_check_is_case_insensitive(self):
        assert normalize_url("HTTPS://Example.com") == "HTTPS://Example.com"

    def test_strips_whitespace(self):
        assert normalize_url("  example.com/a ") == "https://example.com/a"


class TestBuildParams:

    def test_includes_all_category_selectors(self, settings):
        params = build_params("https://example.com", settings)
        categories = [v for k, v in params if k == "category"]
        assert categories == ["performance", "accessibility", "best-practices", "seo"]
        assert ("url", "https://example.com") in params
        assert ("strategy", "desktop") in params
        assert ("key", "test-key") in params

    def test_omits_key_when_not_configured(self):
        params = build_params("https://example.com", Settings())
        assert all(k != "key" for k, _ in params)


class TestParsePayload:

    def test_reads_categories_and_audits(self, make_body):
        payload = parse_payload(make_body(), "https://example.com")
        assert payload.url == "https://example.com"
        assert payload.category_score("accessibility") == 0.95
        assert payload.audit_score("is-on-https") == 1.0
        assert payload.audit_value("first-contentful-paint") == 1200.0

    def test_missing_entries_are_absent(self, make_body):
        payload = parse_payload(make_body(categories={"seo": 0.5}, audits={}))
        assert payload.category_score("performance") is None
        assert payload.audit_score("is-on-https") is None
        assert payload.audit_value("total-blocking-time") is None

    def test_malformed_entries_are_absent(self, make_body):
        body = make_body(
            categories={"seo": "high"},
            audits={
                "is-on-https": {"score": "yes"},
                "color-contrast": None,
                "first-contentful-paint": {"numericValue": float("nan")},
                "document-title": {"score": True},
            },
        )
        body["lighthouseResult"]["categories"]["performance"] = "broken"
        payload = parse_payload(body)
        assert payload.category_score("seo") is None
        assert payload.category_score("performance") is None
        assert payload.audit_score("is-on-https") is None
        assert payload.audit_score("color-contrast") is None
        assert payload.audit_value("first-contentful-paint") is None
        assert payload.audit_score("document-title") is None

    def test_missing_sections_default_to_empty(self):
        payload = parse_payload({"lighthouseResult": {}})
        assert payload.categories == {}
        assert payload.audits == {}

    @pytest.mark.parametrize("body", [
        [],
        "text",
        {},
        {"lighthouseResult": None},
        {"lighthouseResult": {"categories": []}},
        {"lighthouseResult": {"audits": "nope"}},
    ])
    def test_rejects_wrong_shape(self, body):
        with pytest.raises(DecodeError):
            parse_payload(body)


class TestFetchRaw:

    def test_sends_canonical_url(self, mock_client, settings, make_body):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=make_body())

        payload = fetch_raw("example.com", settings=settings, client=mock_client(handler))

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert str(request.url).startswith(PAGESPEED_ENDPOINT)
        assert request.url.params["url"] == "https://example.com"
        assert request.url.params.get_list("category") == [
            "performance", "accessibility", "best-practices", "seo"
        ]
        assert payload.url == "https://example.com"
        assert payload.category_score("seo") == 0.92

    def test_transport_failure(self, mock_client, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            fetch_raw("example.com", settings=settings, client=mock_client(handler))
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout_is_transport_failure(self, mock_client, settings):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            fetch_raw("example.com", settings=settings, client=mock_client(handler))

    @pytest.mark.parametrize("status", [400, 403, 429, 500, 503])
    def test_non_success_status(self, mock_client, settings, status):
        client = mock_client(lambda request: httpx.Response(status, json={"error": {}}))

        with pytest.raises(ProviderStatusError) as exc_info:
            fetch_raw("example.com", settings=settings, client=client)
        assert exc_info.value.status_code == status

    def test_invalid_json(self, mock_client, settings):
        client = mock_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(DecodeError):
            fetch_raw("example.com", settings=settings, client=client)

    def test_unexpected_json(self, mock_client, settings):
        client = mock_client(lambda request: httpx.Response(200, json={"kind": "other"}))

        with pytest.raises(DecodeError):
            fetch_raw("example.com", settings=settings, client=client)


class TestFetchRawAsync:

    def test_success(self, settings, make_body):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=make_body())

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                return await fetch_raw_async("example.com", settings=settings, client=client)

        payload = asyncio.run(run())
        assert len(seen) == 1
        assert seen[0].url.params["url"] == "https://example.com"
        assert payload.category_score("accessibility") == 0.95

    def test_status_error(self, settings):
        async def run():
            transport = httpx.MockTransport(lambda request: httpx.Response(502))
            async with httpx.AsyncClient(transport=transport) as client:
                return await fetch_raw_async("example.com", settings=settings, client=client)

        with pytest.raises(ProviderStatusError):
            asyncio.run(run())


def test_integer_too_large_for_float_is_absent(make_body):
    body = make_body(
        categories={"seo": 10 ** 400},
        audits={"total-blocking-time": {"score": 1, "numericValue": 10 ** 400}},
    )
    payload = parse_payload(body)
    assert payload.category_score("seo") is None
    assert payload.audit_value("total-blocking-time") is None
    assert payload.audit_score("total-blocking-time") == 1.0
