"""PageSpeed Insights adapter.

Issues a single request per call and hands back the raw Lighthouse
categories and audits. Nothing here interprets scores; absent values stay
``None`` so the normalization path can decide how to read them.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from .config import Settings
from .errors import DecodeError, ProviderStatusError, TransportError


logger = logging.getLogger(__name__)

CATEGORY_SELECTORS = ("performance", "accessibility", "best-practices", "seo")

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; SiteAudit/0.1)",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class RawAudit:
    """One Lighthouse audit. Either value may be missing."""
    score: Optional[float] = None
    numeric_value: Optional[float] = None


@dataclass(frozen=True)
class RawProviderPayload:
    """Lighthouse result as the provider sent it.

    ``categories`` maps category id to its fractional score, or ``None`` when
    the category came back without a usable score. Categories and audits the
    provider left out are simply not in the mappings.
    """
    url: str
    categories: dict[str, Optional[float]] = field(default_factory=dict)
    audits: dict[str, RawAudit] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict)

    def category_score(self, name: str) -> Optional[float]:
        return self.categories.get(name)

    def audit_score(self, name: str) -> Optional[float]:
        audit = self.audits.get(name)
        return audit.score if audit else None

    def audit_value(self, name: str) -> Optional[float]:
        audit = self.audits.get(name)
        return audit.numeric_value if audit else None


def normalize_url(url: str) -> str:
    """Ensure URL has a scheme."""
    url = url.strip()
    if not url.lower().startswith(("http://", "https://")):
        url = "https://" + url
    return url


def build_params(url: str, settings: Settings) -> list[tuple[str, str]]:
    """Query string for one runPagespeed call."""
    params = [("url", url), ("strategy", settings.strategy)]
    params += [("category", c) for c in CATEGORY_SELECTORS]
    if settings.api_key:
        params.append(("key", settings.api_key))
    return params


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def _section(result: dict, name: str) -> dict:
    section = result.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise DecodeError(f"lighthouseResult.{name} is {type(section).__name__}, expected object")
    return section


def parse_payload(data: Any, url: str = "") -> RawProviderPayload:
    """Read a decoded runPagespeed response into a RawProviderPayload.

    Raises:
        DecodeError: if the body is not a Lighthouse result.
    """
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    result = data.get("lighthouseResult")
    if not isinstance(result, dict):
        raise DecodeError("Response has no lighthouseResult object")

    categories: dict[str, Optional[float]] = {}
    for name, entry in _section(result, "categories").items():
        categories[name] = _number(entry.get("score")) if isinstance(entry, dict) else None

    audits: dict[str, RawAudit] = {}
    for name, entry in _section(result, "audits").items():
        if not isinstance(entry, dict):
            continue
        audits[name] = RawAudit(
            score=_number(entry.get("score")),
            numeric_value=_number(entry.get("numericValue")),
        )

    return RawProviderPayload(url=url, categories=categories, audits=audits, raw=result)


def _read_response(response: httpx.Response, url: str) -> RawProviderPayload:
    if not response.is_success:
        raise ProviderStatusError(response.status_code)
    try:
        data = response.json()
    except ValueError as e:
        raise DecodeError(f"Provider body is not valid JSON: {e}") from e
    return parse_payload(data, url)


def fetch_raw(
    url: str,
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
) -> RawProviderPayload:
    """Fetch the raw Lighthouse result for a URL.

    Args:
        url: Page to audit. ``https://`` is assumed when no scheme is given.
        settings: Provider settings (default: from the environment).
        client: Reuse an existing client instead of opening one.

    Raises:
        TransportError: the request failed or timed out.
        ProviderStatusError: the provider answered with a non-2xx status.
        DecodeError: the body is not a Lighthouse result.
    """
    settings = settings or Settings.from_env()
    target = normalize_url(url)
    params = build_params(target, settings)
    logger.debug("Requesting %s strategy=%s for %s", settings.endpoint, settings.strategy, target)

    try:
        if client is None:
            with httpx.Client(headers=DEFAULT_HEADERS, timeout=settings.timeout) as own_client:
                response = own_client.get(settings.endpoint, params=params)
        else:
            response = client.get(settings.endpoint, params=params)
    except httpx.RequestError as e:
        raise TransportError(f"Request for {target} failed: {e}") from e

    return _read_response(response, target)


async def fetch_raw_async(
    url: str,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> RawProviderPayload:
    """Async twin of fetch_raw.

    Cancelling the awaiting task drops the in-flight request; a client
    opened here is closed on the way out.
    """
    settings = settings or Settings.from_env()
    target = normalize_url(url)
    params = build_params(target, settings)
    logger.debug("Requesting %s strategy=%s for %s", settings.endpoint, settings.strategy, target)

    try:
        if client is None:
            async with httpx.AsyncClient(headers=DEFAULT_HEADERS, timeout=settings.timeout) as own_client:
                response = await own_client.get(settings.endpoint, params=params)
        else:
            response = await client.get(settings.endpoint, params=params)
    except httpx.RequestError as e:
        raise TransportError(f"Request for {target} failed: {e}") from e

    return _read_response(response, target)
