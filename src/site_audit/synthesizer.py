"""Entry point: always hand back a valid AuditReport for a URL."""

import logging
import random
from datetime import datetime
from typing import Optional

import httpx

from .config import Settings
from .errors import ProviderError
from .fallback import generate_fallback
from .models import AuditReport
from .normalize import normalize_payload
from .provider import RawProviderPayload, fetch_raw, fetch_raw_async, normalize_url
from .scoring import validate_report


logger = logging.getLogger(__name__)


def _make_rng(settings: Settings, rng: Optional[random.Random]) -> random.Random:
    if rng is not None:
        return rng
    return random.Random(settings.seed)


def build_report(
    url: str,
    payload: Optional[RawProviderPayload],
    rng: random.Random,
    captured_at: Optional[datetime] = None,
) -> AuditReport:
    """Pick the normalization or fallback path and validate the result.

    Raises:
        SynthesisError: the produced report breaks an invariant.
    """
    if payload is None:
        report = generate_fallback(url, rng, captured_at)
    else:
        report = normalize_payload(payload, url, rng, captured_at)
    return validate_report(report)


def _log_fallback(url: str, error: ProviderError) -> None:
    logger.warning(
        "Provider audit for %s failed (%s: %s); using synthetic report",
        url, type(error).__name__, error,
    )


def synthesize(
    url: str,
    *,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
    client: Optional[httpx.Client] = None,
    captured_at: Optional[datetime] = None,
) -> AuditReport:
    """Audit a URL.

    Provider failures of any kind switch to the fallback path and are never
    raised to the caller.

    Args:
        url: Page to audit, scheme optional.
        settings: Provider settings (default: from the environment).
        rng: Random source for fields the provider cannot observe.
        client: HTTP client for the provider request.
        captured_at: Report timestamp (default: now).

    Raises:
        SynthesisError: only on an internal invariant violation.
        ValueError: ``settings`` was omitted and the environment holds a
            malformed SITE_AUDIT_* value.
    """
    settings = settings or Settings.from_env()
    url = normalize_url(url)
    rng = _make_rng(settings, rng)

    try:
        payload = fetch_raw(url, settings=settings, client=client)
    except ProviderError as e:
        _log_fallback(url, e)
        payload = None

    report = build_report(url, payload, rng, captured_at)
    logger.info("Audit of %s from %s: overall %d", url, report.source, report.overall_score)
    return report


async def synthesize_async(
    url: str,
    *,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
    client: Optional[httpx.AsyncClient] = None,
    captured_at: Optional[datetime] = None,
) -> AuditReport:
    """Async variant of synthesize. Only the provider request is awaited.

    Raises the same errors as synthesize.
    """
    settings = settings or Settings.from_env()
    url = normalize_url(url)
    rng = _make_rng(settings, rng)

    try:
        payload = await fetch_raw_async(url, settings=settings, client=client)
    except ProviderError as e:
        _log_fallback(url, e)
        payload = None

    report = build_report(url, payload, rng, captured_at)
    logger.info("Audit of %s from %s: overall %d", url, report.source, report.overall_score)
    return report
