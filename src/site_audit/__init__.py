"""Website audit reports from PageSpeed Insights, with a synthetic fallback."""

__version__ = "0.1.0"

from .errors import (
    DecodeError,
    ProviderError,
    ProviderStatusError,
    SynthesisError,
    TransportError,
)
from .models import AuditReport
from .synthesizer import synthesize, synthesize_async

__all__ = [
    "AuditReport",
    "DecodeError",
    "ProviderError",
    "ProviderStatusError",
    "SynthesisError",
    "TransportError",
    "synthesize",
    "synthesize_async",
]
