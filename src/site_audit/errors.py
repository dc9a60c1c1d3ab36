"""Error types raised while auditing a URL."""


class ProviderError(Exception):
    """Base class for failures talking to the audit provider."""


class TransportError(ProviderError):
    """The request never produced a response (DNS, connect, timeout...)."""


class ProviderStatusError(ProviderError):
    """The provider answered with a non-success status."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"Provider returned HTTP {status_code}")


class DecodeError(ProviderError):
    """The response body could not be read as a provider payload."""


class SynthesisError(Exception):
    """A produced report broke one of its own invariants.

    Not a ProviderError: this signals a bug, never a reason to fall back.
    """
