"""Runtime settings, read from the environment."""

import os
from dataclasses import dataclass, replace
from typing import Optional


PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
STRATEGIES = ("desktop", "mobile")


def _env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {val!r}") from None


def _env_int(name: str) -> Optional[int]:
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {val!r}") from None


@dataclass(frozen=True)
class Settings:
    """Provider and synthesis settings.

    Attributes:
        api_key: PageSpeed Insights key. Requests go out without one if unset.
        strategy: "desktop" or "mobile" analysis.
        timeout: Seconds before a provider request is abandoned.
        seed: Seeds the random source for reproducible unobserved fields.
        endpoint: Provider URL.
    """
    api_key: Optional[str] = None
    strategy: str = "desktop"
    timeout: float = 30.0
    seed: Optional[int] = None
    endpoint: str = PAGESPEED_ENDPOINT

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(f"strategy must be one of {STRATEGIES}, got {self.strategy!r}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.getenv("PAGESPEED_API_KEY") or None,
            strategy=os.getenv("SITE_AUDIT_STRATEGY", "desktop").strip().lower() or "desktop",
            timeout=_env_float("SITE_AUDIT_TIMEOUT", 30.0),
            seed=_env_int("SITE_AUDIT_SEED"),
        )

    def override(self, **changes) -> "Settings":
        """Copy with the given fields replaced, skipping ``None`` values."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
