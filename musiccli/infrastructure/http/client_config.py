"""Immutable configuration shared by every request of a client."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from musiccli.infrastructure.resilience.retry_policy import RetryPolicy

DEFAULT_BASE_URL = "http://localhost:3300/api"
DEFAULT_TIMEOUT_MS = 15000
DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType({"Content-Type": "application/json"})


@dataclass(frozen=True)
class ClientConfig:
    """Base URL, per-attempt timeout, fixed headers and retry policy.

    Built once at start-up and injected into the dispatcher; safe to share
    between concurrent calls.
    """
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    headers: Mapping[str, str] = field(default_factory=lambda: DEFAULT_HEADERS)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")
        # Freeze a caller-supplied dict.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000
