"""Domain Events related to API calls and resilience.

Emitted by the retry service when an attempt starts, succeeds, is scheduled
for retry, or fails definitively.
"""

from dataclasses import dataclass, field
import time
from typing import Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


@dataclass
class ApiCallInitiated(DomainEvent):
    """Event triggered when a physical attempt is about to be sent."""
    endpoint: str  # e.g., '/songlist'
    attempt_number: int
    method: str = "GET"
    timestamp: float = field(default_factory=time.time)


@dataclass
class ApiCallSucceeded(DomainEvent):
    """Event triggered when an API call succeeds."""
    endpoint: str
    latency_ms: float
    attempts: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class ApiCallFailed(DomainEvent):
    """Event triggered when an API call fails definitively (after retries)."""
    endpoint: str
    error_type: str
    error_message: str
    attempts: int
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a retry is scheduled for a failed API call."""
    endpoint: str
    attempt_number: int  # 1-indexed retry number
    delay_seconds: float
    error_code: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
