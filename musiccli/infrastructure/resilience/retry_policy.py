"""Retry policy: which failed attempts are re-sent, and after what delay.

The policy is plain data plus two pure functions so it can live inside the
immutable client configuration and be shared by concurrent calls.
"""

from dataclasses import dataclass

from musiccli.domain.models.common import IDEMPOTENT_METHODS
from musiccli.infrastructure.http.errors import MusicApiError

DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY_MS = 1000


def is_network_error(error: BaseException) -> bool:
    """Connection could not be established or was interrupted."""
    return isinstance(error, MusicApiError) and error.is_network_error


def is_retryable_error(error: MusicApiError) -> bool:
    """No response at all, rate limited, or a server-side (5xx) failure."""
    if error.is_timeout:
        return False
    status = error.status_code
    if status is None:
        return True
    return status == 429 or 500 <= status <= 599


def is_idempotent_request_error(error: BaseException) -> bool:
    if not isinstance(error, MusicApiError) or not error.method:
        return False
    return error.method in IDEMPOTENT_METHODS and is_retryable_error(error)


def is_network_or_idempotent_request_error(error: BaseException) -> bool:
    return is_network_error(error) or is_idempotent_request_error(error)


@dataclass(frozen=True)
class RetryPolicy:
    """Linear backoff retry policy.

    Attributes:
        retries: Number of re-sends after the first attempt (total attempts = retries + 1).
        retry_delay_ms: Base delay; retry n waits n * retry_delay_ms.
    """
    retries: int = DEFAULT_RETRIES
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS

    def __post_init__(self):
        if self.retries < 0:
            raise ValueError(f"retries must be >= 0, got {self.retries}")
        if self.retry_delay_ms < 0:
            raise ValueError(f"retry_delay_ms must be >= 0, got {self.retry_delay_ms}")

    @property
    def max_attempts(self) -> int:
        return self.retries + 1

    def delay_for(self, retry_count: int) -> float:
        """Seconds to wait before retry number `retry_count` (1-indexed)."""
        return retry_count * self.retry_delay_ms / 1000

    def should_retry(self, error: BaseException) -> bool:
        if is_network_or_idempotent_request_error(error):
            return True
        return isinstance(error, MusicApiError) and error.is_timeout
