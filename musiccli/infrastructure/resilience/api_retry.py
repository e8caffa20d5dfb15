"""Service for executing API calls with automatic retries.

Implements linear backoff for transient failures: network errors,
timeouts, and server-side failures of idempotent requests. The caller
observes one outcome per call: the result, or the last error unchanged.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from musiccli.domain.events.api_events import (
    ApiCallFailed, ApiCallInitiated, ApiCallSucceeded, DomainEvent, RetryScheduled
)
from musiccli.infrastructure.http.errors import MusicApiError
from musiccli.infrastructure.resilience.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

EventListener = Callable[[DomainEvent], None]
Sleeper = Callable[[float], Awaitable[Any]]


class ApiRetryService:
    """Handles API call execution with retries."""

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        event_listener: Optional[EventListener] = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        """Initializes the ApiRetryService.

        Args:
            policy: Retry count, backoff and retry predicate.
            event_listener: Optional callable receiving domain events.
            sleep: Coroutine function used for the backoff suspension.
        """
        self.policy = policy or RetryPolicy()
        self.event_listener = event_listener
        self._sleep = sleep
        logger.debug(
            f"ApiRetryService initialized: retries={self.policy.retries}, "
            f"retry_delay={self.policy.retry_delay_ms}ms (linear)"
        )

    def _dispatch_event(self, event: DomainEvent) -> None:
        logger.debug(f"EVENT: {event}")
        if self.event_listener is None:
            return
        try:
            self.event_listener(event)
        except Exception as e:
            logger.error(f"Event listener failed on {type(event).__name__}: {e}", exc_info=True)

    async def execute_with_retry(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        endpoint_name: Optional[str] = None,
        **kwargs: Any
    ) -> Any:
        """Executes an async function, re-invoking it while the policy allows.

        Args:
            func: The async function (one physical attempt) to execute.
            *args: Positional arguments for the function, identical on every attempt.
            endpoint_name: Name used in logs and events (defaults to func.__name__).
            **kwargs: Keyword arguments for the function.

        Returns:
            The result of the first successful attempt.

        Raises:
            MusicApiError: The last observed error, once retries are exhausted
                or immediately when the error is not retryable.
        """
        effective_endpoint = endpoint_name or getattr(func, "__name__", repr(func))
        retry_count = 0

        while True:
            attempt = retry_count + 1
            self._dispatch_event(ApiCallInitiated(endpoint=effective_endpoint, attempt_number=attempt))
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except MusicApiError as e:
                if retry_count >= self.policy.retries or not self.policy.should_retry(e):
                    if retry_count >= self.policy.retries and self.policy.retries > 0:
                        logger.error(
                            f"Max retries ({self.policy.retries}) reached for {effective_endpoint}. Last error: {e}"
                        )
                    else:
                        logger.debug(f"Not retrying {effective_endpoint} after {e.code}: {e}")
                    self._dispatch_event(ApiCallFailed(
                        endpoint=effective_endpoint,
                        error_type=e.code,
                        error_message=str(e),
                        attempts=attempt,
                        status_code=e.status_code,
                    ))
                    raise

                retry_count += 1
                delay = self.policy.delay_for(retry_count)
                logger.warning(
                    f"Retryable error calling {effective_endpoint} on attempt {attempt}/{self.policy.max_attempts}: "
                    f"{e.code}. Waiting {delay:.2f}s..."
                )
                self._dispatch_event(RetryScheduled(
                    endpoint=effective_endpoint,
                    attempt_number=retry_count,
                    delay_seconds=delay,
                    error_code=e.code,
                ))
                await self._sleep(delay)
                continue

            latency_ms = (time.perf_counter() - start_time) * 1000
            self._dispatch_event(ApiCallSucceeded(endpoint=effective_endpoint, latency_ms=latency_ms, attempts=attempt))
            return result
