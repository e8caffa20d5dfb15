"""Sends a single request attempt to the music service.

Hides the specifics of httpx and translates between RequestDescriptor /
response bodies and the transport.
"""

import asyncio
import logging
import time
from typing import Any, Optional

import httpx

from musiccli.domain.models.common import RequestDescriptor
from musiccli.infrastructure.http.client_config import ClientConfig
from musiccli.infrastructure.http.errors import ECONNABORTED, MusicApiError

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Dispatches one physical attempt per call to `send`."""

    def __init__(self, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initializes the underlying httpx client.

        Args:
            config: The shared client configuration.
            transport: Optional transport override (e.g., httpx.MockTransport in tests).
        """
        self.config = config
        # Per-phase limits; send() enforces the overall deadline of each attempt.
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            headers=dict(config.headers),
            transport=transport,
            follow_redirects=True,
        )
        logger.debug(f"RequestDispatcher initialized for {config.base_url} (timeout={config.timeout_ms}ms)")

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        """Returns the JSON body, or the raw text when the body is not JSON."""
        try:
            return response.json()
        except ValueError:
            return response.text

    async def send(self, descriptor: RequestDescriptor) -> Any:
        """Sends the descriptor once.

        Returns:
            The decoded response body of a 2xx response.

        Raises:
            MusicApiError: On transport failure, timeout, or non-2xx status.
        """
        method = descriptor.method.upper()
        request = self._client.build_request(method, descriptor.path, params=descriptor.query_params())
        logger.debug(f"{method} {request.url}")
        start_time = time.perf_counter()
        try:
            # httpx only bounds each phase; the attempt as a whole is bounded here.
            response = await asyncio.wait_for(self._client.send(request), self.config.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.debug(f"{method} {request.url} exceeded {self.config.timeout_ms}ms")
            raise MusicApiError(
                f"timeout of {self.config.timeout_ms}ms exceeded",
                code=ECONNABORTED,
                method=method,
                url=str(request.url),
            ) from e
        except httpx.RequestError as e:
            logger.debug(f"{method} {request.url} failed: {type(e).__name__}: {e}")
            raise MusicApiError.from_transport_error(e, method=method, url=str(request.url)) from e

        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"{method} {request.url} -> {response.status_code} in {latency_ms:.2f}ms")
        if not response.is_success:
            raise MusicApiError.from_response(response)
        return self._decode_body(response)

    async def aclose(self) -> None:
        await self._client.aclose()
