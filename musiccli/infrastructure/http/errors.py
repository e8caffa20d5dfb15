"""Errors raised by the request dispatcher.

Every failed attempt surfaces as a MusicApiError carrying an error code in
the style of the transport, so the retry policy can classify it without
looking at httpx internals.
"""

from typing import Optional

import httpx

# --- Error Codes ---
ERR_NETWORK = "ERR_NETWORK"            # connection failed or was interrupted, no response
ECONNABORTED = "ECONNABORTED"          # the attempt exceeded its timeout
ERR_BAD_REQUEST = "ERR_BAD_REQUEST"    # 4xx response
ERR_BAD_RESPONSE = "ERR_BAD_RESPONSE"  # 5xx (or other non-2xx) response
ERR_REQUEST = "ERR_REQUEST"            # request failed for another transport reason


class MusicApiError(Exception):
    """Failure of a single request attempt."""

    def __init__(
        self,
        message: str,
        code: str,
        method: str = "GET",
        url: Optional[str] = None,
        response: Optional[httpx.Response] = None,
    ):
        self.message = message
        self.code = code
        self.method = method.upper()
        self.url = url
        self.response = response
        super().__init__(message)

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None

    @property
    def is_network_error(self) -> bool:
        """True when no response arrived and the attempt did not time out."""
        return self.response is None and self.code == ERR_NETWORK

    @property
    def is_timeout(self) -> bool:
        return self.code == ECONNABORTED

    def __repr__(self) -> str:
        return (
            f"MusicApiError(code={self.code!r}, method={self.method!r}, "
            f"url={self.url!r}, status_code={self.status_code!r})"
        )

    @classmethod
    def from_transport_error(cls, exc: httpx.RequestError, method: str, url: str) -> "MusicApiError":
        """Classifies an httpx exception raised before any response arrived."""
        # TimeoutException subclasses TransportError, check it first.
        if isinstance(exc, httpx.TimeoutException):
            code = ECONNABORTED
        elif isinstance(exc, httpx.TransportError):
            code = ERR_NETWORK
        else:
            code = ERR_REQUEST
        message = str(exc) or type(exc).__name__
        return cls(message, code=code, method=method, url=url)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "MusicApiError":
        """Builds the error for a non-2xx response."""
        status = response.status_code
        code = ERR_BAD_REQUEST if 400 <= status < 500 else ERR_BAD_RESPONSE
        return cls(
            f"Request failed with status code {status}",
            code=code,
            method=response.request.method,
            url=str(response.request.url),
            response=response,
        )
