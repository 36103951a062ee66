"""Errors raised by ``ApiClient``.

Two failure shapes are kept apart so scenarios can tell "no response" from
"error response":

- ``TransportError``: the request never produced a usable response (timeout,
  DNS, refused connection, redirect loop, undecodable body). It has no status.
- ``HttpStatusError``: the server answered with status >= 400. The full
  ``CapturedResponse`` rides along so callers can assert on the error payload.
"""

from typing import Optional

from .models import CapturedResponse, RequestDescriptor


class ApiContractError(Exception):
    """Base class for client errors."""
    pass


class TransportError(ApiContractError):
    """No usable response was received for a request."""

    def __init__(self, request: RequestDescriptor, reason: str):
        self.request = request
        self.reason = reason
        super().__init__(f"{request.describe()} failed without a response: {reason}")

    @property
    def status(self) -> Optional[int]:
        return None


class HttpStatusError(ApiContractError):
    """The server responded with an error status."""

    def __init__(self, response: CapturedResponse):
        self.response = response
        label = response.request.describe() if response.request else "request"
        super().__init__(f"{label} returned HTTP {response.status}")

    @property
    def status(self) -> int:
        return self.response.status
