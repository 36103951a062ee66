"""Asynchronous HTTP client used by every contract suite.

``ApiClient`` wraps one ``httpx.AsyncClient`` bound to a base URL, a default
header set and a timeout. Each verb method returns a ``CapturedResponse`` for
statuses below 400, raises ``HttpStatusError`` (carrying the captured
response) for 4xx/5xx, and raises ``TransportError`` when no usable response
arrived (connection failure, timeout, redirect loop, undecodable content). Nothing is retried.

Lifecycle events go to the injected ``RequestObserver``; the default
observer does nothing.
"""

import time
from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import HttpStatusError, TransportError
from .models import CapturedResponse, RequestDescriptor
from .observers import NullObserver, RequestObserver

DEFAULT_TIMEOUT = 5.0
MAX_TIMEOUT = 15.0
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class ApiClient:
    """HTTP client session for one API under test."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Mapping[str, str]] = None,
        observer: Optional[RequestObserver] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Configure a client session.

        Parameters
        - base_url: Root URL every request path is joined onto
        - timeout: Per-request timeout in seconds (at most ``MAX_TIMEOUT``)
        - headers: Extra default headers merged over ``DEFAULT_HEADERS``
        - observer: Receives dispatch/completion/failure events
        - transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = self._check_timeout(timeout)
        self.observer = observer or NullObserver()
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={**DEFAULT_HEADERS, **(headers or {})},
            timeout=self.timeout,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def headers(self) -> httpx.Headers:
        """Default headers sent with every request."""
        return self._client.headers

    def set_header(self, name: str, value: str) -> None:
        """Add or replace a default header.

        Only call this while no request is in flight.
        """
        self._client.headers[name] = value

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> CapturedResponse:
        """Issue a GET request with optional query parameters."""
        return await self.request("GET", path, params=params, timeout=timeout)

    async def post(self, path: str, body: Any = None, timeout: Optional[float] = None) -> CapturedResponse:
        """Issue a POST request; ``body`` defaults to an empty JSON object."""
        return await self.request("POST", path, body={} if body is None else body, timeout=timeout)

    async def put(self, path: str, body: Any = None, timeout: Optional[float] = None) -> CapturedResponse:
        """Issue a PUT request; ``body`` defaults to an empty JSON object."""
        return await self.request("PUT", path, body={} if body is None else body, timeout=timeout)

    async def patch(self, path: str, body: Any = None, timeout: Optional[float] = None) -> CapturedResponse:
        """Issue a PATCH request; ``body`` defaults to an empty JSON object."""
        return await self.request("PATCH", path, body={} if body is None else body, timeout=timeout)

    async def delete(self, path: str, timeout: Optional[float] = None) -> CapturedResponse:
        """Issue a DELETE request."""
        return await self.request("DELETE", path, timeout=timeout)

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> CapturedResponse:
        """Dispatch one request and capture its outcome.

        Dict/list bodies are sent as JSON; ``str``/``bytes`` bodies are sent
        verbatim under the session's Content-Type.

        Raises
        - ``HttpStatusError`` when the status is 400 or above
        - ``TransportError`` when no usable response was received (connection
          failure, timeout, redirect loop, undecodable content)
        - ``ValueError`` when ``timeout`` exceeds ``MAX_TIMEOUT``
        """
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            params=params or {},
            body=body,
            headers=headers or {},
        )
        request_timeout = self.timeout if timeout is None else self._check_timeout(timeout)
        send_kwargs: Dict[str, Any] = {
            "params": dict(descriptor.params) or None,
            "headers": dict(descriptor.headers) or None,
            "timeout": request_timeout,
        }
        if isinstance(body, (str, bytes)):
            send_kwargs["content"] = body
        elif body is not None:
            send_kwargs["json"] = body

        self.observer.on_request(descriptor)
        start = time.perf_counter()
        try:
            raw = await self._client.request(descriptor.method, path, **send_kwargs)
        except httpx.RequestError as exc:
            elapsed_ms = _elapsed_ms(start)
            error = TransportError(descriptor, f"{type(exc).__name__}: {exc}")
            self.observer.on_error(descriptor, error, elapsed_ms)
            raise error from exc
        elapsed_ms = _elapsed_ms(start)

        response = CapturedResponse.from_httpx(raw, elapsed_ms, descriptor)
        self.observer.on_response(descriptor, response)
        if not response.ok:
            raise HttpStatusError(response)
        return response

    async def aclose(self) -> None:
        """Close pooled connections."""
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    @staticmethod
    def _check_timeout(timeout: float) -> float:
        if timeout <= 0 or timeout > MAX_TIMEOUT:
            raise ValueError(f"timeout must be in (0, {MAX_TIMEOUT}] seconds, got {timeout}")
        return float(timeout)


def _elapsed_ms(start: float) -> int:
    return max(0, int(round((time.perf_counter() - start) * 1000)))
