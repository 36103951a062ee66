"""Request and response records produced by ``ApiClient``."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

import httpx


@dataclass(frozen=True)
class RequestDescriptor:
    """What was sent: method, path, query parameters, body and extra headers."""
    method: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def describe(self) -> str:
        """Short ``METHOD path`` label used in logs and failure messages."""
        return f"{self.method} {self.path}"


@dataclass(frozen=True)
class CapturedResponse:
    """The materialized result of one HTTP call.

    ``headers`` is an ``httpx.Headers`` so lookups are case-insensitive.
    ``body`` is the decoded JSON value, or the raw bytes when the payload is
    empty or not JSON.
    """
    status: int
    headers: httpx.Headers
    body: Any
    elapsed_ms: int
    request: Optional[RequestDescriptor] = None

    def __post_init__(self):
        if self.elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {self.elapsed_ms}")

    @classmethod
    def from_httpx(
        cls,
        response: httpx.Response,
        elapsed_ms: int,
        request: Optional[RequestDescriptor] = None,
    ) -> "CapturedResponse":
        """Capture an ``httpx.Response`` whose body has already been read."""
        return cls(
            status=response.status_code,
            headers=httpx.Headers(response.headers),
            body=decode_body(response),
            elapsed_ms=elapsed_ms,
            request=request,
        )

    @property
    def ok(self) -> bool:
        return self.status < 400


def decode_body(response: httpx.Response) -> Any:
    """Decode a JSON payload, falling back to raw bytes."""
    content = response.content
    if not content:
        return content
    content_type = response.headers.get("content-type", "")
    if "json" not in content_type:
        return content
    try:
        return response.json()
    except ValueError:
        return content
