"""Tests for the HTTP client adapter."""

import asyncio
import json

import httpx
import pytest

from apicontract.client.api_client import MAX_TIMEOUT, ApiClient
from apicontract.client.errors import HttpStatusError, TransportError
from apicontract.client.factory import build_observer, create_api_client
from apicontract.client.models import CapturedResponse, RequestDescriptor
from apicontract.client.observers import (
    CompositeObserver,
    LoggingObserver,
    MetricsObserver,
    NullObserver,
    RequestObserver,
)
from apicontract.common.config import HttpBinConfig, ReqResConfig
from apicontract.common.metrics import MetricsCollector

BASE_URL = "https://api.test"

pytestmark = pytest.mark.unit


def echo(request: httpx.Request) -> httpx.Response:
    """Reflect the request back the way HTTPBin does."""
    content = request.content.decode() if request.content else ""
    try:
        parsed = json.loads(content) if content else None
    except ValueError:
        parsed = None
    return httpx.Response(
        200,
        json={
            "method": request.method,
            "url": str(request.url),
            "args": dict(request.url.params),
            "headers": dict(request.headers),
            "data": content,
            "json": parsed,
        },
    )


def make_client(handler, **kwargs) -> ApiClient:
    return ApiClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


class RecordingObserver(RequestObserver):
    """Observer that keeps every event for inspection."""

    def __init__(self):
        self.events = []

    def on_request(self, request):
        self.events.append(("request", request.describe()))

    def on_response(self, request, response):
        self.events.append(("response", request.describe(), response.status))

    def on_error(self, request, error, elapsed_ms):
        self.events.append(("error", request.describe(), type(error).__name__))


@pytest.mark.asyncio
async def test_get_captures_response():
    """A successful GET produces a fully populated CapturedResponse."""
    async with make_client(echo) as client:
        response = await client.get("/get", {"param1": "value1", "requestId": 3})

    assert isinstance(response, CapturedResponse)
    assert response.status == 200
    assert response.elapsed_ms >= 0
    assert response.body["method"] == "GET"
    assert response.body["args"] == {"param1": "value1", "requestId": "3"}
    assert response.body["url"].startswith(f"{BASE_URL}/get")
    assert response.request == RequestDescriptor("GET", "/get", {"param1": "value1", "requestId": 3})


@pytest.mark.asyncio
async def test_headers_are_case_insensitive():
    def handler(request):
        return httpx.Response(200, json={}, headers={"X-Trace-Id": "abc"})

    async with make_client(handler) as client:
        response = await client.get("/")

    assert response.headers["x-trace-id"] == "abc"
    assert response.headers["X-TRACE-ID"] == "abc"
    assert "content-type" in response.headers


@pytest.mark.asyncio
async def test_default_headers_sent():
    async with make_client(echo) as client:
        response = await client.get("/headers")

    sent = {k.lower(): v for k, v in response.body["headers"].items()}
    assert sent["content-type"] == "application/json"
    assert sent["accept"] == "application/json"


@pytest.mark.asyncio
async def test_set_header_applies_to_later_requests():
    """Custom headers configured before dispatch reach the server."""
    async with make_client(echo) as client:
        client.set_header("X-Custom-Header", "test-value")
        client.set_header("X-API-Key", "secret-key")
        response = await client.get("/headers")

    sent = {k.lower(): v for k, v in response.body["headers"].items()}
    assert sent["x-custom-header"] == "test-value"
    assert sent["x-api-key"] == "secret-key"
    assert client.headers["x-api-key"] == "secret-key"


@pytest.mark.asyncio
async def test_post_round_trips_json_body():
    body = {"a": 1, "b": "x"}
    async with make_client(echo) as client:
        response = await client.post("/post", body)

    assert response.body["json"] == body
    assert response.request.body == body


@pytest.mark.asyncio
@pytest.mark.parametrize("verb", ["post", "put", "patch"])
async def test_body_defaults_to_empty_object(verb):
    async with make_client(echo) as client:
        response = await getattr(client, verb)(f"/{verb}")

    assert response.body["method"] == verb.upper()
    assert response.body["json"] == {}


@pytest.mark.asyncio
async def test_string_body_is_sent_verbatim():
    async with make_client(echo) as client:
        response = await client.post("/post", "invalid-json")

    assert response.body["data"] == "invalid-json"
    assert response.body["json"] is None


@pytest.mark.asyncio
async def test_delete_has_no_body():
    async with make_client(lambda request: httpx.Response(204)) as client:
        response = await client.delete("/users/2")

    assert response.status == 204
    assert response.body == b""
    assert not response.body


@pytest.mark.asyncio
async def test_non_json_body_kept_as_bytes():
    def handler(request):
        return httpx.Response(200, content=b"<html></html>", headers={"content-type": "text/html"})

    async with make_client(handler) as client:
        response = await client.get("/html")

    assert response.body == b"<html></html>"


@pytest.mark.asyncio
async def test_redirects_are_followed():
    def handler(request):
        if request.url.path == "/old":
            return httpx.Response(302, headers={"location": f"{BASE_URL}/new"})
        return httpx.Response(200, json={"path": request.url.path})

    async with make_client(handler) as client:
        response = await client.get("/old")

    assert response.status == 200
    assert response.body == {"path": "/new"}


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 404, 418, 500])
async def test_error_status_raises_with_captured_response(status):
    """4xx/5xx surface as HttpStatusError carrying the full response."""
    def handler(request):
        return httpx.Response(status, json={"error": "Missing password"})

    async with make_client(handler) as client:
        with pytest.raises(HttpStatusError) as exc_info:
            await client.get("/status")

    error = exc_info.value
    assert error.status == status
    assert error.response.status == status
    assert error.response.body == {"error": "Missing password"}
    assert error.response.elapsed_ms >= 0
    assert f"GET /status returned HTTP {status}" in str(error)


@pytest.mark.asyncio
async def test_transport_failure_is_distinct_from_status_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.get("/posts")

    error = exc_info.value
    assert not isinstance(error, HttpStatusError)
    assert error.status is None
    assert error.request.describe() == "GET /posts"
    assert isinstance(error.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_is_a_transport_failure():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with make_client(handler) as client:
        with pytest.raises(TransportError, match="ReadTimeout"):
            await client.get("/delay/10")


def redirect_loop(request):
    return httpx.Response(302, headers={"location": str(request.url)})


def broken_gzip(request):
    return httpx.Response(
        200,
        headers={"content-type": "application/json", "content-encoding": "gzip"},
        stream=httpx.ByteStream(b"definitely not gzip"),
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "handler, cause",
    [(redirect_loop, httpx.TooManyRedirects), (broken_gzip, httpx.DecodingError)],
)
async def test_unusable_response_is_a_transport_failure(handler, cause):
    """Redirect loops and undecodable bodies are reported like lost connections."""
    collector = MetricsCollector("unit")
    async with make_client(handler, observer=MetricsObserver(collector)) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.get("/loop")

    assert isinstance(exc_info.value.__cause__, cause)
    metrics = collector.get_metrics()
    assert 'http_requests_in_flight{api="unit"} 0.0' in metrics
    assert 'http_transport_errors_total{api="unit",method="GET",endpoint="/loop"} 1.0' in metrics


@pytest.mark.asyncio
async def test_elapsed_tracks_dispatch_to_receipt():
    async def slow(request):
        await asyncio.sleep(0.1)
        return httpx.Response(200, json={})

    async with make_client(slow) as client:
        response = await client.get("/delay")

    assert response.elapsed_ms >= 90


def test_timeout_limits():
    with pytest.raises(ValueError):
        ApiClient(BASE_URL, timeout=MAX_TIMEOUT + 1)
    with pytest.raises(ValueError):
        ApiClient(BASE_URL, timeout=0)


@pytest.mark.asyncio
async def test_per_call_timeout_override():
    async with make_client(echo) as client:
        response = await client.get("/delay/2", timeout=MAX_TIMEOUT)
        assert response.status == 200

        with pytest.raises(ValueError):
            await client.get("/delay/2", timeout=MAX_TIMEOUT + 5)


@pytest.mark.asyncio
async def test_observer_sees_lifecycle_events():
    def handler(request):
        if request.url.path == "/missing":
            return httpx.Response(404, json={})
        if request.url.path == "/down":
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json={})

    observer = RecordingObserver()
    async with make_client(handler, observer=observer) as client:
        await client.get("/ok")
        with pytest.raises(HttpStatusError):
            await client.get("/missing")
        with pytest.raises(TransportError):
            await client.delete("/down")

    assert observer.events == [
        ("request", "GET /ok"),
        ("response", "GET /ok", 200),
        ("request", "GET /missing"),
        ("response", "GET /missing", 404),
        ("request", "DELETE /down"),
        ("error", "DELETE /down", "TransportError"),
    ]


def test_default_observer_is_null():
    assert isinstance(ApiClient(BASE_URL).observer, NullObserver)


@pytest.mark.asyncio
async def test_metrics_observer_records_requests():
    collector = MetricsCollector("unit")
    async with make_client(echo, observer=MetricsObserver(collector)) as client:
        await client.get("/get")

    metrics = collector.get_metrics()
    assert 'http_requests_total{api="unit",method="GET",endpoint="/get",status="200"} 1.0' in metrics
    assert 'http_requests_in_flight{api="unit"} 0.0' in metrics


def test_build_observer_follows_config():
    quiet = HttpBinConfig(api_request_logging=False)
    assert build_observer(quiet) is None
    assert isinstance(build_observer(quiet, MetricsCollector("unit")), MetricsObserver)
    assert isinstance(build_observer(HttpBinConfig()), LoggingObserver)
    assert isinstance(build_observer(HttpBinConfig(), MetricsCollector("unit")), CompositeObserver)


@pytest.mark.asyncio
async def test_factory_applies_api_headers():
    config = ReqResConfig(api_reqres_url=BASE_URL, api_reqres_key="k-123", api_request_logging=False)
    client = create_api_client("reqres", config=config, transport=httpx.MockTransport(echo))
    async with client:
        response = await client.get("/users")

    sent = {k.lower(): v for k, v in response.body["headers"].items()}
    assert sent["x-api-key"] == "k-123"
    assert client.timeout == config.api_timeout_seconds
    assert client.base_url == BASE_URL
