"""Request lifecycle observers.

``ApiClient`` reports three events to the observer it was constructed with:
dispatch, completion (any status) and transport failure. Observers are
diagnostic only; they must not change what the client returns or raises.
"""

from typing import Iterable

import structlog

from apicontract.common.metrics import MetricsCollector

from .models import CapturedResponse, RequestDescriptor


class RequestObserver:
    """Base observer; every hook is a no-op."""

    def on_request(self, request: RequestDescriptor) -> None:
        pass

    def on_response(self, request: RequestDescriptor, response: CapturedResponse) -> None:
        pass

    def on_error(self, request: RequestDescriptor, error: Exception, elapsed_ms: int) -> None:
        pass


class NullObserver(RequestObserver):
    """Observer that ignores every event."""
    pass


class LoggingObserver(RequestObserver):
    """Emit one structured log line per lifecycle event."""

    def __init__(self, base_url: str, logger_name: str = "api_client"):
        self.logger = structlog.get_logger(logger_name).bind(base_url=base_url)

    def on_request(self, request: RequestDescriptor) -> None:
        self.logger.info("Dispatching request", method=request.method, path=request.path)

    def on_response(self, request: RequestDescriptor, response: CapturedResponse) -> None:
        log = self.logger.info if response.ok else self.logger.warning
        log(
            "Request completed",
            method=request.method,
            path=request.path,
            status=response.status,
            elapsed_ms=response.elapsed_ms,
        )

    def on_error(self, request: RequestDescriptor, error: Exception, elapsed_ms: int) -> None:
        self.logger.error(
            "Request failed",
            method=request.method,
            path=request.path,
            error=str(error),
            elapsed_ms=elapsed_ms,
        )


class MetricsObserver(RequestObserver):
    """Feed request counts and durations into a ``MetricsCollector``."""

    def __init__(self, collector: MetricsCollector):
        self.collector = collector

    def on_request(self, request: RequestDescriptor) -> None:
        self.collector.request_started()

    def on_response(self, request: RequestDescriptor, response: CapturedResponse) -> None:
        self.collector.request_finished()
        self.collector.record_http_request(
            request.method, request.path, response.status, response.elapsed_ms / 1000
        )

    def on_error(self, request: RequestDescriptor, error: Exception, elapsed_ms: int) -> None:
        self.collector.request_finished()
        self.collector.record_transport_error(request.method, request.path)


class CompositeObserver(RequestObserver):
    """Fan events out to several observers in order."""

    def __init__(self, observers: Iterable[RequestObserver]):
        self.observers = list(observers)

    def on_request(self, request: RequestDescriptor) -> None:
        for observer in self.observers:
            observer.on_request(request)

    def on_response(self, request: RequestDescriptor, response: CapturedResponse) -> None:
        for observer in self.observers:
            observer.on_response(request, response)

    def on_error(self, request: RequestDescriptor, error: Exception, elapsed_ms: int) -> None:
        for observer in self.observers:
            observer.on_error(request, error, elapsed_ms)
