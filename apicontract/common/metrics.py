"""Prometheus metrics for contract runs.

One ``MetricsCollector`` per API suite. Every series carries an ``api``
label holding the collector's name, so dumps from several suites can be
concatenated and still told apart.

Series
- ``http_requests_total{api,method,endpoint,status}``
- ``http_request_duration_seconds{api,method,endpoint}``
- ``http_transport_errors_total{api,method,endpoint}``
- ``http_requests_in_flight{api}``
- ``contract_checks_total{api,check,outcome}``
"""

import re
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

# Public APIs answer in tens of milliseconds to a few seconds; 15s is the client ceiling
DURATION_BUCKETS = (0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 3.0, 5.0, 10.0, 15.0)

_ID_SEGMENT = re.compile(r"^(?:\d+|[0-9a-fA-F-]{32,36})$")


def endpoint_template(path: str) -> str:
    """Collapse id-like path segments so ``/posts/1`` and ``/posts/2`` share a series.

    Numeric and UUID segments become ``{id}``; the query string is dropped.
    """
    segments = path.split("?", 1)[0].split("/")
    return "/".join("{id}" if _ID_SEGMENT.match(segment) else segment for segment in segments)


class MetricsCollector:
    """Request and contract-check metrics for one API suite.

    Parameters
    - service_name: Name of the API under test, used as the ``api`` label
    - registry: Optional ``CollectorRegistry``; a private one is created otherwise
    """

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry or CollectorRegistry()

        self.request_count = Counter(
            "http_requests_total",
            "Requests that received a response, by status",
            ["api", "method", "endpoint", "status"],
            registry=self.registry,
        )
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Time from dispatch to response receipt",
            ["api", "method", "endpoint"],
            buckets=DURATION_BUCKETS,
            registry=self.registry,
        )
        self.transport_errors = Counter(
            "http_transport_errors_total",
            "Requests that never received a response",
            ["api", "method", "endpoint"],
            registry=self.registry,
        )
        self.in_flight = Gauge(
            "http_requests_in_flight",
            "Requests dispatched and not yet answered",
            ["api"],
            registry=self.registry,
        )
        self.contract_checks = Counter(
            "contract_checks_total",
            "Expectation checks run against captured responses",
            ["api", "check", "outcome"],
            registry=self.registry,
        )

    def request_started(self) -> None:
        self.in_flight.labels(api=self.service_name).inc()

    def request_finished(self) -> None:
        self.in_flight.labels(api=self.service_name).dec()

    def record_http_request(self, method: str, endpoint: str, status: int, duration: float) -> None:
        """Record one answered request; ``duration`` is in seconds.

        ``endpoint`` is reduced with ``endpoint_template`` before labelling.
        """
        endpoint = endpoint_template(endpoint)
        self.request_count.labels(
            api=self.service_name, method=method, endpoint=endpoint, status=status
        ).inc()
        self.request_duration.labels(
            api=self.service_name, method=method, endpoint=endpoint
        ).observe(duration)

    def record_transport_error(self, method: str, endpoint: str) -> None:
        endpoint = endpoint_template(endpoint)
        self.transport_errors.labels(api=self.service_name, method=method, endpoint=endpoint).inc()

    def record_check(self, check: str, passed: bool) -> None:
        """Count one expectation outcome (``passed`` or ``failed``)."""
        outcome = "passed" if passed else "failed"
        self.contract_checks.labels(api=self.service_name, check=check, outcome=outcome).inc()

    def get_metrics(self) -> str:
        """Get metrics in Prometheus exposition format."""
        return generate_latest(self.registry).decode("utf-8")
