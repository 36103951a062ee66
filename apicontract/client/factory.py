"""Client factory for the APIs under test.

Centralizes creation of ``ApiClient`` sessions so suites don't repeat base
URLs, required headers and observer wiring. New APIs are added by
registering a config class in ``apicontract.common.config.CONFIG_MAP``.
"""

from typing import Any, List, Optional

import structlog

from apicontract.common.config import BaseConfig, get_config
from apicontract.common.metrics import MetricsCollector

from .api_client import ApiClient
from .observers import CompositeObserver, LoggingObserver, MetricsObserver, RequestObserver

logger = structlog.get_logger("api_client.factory")


def build_observer(
    config: BaseConfig,
    metrics: Optional[MetricsCollector] = None,
) -> Optional[RequestObserver]:
    """Assemble the observer chain a config asks for.

    Returns ``None`` (the client's no-op default) when neither request
    logging nor metrics are wanted.
    """
    observers: List[RequestObserver] = []
    if config.api_request_logging:
        observers.append(LoggingObserver(config.base_url))
    if metrics is not None:
        observers.append(MetricsObserver(metrics))

    if not observers:
        return None
    if len(observers) == 1:
        return observers[0]
    return CompositeObserver(observers)


def create_api_client(
    api_name: str,
    config: Optional[BaseConfig] = None,
    metrics: Optional[MetricsCollector] = None,
    **overrides: Any
) -> ApiClient:
    """Create a client session for a named API.

    Parameters
    - api_name: Key of ``CONFIG_MAP`` (e.g. ``"httpbin"``)
    - config: Pre-built config; loaded from the environment when omitted
    - metrics: Optional collector fed by a ``MetricsObserver``
    - overrides: Forwarded to ``ApiClient`` (``timeout``, ``headers``,
      ``observer``, ``transport``)
    """
    config = config or get_config(api_name)

    headers = {**config.default_headers(), **overrides.pop("headers", {})}
    overrides.setdefault("timeout", config.api_timeout_seconds)
    if "observer" not in overrides:
        overrides["observer"] = build_observer(config, metrics)

    logger.debug("Creating API client", api=api_name, base_url=config.base_url)
    return ApiClient(config.base_url, headers=headers, **overrides)
