"""Structured logging for contract runs.

Every line carries the run name (``service``) and, inside a live suite, the
API under test (``api``), so a single CI log can hold all five suites.

Typical usage
- ``configure_logging(service_name, log_level, log_format)`` once per session
  (the root ``conftest.py`` does this)
- ``bind_api_context(api_name)`` while a suite module runs
- ``get_logger(name)`` for module loggers
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.stdlib import LoggerFactory, add_logger_name

LOG_FORMATS = ("json", "console")


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    log_format: str = "json",
    environment: Optional[str] = None,
) -> None:
    """Configure structlog on top of stdlib logging.

    Parameters
    - service_name: Run identifier bound to each log line
    - log_level: ``DEBUG``, ``INFO``, ``WARNING``, ``ERROR`` (case-insensitive)
    - log_format: ``json`` for CI collectors, ``console`` for a terminal
    - environment: Bound as ``env`` when given (e.g. ``local``, ``ci``)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {log_format} (expected one of {', '.join(LOG_FORMATS)})")

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_logger_name,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name)
    if environment is not None:
        structlog.contextvars.bind_contextvars(env=environment)


def bind_api_context(api_name: str, **extra: Any) -> None:
    """Tag subsequent log lines with the API under test."""
    structlog.contextvars.bind_contextvars(api=api_name, **extra)


def clear_api_context(*extra_keys: str) -> None:
    structlog.contextvars.unbind_contextvars("api", *extra_keys)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_performance(
    operation: str,
    duration_ms: float,
    budget_ms: Optional[float] = None,
    **kwargs: Any
) -> None:
    """Record a timing measurement from a scenario.

    When ``budget_ms`` is given the line also says whether the measurement
    stayed within it, and is logged as a warning when it did not. Budgets
    are reported, never enforced; validators do the enforcing.
    """
    logger = get_logger("performance")
    if budget_ms is None:
        logger.info("Timing recorded", operation=operation, duration_ms=duration_ms, **kwargs)
        return

    within_budget = duration_ms < budget_ms
    log = logger.info if within_budget else logger.warning
    log(
        "Timing recorded",
        operation=operation,
        duration_ms=duration_ms,
        budget_ms=budget_ms,
        within_budget=within_budget,
        **kwargs
    )
